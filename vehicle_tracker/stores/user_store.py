"""Store Utilisateurs / User store."""

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from vehicle_tracker.models.user import User
from vehicle_tracker.stores._base import flush_unique


class UserStore:
    """Lecture/ecriture des utilisateurs / User reads and writes."""

    UNIQUE_FIELDS = ("username", "email")

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_username(self, username: str) -> User | None:
        result = await self.session.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    async def get_by_login(self, login: str, email: str | None = None) -> User | None:
        """Chercher par username ou email / Look up by username or email.

        `email` est la forme normalisee de `login` quand elle differe.
        `email` is the normalized form of `login` when it differs.
        """
        email = login if email is None else email
        result = await self.session.execute(
            select(User).where(or_(User.username == login, User.email == email)).order_by(User.id).limit(1)
        )
        return result.scalar_one_or_none()

    async def add(self, user: User) -> User:
        """Inserer / Insert. Raises DuplicateKeyError("username" | "email")."""
        self.session.add(user)
        await flush_unique(self.session, self.UNIQUE_FIELDS)
        return user
