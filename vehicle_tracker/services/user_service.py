"""
Service Utilisateurs / User service.
Inscription, verification d'identifiants, profil public.
Registration, credential check, public profile.

Aucun token de session n'est emis: la connexion est une simple
verification d'identifiants, la session reste a la charge de l'appelant.
No session token is issued: login is a stateless credential check and any
session concept belongs to the caller.
"""

import logging
from typing import Any

from pydantic import validate_email
from pydantic_core import PydanticCustomError
from sqlalchemy.ext.asyncio import AsyncSession

from vehicle_tracker.exceptions import AuthError, ConflictError, DuplicateKeyError, NotFoundError, ValidationError
from vehicle_tracker.models.user import User
from vehicle_tracker.schemas.user import UserPublic
from vehicle_tracker.services.common import store_errors
from vehicle_tracker.stores.user_store import UserStore
from vehicle_tracker.utils.auth import MAX_PASSWORD_BYTES, hash_password, verify_password

logger = logging.getLogger(__name__)

MIN_USERNAME_LENGTH = 3
MIN_PASSWORD_LENGTH = 6

INVALID_CREDENTIALS = "Invalid username or password"


def _login_email(value: Any) -> Any:
    """Normaliser un email comme EmailStr a l'inscription / Normalize an email the way EmailStr did at registration."""
    if not isinstance(value, str) or "@" not in value:
        return value
    try:
        return validate_email(value)[1]
    except PydanticCustomError:
        return value


class UserService:
    """Operations sur les comptes / Account operations."""

    def __init__(self, session: AsyncSession):
        self.store = UserStore(session)

    async def register(self, username: Any, email: Any, password: Any) -> UserPublic:
        """Inscrire un utilisateur / Register a user."""
        if not username or not email or not password:
            raise ValidationError("Please provide username, email, and password")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")
        if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes long")
        if len(username) < MIN_USERNAME_LENGTH:
            raise ValidationError(f"Username must be at least {MIN_USERNAME_LENGTH} characters long")

        user = User(username=username, email=email, hashed_password=hash_password(password))
        with store_errors("Error registering user"):
            try:
                await self.store.add(user)
            except DuplicateKeyError as exc:
                raise ConflictError(f"{exc.field.capitalize()} already exists") from exc

        logger.info("User registered: %s", username)
        return UserPublic.model_validate(user)

    async def login(self, username: Any, password: Any) -> UserPublic:
        """Verifier les identifiants / Check credentials. `username` may also be an email."""
        if not username or not password:
            raise ValidationError("Please provide username and password")

        with store_errors("Error logging in user"):
            user = await self.store.get_by_login(username, _login_email(username))

        if user is None or not verify_password(password, user.hashed_password):
            logger.warning("Failed login attempt for %s", username)
            raise AuthError(INVALID_CREDENTIALS)

        logger.info("User logged in: %s", user.username)
        return UserPublic.model_validate(user)

    async def get_profile(self, username: str) -> UserPublic:
        """Profil public par username exact / Public profile by exact username."""
        with store_errors("Error fetching user profile"):
            user = await self.store.get_by_username(username)
        if user is None:
            raise NotFoundError("User not found")
        return UserPublic.model_validate(user)
