"""Outils communs des stores / Shared store helpers."""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from vehicle_tracker.exceptions import DuplicateKeyError


def duplicate_field(exc: IntegrityError, fields: tuple[str, ...]) -> str | None:
    """Retrouver la colonne unique violee / Find which unique column was violated.

    SQLite: "UNIQUE constraint failed: users.username".
    PostgreSQL: 'duplicate key value violates unique constraint "uq_users_username"'.
    Both messages contain the column name.
    """
    detail = str(exc.orig) if exc.orig is not None else str(exc)
    lowered = detail.lower()
    if "unique" not in lowered and "duplicate" not in lowered:
        return None
    for field in fields:
        if field in lowered:
            return field
    return None


async def flush_unique(session: AsyncSession, fields: tuple[str, ...]) -> None:
    """Flush en traduisant les violations d'unicite / Flush, translating unique violations.

    La session est annulee avant de lever DuplicateKeyError.
    The session is rolled back before DuplicateKeyError is raised.
    """
    try:
        await session.flush()
    except IntegrityError as exc:
        await session.rollback()
        field = duplicate_field(exc, fields)
        if field is None:
            raise
        raise DuplicateKeyError(field) from exc
