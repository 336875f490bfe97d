"""Outils communs des services / Shared service helpers."""

import logging
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError

from vehicle_tracker.exceptions import InternalError

logger = logging.getLogger(__name__)


@contextmanager
def store_errors(message: str):
    """Traduire les erreurs SQLAlchemy en InternalError / Map SQLAlchemy errors to InternalError."""
    try:
        yield
    except SQLAlchemyError as exc:
        logger.exception("%s: %s", message, exc)
        raise InternalError(message) from exc
