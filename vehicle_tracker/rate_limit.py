"""Rate limiting global / Global rate limiter.

Utilise slowapi pour limiter les requetes par IP (inscription, connexion).
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from vehicle_tracker.config import settings

limiter = Limiter(key_func=get_remote_address, enabled=settings.RATE_LIMIT_ENABLED)
