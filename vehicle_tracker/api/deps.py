"""
Dépendances des routes / Route dependencies.
Injectées dans les routes via Depends().
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from vehicle_tracker.database import get_db
from vehicle_tracker.services.user_service import UserService
from vehicle_tracker.services.vehicle_service import VehicleService


async def get_vehicle_service(db: AsyncSession = Depends(get_db)) -> VehicleService:
    """Service vehicules lie a la session de la requete / Vehicle service bound to the request session."""
    return VehicleService(db)


async def get_user_service(db: AsyncSession = Depends(get_db)) -> UserService:
    """Service utilisateurs lie a la session de la requete / User service bound to the request session."""
    return UserService(db)
