"""
Seed des vehicules de demonstration / Demo vehicle seeding.
Crée quelques vehicules au premier démarrage si la table est vide.
Creates a few vehicles on first startup when the table is empty.
"""

import logging
import random

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from vehicle_tracker.models.vehicle import Vehicle
from vehicle_tracker.services.vehicle_service import VehicleService

logger = logging.getLogger(__name__)

# Dhaka, Bangladesh
DEMO_BASE_LOCATION = (23.8103, 90.4125)


async def seed_demo_vehicles(session: AsyncSession, count: int = 5, spread: float = 0.05) -> int:
    """Créer `count` vehicules si aucun n'existe / Create `count` vehicles if none exist.

    Retourne le nombre de vehicules crees / Returns the number of vehicles created.
    """
    result = await session.execute(select(func.count(Vehicle.id)))
    existing = result.scalar()
    if existing:
        logger.info("%d existing vehicle(s), seed skipped", existing)
        return 0

    service = VehicleService(session)
    base_lat, base_lng = DEMO_BASE_LOCATION
    for i in range(count):
        await service.create_vehicle(
            f"Car-{i + 1}",
            round(base_lat + random.uniform(-spread, spread), 6),
            round(base_lng + random.uniform(-spread, spread), 6),
        )
    await session.commit()
    logger.info("Seeded %d demo vehicles", count)
    return count
