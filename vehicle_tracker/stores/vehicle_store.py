"""Store Vehicules / Vehicle store."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from vehicle_tracker.models.vehicle import Vehicle, VehicleLocation
from vehicle_tracker.stores._base import flush_unique


class VehicleStore:
    """Lecture/ecriture des vehicules / Vehicle reads and writes."""

    UNIQUE_FIELDS = ("name",)

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_recent_first(self) -> list[Vehicle]:
        result = await self.session.execute(
            select(Vehicle).order_by(Vehicle.last_updated.desc(), Vehicle.id.desc())
        )
        return list(result.scalars().all())

    async def get(self, vehicle_id: int) -> Vehicle | None:
        return await self.session.get(Vehicle, vehicle_id)

    async def get_by_name(self, name: str) -> Vehicle | None:
        result = await self.session.execute(select(Vehicle).where(Vehicle.name == name))
        return result.scalar_one_or_none()

    async def add(self, vehicle: Vehicle) -> Vehicle:
        """Inserer / Insert. Raises DuplicateKeyError("name") on a taken name."""
        self.session.add(vehicle)
        await flush_unique(self.session, self.UNIQUE_FIELDS)
        return vehicle

    async def append_location(self, vehicle: Vehicle, entry: VehicleLocation, limit: int) -> Vehicle:
        """Ajouter une position et evincer les plus anciennes / Append and evict oldest beyond limit."""
        vehicle.location_history.append(entry)
        overflow = len(vehicle.location_history) - limit
        if overflow > 0:
            del vehicle.location_history[:overflow]
        await self.session.flush()
        return vehicle

    async def delete(self, vehicle: Vehicle) -> None:
        await self.session.delete(vehicle)
        await self.session.flush()
