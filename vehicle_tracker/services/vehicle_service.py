"""
Service Vehicules / Vehicle service.
Validation des coordonnees, historique borne, unicite des noms.
Coordinate validation, bounded history, unique names.
"""

import logging
from datetime import datetime, timezone
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from vehicle_tracker.config import settings
from vehicle_tracker.exceptions import ConflictError, DuplicateKeyError, NotFoundError, ValidationError
from vehicle_tracker.models.vehicle import Vehicle, VehicleLocation
from vehicle_tracker.schemas.vehicle import VehicleListItem, VehicleRead
from vehicle_tracker.services.common import store_errors
from vehicle_tracker.stores.vehicle_store import VehicleStore
from vehicle_tracker.utils.geo import parse_coordinate, validate_coordinates

logger = logging.getLogger(__name__)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _checked_position(lat: Any, lng: Any) -> tuple[float, float]:
    parsed_lat = parse_coordinate(lat)
    parsed_lng = parse_coordinate(lng)
    check = validate_coordinates(parsed_lat, parsed_lng)
    if not check.valid:
        raise ValidationError(check.error)
    return parsed_lat, parsed_lng


class VehicleService:
    """Operations CRUD sur les vehicules / Vehicle CRUD operations."""

    def __init__(self, session: AsyncSession, history_limit: int | None = None):
        self.store = VehicleStore(session)
        if history_limit is None:
            history_limit = settings.HISTORY_LIMIT
        if history_limit < 1:
            raise ValueError(f"history_limit must be at least 1, got {history_limit}")
        self.history_limit = history_limit

    async def list_vehicles(self) -> list[VehicleListItem]:
        """Tous les vehicules, plus recents d'abord / All vehicles, most recently updated first.

        Les enregistrements aux coordonnees invalides sont ignores.
        Records with invalid stored coordinates are skipped.
        """
        with store_errors("Error fetching vehicles"):
            vehicles = await self.store.list_recent_first()

        items = []
        for vehicle in vehicles:
            check = validate_coordinates(vehicle.lat, vehicle.lng)
            if not check.valid:
                logger.warning("Skipping vehicle %s with invalid coordinates: %s", vehicle.name, check.error)
                continue
            read = VehicleRead.model_validate(vehicle)
            items.append(VehicleListItem(
                **read.model_dump(),
                latitude=read.lat,
                longitude=read.lng,
                last_active=read.last_updated,
            ))
        return items

    async def create_vehicle(self, name: Any, lat: Any, lng: Any) -> VehicleRead:
        """Creer un vehicule avec une premiere position / Create a vehicle with its first position."""
        clean_name = name.strip() if isinstance(name, str) else ""
        if not clean_name or lat is None or lng is None:
            raise ValidationError("Vehicle name, latitude, and longitude are required")
        parsed_lat, parsed_lng = _checked_position(lat, lng)

        now = datetime.now(timezone.utc)
        vehicle = Vehicle(
            name=clean_name,
            lat=parsed_lat,
            lng=parsed_lng,
            last_updated=now,
            location_history=[VehicleLocation(lat=parsed_lat, lng=parsed_lng, timestamp=now)],
        )
        with store_errors("Error creating vehicle"):
            try:
                await self.store.add(vehicle)
            except DuplicateKeyError as exc:
                raise ConflictError(f'Vehicle with name "{clean_name}" already exists') from exc

        logger.info("Vehicle %s created at (%s, %s)", clean_name, parsed_lat, parsed_lng)
        return VehicleRead.model_validate(vehicle)

    async def update_location(
        self, name: Any, lat: Any, lng: Any, last_updated: datetime | None = None
    ) -> VehicleRead:
        """Deplacer un vehicule existant / Move an existing vehicle.

        Ne cree jamais de vehicule: un nom inconnu leve NotFoundError.
        Never creates a vehicle: an unknown name raises NotFoundError.
        """
        if not isinstance(name, str) or not name or lat is None or lng is None:
            raise ValidationError("Name, lat, and lng are required")
        parsed_lat, parsed_lng = _checked_position(lat, lng)

        with store_errors("Error updating vehicle"):
            vehicle = await self.store.get_by_name(name)
            if vehicle is None:
                raise NotFoundError(f'Vehicle "{name}" not found')

            now = datetime.now(timezone.utc)
            vehicle.lat = parsed_lat
            vehicle.lng = parsed_lng
            vehicle.last_updated = _as_utc(last_updated) if last_updated else now
            await self.store.append_location(
                vehicle,
                VehicleLocation(lat=parsed_lat, lng=parsed_lng, timestamp=now),
                self.history_limit,
            )

        return VehicleRead.model_validate(vehicle)

    async def get_vehicle(self, vehicle_id: int) -> VehicleRead:
        """Voir un vehicule / Get a vehicle."""
        with store_errors("Error fetching vehicle"):
            vehicle = await self.store.get(vehicle_id)
        if vehicle is None:
            raise NotFoundError("Vehicle not found")

        # Donnees stockees corrompues / Corrupted stored data
        check = validate_coordinates(vehicle.lat, vehicle.lng)
        if not check.valid:
            raise ValidationError(check.error)
        return VehicleRead.model_validate(vehicle)

    async def delete_vehicle(self, vehicle_id: int) -> VehicleRead:
        """Supprimer par id / Delete by id. Returns the deleted snapshot."""
        with store_errors("Error deleting vehicle"):
            vehicle = await self.store.get(vehicle_id)
            if vehicle is None:
                raise NotFoundError("Vehicle not found")
            return await self._delete(vehicle)

    async def delete_vehicle_by_name(self, name: str) -> VehicleRead:
        """Supprimer par nom / Delete by name. Returns the deleted snapshot."""
        with store_errors("Error deleting vehicle"):
            vehicle = await self.store.get_by_name(name)
            if vehicle is None:
                raise NotFoundError("Vehicle not found")
            return await self._delete(vehicle)

    async def _delete(self, vehicle: Vehicle) -> VehicleRead:
        snapshot = VehicleRead.model_validate(vehicle)
        await self.store.delete(vehicle)
        logger.info("Vehicle %s deleted", vehicle.name)
        return snapshot
