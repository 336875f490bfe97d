"""Schémas Véhicule / Vehicle schemas."""

from datetime import datetime
from typing import Any

from vehicle_tracker.schemas.base import CamelModel


# --- Requetes / Requests ---
class VehicleCreate(CamelModel):
    name: str | None = None
    # Valeurs brutes, verifiees par le service / Raw values, checked by the service
    lat: Any = None
    lng: Any = None


class VehicleLocationUpdate(CamelModel):
    name: str | None = None
    lat: Any = None
    lng: Any = None
    last_updated: datetime | None = None


# --- Lecture / Read ---
class LocationPointRead(CamelModel):
    lat: float
    lng: float
    timestamp: datetime


class VehicleRead(CamelModel):
    id: int
    name: str
    lat: float
    lng: float
    last_updated: datetime
    location_history: list[LocationPointRead]
    created_at: datetime
    updated_at: datetime


class VehicleListItem(VehicleRead):
    """Vehicule pour la carte avec alias / Map-ready vehicle with aliases."""
    latitude: float
    longitude: float
    last_active: datetime


# --- Enveloppes / Envelopes ---
class VehicleResponse(CamelModel):
    success: bool = True
    vehicle: VehicleRead


class VehicleMessageResponse(VehicleResponse):
    message: str


class DeletedVehicleResponse(CamelModel):
    success: bool = True
    message: str
    deleted_vehicle: VehicleRead
