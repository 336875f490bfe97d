"""Acces aux donnees / Data access stores."""

from vehicle_tracker.stores.user_store import UserStore
from vehicle_tracker.stores.vehicle_store import VehicleStore

__all__ = ["UserStore", "VehicleStore"]
