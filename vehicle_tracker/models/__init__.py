"""
Modèles SQLAlchemy / SQLAlchemy models.
Importer tous les modèles ici pour que create_all les détecte.
Import all models here so create_all can detect them.
"""

from vehicle_tracker.models.vehicle import Vehicle, VehicleLocation
from vehicle_tracker.models.user import User

__all__ = [
    "Vehicle",
    "VehicleLocation",
    "User",
]
