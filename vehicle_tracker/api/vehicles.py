"""Routes Vehicules / Vehicle API routes."""

from fastapi import APIRouter, Depends

from vehicle_tracker.api.deps import get_vehicle_service
from vehicle_tracker.schemas.vehicle import (
    DeletedVehicleResponse,
    VehicleCreate,
    VehicleListItem,
    VehicleLocationUpdate,
    VehicleMessageResponse,
    VehicleResponse,
)
from vehicle_tracker.services.vehicle_service import VehicleService

router = APIRouter()


@router.get("", response_model=list[VehicleListItem])
async def list_vehicles(service: VehicleService = Depends(get_vehicle_service)):
    """Lister les vehicules pour la carte / List vehicles for the map."""
    return await service.list_vehicles()


@router.post("", response_model=VehicleMessageResponse, status_code=201)
async def create_vehicle(data: VehicleCreate, service: VehicleService = Depends(get_vehicle_service)):
    """Creer un vehicule / Create vehicle."""
    vehicle = await service.create_vehicle(data.name, data.lat, data.lng)
    return VehicleMessageResponse(message="Vehicle added successfully", vehicle=vehicle)


@router.post("/update", response_model=VehicleMessageResponse)
async def update_vehicle_location(
    data: VehicleLocationUpdate,
    service: VehicleService = Depends(get_vehicle_service),
):
    """Mettre a jour la position par nom / Update position by name."""
    vehicle = await service.update_location(data.name, data.lat, data.lng, data.last_updated)
    return VehicleMessageResponse(message="Vehicle updated successfully", vehicle=vehicle)


@router.get("/{vehicle_id}", response_model=VehicleResponse)
async def get_vehicle(vehicle_id: int, service: VehicleService = Depends(get_vehicle_service)):
    """Voir un vehicule / Get vehicle detail."""
    return VehicleResponse(vehicle=await service.get_vehicle(vehicle_id))


@router.delete("/name/{name}", response_model=DeletedVehicleResponse)
async def delete_vehicle_by_name(name: str, service: VehicleService = Depends(get_vehicle_service)):
    """Supprimer un vehicule par nom / Delete vehicle by name."""
    deleted = await service.delete_vehicle_by_name(name)
    return DeletedVehicleResponse(
        message=f'Vehicle "{deleted.name}" deleted permanently',
        deleted_vehicle=deleted,
    )


@router.delete("/{vehicle_id}", response_model=DeletedVehicleResponse)
async def delete_vehicle(vehicle_id: int, service: VehicleService = Depends(get_vehicle_service)):
    """Supprimer un vehicule / Delete vehicle."""
    deleted = await service.delete_vehicle(vehicle_id)
    return DeletedVehicleResponse(
        message=f'Vehicle "{deleted.name}" deleted permanently',
        deleted_vehicle=deleted,
    )
