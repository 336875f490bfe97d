"""Routes API / API routes."""

from fastapi import APIRouter

from vehicle_tracker.api import users, vehicles

api_router = APIRouter(prefix="/api")

api_router.include_router(vehicles.router, prefix="/vehicles", tags=["vehicles"])
api_router.include_router(users.router, prefix="/users", tags=["users"])

# Alias au singulier utilises par le simulateur / Singular aliases used by the simulator
api_router.include_router(vehicles.router, prefix="/vehicle", tags=["vehicles"], include_in_schema=False)
api_router.include_router(users.router, prefix="/user", tags=["users"], include_in_schema=False)

# Liste affichee sur les 404 / Listing shown on 404 responses
AVAILABLE_ENDPOINTS = [
    "GET /health",
    "GET /test",
    "GET /api/vehicles",
    "POST /api/vehicles",
    "POST /api/vehicle/update",
    "GET /api/vehicles/:id",
    "DELETE /api/vehicles/:id",
    "DELETE /api/vehicles/name/:name",
    "POST /api/users/register",
    "POST /api/users/login",
    "GET /api/users/profile/:username",
]
