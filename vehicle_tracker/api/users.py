"""
Routes Utilisateurs / User routes.
Inscription, connexion (sans token), profil public.
Registration, token-free login, public profile.
"""

from fastapi import APIRouter, Depends, Request, status

from vehicle_tracker.api.deps import get_user_service
from vehicle_tracker.config import settings
from vehicle_tracker.rate_limit import limiter
from vehicle_tracker.schemas.user import LoginRequest, RegisterRequest, UserMessageResponse, UserResponse
from vehicle_tracker.services.user_service import UserService

router = APIRouter()


@router.post("/register", response_model=UserMessageResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.RATE_LIMIT_REGISTER)
async def register(request: Request, data: RegisterRequest, service: UserService = Depends(get_user_service)):
    """Inscription / Register a user."""
    user = await service.register(data.username, data.email, data.password)
    return UserMessageResponse(message="User registered successfully", user=user)


@router.post("/login", response_model=UserMessageResponse)
@limiter.limit(settings.RATE_LIMIT_LOGIN)
async def login(request: Request, data: LoginRequest, service: UserService = Depends(get_user_service)):
    """Connexion par identifiants / Login with credentials."""
    user = await service.login(data.username, data.password)
    return UserMessageResponse(message="Login successful", user=user)


@router.get("/profile/{username}", response_model=UserResponse)
async def profile(username: str, service: UserService = Depends(get_user_service)):
    """Profil public / Public profile."""
    return UserResponse(user=await service.get_profile(username))
