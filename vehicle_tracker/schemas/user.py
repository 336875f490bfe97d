"""
Schémas User / User schemas.
Inscription, connexion, profil public.
"""

from pydantic import BaseModel, EmailStr


class RegisterRequest(BaseModel):
    """Requête d'inscription / Registration request."""
    username: str | None = None
    email: EmailStr | None = None
    password: str | None = None


class LoginRequest(BaseModel):
    """Requête de connexion / Login request. `username` accepte aussi un email."""
    username: str | None = None
    password: str | None = None


class UserPublic(BaseModel):
    """Champs publics, jamais le hash / Public fields, never the hash."""
    id: int
    username: str
    email: str
    model_config = {"from_attributes": True}


class UserResponse(BaseModel):
    success: bool = True
    user: UserPublic


class UserMessageResponse(UserResponse):
    message: str
