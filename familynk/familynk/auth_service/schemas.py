from pydantic import BaseModel, ConfigDict, Field
from datetime import date
from typing import Literal, Optional

Role = Literal["user", "admin"]


class LoginRequest(BaseModel):
    email: str
    password: str


class RegisterRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=8, max_length=128)
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    date_of_birth: Optional[date] = None
    photo_url: Optional[str] = Field(None, max_length=2048)
    role: Role = "user"


class RefreshRequest(BaseModel):
    refreshToken: str


class PublicUser(BaseModel):
    """The subset of a stored user that is safe to hand back to a client."""
    id: int
    email: str
    first_name: str
    last_name: str
    date_of_birth: Optional[date] = None
    photo_url: Optional[str] = None
    role: Role = "user"

    model_config = ConfigDict(from_attributes=True)


class TokenPayload(BaseModel):
    """Claims shared by access and refresh tokens."""
    userId: int
    email: str
    role: Role = "user"


class TokenPair(BaseModel):
    accessToken: str
    refreshToken: str


class AuthResponse(TokenPair):
    user: PublicUser


class HealthResponse(BaseModel):
    status: str
    uptime: float
    timestamp: str


class ErrorResponse(BaseModel):
    error: str
