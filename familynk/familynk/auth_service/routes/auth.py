"""
Auth controllers. Each endpoint parses its body, calls AuthService and
returns the result; errors are left to the handlers in ``errors.py``.
"""
from fastapi import APIRouter, Depends, status

from ..dependencies import get_auth_service, get_current_user
from ..models import User
from ..schemas import (
    AuthResponse,
    ErrorResponse,
    LoginRequest,
    PublicUser,
    RefreshRequest,
    RegisterRequest,
)
from ..service import AuthService

router = APIRouter(tags=["auth"])


@router.post(
    "/login",
    response_model=AuthResponse,
    responses={404: {"model": ErrorResponse, "description": "Unknown email or wrong password"}},
)
def login(credentials: LoginRequest, service: AuthService = Depends(get_auth_service)):
    return service.login(credentials.email, credentials.password)


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse, "description": "Email already registered"}},
)
def register(payload: RegisterRequest, service: AuthService = Depends(get_auth_service)):
    return service.register(payload)


@router.post(
    "/refresh",
    response_model=AuthResponse,
    responses={
        401: {"model": ErrorResponse, "description": "Invalid or expired refresh token"},
        404: {"model": ErrorResponse, "description": "User no longer exists"},
    },
)
def refresh(payload: RefreshRequest, service: AuthService = Depends(get_auth_service)):
    return service.refresh(payload.refreshToken)


@router.get("/me", response_model=PublicUser, responses={401: {"model": ErrorResponse}})
def me(user: User = Depends(get_current_user)):
    return user
