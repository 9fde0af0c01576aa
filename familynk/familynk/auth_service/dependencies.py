"""
FastAPI dependencies: service wiring, bearer-token authentication and the
role guard used by admin routes.
"""
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session
from functools import lru_cache
from typing import Optional

from .config import settings
from .db import get_db
from .errors import ForbiddenError, UnauthorizedError
from .models import User
from .service import AuthService
from .tokens import TokenIssuer

_bearer_scheme = HTTPBearer(auto_error=False)


@lru_cache
def get_token_issuer() -> TokenIssuer:
    return TokenIssuer.from_settings(settings)


def get_auth_service(
    db: Session = Depends(get_db),
    tokens: TokenIssuer = Depends(get_token_issuer),
) -> AuthService:
    return AuthService(db, tokens)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
    service: AuthService = Depends(get_auth_service),
) -> User:
    if credentials is None:
        raise UnauthorizedError("Not authenticated")

    claims = service.tokens.decode_access(credentials.credentials)
    user = service.get_user(claims.userId)
    if user is None:
        raise UnauthorizedError("User not found")
    return user


def require_role(role: str):
    """Build a dependency that only lets users with ``role`` through."""

    def guard(user: User = Depends(get_current_user)) -> User:
        if user.role != role:
            raise ForbiddenError()
        return user

    return guard
