"""
Login, registration and refresh-token rotation.

AuthService is built per request around one database session and the
process-wide TokenIssuer. Classified failures (AppError subclasses) pass
through unchanged; anything else is logged and re-raised as InternalError
so no internal detail reaches the client.
"""
from datetime import datetime, timezone
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .auth import dummy_verify, hash_password, verify_password
from .errors import AppError, ConflictError, InternalError, LoginFailedError
from .models import User
from .schemas import AuthResponse, PublicUser, RegisterRequest, TokenPayload
from .tokens import TokenIssuer

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, db: Session, tokens: TokenIssuer):
        self.db = db
        self.tokens = tokens

    def _respond(self, user: User) -> AuthResponse:
        payload = TokenPayload(userId=user.id, email=user.email, role=user.role or "user")
        pair = self.tokens.issue_pair(payload)
        return AuthResponse(
            accessToken=pair.accessToken,
            refreshToken=pair.refreshToken,
            user=PublicUser.model_validate(user),
        )

    def login(self, email: str, password: str) -> AuthResponse:
        """
        Validate credentials and issue a fresh token pair.

        Raises:
            LoginFailedError: unknown email or wrong password (same message)
            InternalError: any unexpected failure
        """
        try:
            user = self.db.query(User).filter(User.email == email).first()
            if user is None:
                dummy_verify()
                logger.warning("Login failed: no account for the given email")
                raise LoginFailedError()
            if not verify_password(password, user.password):
                logger.warning("Login failed: bad password for user_id=%s", user.id)
                raise LoginFailedError()

            user.last_login = datetime.now(timezone.utc)
            self.db.commit()
            self.db.refresh(user)

            response = self._respond(user)
            logger.info("Login: user_id=%s role=%s", user.id, user.role)
            return response
        except AppError:
            raise
        except Exception as e:
            logger.exception("Unexpected error in login")
            raise InternalError("Failed to log in user") from e

    def register(self, data: RegisterRequest) -> AuthResponse:
        """
        Create a user and issue its first token pair.

        Raises:
            ConflictError: the email is already registered
            InternalError: any unexpected failure
        """
        try:
            if self.db.query(User.id).filter(User.email == data.email).first():
                raise ConflictError("Email already registered")

            user = User(
                email=data.email,
                password=hash_password(data.password),
                first_name=data.first_name,
                last_name=data.last_name,
                date_of_birth=data.date_of_birth,
                photo_url=data.photo_url,
                role=data.role,
            )
            # Nothing is stored unless the token pair was issued
            self.db.add(user)
            try:
                self.db.flush()
                response = self._respond(user)
                self.db.commit()
            except IntegrityError as e:
                # A concurrent registration won the race for this email
                self.db.rollback()
                raise ConflictError("Email already registered") from e
            except Exception:
                self.db.rollback()
                raise

            logger.info("Registered user_id=%s role=%s", user.id, user.role)
            return response
        except AppError:
            raise
        except Exception as e:
            logger.exception("Unexpected error in register")
            raise InternalError("Failed to register user") from e

    def refresh(self, refresh_token: str) -> AuthResponse:
        """
        Rotate a token pair.

        The presented refresh token is not revoked; it stays valid until it
        expires on its own.

        Raises:
            UnauthorizedError: invalid, tampered or expired refresh token
            LoginFailedError: the token's user no longer exists
            InternalError: any unexpected failure
        """
        try:
            claims = self.tokens.decode_refresh(refresh_token)
            user = self.db.query(User).filter(User.id == claims.userId).first()
            if user is None:
                logger.warning("Refresh rejected: user_id=%s no longer exists", claims.userId)
                raise LoginFailedError()

            response = self._respond(user)
            logger.info("Refreshed tokens for user_id=%s", user.id)
            return response
        except AppError:
            raise
        except Exception as e:
            logger.exception("Unexpected error in refresh")
            raise InternalError("Failed to refresh token") from e

    def get_user(self, user_id: int) -> User:
        return self.db.query(User).filter(User.id == user_id).first()
