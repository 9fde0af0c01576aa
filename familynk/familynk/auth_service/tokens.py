"""
Signed session tokens.

Access and refresh tokens carry the same claims but are signed with
separate secrets and expire on separate schedules, so a token of one kind
never verifies as the other.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional, Union
import re
import uuid

import jwt

from .config import Settings
from .errors import InternalError, UnauthorizedError
from .schemas import TokenPair, TokenPayload

_DURATION_RE = re.compile(r"^\s*([0-9]+)\s*([smhd]?)\s*$", re.ASCII)
_DURATION_UNITS = {"": 1, "s": 1, "m": 60, "h": 3600, "d": 86400}


def parse_duration(value: Union[int, str, timedelta]) -> timedelta:
    """
    Turn a configured lifetime into a timedelta.

    Accepts a timedelta, a number of seconds, or a string such as
    ``"900"``, ``"15m"``, ``"12h"`` or ``"7d"``.

    Raises:
        ValueError: for negative, empty or unrecognised values
    """
    if isinstance(value, timedelta):
        return value
    if isinstance(value, int):
        if value < 0:
            raise ValueError(f"Token lifetime must not be negative: {value}")
        return timedelta(seconds=value)

    match = _DURATION_RE.match(value or "")
    if not match:
        raise ValueError(f"Invalid token lifetime: {value!r}")
    amount, unit = match.groups()
    return timedelta(seconds=int(amount) * _DURATION_UNITS[unit])


class TokenIssuer:
    """Signs and verifies access/refresh token pairs with PyJWT."""

    def __init__(
        self,
        access_secret: Optional[str],
        refresh_secret: Optional[str],
        access_ttl: Union[int, str, timedelta] = "15m",
        refresh_ttl: Union[int, str, timedelta] = "7d",
        algorithm: str = "HS256",
    ):
        self.access_secret = access_secret
        self.refresh_secret = refresh_secret
        self.access_ttl = parse_duration(access_ttl)
        self.refresh_ttl = parse_duration(refresh_ttl)
        self.algorithm = algorithm

    @classmethod
    def from_settings(cls, config: Settings) -> "TokenIssuer":
        return cls(
            access_secret=config.JWT_SECRET_ACCESS,
            refresh_secret=config.JWT_SECRET_REFRESH,
            access_ttl=config.JWT_EXPIRES_IN_SHORT,
            refresh_ttl=config.JWT_EXPIRES_IN_LONG,
            algorithm=config.JWT_ALGORITHM,
        )

    @staticmethod
    def _require(secret: Optional[str]) -> str:
        if not secret:
            raise InternalError("Token signing is not configured")
        return secret

    def _sign(self, payload: TokenPayload, secret: Optional[str], ttl: timedelta) -> str:
        now = datetime.now(timezone.utc)
        claims = payload.model_dump()
        claims.update({"iat": now, "exp": now + ttl, "jti": uuid.uuid4().hex})
        return jwt.encode(claims, self._require(secret), algorithm=self.algorithm)

    def _decode(self, token: str, secret: Optional[str], kind: str) -> TokenPayload:
        key = self._require(secret)
        try:
            claims = jwt.decode(token, key, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError as exc:
            raise UnauthorizedError(f"{kind} token expired") from exc
        except jwt.InvalidTokenError as exc:
            raise UnauthorizedError(f"Invalid {kind.lower()} token") from exc

        try:
            return TokenPayload.model_validate(claims)
        except ValueError as exc:
            raise UnauthorizedError(f"Invalid {kind.lower()} token") from exc

    def issue_pair(self, payload: TokenPayload) -> TokenPair:
        return TokenPair(
            accessToken=self._sign(payload, self.access_secret, self.access_ttl),
            refreshToken=self._sign(payload, self.refresh_secret, self.refresh_ttl),
        )

    def decode_access(self, token: str) -> TokenPayload:
        return self._decode(token, self.access_secret, "Access")

    def decode_refresh(self, token: str) -> TokenPayload:
        return self._decode(token, self.refresh_secret, "Refresh")
