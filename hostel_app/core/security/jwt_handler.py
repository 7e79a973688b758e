"""
JWT token management utilities.

Issues and verifies the signed, time-bound identity tokens used by every
guarded endpoint.
"""

import logging
import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional, Union

import jwt

from hostel_app.core.exceptions import InvalidTokenError

logger = logging.getLogger(__name__)

DEFAULT_TOKEN_TTL = timedelta(hours=24)

_DURATION_UNITS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "μs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}
_DURATION_PART = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)")
_DURATION_FULL = re.compile(r"[+-]?(?:(?:\d+(?:\.\d*)?|\.\d+)(?:ns|us|µs|μs|ms|s|m|h))+")


def parse_duration(value: str) -> timedelta:
    """
    Parse a Go-style duration string such as ``24h``, ``90m`` or ``1h30m``.

    Args:
        value: Duration string

    Returns:
        Parsed duration

    Raises:
        ValueError: If the string is not a valid duration
    """
    if not isinstance(value, str):
        raise ValueError(f"Invalid duration: {value!r}")

    text = value.strip()
    if text in ("0", "+0", "-0"):
        return timedelta(0)
    if not _DURATION_FULL.fullmatch(text):
        raise ValueError(f"Invalid duration: {value!r}")

    sign = -1 if text.startswith("-") else 1
    seconds = sum(
        float(amount) * _DURATION_UNITS[unit]
        for amount, unit in _DURATION_PART.findall(text)
    )
    return timedelta(seconds=sign * seconds)


def parse_token_ttl(value: Union[str, timedelta, None]) -> timedelta:
    """
    Resolve the token lifetime from configuration.

    Unparseable or non-positive values fall back to 24 hours so that token
    issuance never fails because of configuration.
    """
    if isinstance(value, timedelta):
        ttl = value
    elif not value:
        return DEFAULT_TOKEN_TTL
    else:
        try:
            ttl = parse_duration(value)
        except ValueError:
            return DEFAULT_TOKEN_TTL

    if ttl <= timedelta(0):
        return DEFAULT_TOKEN_TTL
    return ttl


@dataclass(frozen=True)
class TokenClaims:
    """Identity claims decoded from a verified token."""

    user_id: str
    email: str
    name: str
    role: str
    issued_at: datetime
    expires_at: datetime

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "TokenClaims":
        """
        Build claims from a decoded payload, rejecting absent or wrong-typed fields.

        Raises:
            ValueError: If a required claim is missing or has the wrong type
        """
        values = {}
        for key in ("user_id", "email", "name", "role"):
            claim = payload.get(key)
            if not isinstance(claim, str) or not claim:
                raise ValueError(f"Claim '{key}' is missing or not a string")
            values[key] = claim

        timestamps = {}
        for key in ("iat", "exp"):
            claim = payload.get(key)
            if isinstance(claim, bool) or not isinstance(claim, (int, float)):
                raise ValueError(f"Claim '{key}' is missing or not numeric")
            timestamps[key] = datetime.fromtimestamp(claim, tz=timezone.utc)

        return cls(
            issued_at=timestamps["iat"],
            expires_at=timestamps["exp"],
            **values,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "user_id": self.user_id,
            "email": self.email,
            "name": self.name,
            "role": self.role,
            "issued_at": self.issued_at.isoformat(),
            "expires_at": self.expires_at.isoformat(),
        }


class TokenService:
    """
    JWT token service for authentication.

    Tokens are signed with a service-wide secret using an HMAC algorithm.
    Verification accepts only the HMAC family, so tokens carrying ``none`` or
    an asymmetric algorithm in their header are rejected.
    """

    DEFAULT_ALGORITHM = "HS256"
    ALLOWED_ALGORITHMS = ("HS256", "HS384", "HS512")

    def __init__(
        self,
        secret_key: str,
        ttl: Union[str, timedelta, None] = None,
        algorithm: str = DEFAULT_ALGORITHM,
    ):
        """
        Initialize token service.

        Args:
            secret_key: Secret key for signing tokens
            ttl: Token lifetime, as a duration string or timedelta
            algorithm: HMAC algorithm used for signing (default: HS256)

        Raises:
            ValueError: If the secret is empty or the algorithm is not HMAC
        """
        if not secret_key:
            raise ValueError("Token secret must not be empty")
        if algorithm not in self.ALLOWED_ALGORITHMS:
            raise ValueError(f"Unsupported signing algorithm: {algorithm}")

        self.secret_key = secret_key
        self.algorithm = algorithm
        self.ttl = parse_token_ttl(ttl)

        logger.info(
            f"Token service initialized with algorithm {algorithm}, "
            f"tokens expire in {self.ttl}"
        )

    def issue(self, user: Any, issued_at: Optional[datetime] = None) -> str:
        """
        Create a signed token for a user.

        Args:
            user: Object exposing ``id``, ``email``, ``name`` and ``role``
            issued_at: Issue time (defaults to now)

        Returns:
            Encoded JWT token
        """
        now = issued_at or datetime.now(timezone.utc)
        role = getattr(user.role, "value", user.role)

        payload = {
            "user_id": str(user.id),
            "email": user.email,
            "name": user.name,
            "role": role,
            "iat": now,
            "exp": now + self.ttl,
        }

        token = jwt.encode(payload, self.secret_key, algorithm=self.algorithm)
        logger.debug(f"Token issued for user {user.id}")
        return token

    def verify(self, token: str) -> TokenClaims:
        """
        Verify and decode a token.

        Args:
            token: Encoded JWT token

        Returns:
            Decoded claims

        Raises:
            InvalidTokenError: On any signature, algorithm, expiry or payload failure
        """
        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=list(self.ALLOWED_ALGORITHMS),
                options={"require": ["exp", "iat"]},
            )
            claims = TokenClaims.from_payload(payload)
        except (jwt.PyJWTError, ValueError, TypeError) as e:
            logger.warning(f"Token verification failed: {type(e).__name__}")
            raise InvalidTokenError() from e

        now = datetime.now(timezone.utc)
        if not (claims.issued_at <= now < claims.expires_at):
            logger.warning("Token verification failed: outside validity window")
            raise InvalidTokenError()

        return claims
