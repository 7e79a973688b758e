"""Security module for authentication and authorization."""

from .auth import authenticate, authorize, authorize_owner, extract_bearer_token
from .jwt_handler import TokenClaims, TokenService, parse_duration, parse_token_ttl
from .password_hasher import PasswordHasher

__all__ = [
    "PasswordHasher",
    "TokenService",
    "TokenClaims",
    "parse_duration",
    "parse_token_ttl",
    "authenticate",
    "authorize",
    "authorize_owner",
    "extract_bearer_token",
]
