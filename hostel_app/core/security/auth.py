"""
Request authentication and role checks.

The functions here hold the guard logic; ``hostel_app.api.deps`` exposes
them as FastAPI dependencies.
"""

import logging
from typing import Optional, Union

from hostel_app.core.exceptions import AuthenticationError, AuthorizationError
from hostel_app.core.security.jwt_handler import TokenClaims, TokenService
from hostel_app.models.enums import UserRole

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


def extract_bearer_token(authorization: Optional[str]) -> str:
    """
    Pull the credential out of an Authorization header value.

    The ``Bearer `` prefix is optional and matched case-sensitively; nothing
    else is trimmed.

    Raises:
        AuthenticationError: If no credential was supplied
    """
    if not authorization:
        raise AuthenticationError("No authorization token provided")

    if len(authorization) > len(BEARER_PREFIX) and authorization.startswith(BEARER_PREFIX):
        return authorization[len(BEARER_PREFIX):]
    return authorization


def authenticate(authorization: Optional[str], token_service: TokenService) -> TokenClaims:
    """
    Resolve the caller's claims from an Authorization header value.

    Raises:
        AuthenticationError: If the credential is missing
        InvalidTokenError: If the credential does not verify
    """
    token = extract_bearer_token(authorization)
    return token_service.verify(token)


def authorize(claims: TokenClaims, required_role: Union[UserRole, str]) -> TokenClaims:
    """
    Ensure verified claims carry the required role.

    Raises:
        AuthorizationError: If the role does not match
    """
    role = getattr(required_role, "value", required_role)
    if claims.role != role:
        logger.warning(
            "Role check failed",
            extra={"user_id": claims.user_id, "required_role": role},
        )
        raise AuthorizationError()
    return claims


def authorize_owner(claims: TokenClaims, user_id: str) -> TokenClaims:
    """
    Admit the caller acting on their own ``user_id``, or any admin.

    Raises:
        AuthorizationError: If a non-admin acts for another user
    """
    if claims.user_id != user_id and claims.role != UserRole.ADMIN.value:
        logger.warning(
            "Ownership check failed",
            extra={"user_id": claims.user_id, "target_user_id": user_id},
        )
        raise AuthorizationError("You can only manage your own bookings")
    return claims
