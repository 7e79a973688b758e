"""
Authentication endpoints.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Header, status
from fastapi.responses import JSONResponse

from hostel_app.api import deps
from hostel_app.core.exceptions import AuthenticationError
from hostel_app.core.security import TokenClaims
from hostel_app.schemas.auth import (
    AuthResponse,
    ClaimsResponse,
    LoginRequest,
    ProfileResponse,
    SignupRequest,
    UserResponse,
    ValidateTokenResponse,
)
from hostel_app.services import AuthService

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def signup(
    payload: SignupRequest,
    service: AuthService = Depends(deps.get_auth_service),
) -> AuthResponse:
    """Register a new account; the role defaults to ``student``."""
    token, user = service.signup(payload)
    return AuthResponse(
        message="User registered successfully",
        token=token,
        user=UserResponse.model_validate(user),
    )


@router.post("/login", response_model=AuthResponse)
def login(
    payload: LoginRequest,
    service: AuthService = Depends(deps.get_auth_service),
) -> AuthResponse:
    token, user = service.login(payload)
    return AuthResponse(
        message="Login successful",
        token=token,
        user=UserResponse.model_validate(user),
    )


@router.post("/validate", response_model=ValidateTokenResponse)
def validate_token(
    authorization: Optional[str] = Header(default=None),
    service: AuthService = Depends(deps.get_auth_service),
):
    """Report whether the presented token is valid, with its claims if so."""
    try:
        claims = service.validate(authorization)
    except AuthenticationError:
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content=ValidateTokenResponse(valid=False).model_dump(),
        )
    return ValidateTokenResponse(valid=True, claims=ClaimsResponse(**claims.to_dict()))


@router.get("/profile", response_model=ProfileResponse)
def profile(
    claims: TokenClaims = Depends(deps.get_current_claims),
    service: AuthService = Depends(deps.get_auth_service),
) -> ProfileResponse:
    user = service.profile(claims)
    return ProfileResponse(user=UserResponse.model_validate(user))
