"""
FastAPI dependencies.

Example usage in a router:

    @router.get("/me")
    def read_me(claims: TokenClaims = Depends(deps.get_current_claims)):
        ...
"""

from typing import Callable, Generator, Optional, Union

from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session

from hostel_app.core.context import AppContext
from hostel_app.core.security import TokenClaims, authenticate, authorize
from hostel_app.db.session import get_db_session
from hostel_app.models.enums import UserRole
from hostel_app.services import AuthService, BookingService, BuildingService


# --- Database & context --------------------------------------------------------

def get_context(request: Request) -> AppContext:
    return request.app.state.context


def get_db(context: AppContext = Depends(get_context)) -> Generator[Session, None, None]:
    yield from get_db_session(context.database)


# --- Authentication & Authorization -------------------------------------------

def get_current_claims(
    authorization: Optional[str] = Header(default=None),
    context: AppContext = Depends(get_context),
) -> TokenClaims:
    """Any caller holding a valid token."""
    return authenticate(authorization, context.token_service)


def require_role(role: Union[UserRole, str]) -> Callable[..., TokenClaims]:
    """Build a dependency admitting only callers whose token carries ``role``."""

    def dependency(claims: TokenClaims = Depends(get_current_claims)) -> TokenClaims:
        return authorize(claims, role)

    return dependency


# --- Services ------------------------------------------------------------------

def get_auth_service(
    db: Session = Depends(get_db),
    context: AppContext = Depends(get_context),
) -> AuthService:
    return AuthService(db, context.token_service, context.password_hasher)


def get_booking_service(
    db: Session = Depends(get_db),
    context: AppContext = Depends(get_context),
) -> BookingService:
    return BookingService(db, context.inventory)


def get_building_service(db: Session = Depends(get_db)) -> BuildingService:
    return BuildingService(db)
