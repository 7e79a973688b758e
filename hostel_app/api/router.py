"""
API Router - Main Entry Point

Aggregates the auth, building and booking routers. Each deployment mounts
only the services listed in ``ENABLED_SERVICES``.
"""
from typing import Iterable

from fastapi import APIRouter

from hostel_app.api.endpoints import auth, bookings, buildings
from hostel_app.core.logging import get_logger

logger = get_logger(__name__)

SERVICE_ROUTERS = {
    "auth": auth.router,
    "buildings": buildings.router,
    "bookings": bookings.router,
}


def build_api_router(enabled_services: Iterable[str]) -> APIRouter:
    router = APIRouter(
        responses={
            400: {"description": "Bad Request"},
            401: {"description": "Unauthorized"},
            403: {"description": "Forbidden"},
            404: {"description": "Not Found"},
            409: {"description": "Conflict"},
            422: {"description": "Validation Error"},
            500: {"description": "Internal Server Error"},
        }
    )
    for name in enabled_services:
        router.include_router(SERVICE_ROUTERS[name])
        logger.info(f"Mounted {name} router")
    return router
