"""
Application context.

Everything with a connection pool or a secret is built once here and handed
to request handlers through ``app.state.context``; no module keeps its own
engine or client.
"""

import logging
from dataclasses import dataclass

from hostel_app.config.settings import Settings
from hostel_app.core.security import PasswordHasher, TokenService
from hostel_app.db.session import Database
from hostel_app.services.inventory_client import BedInventoryClient, HttpBedInventoryClient

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    settings: Settings
    database: Database
    token_service: TokenService
    password_hasher: PasswordHasher
    inventory: BedInventoryClient

    def close(self) -> None:
        self.inventory.close()
        self.database.dispose()


def build_context(settings: Settings) -> AppContext:
    """Construct the shared collaborators from settings."""
    context = AppContext(
        settings=settings,
        database=Database.from_settings(settings),
        token_service=TokenService(
            settings.JWT_SECRET,
            ttl=settings.JWT_EXPIRY,
            algorithm=settings.JWT_ALGORITHM,
        ),
        password_hasher=PasswordHasher(rounds=settings.PASSWORD_BCRYPT_ROUNDS),
        inventory=HttpBedInventoryClient(
            settings.BUILDING_SERVICE_URL,
            timeout=settings.INVENTORY_TIMEOUT_SECONDS,
        ),
    )
    logger.info(
        "Application context built",
        extra={"environment": settings.ENVIRONMENT, "services": settings.ENABLED_SERVICES},
    )
    return context
