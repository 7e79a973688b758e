"""
Client for the bed inventory held by the building service.

The booking service only ever talks to the inventory through the
``BedInventoryClient`` interface, so tests can pass an in-process fake.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

import httpx

from hostel_app.core.exceptions import DependencyError

logger = logging.getLogger(__name__)

INVENTORY_SERVICE = "building-service"


class BedInventoryClient(ABC):
    """Writes bed occupancy to the inventory owner."""

    @abstractmethod
    def set_occupancy(
        self,
        bed_id: str,
        is_occupied: bool,
        occupied_by: Optional[str] = None,
        occupied_by_name: Optional[str] = None,
    ) -> None:
        """
        Set a bed's occupancy.

        Raises:
            DependencyError: If the inventory did not accept the update
        """

    def occupy(self, bed_id: str, user_id: str, user_name: str) -> None:
        self.set_occupancy(bed_id, True, user_id, user_name)

    def release(self, bed_id: str) -> None:
        self.set_occupancy(bed_id, False, None, None)

    def close(self) -> None:
        pass


class HttpBedInventoryClient(BedInventoryClient):
    """
    Inventory client speaking HTTP to the building service.

    One pooled ``httpx.Client`` is reused for every call. There are no
    automatic retries: any transport error, timeout or non-200 answer is
    raised immediately as ``DependencyError``.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        client: Optional[httpx.Client] = None,
    ):
        """
        Args:
            base_url: Root URL of the building service
            timeout: Per-request timeout in seconds
            client: Pre-built client (tests pass one with a mock transport)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=timeout)

    def _occupancy_url(self, bed_id: str) -> str:
        return f"{self.base_url}/api/buildings/beds/{bed_id}/occupancy"

    def set_occupancy(
        self,
        bed_id: str,
        is_occupied: bool,
        occupied_by: Optional[str] = None,
        occupied_by_name: Optional[str] = None,
    ) -> None:
        body = {
            "is_occupied": is_occupied,
            "occupied_by": occupied_by,
            "occupied_by_name": occupied_by_name,
        }

        try:
            response = self._client.put(
                self._occupancy_url(bed_id),
                json=body,
                timeout=self.timeout,
            )
        except httpx.TimeoutException as e:
            logger.error(f"Bed occupancy update timed out for bed {bed_id}")
            raise DependencyError(
                "Bed inventory request timed out",
                service=INVENTORY_SERVICE,
                details={"bed_id": bed_id},
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"Bed occupancy update failed for bed {bed_id}: {e}")
            raise DependencyError(
                "Bed inventory unreachable",
                service=INVENTORY_SERVICE,
                details={"bed_id": bed_id},
            ) from e

        if response.status_code != 200:
            logger.error(
                f"Bed occupancy update rejected for bed {bed_id}",
                extra={"status_code": response.status_code},
            )
            raise DependencyError(
                "Bed inventory rejected the update",
                service=INVENTORY_SERVICE,
                details={"bed_id": bed_id, "status_code": response.status_code},
            )

        logger.debug(f"Bed {bed_id} occupancy set to {is_occupied}")

    def close(self) -> None:
        if self._owns_client:
            self._client.close()
