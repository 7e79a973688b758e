import json

import httpx
import pytest

from hostel_app.core.exceptions import DependencyError
from hostel_app.services.inventory_client import HttpBedInventoryClient

BASE_URL = "http://building-service.test"


def _client(handler):
    transport = httpx.MockTransport(handler)
    return HttpBedInventoryClient(BASE_URL + "/", timeout=5.0, client=httpx.Client(transport=transport))


def test_occupy_puts_occupant():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"success": True})

    _client(handler).occupy("bed-7", "user-1", "Ada")

    request = seen[0]
    assert request.method == "PUT"
    assert str(request.url) == f"{BASE_URL}/api/buildings/beds/bed-7/occupancy"
    assert json.loads(request.content) == {
        "is_occupied": True,
        "occupied_by": "user-1",
        "occupied_by_name": "Ada",
    }


def test_release_clears_occupant():
    bodies = []

    def handler(request):
        bodies.append(json.loads(request.content))
        return httpx.Response(200)

    _client(handler).release("bed-7")

    assert bodies == [{"is_occupied": False, "occupied_by": None, "occupied_by_name": None}]


@pytest.mark.parametrize("status_code", [201, 400, 404, 500, 503])
def test_non_200_is_a_dependency_error(status_code):
    client = _client(lambda request: httpx.Response(status_code))

    with pytest.raises(DependencyError) as exc_info:
        client.occupy("bed-7", "user-1", "Ada")

    assert exc_info.value.details["status_code"] == status_code
    assert exc_info.value.status_code == 502


def test_timeout_is_a_dependency_error():
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(DependencyError) as exc_info:
        _client(handler).occupy("bed-7", "user-1", "Ada")

    assert "timed out" in exc_info.value.message


def test_connection_failure_is_a_dependency_error():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(DependencyError):
        _client(handler).release("bed-7")


def test_no_automatic_retry():
    attempts = []

    def handler(request):
        attempts.append(request)
        return httpx.Response(503)

    with pytest.raises(DependencyError):
        _client(handler).occupy("bed-7", "user-1", "Ada")

    assert len(attempts) == 1


def test_close_leaves_injected_client_open():
    http_client = httpx.Client(transport=httpx.MockTransport(lambda request: httpx.Response(200)))
    inventory = HttpBedInventoryClient(BASE_URL, client=http_client)

    inventory.close()

    assert not http_client.is_closed
    http_client.close()
