import json
from pathlib import Path
from unittest.mock import AsyncMock, Mock

import pytest

from src.models import CheckInRequest, RoomInventoryEntry


FIXTURES_DIR = Path(__file__).parent / "fixtures"


def load_fixture(*parts: str):
    with open(FIXTURES_DIR.joinpath(*parts), encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def rooms_response():
    """Load GET /habitaciones response from fixture."""
    return load_fixture("frontdesk_api", "rooms_response.json")


@pytest.fixture
def room_inventory(rooms_response):
    """Room inventory as parsed models."""
    return [RoomInventoryEntry.model_validate(row) for row in rooms_response]


@pytest.fixture
def checkin_success_response():
    """Load 2xx check-in response from fixture."""
    return load_fixture("frontdesk_api", "checkin_success_response.json")


@pytest.fixture
def room_conflict_response():
    """Load 422 response with an id_hab error from fixture."""
    return load_fixture("frontdesk_api", "checkin_room_conflict_response.json")


@pytest.fixture
def field_errors_response():
    """Load 422 response with generic field errors from fixture."""
    return load_fixture("frontdesk_api", "checkin_field_errors_response.json")


@pytest.fixture
def walk_in_request():
    """Walk-in for room 305, 2025-09-28 to 2025-09-29, 2 adults and 1 child."""
    return CheckInRequest.model_validate(load_fixture("requests", "walk_in_request.json"))


@pytest.fixture
def reservation_request():
    """Existing-reservation check-in for room 101."""
    return CheckInRequest.model_validate(load_fixture("requests", "reservation_request.json"))


@pytest.fixture
def mock_api_client(room_inventory, checkin_success_response):
    """Mock FrontdeskAPIClient backed by the fixture inventory.

    list_rooms(numero=...) filters by exact numero like the backend does.
    """

    async def list_rooms(numero=None):
        if numero is None:
            return list(room_inventory)
        return [room for room in room_inventory if room.number == numero]

    client = Mock()
    client.list_rooms = AsyncMock(side_effect=list_rooms)
    client.submit_checkin = AsyncMock(return_value=checkin_success_response)
    return client
