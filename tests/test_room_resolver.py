"""Unit tests for the room identifier resolver."""

from unittest.mock import AsyncMock, Mock

import httpx
import pytest

from src.clients import FrontdeskAPIServerError
from src.config import settings
from src.models import ResolutionTier, RoomInventoryEntry
from src.services.resolution import (
    INVENTORY_MATCHERS,
    RoomIdentifierResolver,
    match_exact_number,
    match_first_entry,
    match_numeric_id,
    match_numeric_number,
    parse_room_int,
)


def unfiltered_client(inventory):
    """Client whose backend ignores ?numero= and always returns everything."""
    client = Mock()
    client.list_rooms = AsyncMock(return_value=list(inventory))
    return client


class TestInventoryMatchers:
    """Tests for the pure matchers over a fixed inventory."""

    def test_matcher_order(self):
        assert [tier for tier, _ in INVENTORY_MATCHERS] == [
            ResolutionTier.EXACT_NUMBER,
            ResolutionTier.NUMERIC_ID,
            ResolutionTier.NUMERIC_NUMBER,
            ResolutionTier.FIRST_AVAILABLE,
        ]

    def test_exact_number(self, room_inventory):
        assert match_exact_number(room_inventory, "305") == 12
        assert match_exact_number(room_inventory, " PH-1 ") == 305
        assert match_exact_number(room_inventory, "410") is None

    def test_numeric_id(self, room_inventory):
        assert match_numeric_id(room_inventory, "9") == 9
        assert match_numeric_id(room_inventory, "PH-1") is None
        assert match_numeric_id(room_inventory, "8") is None

    def test_numeric_number_ignores_leading_zeros(self, room_inventory):
        assert match_numeric_number(room_inventory, "410") == 15
        assert match_numeric_number(room_inventory, "0305") == 12

    def test_first_entry(self, room_inventory):
        assert match_first_entry(room_inventory, "anything") == 7
        assert match_first_entry([], "anything") is None

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("305", 305),
            (" 42 ", 42),
            ("0410", 410),
            ("305A", None),
            ("-3", None),
            ("", None),
            ("²", None),
            ("3²", None),
            ("٣", None),
        ],
    )
    def test_parse_room_int(self, value, expected):
        assert parse_room_int(value) == expected


class TestRoomIdentifierResolver:
    """Tests for the resolution ladder."""

    @pytest.mark.asyncio
    async def test_tier1_filtered_query_single_match(self, mock_api_client):
        resolver = RoomIdentifierResolver(mock_api_client)

        resolved = await resolver.resolve("305")

        assert resolved.id == 12
        assert resolved.tier == ResolutionTier.FILTERED_QUERY
        mock_api_client.list_rooms.assert_awaited_once_with(numero="305")

    @pytest.mark.asyncio
    async def test_tier2_exact_number_beats_numeric_id(self, room_inventory):
        """Room "305" has id 12; the room whose id is 305 must not win."""
        resolver = RoomIdentifierResolver(unfiltered_client(room_inventory))

        resolved = await resolver.resolve("305")

        assert resolved.id == 12
        assert resolved.tier == ResolutionTier.EXACT_NUMBER

    @pytest.mark.asyncio
    async def test_tier3_numeric_id(self, mock_api_client):
        resolved = await RoomIdentifierResolver(mock_api_client).resolve("9")

        assert resolved.id == 9
        assert resolved.tier == ResolutionTier.NUMERIC_ID

    @pytest.mark.asyncio
    async def test_tier4_numeric_number(self, mock_api_client):
        resolved = await RoomIdentifierResolver(mock_api_client).resolve("410")

        assert resolved.id == 15
        assert resolved.tier == ResolutionTier.NUMERIC_NUMBER

    @pytest.mark.asyncio
    async def test_tier5_first_entry_is_degraded(self, mock_api_client):
        resolved = await RoomIdentifierResolver(mock_api_client).resolve("999")

        assert resolved.id == 7
        assert resolved.tier == ResolutionTier.FIRST_AVAILABLE
        assert resolved.degraded is True

    @pytest.mark.asyncio
    async def test_superscript_digits_degrade_instead_of_raising(self, mock_api_client):
        resolved = await RoomIdentifierResolver(mock_api_client).resolve("²")

        assert resolved.id == 7
        assert resolved.tier == ResolutionTier.FIRST_AVAILABLE

    @pytest.mark.asyncio
    async def test_tier6_when_inventory_fetch_fails(self):
        client = Mock()
        client.list_rooms = AsyncMock(side_effect=FrontdeskAPIServerError("boom", status_code=500))

        resolved = await RoomIdentifierResolver(client).resolve("999")

        assert resolved.id == settings.checkin.fallback_room_id
        assert resolved.id > 0
        assert resolved.tier == ResolutionTier.FIXED_FALLBACK
        assert client.list_rooms.await_count == 2

    @pytest.mark.asyncio
    async def test_tier6_never_propagates_unexpected_errors(self):
        client = Mock()
        client.list_rooms = AsyncMock(side_effect=httpx.ConnectError("unreachable"))

        resolved = await RoomIdentifierResolver(client, fallback_room_id=44).resolve("101")

        assert resolved.id == 44
        assert resolved.tier == ResolutionTier.FIXED_FALLBACK

    @pytest.mark.asyncio
    async def test_tier6_when_inventory_empty(self):
        resolved = await RoomIdentifierResolver(unfiltered_client([])).resolve("101")

        assert resolved.tier == ResolutionTier.FIXED_FALLBACK

    @pytest.mark.asyncio
    async def test_filtered_query_failure_continues_ladder(self, room_inventory):
        async def list_rooms(numero=None):
            if numero is not None:
                raise FrontdeskAPIServerError("filter unsupported", status_code=500)
            return list(room_inventory)

        client = Mock()
        client.list_rooms = AsyncMock(side_effect=list_rooms)

        resolved = await RoomIdentifierResolver(client).resolve("102")

        assert resolved.id == 9
        assert resolved.tier == ResolutionTier.EXACT_NUMBER

    @pytest.mark.asyncio
    async def test_resolution_is_idempotent_and_refetches(self, mock_api_client):
        resolver = RoomIdentifierResolver(mock_api_client)

        first = await resolver.resolve("410")
        second = await resolver.resolve("410")

        assert first == second
        # No cache: both calls hit the inventory (filtered + full each time)
        assert mock_api_client.list_rooms.await_count == 4

    @pytest.mark.asyncio
    async def test_custom_matchers(self, room_inventory):
        resolver = RoomIdentifierResolver(
            unfiltered_client(room_inventory),
            matchers=[(ResolutionTier.NUMERIC_ID, match_numeric_id)],
        )

        resolved = await resolver.resolve("PH-1")

        assert resolved.tier == ResolutionTier.FIXED_FALLBACK


class TestRoomInventoryEntry:
    def test_numeric_numero_is_coerced(self):
        entry = RoomInventoryEntry.model_validate({"id": 3, "numero": 201})

        assert entry.number == "201"
        assert entry.type is None
