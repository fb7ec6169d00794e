"""Resolution of front-desk room numbers into backend room ids."""

from typing import Callable, Optional

from structlog import get_logger

from src.clients import FrontdeskAPIClient
from src.config import settings
from src.models.frontdesk import RoomInventoryEntry
from src.models.resolution import ResolutionTier, ResolvedRoomId

logger = get_logger(__name__)

InventoryMatcher = Callable[[list[RoomInventoryEntry], str], Optional[int]]


def parse_room_int(value: str) -> Optional[int]:
    """Parse a room string as a plain decimal integer.

    Only ASCII digits (with surrounding whitespace) parse; "305A", "-3" and
    "²" do not.
    """
    text = (value or "").strip()
    if not (text.isascii() and text.isdigit()):
        return None
    return int(text)


def match_exact_number(inventory: list[RoomInventoryEntry], room_number: str) -> Optional[int]:
    target = room_number.strip()
    for entry in inventory:
        if entry.number == target:
            return entry.id
    return None


def match_numeric_id(inventory: list[RoomInventoryEntry], room_number: str) -> Optional[int]:
    parsed = parse_room_int(room_number)
    if parsed is None:
        return None
    for entry in inventory:
        if entry.id == parsed:
            return entry.id
    return None


def match_numeric_number(inventory: list[RoomInventoryEntry], room_number: str) -> Optional[int]:
    parsed = parse_room_int(room_number)
    if parsed is None:
        return None
    for entry in inventory:
        if parse_room_int(entry.number) == parsed:
            return entry.id
    return None


def match_first_entry(inventory: list[RoomInventoryEntry], room_number: str) -> Optional[int]:
    return inventory[0].id if inventory else None


# Evaluated left to right over the full inventory; the first hit wins.
INVENTORY_MATCHERS: list[tuple[ResolutionTier, InventoryMatcher]] = [
    (ResolutionTier.EXACT_NUMBER, match_exact_number),
    (ResolutionTier.NUMERIC_ID, match_numeric_id),
    (ResolutionTier.NUMERIC_NUMBER, match_numeric_number),
    (ResolutionTier.FIRST_AVAILABLE, match_first_entry),
]


class RoomIdentifierResolver:
    """Turns a free-text room number into a backend room id.

    resolve() never raises: when nothing matches, or the inventory cannot be
    read, it falls back to a degraded tier so the submission can proceed. The
    inventory is fetched fresh on every call.
    """

    def __init__(
        self,
        api_client: FrontdeskAPIClient,
        fallback_room_id: Optional[int] = None,
        matchers: Optional[list[tuple[ResolutionTier, InventoryMatcher]]] = None,
    ):
        """Initialize the resolver.

        Args:
            api_client: Client exposing list_rooms()
            fallback_room_id: Id used when the inventory is empty or unreachable
            matchers: Ordered (tier, matcher) pairs over the full inventory
        """
        self.api_client = api_client
        self.fallback_room_id = fallback_room_id or settings.checkin.fallback_room_id
        self.matchers = matchers if matchers is not None else INVENTORY_MATCHERS

    async def _resolve_filtered(self, room_number: str) -> Optional[int]:
        try:
            rooms = await self.api_client.list_rooms(numero=room_number.strip())
        except Exception as e:
            logger.warning(
                "Filtered room lookup failed, falling back to full inventory",
                room_number=room_number,
                error=str(e),
            )
            return None
        if len(rooms) == 1:
            return rooms[0].id
        logger.debug("Filtered room lookup inconclusive", room_number=room_number, match_count=len(rooms))
        return None

    def _fallback(self, room_number: str, reason: str) -> ResolvedRoomId:
        logger.warning(
            "Room resolution degraded to fixed fallback id",
            room_number=room_number,
            room_id=self.fallback_room_id,
            tier=ResolutionTier.FIXED_FALLBACK,
            reason=reason,
        )
        return ResolvedRoomId(id=self.fallback_room_id, tier=ResolutionTier.FIXED_FALLBACK)

    async def resolve(self, room_number: str) -> ResolvedRoomId:
        """Resolve a room number through the fallback ladder.

        Args:
            room_number: Room as typed by staff

        Returns:
            Resolved id and the tier that produced it
        """
        room_number = room_number or ""

        room_id = await self._resolve_filtered(room_number)
        if room_id is not None and room_id > 0:
            logger.info(
                "Room resolved",
                room_number=room_number,
                room_id=room_id,
                tier=ResolutionTier.FILTERED_QUERY,
            )
            return ResolvedRoomId(id=room_id, tier=ResolutionTier.FILTERED_QUERY)

        try:
            inventory = await self.api_client.list_rooms()
        except Exception as e:
            return self._fallback(room_number, f"inventory fetch failed: {str(e)}")

        if not inventory:
            return self._fallback(room_number, "inventory is empty")

        for tier, matcher in self.matchers:
            room_id = matcher(inventory, room_number)
            if room_id is None or room_id <= 0:
                continue
            log = logger.warning if tier.degraded else logger.info
            log(
                "Room resolved" if not tier.degraded else "Room resolution degraded to first inventory entry",
                room_number=room_number,
                room_id=room_id,
                tier=tier,
            )
            return ResolvedRoomId(id=room_id, tier=tier)

        return self._fallback(room_number, "no inventory entry usable")
