"""Room identifier resolution results."""

from enum import IntEnum

from pydantic import BaseModel, Field


class ResolutionTier(IntEnum):
    """Which step of the room resolution ladder produced an id.

    Lower tiers are more precise:
    - 1: FILTERED_QUERY - backend filter by numero returned exactly one room
    - 2: EXACT_NUMBER - full inventory entry with the same numero string
    - 3: NUMERIC_ID - input parsed as int equals a room id
    - 4: NUMERIC_NUMBER - input parsed as int equals a parsed numero
    - 5: FIRST_AVAILABLE - degraded, first room of the inventory
    - 6: FIXED_FALLBACK - degraded, inventory empty or unreachable
    """
    FILTERED_QUERY = 1
    EXACT_NUMBER = 2
    NUMERIC_ID = 3
    NUMERIC_NUMBER = 4
    FIRST_AVAILABLE = 5
    FIXED_FALLBACK = 6

    @property
    def degraded(self) -> bool:
        """True for tiers that did not actually match the input."""
        return self >= ResolutionTier.FIRST_AVAILABLE


class ResolvedRoomId(BaseModel):
    """Backend room id produced by the resolver for a single attempt."""

    id: int = Field(gt=0)
    tier: ResolutionTier

    @property
    def degraded(self) -> bool:
        return self.tier.degraded
