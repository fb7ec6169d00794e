"""Step to resolve the typed room number into a backend room id."""

from src.models.submission import CheckInState
from src.services.pipeline import PipelineContext, PipelineStep
from src.services.resolution import RoomIdentifierResolver


class ResolveRoomStep(PipelineStep):
    """Resolve the room; never halts the pipeline on its own."""

    state = CheckInState.RESOLVING

    def __init__(self, resolver: RoomIdentifierResolver):
        """Initialize the step.

        Args:
            resolver: Room identifier resolver
        """
        super().__init__("ResolveRoom")
        self.resolver = resolver

    async def execute(self, context: PipelineContext) -> bool:
        context.resolved_room = await self.resolver.resolve(context.request.room_number)
        context.stats["room"] = {
            "room_number": context.request.room_number,
            "room_id": context.resolved_room.id,
            "tier": int(context.resolved_room.tier),
            "degraded": context.resolved_room.degraded,
        }
        return True
