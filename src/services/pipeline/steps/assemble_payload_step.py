"""Step to assemble the check-in payload."""

from src.models.submission import CheckInState
from src.services.assembly import PayloadAssembler
from src.services.pipeline import PipelineContext, PipelineStep


class AssemblePayloadStep(PipelineStep):
    """Build the payload using the strategy's client id, defaults and guest counts."""

    state = CheckInState.ASSEMBLING

    def __init__(self):
        super().__init__("AssemblePayload")

    async def execute(self, context: PipelineContext) -> bool:
        strategy = context.strategy
        context.payload = PayloadAssembler.assemble(
            context.request,
            context.resolved_room,
            strategy.client_id(context.request),
            defaults=strategy.assembly_defaults(),
            guest_counts=strategy.guest_counts(context.request),
        )
        self.logger.debug(
            "Assembled check-in payload",
            reserva_id=context.reserva_id,
            payload=context.payload.to_wire(),
            titular_deferred=context.payload.titular_deferred,
        )
        return True
