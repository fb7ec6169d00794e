"""Step to verify the assembled payload before it is sent."""

from src.models.submission import CheckInState, LocalValidationError
from src.services.pipeline import PipelineContext, PipelineStep
from src.services.validation import PayloadVerifier


class VerifyPayloadStep(PipelineStep):
    """Re-check the payload's own invariants."""

    state = CheckInState.VERIFYING

    def __init__(self):
        super().__init__("VerifyPayload")

    async def execute(self, context: PipelineContext) -> bool:
        """Verify the payload.

        Raises:
            LocalValidationError: If the payload violates a structural invariant
        """
        outcome = PayloadVerifier.verify(context.payload)
        if not outcome.is_valid:
            self.logger.error(
                "Assembled payload failed verification",
                reserva_id=context.reserva_id,
                errors=outcome.errors,
            )
            raise LocalValidationError(outcome.errors, stage="payload")
        return True
