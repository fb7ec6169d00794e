"""Step to validate the raw request and its reservation target."""

from typing import Optional

from src.models.submission import CheckInState, LocalValidationError
from src.services.pipeline import PipelineContext, PipelineStep
from src.services.validation import RequestValidator


def parse_reservation_id(value: str) -> Optional[int]:
    """Numeric reservation id for the check-in route, or None."""
    text = (value or "").strip()
    if not (text.isascii() and text.isdigit()) or int(text) <= 0:
        return None
    return int(text)


class ValidateRequestStep(PipelineStep):
    """Run RequestValidator and parse the numeric reservation id for the endpoint."""

    state = CheckInState.VALIDATING

    def __init__(self):
        super().__init__("ValidateRequest")

    async def execute(self, context: PipelineContext) -> bool:
        """Validate the request.

        Raises:
            LocalValidationError: If the request is incomplete or inconsistent,
                or its reservation id cannot address the check-in endpoint
        """
        outcome = RequestValidator.validate(context.request)
        if not outcome.is_valid:
            raise LocalValidationError(outcome.errors, stage="request")

        # The check-in route is keyed by reservation, walk-ins included
        reserva_id = parse_reservation_id(context.request.reservation_id)
        if reserva_id is None:
            raise LocalValidationError(
                [f"Reservation id must be a positive number: {context.request.reservation_id!r}"],
                stage="request",
            )

        context.reserva_id = reserva_id
        return True
