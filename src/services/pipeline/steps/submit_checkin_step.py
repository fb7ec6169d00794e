"""Step to send the check-in write to the backend."""

from pydantic import ValidationError

from src.clients import FrontdeskAPIClient, FrontdeskAPITransportError
from src.models.frontdesk import CheckInResponse
from src.models.submission import CheckInState, SubmissionResult
from src.services.error_classifier import BackendRejectionError
from src.services.pipeline import PipelineContext, PipelineStep


class SubmitCheckInStep(PipelineStep):
    """POST the verified payload exactly once and build the result envelope."""

    state = CheckInState.SUBMITTING

    def __init__(self, api_client: FrontdeskAPIClient):
        """Initialize the step.

        Args:
            api_client: Front-desk API client
        """
        super().__init__("SubmitCheckIn")
        self.api_client = api_client

    async def execute(self, context: PipelineContext) -> bool:
        """Submit the check-in.

        Raises:
            FrontdeskAPIClientError: If the backend call fails
            BackendRejectionError: If a 2xx body reports success=false
        """
        endpoint = FrontdeskAPIClient.checkin_endpoint(context.reserva_id)
        context.response = await self.api_client.submit_checkin(
            context.reserva_id, context.payload.to_wire()
        )

        try:
            response = CheckInResponse.model_validate(context.response)
        except ValidationError as e:
            raise FrontdeskAPITransportError(
                f"Malformed check-in response from {endpoint}: {str(e)}",
                body=context.response,
                endpoint=endpoint,
            ) from e

        if not response.success:
            raise BackendRejectionError(
                response.message or "Check-in rejected by server",
                body=context.response,
            )

        context.result = SubmissionResult(
            success=True,
            folio_id=response.data.id if response.data else None,
            message=response.message or "Check-in completed",
            data_origin=context.strategy.origin,
            endpoint_used=endpoint,
            room_tier=context.resolved_room.tier,
            requires_charge_split=context.request.requires_charge_split,
        )

        self.logger.info(
            "Check-in completed",
            reserva_id=context.reserva_id,
            folio_id=context.result.folio_id,
            room_id=context.payload.id_hab,
            data_origin=context.strategy.name,
        )
        return True
