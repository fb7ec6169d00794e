"""Orchestrator for the check-in submission pipeline."""

from typing import Optional

from structlog import get_logger

from src.clients import FrontdeskAPIClient
from src.models.checkin import CheckInRequest
from src.models.submission import (
    CheckInSubmissionError,
    ClassifiedError,
    ErrorKind,
    SubmissionResult,
)
from src.services.error_classifier import ErrorClassifier
from src.services.pipeline import Pipeline, PipelineContext
from src.services.pipeline.steps import (
    AssemblePayloadStep,
    ResolveRoomStep,
    SubmitCheckInStep,
    ValidateRequestStep,
    VerifyPayloadStep,
)
from src.services.resolution import RoomIdentifierResolver
from src.services.strategies import FORM_SOURCED, DataSourceStrategy

logger = get_logger(__name__)


class CheckInOrchestrator:
    """Runs validate → resolve → assemble → verify → submit for one check-in.

    Every invocation is independent: rooms are re-resolved, nothing is cached,
    and a failed attempt is never retried here.
    """

    def __init__(
        self,
        api_client: Optional[FrontdeskAPIClient] = None,
        resolver: Optional[RoomIdentifierResolver] = None,
    ):
        """Initialize the orchestrator.

        Args:
            api_client: Front-desk API client; built from settings when omitted
            resolver: Room resolver; built on api_client when omitted
        """
        self.api_client = api_client or FrontdeskAPIClient()
        self.resolver = resolver or RoomIdentifierResolver(self.api_client)

    def build_pipeline(self) -> Pipeline:
        """Build the ordered step sequence for one submission."""
        return Pipeline(
            "checkin",
            [
                ValidateRequestStep(),
                ResolveRoomStep(self.resolver),
                AssemblePayloadStep(),
                VerifyPayloadStep(),
                SubmitCheckInStep(self.api_client),
            ],
        )

    async def submit(
        self,
        strategy: DataSourceStrategy,
        request: CheckInRequest,
    ) -> SubmissionResult:
        """Submit one check-in.

        Args:
            strategy: Data-sourcing strategy (form, fixed test, reservation)
            request: Raw request from the front desk

        Returns:
            SubmissionResult for the successful check-in

        Raises:
            CheckInSubmissionError: Carrying the ClassifiedError of the first
                failing stage
        """
        strategy = strategy or FORM_SOURCED
        context = PipelineContext(request, strategy)

        logger.info(
            "Starting check-in submission",
            data_origin=strategy.name,
            is_walk_in=request.is_walk_in,
            reservation_id=request.reservation_id,
            room_number=request.room_number,
        )

        await self.build_pipeline().execute(context)

        if context.success and context.result is not None:
            return context.result

        if context.failure is not None:
            classified = ErrorClassifier.classify(context.failure)
        else:
            classified = ClassifiedError(
                kind=ErrorKind.UNKNOWN,
                message="Check-in did not complete",
            )

        logger.warning(
            "Check-in submission failed",
            reserva_id=context.reserva_id,
            data_origin=strategy.name,
            kind=classified.kind,
            failed_state=context.failed_state,
            error_message=classified.message,
        )
        raise CheckInSubmissionError(classified, state=context.failed_state or context.state)
