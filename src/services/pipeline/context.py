"""Pipeline context for sharing data between check-in steps."""

from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Optional

from src.models.checkin import CheckInPayload, CheckInRequest
from src.models.resolution import ResolvedRoomId
from src.models.submission import CheckInState, SubmissionResult

if TYPE_CHECKING:
    from src.services.strategies import DataSourceStrategy


class PipelineContext:
    """Context object for one check-in attempt.

    Created fresh per submission and discarded afterwards; each step reads
    what earlier steps produced and writes its own output here.
    """

    def __init__(self, request: CheckInRequest, strategy: "DataSourceStrategy"):
        """Initialize pipeline context.

        Args:
            request: Raw check-in request
            strategy: DataSourceStrategy for this attempt
        """
        self.request = request
        self.strategy = strategy
        self.start_time = datetime.now(timezone.utc)

        self.state: CheckInState = CheckInState.IDLE
        self.state_history: list[CheckInState] = [CheckInState.IDLE]

        # Stage outputs
        self.reserva_id: Optional[int] = None
        self.resolved_room: Optional[ResolvedRoomId] = None
        self.payload: Optional[CheckInPayload] = None
        self.response: Optional[dict[str, Any]] = None
        self.result: Optional[SubmissionResult] = None

        # First exception that halted the pipeline, kept for classification
        self.failure: Optional[BaseException] = None
        self.failed_state: Optional[CheckInState] = None

        self.stats: dict[str, Any] = {}
        self.errors: list[dict[str, str]] = []
        self.success: bool = False

    def transition(self, state: CheckInState) -> None:
        """Move the attempt to a new state."""
        self.state = state
        self.state_history.append(state)

    def fail(self, step_name: str, error: BaseException) -> None:
        """Record the exception that stopped a step.

        Args:
            step_name: Name of the failing step
            error: Raised exception
        """
        if self.failure is None:
            self.failure = error
            self.failed_state = self.state
        self.add_error(step_name, str(error))

    def add_error(self, step_name: str, error_message: str) -> None:
        """Add an error to the context.

        Args:
            step_name: Name of the step where error occurred
            error_message: Error message
        """
        self.errors.append({
            "step": step_name,
            "message": error_message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        })

    def has_errors(self) -> bool:
        return len(self.errors) > 0

    def get_results(self) -> dict[str, Any]:
        """Summary of the attempt for logging and diagnostics."""
        end_time = datetime.now(timezone.utc)
        return {
            "reserva_id": self.reserva_id,
            "data_origin": getattr(self.strategy, "name", None),
            "success": self.success,
            "state": self.state.value,
            "states": [state.value for state in self.state_history],
            "room_id": self.resolved_room.id if self.resolved_room else None,
            "room_tier": int(self.resolved_room.tier) if self.resolved_room else None,
            "duration_seconds": (end_time - self.start_time).total_seconds(),
            "errors": self.errors,
            "stats": self.stats,
        }
