"""Base class for pipeline steps."""

from abc import ABC, abstractmethod
from typing import Optional

from structlog import get_logger

from src.models.submission import CheckInState

logger = get_logger(__name__)


class PipelineStep(ABC):
    """Abstract base class for check-in pipeline steps.

    Each step:
    1. Moves the context into its state
    2. Reads earlier outputs from the context
    3. Writes its own output back, or raises to halt the pipeline
    """

    state: Optional[CheckInState] = None

    def __init__(self, name: str | None = None):
        """Initialize the pipeline step.

        Args:
            name: Optional custom name for the step. Defaults to class name.
        """
        self.name = name or self.__class__.__name__
        self.logger = logger.bind(step=self.name)

    @abstractmethod
    async def execute(self, context: "PipelineContext") -> bool:
        """Execute the pipeline step.

        Args:
            context: Pipeline context containing shared data

        Returns:
            True if step succeeded, False if failed
        """
        pass

    async def run(self, context: "PipelineContext") -> bool:
        """Run the step with error handling and logging.

        Exceptions are recorded on the context (the first one is kept for
        classification) and reported as a failed step.

        Args:
            context: Pipeline context

        Returns:
            True if step succeeded, False if failed
        """
        if self.state is not None:
            context.transition(self.state)
        self.logger.debug("Step starting", reserva_id=context.reserva_id)

        try:
            success = await self.execute(context)
        except Exception as e:
            self.logger.warning(
                "Step failed",
                reserva_id=context.reserva_id,
                error=str(e),
                error_type=type(e).__name__,
            )
            context.fail(self.name, e)
            return False

        if success:
            self.logger.debug("Step completed successfully", reserva_id=context.reserva_id)
        else:
            self.logger.warning("Step completed with failure", reserva_id=context.reserva_id)
        return success

    def get_name(self) -> str:
        return self.name

