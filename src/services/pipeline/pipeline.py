"""Pipeline executor for check-in steps."""

from structlog import get_logger

from src.models.submission import CheckInState

from .base_step import PipelineStep
from .context import PipelineContext

logger = get_logger(__name__)


class Pipeline:
    """Pipeline for executing a sequence of processing steps.

    The pipeline:
    1. Executes steps in order
    2. Passes context between steps
    3. Stops at the first failing step; every step is required
    4. Leaves the context in a terminal state
    """

    def __init__(self, name: str, steps: list[PipelineStep]):
        """Initialize the pipeline.

        Args:
            name: Pipeline name for logging
            steps: List of pipeline steps to execute in order
        """
        self.name = name
        self.steps = steps
        self.logger = logger.bind(pipeline=name)

    async def execute(self, context: PipelineContext) -> PipelineContext:
        """Execute the pipeline.

        Args:
            context: Pipeline context

        Returns:
            Updated context with results
        """
        self.logger.debug(
            "Pipeline starting",
            reserva_id=context.reserva_id,
            step_count=len(self.steps),
        )

        successful_steps = 0
        failed_steps = 0

        for step in self.steps:
            step_name = step.get_name()

            try:
                success = await step.run(context)
            except Exception as e:
                self.logger.error(
                    "Step raised unexpected exception",
                    reserva_id=context.reserva_id,
                    step=step_name,
                    error=str(e),
                    exc_info=True,
                )
                context.fail(step_name, e)
                success = False

            if success:
                successful_steps += 1
                continue

            failed_steps += 1
            self.logger.info(
                "Step failed, stopping pipeline",
                reserva_id=context.reserva_id,
                step=step_name,
            )
            break

        context.success = not context.has_errors() and failed_steps == 0
        context.transition(CheckInState.SUCCEEDED if context.success else CheckInState.FAILED)

        context.stats["pipeline"] = {
            "name": self.name,
            "total_steps": len(self.steps),
            "successful_steps": successful_steps,
            "failed_steps": failed_steps,
        }

        self.logger.info(
            "Pipeline completed",
            reserva_id=context.reserva_id,
            success=context.success,
            state=context.state,
            successful_steps=successful_steps,
            failed_steps=failed_steps,
        )

        return context
