"""Command-line runner for diagnosing check-in submissions.

Loads a check-in request from a JSON file (front-end camelCase keys are
accepted), submits it with the chosen data-sourcing strategy and prints the
result or the classified error as JSON.
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from src.clients import FrontdeskAPIClient
from src.config import configure_logging, get_logger, settings
from src.models import CheckInRequest, CheckInSubmissionError
from src.services import CheckInOrchestrator, get_strategy
from src.services.pipeline.steps.validate_request_step import parse_reservation_id
from src.services.strategies import STRATEGIES

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Submit a front-desk check-in")
    parser.add_argument("request_file", type=Path, help="JSON file with the check-in request")
    parser.add_argument(
        "--strategy",
        choices=sorted(STRATEGIES),
        default="form",
        help="Data-sourcing strategy (default: form)",
    )
    parser.add_argument(
        "--probe",
        action="store_true",
        help="Probe backend read endpoints after a failed submission",
    )
    return parser


async def main(argv: Optional[list[str]] = None) -> int:
    """Run one submission.

    Returns:
        0 on success, 1 on a failed submission, 2 on unreadable input
    """
    args = build_parser().parse_args(argv)

    try:
        raw = json.loads(args.request_file.read_text(encoding="utf-8"))
        request = CheckInRequest.model_validate(raw)
    except (OSError, ValueError, ValidationError) as e:
        logger.error("Could not load check-in request", path=str(args.request_file), error=str(e))
        print(json.dumps({"success": False, "error": str(e)}))
        return 2

    logger.info(
        "Starting check-in runner",
        environment=settings.environment,
        strategy=args.strategy,
    )

    client = FrontdeskAPIClient()
    orchestrator = CheckInOrchestrator(api_client=client)

    try:
        result = await orchestrator.submit(get_strategy(args.strategy), request)
    except CheckInSubmissionError as e:
        output: dict[str, Any] = {"success": False, "error": e.error.model_dump(mode="json")}
        reserva_id = parse_reservation_id(request.reservation_id)
        if args.probe and reserva_id is not None:
            output["probes"] = await client.probe_endpoints(reserva_id)
        print(json.dumps(output, indent=2, ensure_ascii=False))
        return 1

    print(json.dumps(result.model_dump(mode="json"), indent=2, ensure_ascii=False))
    return 0


def run_sync(argv: Optional[list[str]] = None) -> int:
    """Configure logging and run the async main function synchronously.

    Returns:
        Exit code from main()
    """
    configure_logging()
    return asyncio.run(main(argv))


if __name__ == "__main__":
    sys.exit(run_sync())
