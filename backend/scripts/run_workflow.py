#!/usr/bin/env python3
"""Run a compliance scan or onboarding plan from a JSON file.

Run from the backend/ directory with OpenAI credentials in the environment:

    python3 scripts/run_workflow.py compliance snapshot.json
    python3 scripts/run_workflow.py onboarding employee.json --duration 14

The input file holds the same body the HTTP endpoint accepts. The result is
printed to stdout as JSON.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any

_project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

from hr_autopilot.core.config import Settings  # noqa: E402
from hr_autopilot.models.requests import (  # noqa: E402
    DEFAULT_ONBOARDING_DAYS,
    ComplianceScanRequest,
    OnboardingPlanRequest,
)
from hr_autopilot.services.dispatcher import WorkflowDispatcher, WorkflowKind  # noqa: E402
from hr_autopilot.services.errors import HRAutopilotError  # noqa: E402

logger = logging.getLogger(__name__)

_COMMANDS = {
    "compliance": WorkflowKind.COMPLIANCE_SCAN,
    "onboarding": WorkflowKind.ONBOARDING_PLAN,
}


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run an HR Autopilot workflow from a JSON file")
    parser.add_argument("workflow", choices=sorted(_COMMANDS), help="Workflow to run")
    parser.add_argument("input", type=Path, help="Path to the JSON request body")
    parser.add_argument(
        "--duration",
        type=int,
        default=None,
        help=f"Onboarding duration in days (default: {DEFAULT_ONBOARDING_DAYS})",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def load_payload(workflow: str, path: Path, duration: int | None) -> ComplianceScanRequest | OnboardingPlanRequest:
    data: dict[str, Any] = json.loads(path.read_text(encoding="utf-8"))
    if workflow == "compliance":
        return ComplianceScanRequest.model_validate(data)
    if "employee" not in data:
        data = {"employee": data}
    if duration is not None:
        data["duration_days"] = duration
    return OnboardingPlanRequest.model_validate(data)


def render(result: Any) -> str:
    if isinstance(result, list):
        return json.dumps([item.model_dump(mode="json") for item in result], indent=2)
    return json.dumps(result.model_dump(mode="json"), indent=2)


async def run(args: argparse.Namespace) -> int:
    settings = Settings()
    payload = load_payload(args.workflow, args.input, args.duration)

    dispatcher = WorkflowDispatcher()
    await dispatcher.initialize(settings)
    try:
        if not dispatcher.llm.initialized:
            logger.error("OPENAI_ENDPOINT and OPENAI_API_KEY must be set")
            return 2
        result = await dispatcher.dispatch(_COMMANDS[args.workflow], payload)
    except HRAutopilotError as e:
        logger.error("Workflow %s failed: %s", args.workflow, e)
        return 1
    finally:
        await dispatcher.close()

    print(render(result))
    return 0


def main() -> None:
    args = parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(message)s",
        stream=sys.stderr,
    )
    sys.exit(asyncio.run(run(args)))


if __name__ == "__main__":
    main()
