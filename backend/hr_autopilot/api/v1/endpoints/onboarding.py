from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from hr_autopilot.core.dependencies import get_current_user
from hr_autopilot.models.auth import UserInfo
from hr_autopilot.models.hr import OnboardingPlan
from hr_autopilot.models.requests import OnboardingPlanRequest
from hr_autopilot.services.dispatcher import hr_dispatcher
from hr_autopilot.services.errors import HRAutopilotError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/onboarding", tags=["onboarding"])


@router.post("/plan", response_model=OnboardingPlan)
async def generate_onboarding_plan(
    body: OnboardingPlanRequest,
    user: UserInfo = Depends(get_current_user),  # noqa: B008
):
    try:
        plan = await hr_dispatcher.generate_onboarding_plan(body.employee, body.duration_days)
    except HRAutopilotError as e:
        logger.error("Onboarding plan failed for employee=%s: %s", body.employee.id, e)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Onboarding plan generation failed: {e}",
        ) from e

    return plan
