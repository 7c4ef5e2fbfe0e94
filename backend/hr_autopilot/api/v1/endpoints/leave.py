from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from hr_autopilot.core.dependencies import get_current_user, require_role
from hr_autopilot.models.auth import UserInfo
from hr_autopilot.models.hr import HRDecision
from hr_autopilot.models.requests import LeaveBatchRequest, LeaveEvaluationRequest, LeaveOverrideRequest
from hr_autopilot.services.dispatcher import hr_dispatcher
from hr_autopilot.services.errors import OverrideNotAuthorizedError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/leave", tags=["leave"])


@router.post("/evaluate", response_model=HRDecision)
async def evaluate_leave(
    body: LeaveEvaluationRequest,
    user: UserInfo = Depends(get_current_user),  # noqa: B008
):
    decision = await hr_dispatcher.evaluate_leave(body.request, body.employee, body.context)
    logger.info(
        "Leave evaluated for employee=%s status=%s user=%s",
        body.request.employee_id,
        decision.status.value,
        user.email,
    )
    return decision


@router.post("/evaluate/batch", response_model=list[HRDecision])
async def evaluate_leave_batch(
    body: LeaveBatchRequest,
    user: UserInfo = Depends(get_current_user),  # noqa: B008
):
    decisions = await hr_dispatcher.evaluate_leave_batch(body.items)
    logger.info("Batch of %d leave requests evaluated, user=%s", len(decisions), user.email)
    return decisions


@router.post("/override", response_model=HRDecision)
async def override_leave(
    body: LeaveOverrideRequest,
    user: UserInfo = Depends(require_role("hr_manager", "admin")),  # noqa: B008
):
    try:
        return await hr_dispatcher.force_approve(body.request, user.as_manager(), body.justification)
    except OverrideNotAuthorizedError as e:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=str(e),
        ) from e
