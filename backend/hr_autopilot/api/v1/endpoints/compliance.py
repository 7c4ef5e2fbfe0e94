from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from hr_autopilot.core.dependencies import get_current_user
from hr_autopilot.models.auth import UserInfo
from hr_autopilot.models.hr import ComplianceAlert
from hr_autopilot.models.requests import ComplianceScanRequest
from hr_autopilot.services.dispatcher import hr_dispatcher
from hr_autopilot.services.errors import HRAutopilotError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/compliance", tags=["compliance"])


@router.post("/scan", response_model=list[ComplianceAlert])
async def scan_compliance(
    body: ComplianceScanRequest,
    user: UserInfo = Depends(get_current_user),  # noqa: B008
):
    try:
        alerts = await hr_dispatcher.scan_compliance(body)
    except HRAutopilotError as e:
        logger.error("Compliance scan failed for user=%s: %s", user.email, e)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Compliance scan failed: {e}",
        ) from e

    logger.info("Compliance scan: %d alerts, user=%s", len(alerts), user.email)
    return alerts
