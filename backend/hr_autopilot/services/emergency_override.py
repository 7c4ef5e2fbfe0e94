from __future__ import annotations

import logging
from datetime import datetime, timezone

from hr_autopilot.models.hr import DecisionMetadata, DecisionStatus, HRDecision, HRManager, LeaveRequest
from hr_autopilot.services.audit import AuditEvent, AuditSink
from hr_autopilot.services.errors import OverrideNotAuthorizedError

logger = logging.getLogger(__name__)

MIN_OVERRIDE_CLEARANCE = 3


class EmergencyOverrideAgent:
    """Manager-forced approval that skips the decision pipeline.

    The audit event is written before the decision is returned; if the sink
    fails, the override fails with it.
    """

    def __init__(self, audit_sink: AuditSink) -> None:
        self.audit_sink = audit_sink

    def is_authorized(self, manager: HRManager) -> bool:
        return manager.clearance_level >= MIN_OVERRIDE_CLEARANCE

    async def force_approve(
        self,
        request: LeaveRequest,
        manager: HRManager,
        justification: str,
    ) -> HRDecision:
        if not self.is_authorized(manager):
            logger.warning(
                "Override refused for manager=%s clearance=%d",
                manager.id,
                manager.clearance_level,
            )
            raise OverrideNotAuthorizedError("Manager not authorized for emergency overrides")

        now = datetime.now(timezone.utc)
        await self.audit_sink.record(
            AuditEvent(
                event="LEAVE_OVERRIDE",
                entity_id=request.id or request.employee_id,
                metadata={
                    "manager_id": manager.id,
                    "justification": justification,
                    "employee_id": request.employee_id,
                },
                timestamp=now,
            )
        )

        return HRDecision(
            status=DecisionStatus.APPROVED,
            reason=f"Emergency override: {justification}",
            metadata=DecisionMetadata(
                evaluated_at=now,
                overridden_by=manager.name or manager.id,
                normal_policy="bypassed",
            ),
        )
