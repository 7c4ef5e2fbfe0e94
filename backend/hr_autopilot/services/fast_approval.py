"""Fast-track approval for short leave requests.

Demo only: conflicts are not checked. The agent refuses to approve anything
unless it was built with ``demo_mode=True``.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from hr_autopilot.models.hr import DecisionMetadata, DecisionStatus, Employee, HRDecision, LeaveContext, LeaveRequest
from hr_autopilot.services.audit import AuditSink
from hr_autopilot.services.errors import InvalidLeaveRequestError
from hr_autopilot.services.leave_rules import count_business_days, error_decision, log_decision, validate_leave_request

logger = logging.getLogger(__name__)

FAST_APPROVAL_THRESHOLD_DAYS = 3


class FastApprovalAgent:
    def __init__(self, audit_sink: AuditSink, demo_mode: bool = False) -> None:
        self.audit_sink = audit_sink
        self.demo_mode = demo_mode

    def qualifies(self, request: LeaveRequest) -> bool:
        if not self.demo_mode:
            return False
        days = count_business_days(request.start_date, request.end_date)
        return days <= FAST_APPROVAL_THRESHOLD_DAYS and self._has_no_conflicts(request)

    async def evaluate(
        self,
        request: LeaveRequest,
        employee: Employee,
        context: LeaveContext | None = None,
    ) -> HRDecision:
        try:
            validate_leave_request(request)
        except InvalidLeaveRequestError as e:
            return await error_decision(self.audit_sink, e, request.id or request.employee_id)

        if not self.qualifies(request):
            reason = "Does not meet fast-track criteria" if self.demo_mode else "Fast-track is disabled"
            return HRDecision(status=DecisionStatus.PENDING, reason=reason)

        logger.info("[demo] Fast-track approved leave for %s", request.employee_id)
        decision = HRDecision(
            status=DecisionStatus.APPROVED,
            reason="Qualifies for demo fast-track approval",
            metadata=DecisionMetadata(
                evaluated_at=datetime.now(timezone.utc),
                fast_tracked=True,
            ),
        )
        await log_decision(self.audit_sink, decision, request, agent_type="fast-approval")
        return decision

    def _has_no_conflicts(self, request: LeaveRequest) -> bool:
        # Calendar lookup is not wired up; demo mode assumes a free calendar.
        return True
