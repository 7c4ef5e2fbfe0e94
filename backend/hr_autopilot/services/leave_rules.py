"""Helpers shared by every leave evaluator."""

from __future__ import annotations

import logging
from datetime import date
from typing import Protocol, runtime_checkable

from hr_autopilot.models.hr import DecisionStatus, Employee, HRDecision, LeaveContext, LeaveRequest
from hr_autopilot.services.audit import AuditEvent, AuditSink, record_or_log
from hr_autopilot.services.errors import InvalidLeaveRequestError

logger = logging.getLogger(__name__)


@runtime_checkable
class LeaveEvaluator(Protocol):
    async def evaluate(
        self,
        request: LeaveRequest,
        employee: Employee,
        context: LeaveContext | None = None,
    ) -> HRDecision: ...


def validate_leave_request(request: LeaveRequest) -> None:
    if not request.start_date or not request.end_date:
        raise InvalidLeaveRequestError("Missing required dates in leave request")
    if request.start_date > request.end_date:
        raise InvalidLeaveRequestError("Start date cannot be after end date")


def count_business_days(start: date, end: date) -> int:
    """Weekdays between ``start`` and ``end``, both inclusive."""
    if start > end:
        return 0
    full_weeks, remainder = divmod((end - start).days + 1, 7)
    first = start.weekday()
    return full_weeks * 5 + sum(1 for offset in range(remainder) if (first + offset) % 7 < 5)


async def log_decision(
    audit_sink: AuditSink,
    decision: HRDecision,
    request: LeaveRequest,
    agent_type: str,
) -> None:
    await record_or_log(
        audit_sink,
        AuditEvent(
            event="LEAVE_DECISION",
            entity_id=request.id or request.employee_id,
            metadata={
                "agent": agent_type,
                "status": decision.status.value,
                "reason": decision.reason,
            },
        )
    )


async def error_decision(audit_sink: AuditSink, error: Exception, entity_id: str) -> HRDecision:
    message = str(error) or "Unknown error occurred"
    logger.error("Leave evaluation failed for %s: %s", entity_id, message)
    await record_or_log(
        audit_sink,
        AuditEvent(
            event="AGENT_ERROR",
            entity_id=entity_id,
            metadata={"error": message, "error_type": type(error).__name__},
        )
    )
    return HRDecision(
        status=DecisionStatus.ERROR,
        reason=f"Failed to process request: {message}",
    )
