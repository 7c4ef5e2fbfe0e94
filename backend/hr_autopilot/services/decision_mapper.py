from __future__ import annotations

from datetime import datetime, timezone

from hr_autopilot.models.hr import (
    ComplianceAlert,
    DecisionMetadata,
    DecisionStatus,
    HRDecision,
    OnboardingDay,
    OnboardingPlan,
)
from hr_autopilot.models.replies import ComplianceScanReply, LeaveDecisionReply, OnboardingPlanReply
from hr_autopilot.services.llm_client import Completion


def _now() -> datetime:
    return datetime.now(timezone.utc)


def map_leave_decision(reply: LeaveDecisionReply, completion: Completion) -> HRDecision:
    return HRDecision(
        status=DecisionStatus(reply.status),
        reason=reply.reason,
        metadata=DecisionMetadata(
            confidence=reply.confidence,
            evaluated_at=_now(),
            model=completion.model,
            tokens_used=completion.tokens_used,
            processing_time_ms=completion.processing_time_ms,
        ),
    )


def map_compliance_alerts(reply: ComplianceScanReply) -> list[ComplianceAlert]:
    detected_at = _now()
    return [
        ComplianceAlert(
            type=issue.type,
            severity=issue.severity,
            description=issue.description,
            suggested_actions=issue.suggested_actions,
            detected_at=detected_at,
        )
        for issue in reply.issues
    ]


def map_onboarding_plan(reply: OnboardingPlanReply, employee_id: str, duration_days: int) -> OnboardingPlan:
    days = sorted(reply.plan, key=lambda d: d.day)
    return OnboardingPlan(
        employee_id=employee_id,
        duration_days=duration_days,
        activities=[OnboardingDay(day=d.day, activities=d.activities, goals=d.goals) for d in days],
        generated_at=_now(),
    )
