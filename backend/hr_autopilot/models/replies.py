"""Expected shapes of the JSON the model returns for each workflow."""

from __future__ import annotations

from typing import Literal

from pydantic import AliasChoices, BaseModel, Field

from hr_autopilot.models.hr import Severity


class LeaveDecisionReply(BaseModel):
    # Older prompts asked for "decision" instead of "status".
    status: Literal["APPROVED", "DENIED", "FLAGGED"] = Field(
        ..., validation_alias=AliasChoices("status", "decision")
    )
    reason: str
    confidence: float = Field(..., ge=0.0, le=1.0)


class ComplianceIssueReply(BaseModel):
    type: str
    severity: Severity
    description: str
    suggested_actions: list[str] = Field(
        default=[], validation_alias=AliasChoices("suggested_actions", "suggestedActions")
    )


class ComplianceScanReply(BaseModel):
    issues: list[ComplianceIssueReply]


class OnboardingDayReply(BaseModel):
    day: int = Field(..., ge=1)
    activities: list[str]
    goals: list[str]


class OnboardingPlanReply(BaseModel):
    plan: list[OnboardingDayReply]
