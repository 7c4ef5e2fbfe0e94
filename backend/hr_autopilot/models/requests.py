"""Request bodies accepted by the HTTP adapters."""

from __future__ import annotations

from pydantic import BaseModel, Field

from hr_autopilot.models.hr import ComplianceSnapshot, Employee, LeaveContext, LeaveRequest

DEFAULT_ONBOARDING_DAYS = 30


class LeaveEvaluationRequest(BaseModel):
    request: LeaveRequest
    employee: Employee
    context: LeaveContext = LeaveContext()


class LeaveBatchRequest(BaseModel):
    items: list[LeaveEvaluationRequest] = Field(..., min_length=1, max_length=100)


class LeaveOverrideRequest(BaseModel):
    request: LeaveRequest
    justification: str = Field(..., min_length=1, max_length=2000)


class ComplianceScanRequest(ComplianceSnapshot):
    pass


class OnboardingPlanRequest(BaseModel):
    employee: Employee
    duration_days: int = Field(default=DEFAULT_ONBOARDING_DAYS, ge=1, le=365)
