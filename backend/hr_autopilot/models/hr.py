"""Domain records for leave decisions, compliance alerts and onboarding plans."""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class DecisionStatus(str, Enum):
    APPROVED = "APPROVED"
    DENIED = "DENIED"
    FLAGGED = "FLAGGED"
    PENDING = "PENDING"
    ERROR = "ERROR"


class Severity(str, Enum):
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


class AlertStatus(str, Enum):
    OPEN = "OPEN"
    ACKNOWLEDGED = "ACKNOWLEDGED"
    RESOLVED = "RESOLVED"


class LeaveRequest(BaseModel):
    """A single leave request. Start must not be after end."""

    id: str | None = None
    employee_id: str = Field(..., min_length=1)
    start_date: date
    end_date: date
    reason: str | None = Field(default=None, max_length=2000)

    @model_validator(mode="after")
    def _check_date_order(self) -> LeaveRequest:
        if self.start_date > self.end_date:
            raise ValueError("Start date cannot be after end date")
        return self


class Employee(BaseModel):
    id: str = Field(..., min_length=1)
    name: str
    role: str
    department: str
    leave_balance: float = Field(..., ge=0)
    experience_level: str | None = None


class HRManager(BaseModel):
    id: str
    name: str | None = None
    clearance_level: int = Field(default=0, ge=0)


class LeaveContext(BaseModel):
    """Organizational context considered alongside a leave request."""

    team_coverage: float = Field(default=100.0, ge=0, le=100)
    critical_projects: list[str] = []


class ComplianceSnapshot(BaseModel):
    """HR data handed to the compliance scan."""

    work_hours: dict[str, float] = {}
    contracts: dict[str, str] = {}
    leave_records: list[str] = []


class DecisionMetadata(BaseModel):
    model_config = ConfigDict(frozen=True, extra="allow")

    confidence: float | None = Field(default=None, ge=0.0, le=1.0)
    evaluated_at: datetime | None = None
    model: str | None = None
    tokens_used: int | None = None
    processing_time_ms: int | None = None


class HRDecision(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: DecisionStatus
    reason: str
    metadata: DecisionMetadata | None = None

    def extra(self, key: str, default: Any = None) -> Any:
        """Look up a workflow-specific metadata flag such as ``fast_tracked``."""
        if self.metadata is None or not self.metadata.model_extra:
            return default
        return self.metadata.model_extra.get(key, default)


class ComplianceAlert(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: str
    severity: Severity
    description: str
    suggested_actions: list[str] = []
    detected_at: datetime
    status: AlertStatus = AlertStatus.OPEN


class OnboardingDay(BaseModel):
    model_config = ConfigDict(frozen=True)

    day: int = Field(..., ge=1)
    activities: list[str]
    goals: list[str]


class OnboardingPlan(BaseModel):
    model_config = ConfigDict(frozen=True)

    employee_id: str
    duration_days: int
    activities: list[OnboardingDay]
    generated_at: datetime
