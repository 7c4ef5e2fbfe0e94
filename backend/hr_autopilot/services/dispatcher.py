from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Any

from pydantic import BaseModel

from hr_autopilot.core.config import Settings
from hr_autopilot.models.hr import (
    ComplianceAlert,
    ComplianceSnapshot,
    DecisionStatus,
    Employee,
    HRDecision,
    HRManager,
    LeaveContext,
    LeaveRequest,
    OnboardingPlan,
)
from hr_autopilot.models.requests import (
    ComplianceScanRequest,
    DEFAULT_ONBOARDING_DAYS,
    LeaveEvaluationRequest,
    OnboardingPlanRequest,
)
from hr_autopilot.services.audit import AuditSink, LoggingAuditSink, build_audit_sink
from hr_autopilot.services.compliance_check import ComplianceCheckWorkflow
from hr_autopilot.services.cost_tracker import CostTracker, InMemoryCostTracker
from hr_autopilot.services.emergency_override import EmergencyOverrideAgent
from hr_autopilot.services.fast_approval import FastApprovalAgent
from hr_autopilot.services.leave_approval import LeaveApprovalWorkflow
from hr_autopilot.services.leave_rules import LeaveEvaluator
from hr_autopilot.services.llm_client import LLMClient, llm_client
from hr_autopilot.services.onboarding import OnboardingWorkflow

logger = logging.getLogger(__name__)


class WorkflowKind(str, Enum):
    LEAVE_APPROVAL = "leave_approval"
    COMPLIANCE_SCAN = "compliance_scan"
    ONBOARDING_PLAN = "onboarding_plan"


class WorkflowDispatcher:
    """Routes caller intent to one of the workflows. Holds no per-request state."""

    def __init__(
        self,
        llm: LLMClient | None = None,
        audit_sink: AuditSink | None = None,
        cost_tracker: CostTracker | None = None,
        demo_mode: bool = False,
    ) -> None:
        self.llm = llm or LLMClient()
        self.cost_tracker = cost_tracker or self.llm.cost_tracker
        self.initialized = False
        self._wire(audit_sink or self.llm.audit_sink, demo_mode)

    def _wire(self, audit_sink: AuditSink, demo_mode: bool) -> None:
        self.audit_sink = audit_sink
        self.llm.audit_sink = audit_sink
        self.llm.cost_tracker = self.cost_tracker
        self.demo_mode = demo_mode
        self.leave_workflow: LeaveEvaluator = LeaveApprovalWorkflow(self.llm, audit_sink)
        self.fast_approval: LeaveEvaluator = FastApprovalAgent(audit_sink, demo_mode=demo_mode)
        self.override_agent = EmergencyOverrideAgent(audit_sink)
        self.compliance_workflow = ComplianceCheckWorkflow(self.llm)
        self.onboarding_workflow = OnboardingWorkflow(self.llm)

    async def initialize(self, settings: Settings) -> None:
        if self.initialized:
            return
        self._wire(build_audit_sink(settings), settings.DEMO_MODE)
        if settings.DEMO_MODE:
            logger.warning("DEMO_MODE is on: short leave requests are fast-tracked without review")
        await self.llm.initialize(settings)
        self.initialized = True

    async def close(self) -> None:
        await self.llm.close()
        self.initialized = False

    async def evaluate_leave(
        self,
        request: LeaveRequest,
        employee: Employee,
        context: LeaveContext | None = None,
    ) -> HRDecision:
        if self.demo_mode:
            decision = await self.fast_approval.evaluate(request, employee, context)
            if decision.status != DecisionStatus.PENDING:
                return decision
        return await self.leave_workflow.evaluate(request, employee, context)

    async def evaluate_leave_batch(self, items: list[LeaveEvaluationRequest]) -> list[HRDecision]:
        return list(
            await asyncio.gather(
                *(self.evaluate_leave(item.request, item.employee, item.context) for item in items)
            )
        )

    async def scan_compliance(self, snapshot: ComplianceSnapshot) -> list[ComplianceAlert]:
        return await self.compliance_workflow.scan(snapshot)

    async def generate_onboarding_plan(
        self,
        employee: Employee,
        duration_days: int = DEFAULT_ONBOARDING_DAYS,
    ) -> OnboardingPlan:
        return await self.onboarding_workflow.generate_plan(employee, duration_days)

    async def force_approve(
        self,
        request: LeaveRequest,
        manager: HRManager,
        justification: str,
    ) -> HRDecision:
        return await self.override_agent.force_approve(request, manager, justification)

    async def dispatch(self, kind: WorkflowKind | str, payload: BaseModel | dict[str, Any]) -> Any:
        kind = WorkflowKind(kind)
        if isinstance(payload, BaseModel):
            payload = payload.model_dump()
        if kind is WorkflowKind.LEAVE_APPROVAL:
            leave = LeaveEvaluationRequest.model_validate(payload)
            return await self.evaluate_leave(leave.request, leave.employee, leave.context)
        if kind is WorkflowKind.COMPLIANCE_SCAN:
            scan = ComplianceScanRequest.model_validate(payload)
            return await self.scan_compliance(scan)
        onboarding = OnboardingPlanRequest.model_validate(payload)
        return await self.generate_onboarding_plan(onboarding.employee, onboarding.duration_days)


hr_dispatcher = WorkflowDispatcher(llm=llm_client, audit_sink=LoggingAuditSink(), cost_tracker=InMemoryCostTracker())
