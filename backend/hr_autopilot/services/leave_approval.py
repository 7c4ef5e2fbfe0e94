from __future__ import annotations

import logging

from hr_autopilot.models.hr import Employee, HRDecision, LeaveContext, LeaveRequest
from hr_autopilot.models.replies import LeaveDecisionReply
from hr_autopilot.services.audit import AuditSink
from hr_autopilot.services.decision_mapper import map_leave_decision
from hr_autopilot.services.errors import HRAutopilotError
from hr_autopilot.services.leave_rules import error_decision, log_decision, validate_leave_request
from hr_autopilot.services.llm_client import LLMClient, ModelConfig
from hr_autopilot.services.prompts import build_leave_messages
from hr_autopilot.services.response_parser import parse_reply

logger = logging.getLogger(__name__)

OPERATION = "leave-approval"
LLM_TEMPERATURE = 0.2
LLM_MAX_TOKENS = 500


class LeaveApprovalWorkflow:
    """Model-backed leave decision.

    Failures are turned into an ``ERROR`` decision instead of being raised so
    that one bad request never sinks a batch of unrelated evaluations.
    """

    def __init__(self, llm: LLMClient, audit_sink: AuditSink) -> None:
        self.llm = llm
        self.audit_sink = audit_sink

    def default_config(self) -> ModelConfig:
        return ModelConfig(
            model=self.llm.default_model,
            temperature=LLM_TEMPERATURE,
            max_tokens=LLM_MAX_TOKENS,
        )

    async def evaluate(
        self,
        request: LeaveRequest,
        employee: Employee,
        context: LeaveContext | None = None,
        config: ModelConfig | None = None,
    ) -> HRDecision:
        entity_id = request.id or request.employee_id
        try:
            validate_leave_request(request)
            messages = build_leave_messages(request, employee, context or LeaveContext())
            model_config = config or self.default_config()
            completion = await self.llm.complete(messages, model_config, OPERATION)
            reply = parse_reply(completion.text, LeaveDecisionReply)
            decision = map_leave_decision(reply, completion)
        except HRAutopilotError as e:
            return await error_decision(self.audit_sink, e, entity_id)

        await log_decision(self.audit_sink, decision, request, agent_type=OPERATION)
        logger.info("Leave request %s evaluated: %s", entity_id, decision.status.value)
        return decision
