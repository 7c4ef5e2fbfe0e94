from __future__ import annotations

import logging

from hr_autopilot.models.hr import Employee, OnboardingPlan
from hr_autopilot.models.replies import OnboardingPlanReply
from hr_autopilot.models.requests import DEFAULT_ONBOARDING_DAYS
from hr_autopilot.services.decision_mapper import map_onboarding_plan
from hr_autopilot.services.errors import MalformedResponseError
from hr_autopilot.services.llm_client import LLMClient, ModelConfig
from hr_autopilot.services.prompts import build_onboarding_messages
from hr_autopilot.services.response_parser import parse_reply

logger = logging.getLogger(__name__)

OPERATION = "onboarding-plan"
LLM_TEMPERATURE = 0.3
LLM_MAX_TOKENS = 2000


class OnboardingWorkflow:
    def __init__(self, llm: LLMClient) -> None:
        self.llm = llm

    def default_config(self) -> ModelConfig:
        return ModelConfig(
            model=self.llm.default_model,
            temperature=LLM_TEMPERATURE,
            max_tokens=LLM_MAX_TOKENS,
        )

    async def generate_plan(
        self,
        employee: Employee,
        duration_days: int = DEFAULT_ONBOARDING_DAYS,
        config: ModelConfig | None = None,
    ) -> OnboardingPlan:
        messages = build_onboarding_messages(employee, duration_days)
        model_config = config or self.default_config()
        try:
            completion = await self.llm.complete(messages, model_config, OPERATION)
            reply = parse_reply(completion.text, OnboardingPlanReply)
        except MalformedResponseError as e:
            await self.llm.record_error(OPERATION, e, model_config.model)
            raise
        plan = map_onboarding_plan(reply, employee.id, duration_days)
        logger.info("Onboarding plan for %s: %d days planned", employee.id, len(plan.activities))
        return plan
