from __future__ import annotations

import logging

from hr_autopilot.models.hr import ComplianceAlert, ComplianceSnapshot
from hr_autopilot.models.replies import ComplianceScanReply
from hr_autopilot.services.decision_mapper import map_compliance_alerts
from hr_autopilot.services.errors import MalformedResponseError
from hr_autopilot.services.llm_client import LLMClient, ModelConfig
from hr_autopilot.services.prompts import build_compliance_messages
from hr_autopilot.services.response_parser import parse_reply

logger = logging.getLogger(__name__)

OPERATION = "compliance-scan"
LLM_TEMPERATURE = 0.0
LLM_MAX_TOKENS = 1000


class ComplianceCheckWorkflow:
    def __init__(self, llm: LLMClient) -> None:
        self.llm = llm

    def default_config(self) -> ModelConfig:
        return ModelConfig(
            model=self.llm.default_model,
            temperature=LLM_TEMPERATURE,
            max_tokens=LLM_MAX_TOKENS,
        )

    async def scan(
        self,
        snapshot: ComplianceSnapshot,
        config: ModelConfig | None = None,
    ) -> list[ComplianceAlert]:
        messages = build_compliance_messages(snapshot)
        model_config = config or self.default_config()
        try:
            completion = await self.llm.complete(messages, model_config, OPERATION)
            reply = parse_reply(completion.text, ComplianceScanReply)
        except MalformedResponseError as e:
            await self.llm.record_error(OPERATION, e, model_config.model)
            raise
        alerts = map_compliance_alerts(reply)
        logger.info(
            "Compliance scan: %d employees, %d alerts",
            len(snapshot.work_hours),
            len(alerts),
        )
        return alerts
