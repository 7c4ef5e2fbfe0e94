from __future__ import annotations

import logging
import time
from dataclasses import dataclass

from openai import AsyncAzureOpenAI

from hr_autopilot.core.config import Settings, resolve_model
from hr_autopilot.services.audit import AuditEvent, AuditSink, LoggingAuditSink, record_or_log
from hr_autopilot.services.cost_tracker import CostTracker, InMemoryCostTracker
from hr_autopilot.services.errors import MalformedResponseError, ProviderError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ModelConfig:
    model: str
    temperature: float
    max_tokens: int


@dataclass(frozen=True)
class Completion:
    text: str
    tokens_used: int
    model: str
    processing_time_ms: int


class LLMClient:
    """Single request/response boundary to the hosted chat completion endpoint."""

    def __init__(
        self,
        audit_sink: AuditSink | None = None,
        cost_tracker: CostTracker | None = None,
    ) -> None:
        self.client: AsyncAzureOpenAI | None = None
        self.initialized = False
        self.default_model = ""
        self.audit_sink: AuditSink = audit_sink or LoggingAuditSink()
        self.cost_tracker: CostTracker = cost_tracker or InMemoryCostTracker()

    async def initialize(self, settings: Settings) -> None:
        if self.initialized:
            return

        if not settings.OPENAI_ENDPOINT or not settings.OPENAI_API_KEY:
            logger.warning("OpenAI credentials missing; LLMClient not initialized")
            return

        self.client = AsyncAzureOpenAI(
            azure_endpoint=settings.OPENAI_ENDPOINT,
            api_key=settings.OPENAI_API_KEY,
            api_version=settings.OPENAI_API_VERSION,
            timeout=settings.OPENAI_TIMEOUT_SECONDS,
            max_retries=0,
        )
        self.default_model = resolve_model(settings)
        self.initialized = True
        logger.info("LLMClient initialized (model=%s)", self.default_model)

    async def close(self) -> None:
        if self.client:
            await self.client.close()
        self.client = None
        self.initialized = False

    async def complete(
        self,
        messages: list[dict[str, str]],
        config: ModelConfig,
        operation: str,
    ) -> Completion:
        if not self.initialized or not self.client:
            raise ProviderError(operation, "LLMClient not initialized")

        started = time.monotonic()
        try:
            response = await self.client.chat.completions.create(
                model=config.model,
                messages=messages,  # type: ignore[arg-type]
                temperature=config.temperature,
                max_tokens=config.max_tokens,
                response_format={"type": "json_object"},
            )
        except Exception as e:
            logger.error("LLM call failed for operation=%s: %s", operation, e)
            await self.record_error(operation, e, config.model)
            raise ProviderError(operation, f"LLM call failed: {e}") from e

        content = response.choices[0].message.content if response.choices else None
        if not content:
            raise MalformedResponseError("Empty response from LLM", content)

        tokens = response.usage.total_tokens if response.usage else 0
        self.cost_tracker.track_usage(model=config.model, tokens=tokens, operation=operation)

        return Completion(
            text=content,
            tokens_used=tokens,
            model=config.model,
            processing_time_ms=int((time.monotonic() - started) * 1000),
        )

    async def record_error(self, operation: str, error: Exception, model: str) -> None:
        """Send a provider or reply failure to the audit sink without masking it."""
        await record_or_log(
            self.audit_sink,
            AuditEvent(
                event="LLM_ERROR",
                entity_id=operation,
                metadata={"error": str(error), "error_type": type(error).__name__, "model": model},
            ),
        )


llm_client = LLMClient()
