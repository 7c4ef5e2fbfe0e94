"""Audit trail sinks.

Durable audit storage lives outside this service. A sink only has to accept
structured events; the default one writes them to the ``audit`` logger.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Protocol

import aiohttp
from pydantic import BaseModel, Field

from hr_autopilot.core.config import Settings

logger = logging.getLogger(__name__)
audit_logger = logging.getLogger("audit")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditEvent(BaseModel):
    event: str
    entity_id: str | None = None
    metadata: dict[str, Any] = {}
    timestamp: datetime = Field(default_factory=_utcnow)


class AuditSink(Protocol):
    async def record(self, event: AuditEvent) -> None: ...


class LoggingAuditSink:
    async def record(self, event: AuditEvent) -> None:
        audit_logger.info(
            "%s entity=%s metadata=%s",
            event.event,
            event.entity_id,
            event.metadata,
        )


class InMemoryAuditSink:
    """Append-only sink, mainly for tests and local demos."""

    def __init__(self) -> None:
        self.events: list[AuditEvent] = []

    async def record(self, event: AuditEvent) -> None:
        self.events.append(event)

    def by_kind(self, kind: str) -> list[AuditEvent]:
        return [e for e in self.events if e.event == kind]


class WebhookAuditSink:
    def __init__(self, url: str, timeout_seconds: float = 10) -> None:
        self.url = url
        self.timeout_seconds = timeout_seconds

    async def record(self, event: AuditEvent) -> None:
        timeout = aiohttp.ClientTimeout(total=self.timeout_seconds)
        async with aiohttp.ClientSession(timeout=timeout) as session:
            async with session.post(self.url, json=event.model_dump(mode="json")) as response:
                if response.status >= 300:
                    error_text = await response.text()
                    raise RuntimeError(f"Audit webhook failed: {response.status} - {error_text}")


def build_audit_sink(settings: Settings) -> AuditSink:
    if settings.AUDIT_WEBHOOK_URL:
        logger.info("Audit events will be posted to %s", settings.AUDIT_WEBHOOK_URL)
        return WebhookAuditSink(settings.AUDIT_WEBHOOK_URL)
    return LoggingAuditSink()


async def record_or_log(sink: AuditSink, event: AuditEvent) -> None:
    """Record ``event``; a sink failure is logged instead of raised."""
    try:
        await sink.record(event)
    except Exception:
        logger.exception("Audit sink failed to record %s for %s", event.event, event.entity_id)
