from __future__ import annotations

import logging
from collections import defaultdict
from datetime import datetime, timezone
from typing import Protocol

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class UsageRecord(BaseModel):
    model: str
    tokens: int
    operation: str
    recorded_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class CostTracker(Protocol):
    def track_usage(self, model: str, tokens: int, operation: str) -> None: ...


class InMemoryCostTracker:
    def __init__(self) -> None:
        self.records: list[UsageRecord] = []

    def track_usage(self, model: str, tokens: int, operation: str) -> None:
        self.records.append(UsageRecord(model=model, tokens=tokens, operation=operation))
        logger.debug("Usage: model=%s tokens=%d operation=%s", model, tokens, operation)

    def totals_by_operation(self) -> dict[str, int]:
        totals: dict[str, int] = defaultdict(int)
        for record in self.records:
            totals[record.operation] += record.tokens
        return dict(totals)

    @property
    def total_tokens(self) -> int:
        return sum(r.tokens for r in self.records)
