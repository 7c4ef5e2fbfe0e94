from __future__ import annotations

import json
import logging
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from hr_autopilot.services.errors import MalformedResponseError

logger = logging.getLogger(__name__)

ReplyT = TypeVar("ReplyT", bound=BaseModel)


def parse_reply(raw: str, schema: type[ReplyT]) -> ReplyT:
    """Decode the model's text reply and validate it against ``schema``.

    Both invalid JSON and a well-formed document of the wrong shape raise
    :class:`MalformedResponseError` carrying the raw text.
    """
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, TypeError) as e:
        raise MalformedResponseError(f"Failed to parse LLM JSON response ({e})", raw) from e

    if not isinstance(data, dict):
        raise MalformedResponseError("Expected a JSON object from LLM", raw)

    try:
        return schema.model_validate(data)
    except ValidationError as e:
        logger.warning("LLM reply does not match %s: %s", schema.__name__, e)
        raise MalformedResponseError(
            f"LLM reply does not match {schema.__name__} ({e.error_count()} errors)", raw
        ) from e
