"""Server-sent event framing shared by the relay and its upstream parser."""

import json
import logging
from typing import Any

logger = logging.getLogger(__name__)

DATA_PREFIX = "data: "
DONE_MARKER = "[DONE]"
DONE_EVENT = f"{DATA_PREFIX}{DONE_MARKER}\n\n"


def format_event(payload: dict[str, Any]) -> str:
    return f"{DATA_PREFIX}{json.dumps(payload)}\n\n"


def parse_data_line(line: str) -> Any | None:
    """Decode one ``data: <json>`` line.

    Blank lines, other SSE fields, the done marker and malformed JSON all
    return None so the caller can skip them.
    """
    if not line.strip() or not line.startswith(DATA_PREFIX):
        return None

    payload = line[len(DATA_PREFIX):]
    if payload.strip() == DONE_MARKER:
        return None

    try:
        return json.loads(payload)
    except json.JSONDecodeError as e:
        logger.debug(f"Stream parse error: {e}")
        return None


def extract_delta(chunk: Any) -> str | None:
    """Pull ``choices[0].delta.content`` out of a completion chunk."""
    try:
        content = chunk["choices"][0]["delta"].get("content")
    except (KeyError, IndexError, TypeError, AttributeError):
        return None
    return content if isinstance(content, str) and content else None
