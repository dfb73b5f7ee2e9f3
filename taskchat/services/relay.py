"""Relay an upstream completion stream to the browser as SSE frames.

The caller gets one ``{"content": ...}`` frame per upstream delta followed by
``data: [DONE]``. An upstream error status produces a single ``{"error": ...}``
frame and nothing else. There is no retry and no timeout; the relay stops when
the upstream finishes or the client goes away.
"""

import logging
from typing import AsyncIterator, Awaitable, Callable, Optional

import httpx

from taskchat.services.llm.base import (
    BaseLLMProvider,
    Message,
    UpstreamConnectError,
    UpstreamError,
    user_message,
)
from taskchat.services.sse import DONE_EVENT, format_event

logger = logging.getLogger(__name__)

CONNECT_FAILURE_MESSAGE = "Failed to connect to OpenAI API"
STREAM_PROCESSING_MESSAGE = "Stream processing error"


async def relay_completion(
    provider: BaseLLMProvider,
    messages: list[Message],
    on_complete: Optional[Callable[[str], Awaitable[None]]] = None,
) -> AsyncIterator[str]:
    parts: list[str] = []
    try:
        async for content in provider.stream_chat(messages):
            parts.append(content)
            yield format_event({"content": content})
    except UpstreamError as e:
        yield format_event({"error": user_message(e.status_code)})
        return
    except (UpstreamConnectError, httpx.ConnectError, httpx.ConnectTimeout) as e:
        logger.error(f"Fetch error: {e}")
        yield format_event({"error": CONNECT_FAILURE_MESSAGE})
        return
    except httpx.HTTPError as e:
        logger.error(f"Stream error: {e}")
        yield format_event({"error": STREAM_PROCESSING_MESSAGE})
        yield DONE_EVENT
        return

    yield DONE_EVENT

    if on_complete is not None:
        await on_complete("".join(parts))
