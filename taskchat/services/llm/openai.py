"""OpenAI provider over plain HTTP."""

import logging
from typing import AsyncIterator

import httpx

from taskchat.core.config import settings
from taskchat.services.llm.base import BaseLLMProvider, Message, UpstreamConnectError, UpstreamError
from taskchat.services.sse import extract_delta, parse_data_line

logger = logging.getLogger(__name__)


class OpenAIProvider(BaseLLMProvider):
    def __init__(self, api_key: str, transport: httpx.AsyncBaseTransport | None = None):
        self._api_key = api_key
        self._transport = transport
        self.base_url = settings.openai_base_url.rstrip("/")

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }

    def _client(self, timeout: float | None = None) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=self._transport, timeout=timeout)

    async def stream_chat(self, messages: list[Message]) -> AsyncIterator[str]:
        payload = {
            "model": settings.chat_model,
            "messages": [{"role": m.role, "content": m.content} for m in messages],
            "stream": True,
        }
        # No timeout: the stream stays open as long as the upstream keeps talking.
        async with self._client() as client:
            request = client.build_request(
                "POST",
                f"{self.base_url}/chat/completions",
                headers=self._headers(),
                json=payload,
            )
            try:
                resp = await client.send(request, stream=True)
            except httpx.TransportError as e:
                raise UpstreamConnectError(str(e)) from e

            try:
                if resp.is_error:
                    body = (await resp.aread()).decode(errors="replace")
                    logger.warning(f"OpenAI error: {resp.status_code} {body}")
                    raise UpstreamError(resp.status_code, body)

                # aiter_lines decodes incrementally and holds a partial line
                # until its newline arrives.
                async for line in resp.aiter_lines():
                    content = extract_delta(parse_data_line(line))
                    if content:
                        yield content
            finally:
                await resp.aclose()

    async def generate_image(self, prompt: str) -> str | None:
        logger.info(f"Generating image for prompt: {prompt[:80]}")
        async with self._client(timeout=120.0) as client:
            resp = await client.post(
                f"{self.base_url}/images/generations",
                headers=self._headers(),
                json={
                    "model": settings.image_model,
                    "prompt": prompt,
                    "n": 1,
                    "size": settings.image_size,
                },
            )

        if resp.is_error:
            message = ""
            try:
                error = resp.json().get("error")
            except (ValueError, AttributeError):
                error = None
            if isinstance(error, dict):
                message = error.get("message") or ""
            logger.warning(f"OpenAI error: {resp.status_code} {resp.text}")
            raise UpstreamError(resp.status_code, message)

        data = resp.json().get("data") or []
        if not data:
            return None
        first = data[0]
        if first.get("url"):
            return first["url"]
        if first.get("b64_json"):
            return f"data:image/png;base64,{first['b64_json']}"
        return None
