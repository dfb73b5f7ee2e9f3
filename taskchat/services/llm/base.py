"""Abstract LLM provider interface. All providers must implement this."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import AsyncIterator

INVALID_KEY_MESSAGE = "Invalid API key. Please check your OpenAI API key."
RATE_LIMIT_MESSAGE = "Rate limit exceeded. Please try again later."
STREAM_FAILURE_MESSAGE = "An error occurred while streaming the response."


@dataclass
class Message:
    role: str  # "user" | "assistant"
    content: str


class UpstreamError(Exception):
    """The AI vendor answered with a non-2xx status."""

    def __init__(self, status_code: int, message: str = ""):
        super().__init__(f"Upstream returned {status_code}: {message}")
        self.status_code = status_code
        self.message = message


class UpstreamConnectError(Exception):
    """The upstream request failed before any response arrived."""


def user_message(status_code: int, fallback: str = STREAM_FAILURE_MESSAGE) -> str:
    """Map an upstream status to the message shown to the user."""
    if status_code == 401:
        return INVALID_KEY_MESSAGE
    if status_code == 429:
        return RATE_LIMIT_MESSAGE
    return fallback


class BaseLLMProvider(ABC):
    @abstractmethod
    def stream_chat(self, messages: list[Message]) -> AsyncIterator[str]:
        """Stream a chat response as text deltas."""
        ...

    @abstractmethod
    async def generate_image(self, prompt: str) -> str | None:
        """Generate one image and return its URL, or None if none came back."""
        ...
