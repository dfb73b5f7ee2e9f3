"""Image generation proxy with a deterministic placeholder fallback."""

import logging
from typing import Optional
from urllib.parse import quote

import httpx

from taskchat.services.llm.base import BaseLLMProvider, UpstreamError, user_message

logger = logging.getLogger(__name__)

MISSING_KEY_MESSAGE = "Missing OpenAI API key"
GENERATION_FAILED_MESSAGE = "Failed to generate image. Please try again."
NO_IMAGE_MESSAGE = "No image was generated. Please try a different prompt."
UNEXPECTED_MESSAGE = "An unexpected error occurred. Please try again."


def fallback_image_url(prompt: str) -> str:
    """Pick a placeholder image for ``prompt``.

    The seed is the first three digits of the sum of the prompt's character
    codes, so the same prompt always lands on the same URL.
    """
    seed = str(sum(ord(ch) for ch in prompt))[:3]
    query = quote(prompt, safe="!*'()")
    candidates = [
        f"https://picsum.photos/seed/{seed}/800/800",
        f"https://source.unsplash.com/random/800x800?{query}",
    ]
    return candidates[int(seed) % len(candidates)]


def _failure(prompt: str, error: str) -> dict:
    return {"success": False, "error": error, "fallbackUrl": fallback_image_url(prompt)}


async def generate_image(provider: Optional[BaseLLMProvider], prompt: str) -> dict:
    """Return ``{"success": True, "imageUrl": ...}`` or a failure with a fallback URL."""
    if provider is None:
        logger.info("Missing API key")
        return _failure(prompt, MISSING_KEY_MESSAGE)

    try:
        image_url = await provider.generate_image(prompt)
    except UpstreamError as e:
        return _failure(prompt, user_message(e.status_code, e.message or GENERATION_FAILED_MESSAGE))
    except (httpx.HTTPError, ValueError, AttributeError, TypeError) as e:
        # transport failures and 2xx bodies that are not the expected JSON
        logger.error(f"Generation error: {e}")
        return _failure(prompt, UNEXPECTED_MESSAGE)

    if not image_url:
        logger.info("No image in response")
        return _failure(prompt, NO_IMAGE_MESSAGE)

    logger.info("Image generated successfully")
    return {"success": True, "imageUrl": image_url}
