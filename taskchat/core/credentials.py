"""Resolution of the OpenAI key the browser stores for the chat demo."""

import base64
import binascii
import logging

from fastapi import Request

from taskchat.core.config import settings

logger = logging.getLogger(__name__)

API_KEY_HEADER = "x-openai-key"


def encode_api_key(api_key: str) -> str:
    return base64.b64encode(api_key.encode()).decode()


def decode_api_key(value: str) -> str | None:
    try:
        return base64.b64decode(value, validate=True).decode()
    except (binascii.Error, UnicodeDecodeError) as e:
        logger.warning(f"Error decoding API key cookie: {e}")
        return None


def resolve_api_key(request: Request) -> str | None:
    """Header first, then the cookie, then the server-configured key."""
    header_key = request.headers.get(API_KEY_HEADER)
    if header_key:
        return header_key

    cookie_value = request.cookies.get(settings.api_key_cookie)
    if cookie_value:
        cookie_key = decode_api_key(cookie_value)
        if cookie_key:
            return cookie_key

    return settings.openai_api_key or None
