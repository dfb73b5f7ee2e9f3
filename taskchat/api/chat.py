"""AI proxy endpoints: streamed chat completions and image generation."""

import logging
from datetime import datetime, timezone
from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse, StreamingResponse
from pydantic import BaseModel
from sqlmodel import Session

from taskchat.core.config import settings
from taskchat.core.credentials import resolve_api_key
from taskchat.core.database import engine
from taskchat.core.session import get_optional_client_id
from taskchat.crud import chat as crud
from taskchat.services.images import generate_image as generate_image_with_fallback
from taskchat.services.llm import get_llm_provider
from taskchat.services.llm.base import Message
from taskchat.services.relay import relay_completion

router = APIRouter()
logger = logging.getLogger(__name__)

SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
}

MOCK_IMAGE_URL = "https://picsum.photos/seed/123/800/800"
MOCK_COMPLETION = (
    "## Markdown Support\n\n"
    "This is a mock response with **markdown** formatting support:\n\n"
    "- Lists work\n- *Italic text* works\n- **Bold text** works\n\n"
    "```js\n// Code blocks work too\nconst demo = () => {\n  console.log('Hello world!');\n};\n```\n\n"
    "> Blockquotes are styled properly"
)


class CompletionRequest(BaseModel):
    prompt: str
    conversation_id: int | None = None


class ChatTurn(BaseModel):
    role: Literal["user", "assistant"]
    content: str


class ChatCompletionRequest(BaseModel):
    messages: list[ChatTurn]


class ImageRequest(BaseModel):
    prompt: str


def _missing_key_response() -> JSONResponse:
    logger.info("Missing API key")
    return JSONResponse(
        status_code=400,
        content={"success": False, "error": "Missing OpenAI API key"},
    )


@router.get("/")
async def service_status():
    return {
        "success": True,
        "message": "OpenAI service is running",
        "path": "root",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.post("/stream-completion")
async def stream_completion(
    body: CompletionRequest,
    request: Request,
    client_id: str | None = Depends(get_optional_client_id),
):
    if settings.enable_mock_responses:
        logger.info("Using mock completion response")
        return {"success": True, "content": MOCK_COMPLETION, "message": "Mock text response"}

    api_key = resolve_api_key(request)
    if not api_key:
        return _missing_key_response()

    on_complete = None
    if body.conversation_id is not None:
        if client_id is None:
            raise HTTPException(status_code=401, detail="A session is required to store messages")
        conversation_id = body.conversation_id
        if not _owns_conversation(conversation_id, client_id):
            raise HTTPException(status_code=404, detail="Conversation not found")
        _save_message(conversation_id, "user", body.prompt)

        async def on_complete(text: str) -> None:
            if text:
                _save_message(conversation_id, "assistant", text)

    logger.info(f"Starting completion for prompt: {body.prompt[:80]}")
    provider = get_llm_provider(api_key)
    return StreamingResponse(
        relay_completion(provider, [Message(role="user", content=body.prompt)], on_complete),
        media_type="text/event-stream",
        headers=SSE_HEADERS,
    )


@router.post("/chat-completion")
async def chat_completion(body: ChatCompletionRequest, request: Request):
    api_key = resolve_api_key(request)
    if not api_key:
        return _missing_key_response()

    provider = get_llm_provider(api_key)
    messages = [Message(role=m.role, content=m.content) for m in body.messages]
    return StreamingResponse(
        relay_completion(provider, messages),
        media_type="text/event-stream",
        headers=SSE_HEADERS,
    )


@router.post("/generate-image")
async def generate_image(body: ImageRequest, request: Request):
    if settings.enable_mock_responses:
        logger.info("Using mock image response")
        return {"success": True, "imageUrl": MOCK_IMAGE_URL, "message": "Mock image response"}

    api_key = resolve_api_key(request)
    provider = get_llm_provider(api_key) if api_key else None
    return await generate_image_with_fallback(provider, body.prompt)


def _owns_conversation(conversation_id: int, client_id: str) -> bool:
    with Session(engine) as session:
        return crud.get_conversation(session, conversation_id, client_id) is not None


def _save_message(conversation_id: int, role: str, content: str) -> None:
    with Session(engine) as session:
        crud.create_message(session, conversation_id=conversation_id, role=role, content=content)
