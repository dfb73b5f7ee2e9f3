"""Browser-held OpenAI key management for the chat demo."""

from fastapi import APIRouter, HTTPException, Request, Response
from pydantic import BaseModel

from taskchat.core.config import settings
from taskchat.core.credentials import encode_api_key, resolve_api_key

router = APIRouter()

API_KEY_MAX_AGE = 30 * 24 * 60 * 60


class ApiKeyBody(BaseModel):
    api_key: str


@router.get("/api-key")
async def api_key_status(request: Request):
    return {"configured": resolve_api_key(request) is not None}


@router.post("/api-key")
async def save_api_key(body: ApiKeyBody, response: Response):
    api_key = body.api_key.strip()
    if not api_key:
        raise HTTPException(status_code=400, detail="API key must not be empty")

    response.set_cookie(
        settings.api_key_cookie,
        encode_api_key(api_key),
        max_age=API_KEY_MAX_AGE,
        path="/",
        httponly=True,
        samesite="strict",
    )
    return {"status": "saved"}


@router.delete("/api-key")
async def clear_api_key(response: Response):
    response.delete_cookie(settings.api_key_cookie, path="/", samesite="strict")
    return {"status": "deleted"}
