from fastapi import APIRouter, Depends, Response

from taskchat.core.config import settings
from taskchat.core.session import get_client_id, issue_session

router = APIRouter()


@router.post("/")
async def create_session(response: Response):
    """Start a new anonymous session. The token is returned and set as a cookie."""
    client_id, token = issue_session()
    response.set_cookie(
        settings.session_cookie,
        token,
        max_age=settings.session_ttl_days * 24 * 60 * 60,
        httponly=True,
        samesite="strict",
    )
    return {"client_id": client_id, "token": token}


@router.get("/")
async def read_session(client_id: str = Depends(get_client_id)):
    return {"client_id": client_id}
