"""Signed session tokens that scope chat history to one browser.

A session is an HS256 JWT whose subject is a randomly generated client id.
The token travels either as a bearer token or in the session cookie.
"""

import uuid
from datetime import datetime, timedelta, timezone

from fastapi import HTTPException, Request, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import ExpiredSignatureError, JWTError, jwt

from taskchat.core.config import settings

ALGORITHM = "HS256"

security = HTTPBearer(auto_error=False)


def issue_session() -> tuple[str, str]:
    """Create a new client id and return ``(client_id, token)``."""
    client_id = str(uuid.uuid4())
    expires = datetime.now(timezone.utc) + timedelta(days=settings.session_ttl_days)
    token = jwt.encode(
        {"sub": client_id, "exp": expires},
        settings.session_secret,
        algorithm=ALGORITHM,
    )
    return client_id, token


def verify_session(token: str) -> str:
    """Return the client id carried by ``token``.

    Raises HTTPException(401) if the token is forged, expired or has no subject.
    """
    try:
        claims = jwt.decode(token, settings.session_secret, algorithms=[ALGORITHM])
    except ExpiredSignatureError:
        raise HTTPException(status_code=401, detail="Session has expired")
    except JWTError as e:
        raise HTTPException(status_code=401, detail=f"Invalid session: {str(e)}")

    client_id = claims.get("sub")
    if not client_id:
        raise HTTPException(status_code=401, detail="Invalid session: missing subject")
    return client_id


async def get_client_id(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Security(security),
) -> str:
    """FastAPI dependency resolving the caller's client id.

    Usage: client_id: str = Depends(get_client_id)
    """
    if credentials is not None:
        return verify_session(credentials.credentials)

    token = request.cookies.get(settings.session_cookie)
    if not token:
        raise HTTPException(status_code=401, detail="No session. POST /api/session first.")
    return verify_session(token)


async def get_optional_client_id(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Security(security),
) -> str | None:
    """Like get_client_id, but anonymous callers get None instead of a 401."""
    if credentials is None and not request.cookies.get(settings.session_cookie):
        return None
    return await get_client_id(request, credentials)
