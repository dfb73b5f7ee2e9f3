"""Tests for session tokens and browser-held API keys."""

from datetime import datetime, timedelta, timezone

import pytest
from fastapi import HTTPException
from jose import jwt

from taskchat.core.config import settings
from taskchat.core.credentials import decode_api_key, encode_api_key
from taskchat.core.session import ALGORITHM, issue_session, verify_session


def test_issue_and_verify_session():
    client_id, token = issue_session()
    assert verify_session(token) == client_id


def test_sessions_are_unique():
    assert issue_session()[0] != issue_session()[0]


def test_verify_rejects_forged_token():
    token = jwt.encode({"sub": "abc"}, "not-the-secret", algorithm=ALGORITHM)
    with pytest.raises(HTTPException) as exc:
        verify_session(token)
    assert exc.value.status_code == 401


def test_verify_rejects_expired_token():
    expired = datetime.now(timezone.utc) - timedelta(minutes=1)
    token = jwt.encode({"sub": "abc", "exp": expired}, settings.session_secret, algorithm=ALGORITHM)
    with pytest.raises(HTTPException) as exc:
        verify_session(token)
    assert exc.value.status_code == 401


def test_verify_rejects_missing_subject():
    token = jwt.encode({"foo": "bar"}, settings.session_secret, algorithm=ALGORITHM)
    with pytest.raises(HTTPException):
        verify_session(token)


def test_session_endpoint_sets_cookie(client):
    response = client.post("/api/session/")
    assert response.status_code == 200
    assert settings.session_cookie in response.cookies
    assert client.get("/api/session/").json()["client_id"] == response.json()["client_id"]


def test_bearer_token_is_accepted(client):
    _, token = issue_session()
    response = client.get(
        "/api/conversations/", headers={"Authorization": f"Bearer {token}"}
    )
    assert response.status_code == 200


def test_api_key_cookie_encoding():
    assert decode_api_key(encode_api_key("sk-test")) == "sk-test"
    assert decode_api_key("%%%not base64") is None


def test_api_key_settings_endpoints(client):
    assert client.get("/api/settings/api-key").json() == {"configured": False}

    response = client.post("/api/settings/api-key", json={"api_key": "sk-test"})
    assert response.status_code == 200
    assert settings.api_key_cookie in response.cookies
    assert client.get("/api/settings/api-key").json() == {"configured": True}

    client.delete("/api/settings/api-key")
    assert client.get("/api/settings/api-key").json() == {"configured": False}


def test_api_key_settings_rejects_empty(client):
    assert client.post("/api/settings/api-key", json={"api_key": "  "}).status_code == 400


def test_api_key_header_counts_as_configured(client):
    response = client.get("/api/settings/api-key", headers={"x-openai-key": "sk-header"})
    assert response.json() == {"configured": True}
