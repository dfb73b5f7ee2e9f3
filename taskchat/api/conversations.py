"""REST API for conversation history management."""

import logging
from typing import Literal

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlmodel import Session

from taskchat.core.database import get_session
from taskchat.core.session import get_client_id
from taskchat.crud import chat as crud
from taskchat.models.conversation import ChatMessage, Conversation
from taskchat.models.timestamps import utc_isoformat

router = APIRouter()
logger = logging.getLogger(__name__)


class ConversationCreate(BaseModel):
    title: str = "New Conversation"


class ConversationUpdate(BaseModel):
    title: str


class MessageCreate(BaseModel):
    role: Literal["user", "assistant"]
    content: str
    type: Literal["text", "image"] = "text"


class MessageBatch(BaseModel):
    messages: list[MessageCreate]


def conversation_to_dict(c: Conversation) -> dict:
    return {
        "id": c.id,
        "title": c.title,
        "created_at": utc_isoformat(c.created_at),
        "updated_at": utc_isoformat(c.updated_at),
    }


def message_to_dict(m: ChatMessage) -> dict:
    return {
        "id": m.id,
        "conversation_id": m.conversation_id,
        "role": m.role,
        "content": m.content,
        "type": m.type,
        "created_at": utc_isoformat(m.created_at),
    }


def _owned_conversation(session: Session, conversation_id: int, client_id: str) -> Conversation:
    conv = crud.get_conversation(session, conversation_id, client_id)
    if not conv:
        logger.debug(f"Conversation {conversation_id} not found for client {client_id}")
        raise HTTPException(status_code=404, detail="Conversation not found")
    return conv


@router.get("/")
async def list_conversations(
    session: Session = Depends(get_session), client_id: str = Depends(get_client_id)
):
    return [conversation_to_dict(c) for c in crud.get_conversations(session, client_id)]


@router.post("/", status_code=201)
async def create_conversation(
    body: ConversationCreate,
    session: Session = Depends(get_session),
    client_id: str = Depends(get_client_id),
):
    conv = crud.create_conversation(session, client_id, body.title)
    return conversation_to_dict(conv)


@router.get("/{conversation_id}")
async def get_conversation(
    conversation_id: int,
    session: Session = Depends(get_session),
    client_id: str = Depends(get_client_id),
):
    conv = _owned_conversation(session, conversation_id, client_id)
    messages = crud.get_messages(session, conversation_id)
    return {
        **conversation_to_dict(conv),
        "messages": [message_to_dict(m) for m in messages],
    }


@router.patch("/{conversation_id}")
async def update_conversation_title(
    conversation_id: int,
    body: ConversationUpdate,
    session: Session = Depends(get_session),
    client_id: str = Depends(get_client_id),
):
    conv = _owned_conversation(session, conversation_id, client_id)
    return conversation_to_dict(crud.update_conversation_title(session, conv, body.title))


@router.post("/{conversation_id}/messages", status_code=201)
async def create_message(
    conversation_id: int,
    body: MessageCreate,
    session: Session = Depends(get_session),
    client_id: str = Depends(get_client_id),
):
    _owned_conversation(session, conversation_id, client_id)
    msg = crud.create_message(session, conversation_id=conversation_id, **body.model_dump())
    return message_to_dict(msg)


@router.post("/{conversation_id}/messages/batch", status_code=201)
async def create_messages(
    conversation_id: int,
    body: MessageBatch,
    session: Session = Depends(get_session),
    client_id: str = Depends(get_client_id),
):
    _owned_conversation(session, conversation_id, client_id)
    messages = crud.create_messages(
        session,
        [{"conversation_id": conversation_id, **m.model_dump()} for m in body.messages],
    )
    return [message_to_dict(m) for m in messages]


@router.delete("/{conversation_id}")
async def delete_conversation(
    conversation_id: int,
    session: Session = Depends(get_session),
    client_id: str = Depends(get_client_id),
):
    conv = _owned_conversation(session, conversation_id, client_id)
    crud.delete_conversation(session, conv)
    return {"status": "deleted"}
