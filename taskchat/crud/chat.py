"""Conversation and message accessors, scoped by session client id."""

import logging
from datetime import datetime, timezone
from typing import Any, Optional

from sqlmodel import Session, select

from taskchat.models.conversation import ChatMessage, Conversation

logger = logging.getLogger(__name__)


def get_conversations(session: Session, client_id: str) -> list[Conversation]:
    return list(session.exec(
        select(Conversation)
        .where(Conversation.client_id == client_id)
        .order_by(Conversation.updated_at.desc())  # type: ignore
    ).all())


def get_conversation(
    session: Session, conversation_id: int, client_id: str
) -> Optional[Conversation]:
    """Fetch a conversation owned by ``client_id``; other clients' read as missing."""
    conv = session.get(Conversation, conversation_id)
    if not conv or conv.client_id != client_id:
        return None
    return conv


def create_conversation(
    session: Session, client_id: str, title: str = "New Conversation"
) -> Conversation:
    conv = Conversation(title=title, client_id=client_id)
    session.add(conv)
    session.commit()
    session.refresh(conv)
    return conv


def update_conversation_title(session: Session, conversation: Conversation, title: str) -> Conversation:
    conversation.title = title
    session.add(conversation)
    session.commit()
    session.refresh(conversation)
    return conversation


def get_messages(session: Session, conversation_id: int) -> list[ChatMessage]:
    return list(session.exec(
        select(ChatMessage)
        .where(ChatMessage.conversation_id == conversation_id)
        .order_by(ChatMessage.created_at, ChatMessage.id)  # type: ignore
    ).all())


def create_message(session: Session, **fields: Any) -> ChatMessage:
    return create_messages(session, [fields])[0]


def create_messages(session: Session, batch: list[dict[str, Any]]) -> list[ChatMessage]:
    """Insert messages and bump the conversation's updated_at.

    The first message's conversation is the one touched.
    """
    if not batch:
        return []

    messages = [ChatMessage(**fields) for fields in batch]
    session.add_all(messages)

    conv = session.get(Conversation, messages[0].conversation_id)
    if conv:
        conv.updated_at = datetime.now(timezone.utc)
        session.add(conv)

    session.commit()
    for msg in messages:
        session.refresh(msg)
    return messages


def delete_conversation(session: Session, conversation: Conversation) -> None:
    messages = session.exec(
        select(ChatMessage).where(ChatMessage.conversation_id == conversation.id)
    ).all()
    for msg in messages:
        session.delete(msg)

    session.delete(conversation)
    session.commit()
    logger.debug(f"Deleted conversation {conversation.id}")
