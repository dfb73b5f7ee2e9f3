"""Conversation and message models for chat history persistence."""

from datetime import datetime
from typing import Optional

from sqlmodel import Field, Relationship, SQLModel

from taskchat.models.timestamps import utcnow


class Conversation(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    title: str = Field(default="New Conversation")
    client_id: str = Field(index=True)  # subject of the session token that owns it
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    messages: list["ChatMessage"] = Relationship(back_populates="conversation")


class ChatMessage(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    conversation_id: int = Field(foreign_key="conversation.id")
    role: str  # "user" | "assistant"
    content: str
    type: str = Field(default="text")  # "text" | "image"
    created_at: datetime = Field(default_factory=utcnow)

    conversation: Optional[Conversation] = Relationship(back_populates="messages")
