from taskchat.models.conversation import ChatMessage, Conversation
from taskchat.models.task import Category, Task

__all__ = ["Category", "ChatMessage", "Conversation", "Task"]
