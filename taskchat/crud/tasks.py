"""Task accessors. Each call is one round trip; store errors propagate."""

import logging
from datetime import datetime, timezone
from typing import Any, Optional

from sqlmodel import Session, select

from taskchat.models.task import Task

logger = logging.getLogger(__name__)


def get_all_tasks(session: Session) -> list[Task]:
    return list(session.exec(select(Task).order_by(Task.created_at)).all())  # type: ignore


def get_task(session: Session, task_id: int) -> Optional[Task]:
    return session.get(Task, task_id)


def create_task(session: Session, **fields: Any) -> Task:
    task = Task(**fields)
    session.add(task)
    session.commit()
    session.refresh(task)
    logger.debug(f"Created task {task.id}")
    return task


def update_task(session: Session, task_id: int, updates: dict[str, Any]) -> Optional[Task]:
    """Apply a partial update. Returns None if the task does not exist."""
    task = session.get(Task, task_id)
    if not task:
        return None

    for field, value in updates.items():
        setattr(task, field, value)
    task.updated_at = datetime.now(timezone.utc)

    session.add(task)
    session.commit()
    session.refresh(task)
    return task


def delete_task(session: Session, task_id: int) -> bool:
    task = session.get(Task, task_id)
    if not task:
        return False

    session.delete(task)
    session.commit()
    logger.debug(f"Deleted task {task_id}")
    return True
