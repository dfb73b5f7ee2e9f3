"""REST API for the to-do list."""

import logging
from datetime import date
from typing import Literal

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, field_validator
from sqlmodel import Session

from taskchat.core.database import get_session
from taskchat.crud import tasks as crud
from taskchat.models.task import Task
from taskchat.models.timestamps import utc_isoformat

router = APIRouter()
logger = logging.getLogger(__name__)

TaskStatus = Literal["pending", "in-progress", "completed"]
TaskPriority = Literal["low", "medium", "high"]

# Fields an update may explicitly clear with null
NULLABLE_FIELDS = {"description", "due_date", "category_id"}


def _not_blank(value: str | None) -> str | None:
    if value is not None and not value.strip():
        raise ValueError("must not be blank")
    return value.strip() if value is not None else value


class TaskCreate(BaseModel):
    title: str
    description: str | None = None
    status: TaskStatus = "pending"
    priority: TaskPriority = "medium"
    due_date: date | None = None
    category_id: int | None = None

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value):
        return _not_blank(value)


class TaskUpdate(BaseModel):
    title: str | None = None
    description: str | None = None
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    due_date: date | None = None
    category_id: int | None = None

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value):
        return _not_blank(value)


def task_to_dict(t: Task) -> dict:
    return {
        "id": t.id,
        "title": t.title,
        "description": t.description,
        "status": t.status,
        "priority": t.priority,
        "due_date": t.due_date.isoformat() if t.due_date else None,
        "category_id": t.category_id,
        "created_at": utc_isoformat(t.created_at),
        "updated_at": utc_isoformat(t.updated_at),
    }


@router.get("/")
async def list_tasks(session: Session = Depends(get_session)):
    return [task_to_dict(t) for t in crud.get_all_tasks(session)]


@router.post("/", status_code=201)
async def create_task(body: TaskCreate, session: Session = Depends(get_session)):
    task = crud.create_task(session, **body.model_dump())
    return task_to_dict(task)


@router.get("/{task_id}")
async def get_task(task_id: int, session: Session = Depends(get_session)):
    task = crud.get_task(session, task_id)
    if not task:
        raise HTTPException(status_code=404, detail="Task not found")
    return task_to_dict(task)


@router.patch("/{task_id}")
async def update_task(task_id: int, body: TaskUpdate, session: Session = Depends(get_session)):
    updates = {
        k: v for k, v in body.model_dump(exclude_unset=True).items()
        if v is not None or k in NULLABLE_FIELDS
    }
    task = crud.update_task(session, task_id, updates)
    if not task:
        logger.debug(f"Update: task {task_id} not found")
        raise HTTPException(status_code=404, detail="Task not found")
    return task_to_dict(task)


@router.delete("/{task_id}")
async def delete_task(task_id: int, session: Session = Depends(get_session)):
    if not crud.delete_task(session, task_id):
        logger.debug(f"Delete: task {task_id} not found")
        raise HTTPException(status_code=404, detail="Task not found")
    return {"status": "deleted"}
