"""REST API for task categories."""

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, field_validator
from sqlmodel import Session

from taskchat.core.database import get_session
from taskchat.crud import categories as crud
from taskchat.models.task import Category
from taskchat.models.timestamps import utc_isoformat

router = APIRouter()


def _not_blank(value: str | None) -> str | None:
    if value is not None and not value.strip():
        raise ValueError("must not be blank")
    return value.strip() if value is not None else value


class CategoryCreate(BaseModel):
    name: str
    color: str = "#3B82F6"

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value):
        return _not_blank(value)


class CategoryUpdate(BaseModel):
    name: str | None = None
    color: str | None = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value):
        return _not_blank(value)


def category_to_dict(c: Category) -> dict:
    return {
        "id": c.id,
        "name": c.name,
        "color": c.color,
        "created_at": utc_isoformat(c.created_at),
    }


@router.get("/")
async def list_categories(session: Session = Depends(get_session)):
    return [category_to_dict(c) for c in crud.get_all_categories(session)]


@router.post("/", status_code=201)
async def create_category(body: CategoryCreate, session: Session = Depends(get_session)):
    return category_to_dict(crud.create_category(session, **body.model_dump()))


@router.patch("/{category_id}")
async def update_category(
    category_id: int, body: CategoryUpdate, session: Session = Depends(get_session)
):
    updates = body.model_dump(exclude_unset=True, exclude_none=True)
    category = crud.update_category(session, category_id, updates)
    if not category:
        raise HTTPException(status_code=404, detail="Category not found")
    return category_to_dict(category)


@router.delete("/{category_id}")
async def delete_category(category_id: int, session: Session = Depends(get_session)):
    """Delete a category. Tasks that used it are left uncategorised."""
    if not crud.delete_category(session, category_id):
        raise HTTPException(status_code=404, detail="Category not found")
    return {"status": "deleted"}
