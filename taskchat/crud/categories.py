"""Category accessors."""

import logging
from typing import Any, Optional

from sqlalchemy import update
from sqlmodel import Session, select

from taskchat.models.task import Category, Task

logger = logging.getLogger(__name__)


def get_all_categories(session: Session) -> list[Category]:
    return list(session.exec(select(Category).order_by(Category.created_at)).all())  # type: ignore


def get_category(session: Session, category_id: int) -> Optional[Category]:
    return session.get(Category, category_id)


def create_category(session: Session, **fields: Any) -> Category:
    category = Category(**fields)
    session.add(category)
    session.commit()
    session.refresh(category)
    return category


def update_category(
    session: Session, category_id: int, updates: dict[str, Any]
) -> Optional[Category]:
    category = session.get(Category, category_id)
    if not category:
        return None

    for field, value in updates.items():
        setattr(category, field, value)

    session.add(category)
    session.commit()
    session.refresh(category)
    return category


def delete_category(session: Session, category_id: int) -> bool:
    """Detach every task from the category, then delete the category.

    The two steps are committed separately. If the delete fails, the tasks
    stay detached.
    """
    session.exec(  # type: ignore[call-overload]
        update(Task).where(Task.category_id == category_id).values(category_id=None)
    )
    session.commit()

    category = session.get(Category, category_id)
    if not category:
        return False

    session.delete(category)
    session.commit()
    logger.debug(f"Deleted category {category_id}")
    return True
