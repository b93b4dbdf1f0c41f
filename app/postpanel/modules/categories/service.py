from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.postpanel.constants import CATEGORIES_PER_PAGE, MAX_DB_INT, NAME_MAX_LENGTH
from app.postpanel.modules.categories.models import Category
from app.postpanel.pagination import Page, paginate
from app.postpanel.utils import utcnow
from app.postpanel.validation import STRING, FieldRule, ValidationResult, validate

if TYPE_CHECKING:
    from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

CATEGORY_SCHEMA = {
    "name": FieldRule(required=True, kind=STRING, max_length=NAME_MAX_LENGTH),
}


def get_category(s: "Session", category_id: int) -> Category | None:
    if category_id < 1 or category_id > MAX_DB_INT:
        return None
    return s.get(Category, category_id)


def list_categories(s: "Session", page: int = 1) -> Page:
    q = s.query(Category).order_by(Category.id.desc())
    return paginate(q, page, CATEGORIES_PER_PAGE)


def list_all_categories(s: "Session") -> list[Category]:
    """Every category, for selection controls."""
    return s.query(Category).order_by(Category.id.asc()).all()


def validate_category_payload(s: "Session", payload: dict) -> ValidationResult:
    return validate(s, CATEGORY_SCHEMA, payload)


def create_category(s: "Session", data: dict) -> Category:
    now = utcnow()
    category = Category(name=data["name"], created_at=now, updated_at=now)
    s.add(category)
    s.flush()
    logger.info("Category created id=%s", category.id)
    return category


def update_category(s: "Session", category: Category, data: dict) -> Category:
    category.name = data["name"]
    category.updated_at = utcnow()
    logger.info("Category updated id=%s", category.id)
    return category


def delete_category(s: "Session", category: Category) -> None:
    """Delete a category. Its category_post rows go with it."""
    logger.info("Category deleted id=%s", category.id)
    s.delete(category)
    s.flush()
