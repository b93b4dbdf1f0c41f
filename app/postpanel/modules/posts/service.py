from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.postpanel.constants import MAX_DB_INT, NAME_MAX_LENGTH, POSTS_PER_PAGE
from app.postpanel.modules.categories.models import Category
from app.postpanel.modules.posts.models import Post
from app.postpanel.pagination import Page, paginate
from app.postpanel.utils import utcnow
from app.postpanel.validation import ID_LIST, STRING, FieldRule, ValidationResult, validate

if TYPE_CHECKING:
    from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

POST_SCHEMA = {
    "name": FieldRule(required=True, kind=STRING, max_length=NAME_MAX_LENGTH),
    "category_ids": FieldRule(required=True, kind=ID_LIST, exists_in=Category, label="category ids"),
}


def get_post(s: "Session", post_id: int) -> Post | None:
    """None when no such post; ids outside the column range cannot exist."""
    if post_id < 1 or post_id > MAX_DB_INT:
        return None
    return s.get(Post, post_id)


def list_posts(s: "Session", page: int = 1) -> Page:
    """Newest first, POSTS_PER_PAGE per page. Pages past the end come back empty."""
    q = s.query(Post).order_by(Post.id.desc())
    return paginate(q, page, POSTS_PER_PAGE)


def validate_post_payload(s: "Session", payload: dict) -> ValidationResult:
    """Validate create/update payload. Returns normalized data plus field errors."""
    return validate(s, POST_SCHEMA, payload)


def _load_categories(s: "Session", category_ids: list[int]) -> list[Category]:
    if not category_ids:
        return []
    by_id = {c.id: c for c in s.query(Category).filter(Category.id.in_(category_ids)).all()}
    return [by_id[i] for i in category_ids if i in by_id]


def attach_categories(s: "Session", post: Post, category_ids: list[int]) -> list[int]:
    """Add association rows for `category_ids`. Existing rows are kept."""
    current = {c.id for c in post.categories}
    new_ids = [i for i in category_ids if i not in current]
    post.categories.extend(_load_categories(s, new_ids))
    return new_ids


def sync_categories(s: "Session", post: Post, category_ids: list[int]) -> dict[str, list[int]]:
    """
    Make the post's category set exactly `category_ids`.
    Rows for ids in both sets are left untouched.
    """
    target = set(category_ids)
    detached: list[int] = []
    for category in list(post.categories):
        if category.id not in target:
            post.categories.remove(category)
            detached.append(category.id)
    attached = attach_categories(s, post, category_ids)
    return {"attached": attached, "detached": detached}


def create_post(s: "Session", data: dict) -> Post:
    """Insert a post and attach its categories. Caller commits."""
    now = utcnow()
    post = Post(name=data["name"], created_at=now, updated_at=now)
    s.add(post)
    s.flush()

    attach_categories(s, post, data["category_ids"])
    s.flush()
    logger.info("Post created id=%s categories=%s", post.id, post.category_ids)
    return post


def update_post(s: "Session", post: Post, data: dict) -> Post:
    """Replace the name and sync categories. Caller commits."""
    post.name = data["name"]
    post.updated_at = utcnow()

    changes = sync_categories(s, post, data["category_ids"])
    s.flush()
    logger.info(
        "Post updated id=%s attached=%s detached=%s",
        post.id,
        changes["attached"],
        changes["detached"],
    )
    return post


def delete_post(s: "Session", post: Post) -> None:
    """Delete a post. Its category_post rows go with it."""
    logger.info("Post deleted id=%s", post.id)
    s.delete(post)
    s.flush()
