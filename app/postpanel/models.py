from __future__ import annotations

from sqlalchemy import Column, ForeignKey, Integer, Table
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


# Join table for Post <-> Category. Rows are owned by the post side for sync.
category_post = Table(
    "category_post",
    Base.metadata,
    Column("post_id", Integer, ForeignKey("posts.id", ondelete="CASCADE"), primary_key=True),
    Column("category_id", Integer, ForeignKey("categories.id", ondelete="CASCADE"), primary_key=True),
)


# Ensure module models are imported so Base.metadata includes their tables.
# (Kept at bottom to avoid circular imports.)
from app.postpanel.modules.categories.models import Category  # noqa: E402,F401
from app.postpanel.modules.posts.models import Post  # noqa: E402,F401
