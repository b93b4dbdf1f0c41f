from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.postpanel.constants import NAME_MAX_LENGTH
from app.postpanel.models import Base
from app.postpanel.utils import utcnow

if TYPE_CHECKING:
    from app.postpanel.modules.categories.models import Category


class Post(Base):
    __tablename__ = "posts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH), nullable=False)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False), nullable=False, default=utcnow, onupdate=utcnow
    )

    # Association rows live in category_post; the ORM deletes them with the post.
    categories: Mapped[list["Category"]] = relationship(
        secondary="category_post",
        back_populates="posts",
        lazy="selectin",
        order_by="Category.id",
    )

    @property
    def category_ids(self) -> list[int]:
        return [c.id for c in self.categories]

    def __repr__(self) -> str:
        return f"<Post id={self.id} name={self.name!r}>"
