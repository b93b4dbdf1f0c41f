from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.postpanel.constants import NAME_MAX_LENGTH
from app.postpanel.models import Base
from app.postpanel.utils import utcnow

if TYPE_CHECKING:
    from app.postpanel.modules.posts.models import Post


class Category(Base):
    __tablename__ = "categories"
    __table_args__ = (
        Index("idx_categories_name", "name"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH), nullable=False)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False, default=utcnow)

    posts: Mapped[list["Post"]] = relationship(
        secondary="category_post",
        back_populates="categories",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<Category id={self.id} name={self.name!r}>"
