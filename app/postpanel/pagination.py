from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from sqlalchemy.orm import Query

from app.postpanel.constants import MAX_DB_INT

T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of a query result plus the numbers a renderer needs."""

    items: list[T] = field(default_factory=list)
    page: int = 1
    per_page: int = 10
    total: int = 0

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.per_page

    @property
    def total_pages(self) -> int:
        return (self.total + self.per_page - 1) // self.per_page

    @property
    def has_prev(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page * self.per_page < self.total

    @property
    def prev_num(self) -> int | None:
        return self.page - 1 if self.has_prev else None

    @property
    def next_num(self) -> int | None:
        return self.page + 1 if self.has_next else None

    def __iter__(self):
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)


def normalize_page(raw: Any) -> int:
    """Parse a ?page= value; anything missing, non-numeric or < 1 becomes 1."""
    try:
        page = int(raw)
    except (TypeError, ValueError):
        return 1
    return page if page >= 1 else 1


def paginate(q: Query, page: int, per_page: int) -> Page:
    page = normalize_page(page)
    total = q.order_by(None).count()
    offset = (page - 1) * per_page
    # Nothing past the last row; also keeps huge offsets out of the query.
    if offset >= total or offset > MAX_DB_INT:
        return Page(items=[], page=page, per_page=per_page, total=total)
    items = q.offset(offset).limit(per_page).all()
    return Page(items=items, page=page, per_page=per_page, total=total)
