"""Offset pagination over SQLAlchemy queries."""

import math
from dataclasses import dataclass

from sqlalchemy.orm import Query


@dataclass
class Page:
    items: list
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0


def paginate(query: Query, page: int, limit: int) -> Page:
    """Count the full query, then fetch one page of it."""
    total = query.order_by(None).count()
    items = query.offset((page - 1) * limit).limit(limit).all()
    return Page(items=items, total=total, page=page, limit=limit)
