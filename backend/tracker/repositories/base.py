# tracker/repositories/base.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Generic, TypeVar

from sqlalchemy.orm import Session
from sqlalchemy import select, func

T = TypeVar("T")  # SQLAlchemy model type

@dataclass(slots=True)
class Page(Generic[T]):
    items: list[T]
    total: int
    limit: int | None
    offset: int

class BaseRepository(Generic[T]):
    """Lightweight base for repositories using SQLAlchemy 2.0 style."""
    model: type

    def __init__(self, db: Session):
        self.db = db

    def get(self, entity_id: int) -> T | None:
        return self.db.get(self.model, entity_id)

    def page_from_stmt(self, stmt, *, limit: int | None = 50, offset: int = 0) -> Page[T]:
        total = self.db.execute(
            select(func.count()).select_from(stmt.order_by(None).subquery())
        ).scalar_one()
        items = list(self.db.execute(stmt.limit(limit).offset(offset)).scalars().unique().all())
        return Page(items=items, total=total, limit=limit, offset=offset)

    def add_and_commit(self, entity: T) -> T:
        self.db.add(entity)
        self.db.commit()
        self.db.refresh(entity)
        return entity

    def delete(self, entity_id: int) -> bool:
        entity = self.get(entity_id)
        if entity is None:
            return False
        self.db.delete(entity)
        self.db.commit()
        return True
