from __future__ import annotations
from sqlalchemy import select
from tracker.models import StatEntry
from tracker.repositories.base import BaseRepository

class StatRepository(BaseRepository[StatEntry]):
    model = StatEntry

    def list(self, *, player_id: int | None = None) -> list[StatEntry]:
        """Newest first, the order trend calculations expect."""
        stmt = select(StatEntry)
        if player_id is not None:
            stmt = stmt.where(StatEntry.player_id == player_id)
        stmt = stmt.order_by(StatEntry.date.desc(), StatEntry.id.desc())
        return list(self.db.execute(stmt).scalars().all())

    def create(self, player_id: int, **counts) -> StatEntry:
        return self.add_and_commit(StatEntry(player_id=player_id, **counts))
