# tracker/repositories/player_repo.py
from __future__ import annotations
from typing import Optional

from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError

from tracker.models import Player
from tracker.repositories.base import BaseRepository, Page

class PlayerRepository(BaseRepository[Player]):
    model = Player

    # READS
    def get_by_email(self, email: str) -> Optional[Player]:
        stmt = select(Player).where(func.lower(Player.email) == email.lower())
        return self.db.execute(stmt).scalar_one_or_none()

    def list(self, *, limit: int | None = None, offset: int = 0) -> Page[Player]:
        stmt = select(Player).order_by(Player.id.asc())
        return self.page_from_stmt(stmt, limit=limit, offset=offset)

    # WRITES
    def create(
        self,
        *,
        email: str,
        first_name: str,
        last_name: str,
        position: str,
        photo_url: str | None = None,
    ) -> Player:
        player = Player(
            email=email,
            first_name=first_name,
            last_name=last_name,
            position=position,
            photo_url=photo_url,
        )
        try:
            return self.add_and_commit(player)
        except IntegrityError:
            self.db.rollback()
            # clean marker the router maps to 400
            raise ValueError("email_already_exists")

    def update(self, player_id: int, **fields) -> Optional[Player]:
        player = self.get(player_id)
        if not player:
            return None
        for name, value in fields.items():
            setattr(player, name, value)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ValueError("email_already_exists")
        self.db.refresh(player)
        return player
