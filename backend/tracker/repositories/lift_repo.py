from __future__ import annotations
from datetime import datetime, timezone
from typing import Optional
from sqlalchemy import select
from sqlalchemy.orm import joinedload
from tracker.models import Lift, LiftHistory
from tracker.repositories.base import BaseRepository

class LiftRepository(BaseRepository[Lift]):
    model = Lift

    def get(self, lift_id: int) -> Optional[Lift]:
        stmt = select(Lift).options(joinedload(Lift.player)).where(Lift.id == lift_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def list_all(self) -> list[Lift]:
        stmt = select(Lift).options(joinedload(Lift.player)).order_by(Lift.id.asc())
        return list(self.db.execute(stmt).scalars().all())

    def list_by_player(self, player_id: int) -> list[Lift]:
        stmt = select(Lift).options(joinedload(Lift.player))\
                           .where(Lift.player_id == player_id)\
                           .order_by(Lift.created_at.desc(), Lift.id.desc())
        return list(self.db.execute(stmt).scalars().all())

    def history_by_player(self, player_id: int) -> list[LiftHistory]:
        stmt = select(LiftHistory).options(joinedload(LiftHistory.player))\
                                  .where(LiftHistory.player_id == player_id)\
                                  .order_by(LiftHistory.workout_date.desc(), LiftHistory.id.desc())
        return list(self.db.execute(stmt).scalars().all())

    def create(
        self,
        player_id: int,
        *,
        exercise_name: str,
        weight: float,
        reps: int,
        sets: int = 1,
        notes: str | None = None,
    ) -> Lift:
        """Store the lift and its history row in one commit."""
        now = datetime.now(timezone.utc)
        lift = Lift(
            player_id=player_id,
            exercise_name=exercise_name,
            weight=weight,
            reps=reps,
            sets=sets,
            notes=notes,
        )
        self.db.add(lift)
        self.db.add(LiftHistory(
            player_id=player_id,
            exercise_name=exercise_name,
            weight=weight,
            reps=reps,
            sets=sets,
            notes=notes,
            workout_date=now,
        ))
        self.db.commit()
        return self.get(lift.id)
