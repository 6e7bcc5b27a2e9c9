from __future__ import annotations
from datetime import date
from typing import Iterable, Optional
from sqlalchemy import select
from sqlalchemy.orm import selectinload
from tracker.models import Workout, WorkoutSet
from tracker.repositories.base import BaseRepository

class WorkoutRepository(BaseRepository[Workout]):
    model = Workout

    def get(self, workout_id: int) -> Optional[Workout]:
        stmt = select(Workout).options(selectinload(Workout.sets)).where(Workout.id == workout_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def list(
        self,
        *,
        player_id: int | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> list[Workout]:
        """Newest first; both date bounds are inclusive."""
        stmt = select(Workout).options(selectinload(Workout.sets))
        if player_id is not None:
            stmt = stmt.where(Workout.player_id == player_id)
        if start_date is not None:
            stmt = stmt.where(Workout.date >= start_date)
        if end_date is not None:
            stmt = stmt.where(Workout.date <= end_date)
        stmt = stmt.order_by(Workout.date.desc(), Workout.id.desc())
        return list(self.db.execute(stmt).scalars().all())

    def create(self, player_id: int, *, date: date, notes: str | None, sets: Iterable[dict]) -> Workout:
        workout = Workout(player_id=player_id, date=date, notes=notes)
        workout.sets = [
            WorkoutSet(
                exercise_id=s["exercise_id"],
                set_number=s.get("set_number") or 1,
                reps=s["reps"],
                weight=s["weight"],
            )
            for s in sets
        ]
        self.db.add(workout)
        self.db.commit()
        return self.get(workout.id)
