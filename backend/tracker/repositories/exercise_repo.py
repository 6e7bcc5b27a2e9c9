from __future__ import annotations
from typing import Optional
from sqlalchemy import select, func, exists
from tracker.models import Exercise, WorkoutSet
from tracker.repositories.base import BaseRepository

class ExerciseRepository(BaseRepository[Exercise]):
    model = Exercise

    def list(self) -> list[Exercise]:
        stmt = select(Exercise).order_by(Exercise.name.asc(), Exercise.id.asc())
        return list(self.db.execute(stmt).scalars().all())

    def get_by_name(self, name: str) -> Optional[Exercise]:
        stmt = select(Exercise).where(func.lower(Exercise.name) == name.lower())
        return self.db.execute(stmt).scalars().first()

    def is_in_use(self, exercise_id: int) -> bool:
        stmt = select(exists().where(WorkoutSet.exercise_id == exercise_id))
        return bool(self.db.execute(stmt).scalar())

    def create(self, *, name: str, category: str | None = None) -> Exercise:
        if self.get_by_name(name):
            raise ValueError("exercise_already_exists")
        return self.add_and_commit(Exercise(name=name, category=category))

    def delete(self, exercise_id: int) -> bool:
        # checked here as well as by the FK so SQLite without pragmas behaves the same
        if self.is_in_use(exercise_id):
            raise ValueError("exercise_in_use")
        return super().delete(exercise_id)
