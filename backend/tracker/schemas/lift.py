from typing import Annotated
from datetime import datetime
from pydantic import Field, StringConstraints, computed_field, field_validator
from tracker.analytics import estimated_one_rep_max
from tracker.schemas.base import CamelModel
from tracker.schemas.player import PlayerSummary

ExerciseNameStr = Annotated[str, Field(max_length=50)]
PosInt = Annotated[int, Field(ge=1)]
NonNegFloat = Annotated[float, Field(ge=0)]
NotesStr = Annotated[str, StringConstraints(strip_whitespace=True, max_length=500)]

class LiftCreate(CamelModel):
    player_id: int
    exercise_name: ExerciseNameStr
    weight: NonNegFloat
    reps: PosInt
    sets: PosInt = 1
    notes: NotesStr | None = None

    @field_validator("exercise_name")
    @classmethod
    def exercise_non_blank(cls, v: str) -> str:
        v2 = v.strip()
        if not v2:
            raise ValueError("exercise name cannot be blank")
        return v2

class LiftRead(CamelModel):
    id: int
    player_id: int
    exercise_name: str
    weight: float
    reps: int
    sets: int
    notes: str | None = None
    created_at: datetime
    updated_at: datetime
    player: PlayerSummary | None = None

    @computed_field(alias="estimatedOneRepMax")
    @property
    def estimated_one_rep_max(self) -> float:
        return round(estimated_one_rep_max(self.weight, self.reps), 2)

class LiftHistoryRead(CamelModel):
    id: int
    player_id: int
    exercise_name: str
    weight: float
    reps: int
    sets: int
    notes: str | None = None
    workout_date: datetime
    created_at: datetime
    player: PlayerSummary | None = None
