from typing import Annotated
import datetime as dt
from pydantic import Field, StringConstraints
from tracker.schemas.base import CamelModel
from tracker.schemas.exercise import ExerciseRead

PosInt = Annotated[int, Field(ge=1)]
NonNegFloat = Annotated[float, Field(ge=0)]
NotesStr = Annotated[str, StringConstraints(strip_whitespace=True, max_length=200)]

class WorkoutSetCreate(CamelModel):
    exercise_id: int
    set_number: PosInt = 1
    reps: PosInt
    weight: NonNegFloat

class WorkoutCreate(CamelModel):
    player_id: int
    date: dt.date
    notes: NotesStr | None = None
    sets: list[WorkoutSetCreate] = Field(min_length=1)

class WorkoutSetRead(CamelModel):
    id: int
    exercise_id: int
    set_number: int
    reps: int
    weight: float
    exercise: ExerciseRead | None = None

class WorkoutRead(CamelModel):
    id: int
    player_id: int
    date: dt.date
    notes: str | None = None
    created_at: dt.datetime
    updated_at: dt.datetime
    sets: list[WorkoutSetRead] = []
