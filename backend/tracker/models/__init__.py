from tracker.models.player import Player
from tracker.models.lift import Lift, LiftHistory
from tracker.models.exercise import Exercise
from tracker.models.workout import Workout, WorkoutSet
from tracker.models.stat_entry import GameType, StatEntry

__all__ = [
    "Player",
    "Lift",
    "LiftHistory",
    "Exercise",
    "Workout",
    "WorkoutSet",
    "GameType",
    "StatEntry",
]
