from typing import Annotated
import datetime as dt
from pydantic import Field, model_validator
from tracker.analytics import CATEGORY_FIELDS, LeaderboardSort, Trend
from tracker.models.stat_entry import GameType
from tracker.schemas.base import CamelModel

Count = Annotated[int, Field(ge=0)]

class StatCreate(CamelModel):
    player_id: int
    date: dt.date
    game_type: GameType = GameType.practice
    three_point_makes: Count = 0
    three_point_attempts: Count = 0
    two_point_makes: Count = 0
    two_point_attempts: Count = 0
    free_throw_makes: Count = 0
    free_throw_attempts: Count = 0
    assists: Count = 0
    rebounds: Count = 0

    @model_validator(mode="after")
    def makes_within_attempts(self):
        data = self.model_dump(by_alias=True)
        for makes_key, attempts_key in CATEGORY_FIELDS.values():
            if data[makes_key] > data[attempts_key]:
                raise ValueError(f"{makes_key} cannot exceed {attempts_key}")
        return self

class StatRead(CamelModel):
    id: int
    player_id: int
    date: dt.date
    game_type: str
    three_point_makes: int
    three_point_attempts: int
    two_point_makes: int
    two_point_attempts: int
    free_throw_makes: int
    free_throw_attempts: int
    assists: int
    rebounds: int
    created_at: dt.datetime

class ShootingLineRead(CamelModel):
    makes: int
    attempts: int
    percentage: int

class PlayerStatSummary(CamelModel):
    player_id: int
    games_played: int
    three_point: ShootingLineRead
    two_point: ShootingLineRead
    free_throw: ShootingLineRead
    total_points: int
    assists_total: int
    assists_average: float
    rebounds_total: int
    rebounds_average: float
    three_point_trend: Trend
    free_throw_trend: Trend

class LeaderboardEntryRead(CamelModel):
    rank: int
    player_id: int
    name: str
    position: str
    value: int
    total_points: int
    three_point: ShootingLineRead
    two_point: ShootingLineRead
    free_throw: ShootingLineRead

class LeaderboardRead(CamelModel):
    sort_by: LeaderboardSort
    entries: list[LeaderboardEntryRead]
