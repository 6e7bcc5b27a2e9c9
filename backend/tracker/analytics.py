"""
Derived basketball statistics.

Everything here works on plain records shaped like the JSON the API returns
and the client keeps in local storage (camelCase keys), so the same helpers
serve the /api/Stat summary endpoints and the client dashboards.
Stat entries are expected newest first.
"""
from __future__ import annotations

import datetime as dt
import math
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Mapping, Sequence

Record = Mapping[str, Any]

class ShotCategory(str, Enum):
    three_point = "threePoint"
    two_point = "twoPoint"
    free_throw = "freeThrow"

# (makes key, attempts key) per category
CATEGORY_FIELDS = {
    ShotCategory.three_point: ("threePointMakes", "threePointAttempts"),
    ShotCategory.two_point: ("twoPointMakes", "twoPointAttempts"),
    ShotCategory.free_throw: ("freeThrowMakes", "freeThrowAttempts"),
}

POINT_VALUES = {
    ShotCategory.three_point: 3,
    ShotCategory.two_point: 2,
    ShotCategory.free_throw: 1,
}

class Trend(str, Enum):
    improving = "improving"
    declining = "declining"
    stable = "stable"
    no_data = "no data"
    insufficient = "insufficient data"

class LeaderboardSort(str, Enum):
    total_points = "totalPoints"
    threes = "threes"
    twos = "twos"
    free_throws = "freeThrows"

class Outcome(str, Enum):
    better = "better"
    worse = "worse"
    neutral = "neutral"

TREND_WINDOW = 3
TREND_THRESHOLD = 5
LEADERBOARD_LIMIT = 5

@dataclass(slots=True)
class ShootingLine:
    makes: int = 0
    attempts: int = 0
    percentage: int = 0

    def fraction(self) -> str:
        return f"{self.makes}/{self.attempts}"

@dataclass(slots=True)
class LeaderboardRow:
    player_id: str
    name: str
    position: str
    photo: str | None
    three: ShootingLine
    two: ShootingLine
    free_throw: ShootingLine
    total_points: int

    def value(self, sort_by: LeaderboardSort) -> int:
        if sort_by is LeaderboardSort.threes:
            return self.three.makes
        if sort_by is LeaderboardSort.twos:
            return self.two.makes
        if sort_by is LeaderboardSort.free_throws:
            return self.free_throw.makes
        return self.total_points

    def total_makes(self) -> int:
        return self.three.makes + self.two.makes + self.free_throw.makes

@dataclass(slots=True)
class PlayerComparisonStats:
    three: ShootingLine
    two: ShootingLine
    free_throw: ShootingLine
    assists_total: int
    assists_average: float
    rebounds_total: int
    rebounds_average: float
    games_played: int

@dataclass(slots=True)
class ComparisonLine:
    label: str
    value: str
    opponent_value: str
    outcome: Outcome
    details: str = ""

@dataclass(slots=True)
class TeamOverview:
    total_players: int
    total_workouts: int
    three_point_average: int
    free_throw_average: int

@dataclass(slots=True)
class Dashboard:
    total_workouts: int
    weekly_workouts: int
    three: ShootingLine
    free_throw: ShootingLine
    three_trend: Trend
    free_throw_trend: Trend

@dataclass(slots=True)
class LiftingQuickStats:
    total_workouts: int
    total_volume: int
    average_weight: int
    exercise_count: int

@dataclass(slots=True)
class ProgressLine:
    exercise: str
    first: float
    last: float
    diff: float

@dataclass(slots=True)
class LiftSummary:
    total_lifts: int = 0
    total_volume: int = 0
    active_players: int = 0
    this_week: int = 0
    exercise_count: int = 0
    top_exercise: str = "None"
    most_active_player: str = "None"
    exercises: list[str] = field(default_factory=list)


def _round_half_up(x: float) -> int:
    # browser Math.round semantics (Python's round() is banker's rounding)
    return int(math.floor(x + 0.5))

def _int(value: Any) -> int:
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0

def _float(value: Any) -> float:
    try:
        return float(value or 0)
    except (TypeError, ValueError):
        return 0.0

def as_date(value: Any) -> dt.date | None:
    """Accepts date, datetime or an ISO string ("2024-03-01" or a full timestamp)."""
    if value is None or value == "":
        return None
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    try:
        return dt.date.fromisoformat(str(value)[:10])
    except ValueError:
        return None

def same_player(record: Record, player_id: Any) -> bool:
    # client-created ids are strings, server ids are ints
    return str(record.get("playerId")) == str(player_id)


def calculate_percentage(makes: int, attempts: int) -> int:
    return _round_half_up(makes / attempts * 100) if attempts > 0 else 0

def clamp_count(value: Any) -> int:
    return max(0, _int(value))

def clamp_makes(makes: Any, attempts: Any) -> int:
    "Makes can never exceed the paired attempts field, and neither goes below zero."
    m, a = clamp_count(makes), clamp_count(attempts)
    return a if m > a else m

def calculate_player_stats(entries: Iterable[Record], category: ShotCategory | str) -> ShootingLine:
    makes_key, attempts_key = CATEGORY_FIELDS[ShotCategory(category)]
    makes = attempts = 0
    for entry in entries:
        makes += _int(entry.get(makes_key))
        attempts += _int(entry.get(attempts_key))
    return ShootingLine(makes=makes, attempts=attempts, percentage=calculate_percentage(makes, attempts))

def calculate_trend(entries: Sequence[Record], category: ShotCategory | str) -> Trend:
    """
    Compare the last TREND_WINDOW entries against the TREND_WINDOW before them.
    Percentages are taken over the pooled makes/attempts of each window.
    """
    if len(entries) < 2:
        return Trend.no_data
    recent = entries[:TREND_WINDOW]
    older = entries[TREND_WINDOW:TREND_WINDOW * 2]
    if not older:
        return Trend.insufficient

    diff = calculate_player_stats(recent, category).percentage - calculate_player_stats(older, category).percentage
    if diff > TREND_THRESHOLD:
        return Trend.improving
    if diff < -TREND_THRESHOLD:
        return Trend.declining
    return Trend.stable

def total_points(three: ShootingLine, two: ShootingLine, free_throw: ShootingLine) -> int:
    return (
        three.makes * POINT_VALUES[ShotCategory.three_point]
        + two.makes * POINT_VALUES[ShotCategory.two_point]
        + free_throw.makes * POINT_VALUES[ShotCategory.free_throw]
    )

def build_leaderboard(
    players: Iterable[Record],
    entries: Sequence[Record],
    sort_by: LeaderboardSort | str = LeaderboardSort.total_points,
    limit: int | None = LEADERBOARD_LIMIT,
) -> list[LeaderboardRow]:
    """
    Rank players on the chosen metric, highest first.
    Ties keep the order the players were given in.
    """
    sort_by = LeaderboardSort(sort_by)
    rows = []
    for player in players:
        mine = [e for e in entries if same_player(e, player["id"])]
        three = calculate_player_stats(mine, ShotCategory.three_point)
        two = calculate_player_stats(mine, ShotCategory.two_point)
        ft = calculate_player_stats(mine, ShotCategory.free_throw)
        rows.append(LeaderboardRow(
            player_id=str(player["id"]),
            name=player.get("name") or "",
            position=player.get("position") or "",
            photo=player.get("photo"),
            three=three,
            two=two,
            free_throw=ft,
            total_points=total_points(three, two, ft),
        ))
    rows.sort(key=lambda r: r.value(sort_by), reverse=True)
    return rows if limit is None else rows[:limit]

def comparison_stats(entries: Sequence[Record]) -> PlayerComparisonStats:
    games = len(entries)
    assists = sum(_int(e.get("assists")) for e in entries)
    rebounds = sum(_int(e.get("rebounds")) for e in entries)
    return PlayerComparisonStats(
        three=calculate_player_stats(entries, ShotCategory.three_point),
        two=calculate_player_stats(entries, ShotCategory.two_point),
        free_throw=calculate_player_stats(entries, ShotCategory.free_throw),
        assists_total=assists,
        assists_average=round(assists / games, 1) if games else 0.0,
        rebounds_total=rebounds,
        rebounds_average=round(rebounds / games, 1) if games else 0.0,
        games_played=games,
    )

def compare_metric(mine: float, theirs: float) -> Outcome:
    if mine == 0 and theirs == 0:
        return Outcome.neutral
    return Outcome.better if mine > theirs else Outcome.worse

def comparison_lines(mine: PlayerComparisonStats, theirs: PlayerComparisonStats) -> list[ComparisonLine]:
    """Head-to-head lines for one side of a two-player comparison."""
    lines = []
    for label, a, b in (
        ("3-Point %", mine.three, theirs.three),
        ("2-Point %", mine.two, theirs.two),
        ("Free Throw %", mine.free_throw, theirs.free_throw),
    ):
        lines.append(ComparisonLine(
            label=label,
            value=f"{a.percentage}%",
            opponent_value=f"{b.percentage}%",
            outcome=compare_metric(a.percentage, b.percentage),
            details=a.fraction(),
        ))
    lines.append(ComparisonLine(
        label="Assists/Game",
        value=f"{mine.assists_average:.1f}",
        opponent_value=f"{theirs.assists_average:.1f}",
        outcome=compare_metric(mine.assists_average, theirs.assists_average),
        details=f"Total: {mine.assists_total}",
    ))
    lines.append(ComparisonLine(
        label="Rebounds/Game",
        value=f"{mine.rebounds_average:.1f}",
        opponent_value=f"{theirs.rebounds_average:.1f}",
        outcome=compare_metric(mine.rebounds_average, theirs.rebounds_average),
        details=f"Total: {mine.rebounds_total}",
    ))
    lines.append(ComparisonLine(
        label="Workouts",
        value=str(mine.games_played),
        opponent_value=str(theirs.games_played),
        outcome=compare_metric(mine.games_played, theirs.games_played),
    ))
    return lines

def compare_players(
    entries_a: Sequence[Record], entries_b: Sequence[Record],
) -> tuple[list[ComparisonLine], list[ComparisonLine]]:
    """Both sides of a head-to-head, each judged against the other."""
    a, b = comparison_stats(entries_a), comparison_stats(entries_b)
    return comparison_lines(a, b), comparison_lines(b, a)

def team_overview(players: Sequence[Record], workouts: Sequence[Record], entries: Sequence[Record]) -> TeamOverview:
    three = calculate_player_stats(entries, ShotCategory.three_point)
    ft = calculate_player_stats(entries, ShotCategory.free_throw)
    return TeamOverview(
        total_players=len(players),
        total_workouts=len(workouts),
        three_point_average=three.percentage,
        free_throw_average=ft.percentage,
    )

def weekly_workout_count(workouts: Iterable[Record], today: dt.date | None = None) -> int:
    today = today or dt.date.today()
    week_ago = today - dt.timedelta(days=7)
    return sum(1 for w in workouts if (d := as_date(w.get("date"))) is not None and d > week_ago)

def dashboard(workouts: Sequence[Record], entries: Sequence[Record], today: dt.date | None = None) -> Dashboard:
    """Headline numbers for one player (or the whole team when given everything)."""
    return Dashboard(
        total_workouts=len(workouts),
        weekly_workouts=weekly_workout_count(workouts, today),
        three=calculate_player_stats(entries, ShotCategory.three_point),
        free_throw=calculate_player_stats(entries, ShotCategory.free_throw),
        three_trend=calculate_trend(entries, ShotCategory.three_point),
        free_throw_trend=calculate_trend(entries, ShotCategory.free_throw),
    )

def last_n_days(n: int, today: dt.date | None = None) -> list[dt.date]:
    today = today or dt.date.today()
    return [today - dt.timedelta(days=i) for i in range(n - 1, -1, -1)]

def weekly_activity(workouts: Sequence[Record], today: dt.date | None = None) -> list[tuple[dt.date, int]]:
    """Workout counts for each of the last 7 days, oldest first."""
    per_day = Counter(as_date(w.get("date")) for w in workouts)
    return [(day, per_day.get(day, 0)) for day in last_n_days(7, today)]

def estimated_one_rep_max(weight: float, reps: int) -> float:
    # Epley
    return weight * (1 + reps / 30.0)

def _all_sets(workouts: Iterable[Record]) -> list[Record]:
    return [s for w in workouts for s in (w.get("sets") or [])]

def lifting_quick_stats(workouts: Sequence[Record]) -> LiftingQuickStats:
    sets = _all_sets(workouts)
    volume = sum(_int(s.get("reps")) * _float(s.get("weight")) for s in sets)
    avg = sum(_float(s.get("weight")) for s in sets) / len(sets) if sets else 0
    return LiftingQuickStats(
        total_workouts=len(workouts),
        total_volume=_round_half_up(volume),
        average_weight=_round_half_up(avg),
        exercise_count=len({s.get("exerciseId") for s in sets}),
    )

def set_exercise_name(s: Record) -> str:
    exercise = s.get("exercise") or {}
    return exercise.get("name") or f"Exercise #{s.get('exerciseId')}"

def lifting_progress(workouts: Sequence[Record], limit: int = 3) -> list[ProgressLine]:
    """First vs latest weight per exercise, for the first `limit` exercises seen."""
    series: dict[str, list[tuple[dt.date | None, float]]] = {}
    for w in workouts:
        for s in w.get("sets") or []:
            series.setdefault(set_exercise_name(s), []).append((as_date(w.get("date")), _float(s.get("weight"))))

    lines = []
    for name, points in list(series.items())[:limit]:
        points.sort(key=lambda p: p[0] or dt.date.min)
        first, last = points[0][1], points[-1][1]
        lines.append(ProgressLine(exercise=name, first=first, last=last, diff=round(last - first, 1)))
    return lines

def _most_common(values: Iterable[str]) -> str:
    counts = Counter(values)
    if not counts:
        return "None"
    # Counter keeps first-seen order, so ties go to the earliest value
    best = max(counts.values())
    return next(k for k, v in counts.items() if v == best)

def lift_summary(lifts: Sequence[Record], today: dt.date | None = None) -> LiftSummary:
    """Totals for single-exercise lifts (weight x reps x sets)."""
    if not lifts:
        return LiftSummary()
    today = today or dt.date.today()
    week_ago = today - dt.timedelta(days=7)
    exercises = list(dict.fromkeys(l.get("exerciseName") for l in lifts))
    return LiftSummary(
        total_lifts=len(lifts),
        total_volume=_round_half_up(sum(
            _float(l.get("weight")) * _int(l.get("reps")) * _int(l.get("sets")) for l in lifts
        )),
        active_players=len({str(l.get("playerId")) for l in lifts}),
        this_week=sum(1 for l in lifts if (d := as_date(l.get("createdAt"))) is not None and d > week_ago),
        exercise_count=len(exercises),
        top_exercise=_most_common(l.get("exerciseName") for l in lifts),
        most_active_player=_most_common(l.get("playerName") for l in lifts),
        exercises=exercises,
    )
