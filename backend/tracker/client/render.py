"""Plain-text views of the tracker state, one function per panel."""
from __future__ import annotations

import datetime as dt
from typing import Any, Optional, Sequence

from tracker import analytics
from tracker.analytics import LeaderboardSort

MEDALS = ("🥇", "🥈", "🥉")
DEFAULT_MEDAL = "🏀"

WORKOUT_TYPES = {
    "shooting": "Shooting Practice",
    "conditioning": "Conditioning",
    "skills": "Skills Training",
    "game": "Game",
}

GAME_TYPES = {
    "practice": "Practice",
    "scrimmage": "Scrimmage",
    "game": "Official Game",
}

TREND_ARROWS = {
    analytics.Trend.improving: "↑",
    analytics.Trend.declining: "↓",
    analytics.Trend.stable: "→",
}

OUTCOME_MARKS = {
    analytics.Outcome.better: "+",
    analytics.Outcome.worse: "-",
    analytics.Outcome.neutral: " ",
}


def format_workout_type(value: str) -> str:
    return WORKOUT_TYPES.get(value, value)

def format_game_type(value: str) -> str:
    return GAME_TYPES.get(value, value)

def format_date(value: Any) -> str:
    d = analytics.as_date(value)
    if d is None:
        return str(value or "")
    return f"{d:%b} {d.day}, {d.year}"

def format_trend(trend: analytics.Trend) -> str:
    arrow = TREND_ARROWS.get(trend)
    return f"{arrow} {trend.value.capitalize()}" if arrow else trend.value.capitalize()


def render_players(players: Sequence[dict], current: Optional[str] = None) -> str:
    if not players:
        return "No players added yet. Add a player to get started!"
    lines = []
    for p in players:
        mark = "*" if p["id"] == current else " "
        lines.append(f"{mark} [{p['id']}] {p['name']} ({p['position']})")
    return "\n".join(lines)

def _player_names(players: Sequence[dict]) -> dict[str, str]:
    return {str(p["id"]): p["name"] for p in players}

def render_sessions(workouts: Sequence[dict], players: Sequence[dict]) -> str:
    if not workouts:
        return "No workouts recorded yet."
    names = _player_names(players)
    lines = []
    for w in workouts:
        notes = f": {w['notes']}" if w.get("notes") else ""
        lines.append(
            f"{format_date(w.get('date'))}  {format_workout_type(w.get('type', ''))}"
            f" - {names.get(str(w.get('playerId')), 'Unknown Player')}{notes}"
        )
    return "\n".join(lines)

def render_stats(entries: Sequence[dict], players: Sequence[dict]) -> str:
    if not entries:
        return "No statistics recorded yet."
    names = _player_names(players)
    blocks = []
    for e in entries:
        head = (
            f"{format_game_type(e.get('gameType', ''))} - "
            f"{names.get(str(e.get('playerId')), 'Unknown Player')} - {format_date(e.get('date'))}"
        )
        body = "  ".join(
            f"{label}: {analytics.calculate_player_stats([e], cat).fraction()}"
            f" ({analytics.calculate_player_stats([e], cat).percentage}%)"
            for label, cat in (
                ("3PT", analytics.ShotCategory.three_point),
                ("2PT", analytics.ShotCategory.two_point),
                ("FT", analytics.ShotCategory.free_throw),
            )
        )
        blocks.append(f"{head}\n  {body}  AST: {e.get('assists', 0)}  REB: {e.get('rebounds', 0)}")
    return "\n".join(blocks)

def render_dashboard(d: analytics.Dashboard) -> str:
    return "\n".join([
        f"Total workouts:   {d.total_workouts}",
        f"This week:        {d.weekly_workouts}",
        f"3-Point %:        {d.three.percentage}% ({d.three.fraction()})  {format_trend(d.three_trend)}",
        f"Free Throw %:     {d.free_throw.percentage}% ({d.free_throw.fraction()})  {format_trend(d.free_throw_trend)}",
    ])

def _leaderboard_stat(row: analytics.LeaderboardRow, sort_by: LeaderboardSort) -> tuple[str, str]:
    if sort_by is LeaderboardSort.threes:
        return str(row.three.makes), f"{row.three.fraction()} 3PA"
    if sort_by is LeaderboardSort.twos:
        return str(row.two.makes), f"{row.two.fraction()} 2PA"
    if sort_by is LeaderboardSort.free_throws:
        return str(row.free_throw.makes), f"{row.free_throw.fraction()} FTA"
    return (
        str(row.total_points),
        f"{row.three.makes}x3 • {row.two.makes}x2 • {row.free_throw.makes}x1",
    )

def render_leaderboard(
    rows: Sequence[analytics.LeaderboardRow],
    sort_by: LeaderboardSort | str = LeaderboardSort.total_points,
    current: Optional[str] = None,
) -> str:
    if not rows:
        return "No players available"
    if all(r.total_makes() == 0 for r in rows):
        return "No shooting data available yet"
    sort_by = LeaderboardSort(sort_by)
    lines = []
    for i, row in enumerate(rows):
        medal = MEDALS[i] if i < len(MEDALS) else DEFAULT_MEDAL
        main, sub = _leaderboard_stat(row, sort_by)
        mark = "*" if row.player_id == current else " "
        lines.append(f"{mark}{medal} {row.name:<24} {row.position:<6} {main:>5}  {sub}")
    return "\n".join(lines)

def render_comparison(first: tuple[dict, list], second: tuple[dict, list]) -> str:
    (a, lines_a), (b, lines_b) = first, second
    out = [f"{'':<16}{a['name']:>20}   {b['name']:>20}"]
    for la, lb in zip(lines_a, lines_b):
        left = f"{OUTCOME_MARKS[la.outcome]}{la.value}"
        right = f"{OUTCOME_MARKS[lb.outcome]}{lb.value}"
        out.append(f"{la.label:<16}{left:>20}   {right:>20}")
        if la.details or lb.details:
            out.append(f"{'':<16}{la.details:>20}   {lb.details:>20}")
    return "\n".join(out)

def render_team_overview(o: analytics.TeamOverview) -> str:
    return (
        f"Players: {o.total_players}  Workouts: {o.total_workouts}  "
        f"Team 3PT: {o.three_point_average}%  Team FT: {o.free_throw_average}%"
    )

def render_weekly_activity(days: Sequence[tuple[dt.date, int]]) -> str:
    total = sum(n for _, n in days)
    cells = "  ".join(f"{d:%a} {n}" for d, n in days)
    return f"Last 7 Days: {total} total workouts\n{cells}"

def render_lifting(
    workouts: Sequence[dict],
    quick: analytics.LiftingQuickStats,
    progress: Sequence[analytics.ProgressLine],
) -> str:
    out = [
        f"Workouts: {quick.total_workouts}  Volume: {quick.total_volume} lbs  "
        f"Avg weight: {quick.average_weight} lbs  Exercises: {quick.exercise_count}",
    ]
    if progress:
        out.append("Progress:")
        out.extend(
            f"  {p.exercise}: {p.first:g} → {p.last:g} ({p.diff:+g})" for p in progress
        )
    if not workouts:
        out.append("No workouts yet")
        return "\n".join(out)
    for w in workouts:
        sets = ", ".join(
            f"{analytics.set_exercise_name(s)} {s.get('reps')}x{float(s.get('weight') or 0):g}"
            for s in w.get("sets") or []
        )
        notes = f" ({w['notes']})" if w.get("notes") else ""
        out.append(f"{format_date(w.get('date'))}{notes}: {sets}")
    return "\n".join(out)

def render_lift_summary(s: analytics.LiftSummary) -> str:
    return "\n".join([
        f"Total lifts:        {s.total_lifts}",
        f"Total volume:       {s.total_volume} lbs",
        f"Active players:     {s.active_players}",
        f"This week:          {s.this_week}",
        f"Exercises:          {s.exercise_count}",
        f"Top exercise:       {s.top_exercise}",
        f"Most active player: {s.most_active_player}",
    ])

def render_lifts(lifts: Sequence[dict]) -> str:
    if not lifts:
        return "No lifts logged yet"
    out = []
    for l in lifts:
        when = format_date(l.get("workoutDate") or l.get("createdAt"))
        line = f"{when}: {l.get('exerciseName')} {l.get('sets')}x{l.get('reps')} @ {float(l.get('weight') or 0):g} lbs"
        if l.get("estimatedOneRepMax") is not None:
            line += f"  (est. 1RM {float(l['estimatedOneRepMax']):g})"
        out.append(line)
    return "\n".join(out)
