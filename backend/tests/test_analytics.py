import datetime as dt
import pytest
from tracker import analytics
from tracker.analytics import LeaderboardSort, Outcome, ShotCategory, Trend

def shot(makes, attempts, category=ShotCategory.three_point, **extra):
    makes_key, attempts_key = analytics.CATEGORY_FIELDS[category]
    return {makes_key: makes, attempts_key: attempts, **extra}

@pytest.mark.parametrize("makes,attempts,expected", [
    (0, 0, 0),
    (3, 10, 30),
    (1, 3, 33),
    (2, 3, 67),
    (1, 8, 13),   # 12.5 rounds up
    (5, 5, 100),
])
def test_calculate_percentage(makes, attempts, expected):
    assert analytics.calculate_percentage(makes, attempts) == expected

def test_clamp_makes():
    assert analytics.clamp_makes(7, 5) == 5
    assert analytics.clamp_makes(3, 5) == 3
    assert analytics.clamp_makes("", None) == 0

def test_clamp_makes_never_negative():
    assert analytics.clamp_makes(0, -3) == 0
    assert analytics.clamp_makes(-2, 4) == 0
    assert analytics.clamp_count("-5") == 0
    assert analytics.clamp_count("6") == 6

def test_player_stats_sums_and_ignores_missing_fields():
    entries = [shot(2, 5), shot(3, 5), {"assists": 4}]
    line = analytics.calculate_player_stats(entries, ShotCategory.three_point)
    assert (line.makes, line.attempts, line.percentage) == (5, 10, 50)
    assert line.fraction() == "5/10"
    assert analytics.calculate_player_stats([], "freeThrow").percentage == 0

def test_trend_no_data_and_insufficient():
    assert analytics.calculate_trend([], ShotCategory.three_point) is Trend.no_data
    assert analytics.calculate_trend([shot(1, 2)], ShotCategory.three_point) is Trend.no_data
    assert analytics.calculate_trend([shot(1, 2)] * 3, ShotCategory.three_point) is Trend.insufficient

def test_trend_improving_declining_stable():
    recent_80 = [shot(8, 10)] * 3
    older_60 = [shot(6, 10)] * 3
    assert analytics.calculate_trend(recent_80 + older_60, "threePoint") is Trend.improving
    assert analytics.calculate_trend(older_60 + recent_80, "threePoint") is Trend.declining
    # 5 points is not enough either way
    assert analytics.calculate_trend([shot(13, 20)] * 3 + [shot(12, 20)] * 3, "threePoint") is Trend.stable

def test_trend_only_uses_two_windows():
    entries = [shot(8, 10)] * 3 + [shot(8, 10)] * 3 + [shot(0, 10)] * 10
    assert analytics.calculate_trend(entries, "threePoint") is Trend.stable

def test_trend_with_partial_older_window():
    entries = [shot(9, 10)] * 3 + [shot(1, 10)]
    assert analytics.calculate_trend(entries, "threePoint") is Trend.improving

def test_total_points():
    three = analytics.ShootingLine(makes=2, attempts=5)
    two = analytics.ShootingLine(makes=3, attempts=4)
    ft = analytics.ShootingLine(makes=1, attempts=2)
    assert analytics.total_points(three, two, ft) == 13

PLAYERS = [
    {"id": "1", "name": "Two Guy", "position": "C"},
    {"id": "2", "name": "Three Guy", "position": "SG"},
    {"id": "3", "name": "Bench", "position": "PF"},
]

def test_leaderboard_two_threes_beat_one_two():
    entries = [
        {"playerId": "1", **shot(1, 1, ShotCategory.two_point)},
        {"playerId": 2, **shot(2, 2)},  # server ids are ints
    ]
    rows = analytics.build_leaderboard(PLAYERS, entries)
    assert [r.name for r in rows] == ["Three Guy", "Two Guy", "Bench"]
    assert rows[0].total_points == 6 and rows[1].total_points == 2

def test_leaderboard_sort_choices_and_ties_keep_order():
    entries = [
        {"playerId": "1", **shot(4, 4, ShotCategory.free_throw)},
        {"playerId": "2", **shot(1, 1)},
    ]
    by_ft = analytics.build_leaderboard(PLAYERS, entries, LeaderboardSort.free_throws)
    assert by_ft[0].player_id == "1"
    by_twos = analytics.build_leaderboard(PLAYERS, entries, "twos")
    # everybody has 0 twos, so input order holds
    assert [r.player_id for r in by_twos] == ["1", "2", "3"]

def test_leaderboard_limit():
    players = [{"id": str(i), "name": f"P{i}", "position": "G"} for i in range(8)]
    assert len(analytics.build_leaderboard(players, [])) == 5
    assert len(analytics.build_leaderboard(players, [], limit=None)) == 8

def test_compare_players():
    a = [{"assists": 4, "rebounds": 1, **shot(3, 6)}, {"assists": 3, "rebounds": 0, **shot(1, 2)}]
    b = [{"assists": 1, "rebounds": 5, **shot(1, 4)}]
    mine, theirs = analytics.compare_players(a, b)
    by_label = {line.label: line for line in mine}
    assert by_label["3-Point %"].value == "50%" and by_label["3-Point %"].outcome is Outcome.better
    assert by_label["3-Point %"].details == "4/8"
    assert by_label["Assists/Game"].value == "3.5"
    assert by_label["Rebounds/Game"].outcome is Outcome.worse
    assert by_label["Free Throw %"].outcome is Outcome.neutral
    assert by_label["Workouts"].value == "2"
    assert {l.label: l.outcome for l in theirs}["Rebounds/Game"] is Outcome.better

def test_comparison_stats_empty():
    stats = analytics.comparison_stats([])
    assert stats.games_played == 0 and stats.assists_average == 0.0

def test_team_overview():
    entries = [shot(3, 10, assists=0), shot(1, 2, ShotCategory.free_throw)]
    o = analytics.team_overview(PLAYERS, [{}, {}], entries)
    assert (o.total_players, o.total_workouts, o.three_point_average, o.free_throw_average) == (3, 2, 30, 50)

TODAY = dt.date(2024, 3, 10)

def test_weekly_activity_last_seven_days_oldest_first():
    workouts = [{"date": "2024-03-10"}, {"date": "2024-03-10"}, {"date": "2024-03-04"}, {"date": "2024-03-01"}]
    days = analytics.weekly_activity(workouts, TODAY)
    assert [d for d, _ in days] == [dt.date(2024, 3, d) for d in range(4, 11)]
    assert days[-1] == (TODAY, 2)
    assert days[0] == (dt.date(2024, 3, 4), 1)
    assert sum(n for _, n in days) == 3

def test_dashboard_counts_week_and_trends():
    workouts = [{"date": "2024-03-09"}, {"date": "2024-03-03"}, {"date": "2024-02-01"}]
    d = analytics.dashboard(workouts, [shot(1, 2)], TODAY)
    assert d.total_workouts == 3
    assert d.weekly_workouts == 1
    assert d.three.percentage == 50
    assert d.three_trend is Trend.no_data

def test_week_count_matches_seven_day_activity():
    week_edge = [{"date": "2024-03-03"}]
    assert analytics.weekly_workout_count(week_edge, TODAY) == 0
    assert sum(n for _, n in analytics.weekly_activity(week_edge, TODAY)) == 0
    first_day = [{"date": "2024-03-04"}]
    assert analytics.weekly_workout_count(first_day, TODAY) == 1
    assert sum(n for _, n in analytics.weekly_activity(first_day, TODAY)) == 1

def test_lifting_quick_stats_and_progress():
    workouts = [
        {"date": "2024-03-08", "sets": [
            {"exerciseId": 1, "reps": 5, "weight": 225, "exercise": {"name": "Squat"}},
            {"exerciseId": 2, "reps": 10, "weight": 45.5, "exercise": {"name": "Curl"}},
        ]},
        {"date": "2024-03-01", "sets": [
            {"exerciseId": 1, "reps": 5, "weight": 205, "exercise": {"name": "Squat"}},
        ]},
    ]
    q = analytics.lifting_quick_stats(workouts)
    assert q.total_workouts == 2
    assert q.total_volume == 1125 + 455 + 1025
    assert q.average_weight == 159  # 475.5 / 3 = 158.5 rounds up
    assert q.exercise_count == 2

    progress = {p.exercise: p for p in analytics.lifting_progress(workouts)}
    assert (progress["Squat"].first, progress["Squat"].last, progress["Squat"].diff) == (205, 225, 20)
    assert progress["Curl"].diff == 0

def test_lifting_quick_stats_empty():
    q = analytics.lifting_quick_stats([])
    assert (q.total_workouts, q.total_volume, q.average_weight, q.exercise_count) == (0, 0, 0, 0)

def test_estimated_one_rep_max():
    assert analytics.estimated_one_rep_max(300, 0) == 300
    assert round(analytics.estimated_one_rep_max(200, 3), 2) == 220.0

def test_lift_summary():
    lifts = [
        {"playerId": 1, "playerName": "A B", "exerciseName": "Squat", "weight": 100, "reps": 5, "sets": 3, "createdAt": "2024-03-09T10:00:00"},
        {"playerId": 1, "playerName": "A B", "exerciseName": "Bench", "weight": 50, "reps": 10, "sets": 1, "createdAt": "2024-02-01T10:00:00"},
        {"playerId": 2, "playerName": "C D", "exerciseName": "Squat", "weight": 80, "reps": 5, "sets": 1, "createdAt": "2024-03-08T10:00:00"},
    ]
    s = analytics.lift_summary(lifts, TODAY)
    assert s.total_lifts == 3
    assert s.total_volume == 1500 + 500 + 400
    assert s.active_players == 2
    assert s.this_week == 2
    assert s.exercises == ["Squat", "Bench"]
    assert s.top_exercise == "Squat"
    assert s.most_active_player == "A B"
    assert analytics.lift_summary([]).top_exercise == "None"
