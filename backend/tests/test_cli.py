import uuid
import pytest
import requests
from fastapi.testclient import TestClient
from tracker import cli
from tracker.client import TrackerApi
from tracker.main import app
from tracker.client.storage import PLAYERS_KEY, STATS_KEY, WORKOUTS_KEY, LocalStorage

class DeadSession:
    def request(self, method, url, **kwargs):
        raise requests.ConnectionError("refused")

@pytest.fixture
def offline(monkeypatch, tmp_path):
    monkeypatch.setattr(cli, "TrackerApi", lambda base: TrackerApi(base, session=DeadSession()))
    path = tmp_path / "storage.json"
    LocalStorage(path).save_list(PLAYERS_KEY, [
        {"id": "1", "name": "Ana Diaz", "position": "PG"},
        {"id": "2", "name": "Bo Kim", "position": "C"},
    ])
    return ["--api", "http://offline.invalid", "--storage", str(path)]

def test_players_command_uses_local_copy(offline, capsys):
    assert cli.main(offline + ["players"]) == 0
    out = capsys.readouterr().out
    assert "Ana Diaz" in out and "Players: 2" in out

def test_leaderboard_command(offline, capsys):
    assert cli.main(offline + ["leaderboard", "--sort-by", "threes"]) == 0
    assert "No shooting data available yet" in capsys.readouterr().out

def test_dashboard_command(offline, capsys):
    assert cli.main(offline + ["dashboard", "--player", "all"]) == 0
    assert "Total workouts:   0" in capsys.readouterr().out

def test_compare_same_player_fails(offline, capsys):
    assert cli.main(offline + ["compare", "1", "1"]) == 2
    assert "two different players" in capsys.readouterr().out

def test_compare_command(offline, capsys):
    assert cli.main(offline + ["compare", "1", "2"]) == 0
    assert "Assists/Game" in capsys.readouterr().out

def test_lifting_command(offline, capsys):
    assert cli.main(offline + ["lifting"]) == 0
    assert "No workouts yet" in capsys.readouterr().out

def test_stats_command_lists_sessions_and_shooting(offline, tmp_path, capsys):
    store = LocalStorage(tmp_path / "storage.json")
    store.save_list(WORKOUTS_KEY, [
        {"id": 11, "playerId": "1", "date": "2024-03-05", "type": "shooting", "notes": ""},
        {"id": 12, "playerId": "2", "date": "2024-03-05", "type": "game", "notes": ""},
    ])
    store.save_list(STATS_KEY, [
        {"id": 13, "playerId": "1", "date": "2024-03-05", "gameType": "practice",
         "threePointMakes": 3, "threePointAttempts": 6},
    ])
    assert cli.main(offline + ["stats", "--player", "1"]) == 0
    out = capsys.readouterr().out
    assert "Shooting Practice - Ana Diaz" in out and "Bo Kim" not in out
    assert "3PT: 3/6 (50%)" in out

def test_stats_command_without_records(offline, capsys):
    assert cli.main(offline + ["stats"]) == 0
    out = capsys.readouterr().out
    assert "No workouts recorded yet." in out and "No statistics recorded yet." in out

def test_lifts_command_summary_offline(offline, capsys):
    assert cli.main(offline + ["lifts"]) == 0
    assert "Total lifts:        0" in capsys.readouterr().out

def test_lifts_command_needs_server_id(offline, capsys):
    assert cli.main(offline + ["lifts", "--player", "abc"]) == 2
    assert "Please select a player." in capsys.readouterr().out

def test_lifts_command_for_player_against_api(monkeypatch, tmp_path, capsys):
    http = TestClient(app)
    monkeypatch.setattr(cli, "TrackerApi", lambda base: TrackerApi(base, session=http))
    p = http.post("/api/Player", json={
        "email": f"cli-{uuid.uuid4().hex[:8]}@ex.com", "firstName": "Cli", "lastName": "Lift", "position": "G",
    }).json()
    r = http.post("/api/Lift", json={"playerId": p["id"], "exerciseName": "Power Clean", "weight": 155, "reps": 3})
    assert r.status_code == 201, r.text
    argv = ["--api", "http://testserver", "--storage", str(tmp_path / "s.json"), "lifts", "--player", str(p["id"])]
    assert cli.main(argv) == 0
    assert "Power Clean 1x3 @ 155 lbs" in capsys.readouterr().out
    assert cli.main(argv + ["--history"]) == 0
    assert "Power Clean 1x3 @ 155 lbs" in capsys.readouterr().out

def test_serve_runs_uvicorn(monkeypatch):
    import uvicorn
    seen = {}
    monkeypatch.setattr(uvicorn, "run", lambda app, **kw: seen.update(app=app, **kw))
    assert cli.main(["serve", "--port", "9000"]) == 0
    assert seen["app"] == "tracker.main:app" and seen["port"] == 9000
