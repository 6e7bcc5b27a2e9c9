import uuid
from fastapi.testclient import TestClient
from tracker.main import app

client = TestClient(app)

def make_player():
    r = client.post("/api/Player", json={
        "email": f"wk-{uuid.uuid4().hex[:8]}@ex.com", "firstName": "Work", "lastName": "Out", "position": "SG",
    })
    assert r.status_code == 201, r.text
    return r.json()

def make_exercise(prefix="Squat"):
    r = client.post("/api/Exercise", json={"name": f"{prefix}-{uuid.uuid4().hex[:6]}", "category": "Legs"})
    assert r.status_code == 201, r.text
    return r.json()

def post_workout(player_id, date, exercise_id, **extra):
    body = {
        "playerId": player_id, "date": date,
        "sets": [
            {"exerciseId": exercise_id, "setNumber": 1, "reps": 5, "weight": 185},
            {"exerciseId": exercise_id, "setNumber": 2, "reps": 5, "weight": 195.5},
        ],
    }
    body.update(extra)
    return client.post("/api/Workout", json=body)

def test_create_workout_with_sets():
    p, ex = make_player(), make_exercise()
    r = post_workout(p["id"], "2024-05-10", ex["id"], notes="  heavy day ")
    assert r.status_code == 201, r.text
    w = r.json()
    assert w["playerId"] == p["id"] and w["date"] == "2024-05-10"
    assert w["notes"] == "heavy day"
    assert [s["setNumber"] for s in w["sets"]] == [1, 2]
    assert w["sets"][1]["weight"] == 195.5
    assert w["sets"][0]["exercise"]["name"] == ex["name"]

    got = client.get(f"/api/Workout/{w['id']}")
    assert got.status_code == 200
    assert len(got.json()["sets"]) == 2

def test_workout_requires_at_least_one_set():
    p = make_player()
    r = client.post("/api/Workout", json={"playerId": p["id"], "date": "2024-05-10", "sets": []})
    assert r.status_code == 400
    assert r.json()["detail"] == "Validation failed"

def test_workout_set_ranges():
    p, ex = make_player(), make_exercise()
    for bad in ({"reps": 0, "weight": 10}, {"reps": 5, "weight": -5}, {"reps": 5, "weight": 10, "setNumber": 0}):
        s = {"exerciseId": ex["id"], "setNumber": 1}
        s.update(bad)
        r = client.post("/api/Workout", json={"playerId": p["id"], "date": "2024-05-10", "sets": [s]})
        assert r.status_code == 400, bad

def test_workout_unknown_player_or_exercise():
    p, ex = make_player(), make_exercise()
    r = post_workout(999999, "2024-05-10", ex["id"])
    assert r.status_code == 400 and r.json()["detail"] == "Player not found"
    r = post_workout(p["id"], "2024-05-10", 999999)
    assert r.status_code == 400 and r.json()["detail"].startswith("Exercise not found")

def test_filter_by_player_and_date_range():
    p, other, ex = make_player(), make_player(), make_exercise()
    for d in ("2024-01-01", "2024-01-15", "2024-02-01"):
        assert post_workout(p["id"], d, ex["id"]).status_code == 201
    assert post_workout(other["id"], "2024-01-15", ex["id"]).status_code == 201

    r = client.get("/api/Workout", params={"playerId": p["id"]})
    assert [w["date"] for w in r.json()] == ["2024-02-01", "2024-01-15", "2024-01-01"]

    r = client.get("/api/Workout", params={"playerId": p["id"], "startDate": "2024-01-15", "endDate": "2024-02-01"})
    assert [w["date"] for w in r.json()] == ["2024-02-01", "2024-01-15"]

    r = client.get("/api/Workout", params={"startDate": "2024-01-15", "endDate": "2024-01-15"})
    ids = {w["playerId"] for w in r.json()}
    assert {p["id"], other["id"]} <= ids

def test_start_after_end_rejected():
    r = client.get("/api/Workout", params={"startDate": "2024-03-01", "endDate": "2024-02-01"})
    assert r.status_code == 400

def test_delete_workout():
    p, ex = make_player(), make_exercise()
    w = post_workout(p["id"], "2024-05-11", ex["id"]).json()
    assert client.delete(f"/api/Workout/{w['id']}").status_code == 204
    assert client.get(f"/api/Workout/{w['id']}").status_code == 404
    assert client.delete(f"/api/Workout/{w['id']}").status_code == 404
