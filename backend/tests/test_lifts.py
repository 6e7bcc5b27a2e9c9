import uuid
from fastapi.testclient import TestClient
from tracker.main import app

client = TestClient(app)

def make_player():
    r = client.post("/api/Player", json={
        "email": f"lift-{uuid.uuid4().hex[:8]}@ex.com", "firstName": "Lift", "lastName": "Er", "position": "PF",
    })
    assert r.status_code == 201, r.text
    return r.json()

def test_default_exercise_names():
    r = client.get("/api/Lift/exercises")
    assert r.status_code == 200
    assert "Bench Press" in r.json() and "Squat" in r.json()

def test_log_lift_and_read_back():
    p = make_player()
    r = client.post("/api/Lift", json={
        "playerId": p["id"], "exerciseName": "  Bench Press ", "weight": 200, "reps": 3, "sets": 4, "notes": "felt strong",
    })
    assert r.status_code == 201, r.text
    lift = r.json()
    assert lift["exerciseName"] == "Bench Press"
    assert lift["sets"] == 4
    assert lift["player"]["firstName"] == "Lift"
    # Epley: 200 * (1 + 3/30)
    assert lift["estimatedOneRepMax"] == 220.0

    assert client.get(f"/api/Lift/{lift['id']}").json()["id"] == lift["id"]
    mine = client.get(f"/api/Lift/player/{p['id']}").json()
    assert [l["id"] for l in mine] == [lift["id"]]
    assert lift["id"] in [l["id"] for l in client.get("/api/Lift").json()]

def test_history_written_for_each_lift():
    p = make_player()
    for w in (135, 155):
        assert client.post("/api/Lift", json={"playerId": p["id"], "exerciseName": "Squat", "weight": w, "reps": 5}).status_code == 201
    history = client.get(f"/api/Lift/history/player/{p['id']}").json()
    assert sorted(h["weight"] for h in history) == [135, 155]
    assert all(h["sets"] == 1 for h in history)
    assert all("workoutDate" in h for h in history)

def test_lift_unknown_player():
    r = client.post("/api/Lift", json={"playerId": 999999, "exerciseName": "Squat", "weight": 100, "reps": 5})
    assert r.status_code == 400
    assert r.json()["detail"] == "Player not found"

def test_lift_validation():
    p = make_player()
    bad = [
        {"playerId": p["id"], "exerciseName": "Squat", "weight": -1, "reps": 5},
        {"playerId": p["id"], "exerciseName": "Squat", "weight": 100, "reps": 0},
        {"playerId": p["id"], "exerciseName": "   ", "weight": 100, "reps": 5},
        {"playerId": p["id"], "exerciseName": "Squat", "weight": 100, "reps": 5, "sets": 0},
    ]
    for body in bad:
        r = client.post("/api/Lift", json=body)
        assert r.status_code == 400, body
        assert r.json()["detail"] == "Validation failed"

def test_lift_not_found():
    assert client.get("/api/Lift/999999").status_code == 404
