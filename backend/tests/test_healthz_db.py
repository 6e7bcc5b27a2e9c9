from fastapi.testclient import TestClient
from tracker.main import app
from tracker import main as tracker_main

client = TestClient(app)

class _DeadSession:
    def __enter__(self): raise RuntimeError("database unreachable")
    def __exit__(self, *a): return False

def test_healthz_degraded_when_db_down(monkeypatch):
    monkeypatch.setattr(tracker_main, "SessionLocal", lambda: _DeadSession())
    r = client.get("/healthz")
    # the service still answers; only the status flips
    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "degraded"
    assert "unreachable" in body["error"]

def test_other_endpoints_unaffected_by_db_check(monkeypatch):
    monkeypatch.setattr(tracker_main, "SessionLocal", lambda: _DeadSession())
    assert client.get("/ping").json() == {"pong": True}
