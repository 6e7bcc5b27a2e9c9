from fastapi.testclient import TestClient
from tracker.main import app

client = TestClient(app)

def test_root():
    r = client.get("/")
    assert r.status_code == 200
    assert r.json()["ok"] is True

def test_ping():
    r = client.get("/ping")
    assert r.status_code == 200
    assert r.json() == {"pong": True}

def test_healthz():
    r = client.get("/healthz")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"

def test_version():
    r = client.get("/version")
    assert r.status_code == 200
    assert "version" in r.json()

def test_request_id_echoed():
    r = client.get("/ping", headers={"X-Request-ID": "abc123"})
    assert r.headers["X-Request-ID"] == "abc123"
    # generated when the caller sends none
    assert client.get("/ping").headers["X-Request-ID"]
