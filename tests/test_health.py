"""Health check tests."""

from atelier import main


def test_health_endpoint(client):
    """Test health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert "status" in data
    assert "db" in data
    assert "redis" in data
    assert data["compositor"] == "configured"


def test_health_reports_derivative_backlog(client, monkeypatch):
    monkeypatch.setattr(main, "_check_database", lambda: "connected")
    monkeypatch.setattr(main, "_check_redis", lambda: "connected")
    monkeypatch.setattr(main, "_derivative_backlog", lambda: {"pending": 2, "failed": 1})

    data = client.get("/health").json()

    assert data["status"] == "ok"
    assert data["derivatives"] == {"pending": 2, "failed": 1}


def test_health_degraded_without_compositor(client, monkeypatch):
    monkeypatch.setattr(main, "_check_database", lambda: "connected")
    monkeypatch.setattr(main, "_check_redis", lambda: "connected")
    monkeypatch.setattr(main, "_derivative_backlog", lambda: None)
    monkeypatch.setattr(main.settings, "compositor_url", "")

    data = client.get("/health").json()

    assert data["status"] == "degraded"
    assert data["compositor"] == "not configured"


def test_healthz(client):
    response = client.get("/v1/healthz")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
