"""Tests for status, liveness, root and error handling."""

import logging
import re

from fastapi.testclient import TestClient

from emolamp_server.app import create_app
from emolamp_server.config import Settings


def test_status_shape(client):
    body = client.get("/api/status").json()

    assert body["status"] == "ok"
    assert body["server"] == "EmoLamp Server"
    assert body["version"] == "1.0.0"
    assert body["uptime"] >= 0
    assert isinstance(body["timestamp"], int)
    assert body["subscribers"] == 0
    assert body["topics"] == {}
    assert body["logs"] == {"emotion": 0, "weather": 0, "state": 0, "manualstate": 0}


def test_status_reports_store_activity(client):
    client.post("/api/publish", json={"topic": "emolamp/test", "payload": 1, "clientId": "unity"})
    client.get("/api/poll", params={"clientId": "web"})
    client.post("/api/log/emotion", json={"emotion": "happy"})

    body = client.get("/api/status").json()

    assert body["subscribers"] == 1
    assert body["topics"] == {"emolamp/test": 1}
    assert body["logs"]["emotion"] == 1


def test_status_omits_unmounted_surfaces():
    body = TestClient(create_app(Settings(mode="pubsub", timezone="UTC"))).get("/api/status").json()

    assert body["topics"] == {}
    assert body["logs"] is None


def test_healthz_is_plain_ok(client):
    response = client.get("/healthz")

    assert response.status_code == 200
    assert response.text == "OK"
    assert response.headers["content-type"].startswith("text/plain")


def test_unknown_route_is_json_404(client):
    response = client.get("/api/nope")

    assert response.status_code == 404
    assert response.json() == {"error": "Not Found"}


def test_malformed_json_is_bare_500(client, context):
    # Unescaped quote, as produced by clients that build JSON by interpolation
    response = client.post(
        "/api/log/weather",
        content=b'{"temperature": 20, "cityName": "Seo"ul"}',
        headers={"content-type": "application/json"},
    )

    assert response.status_code == 500
    body = response.json()
    assert set(body) == {"error"}
    assert body["error"]
    assert context.log_store.counts()["weather"] == 0


def test_requests_are_logged_before_dispatch(client, caplog):
    with caplog.at_level(logging.INFO, logger="emolamp.server"):
        client.get("/healthz")

    assert any(record.getMessage() == "GET /healthz" for record in caplog.records)


def test_root_serves_dashboard_when_stats_enabled(client):
    response = client.get("/")

    assert response.status_code == 200
    assert "text/html" in response.headers["content-type"]
    assert "EmoLamp" in response.text


def test_dashboard_escapes_every_interpolated_value(client):
    page = client.get("/").text

    interpolations = re.findall(r"\$\{([^}]*)\}", page)
    assert interpolations
    assert all(expr.startswith(("esc(", "color(")) for expr in interpolations)
    assert "/^#[0-9A-Fa-f]{3,8}$/" in page


def test_root_describes_endpoints_in_pubsub_mode():
    app = create_app(Settings(mode="pubsub", timezone="UTC"))
    body = TestClient(app).get("/").json()

    assert "/api/publish" in body["endpoints"]
    assert "/api/poll" in body["endpoints"]
    assert "/api/status" in body["endpoints"]
    assert "/api/stats/today" not in body["endpoints"]
    assert body["currentState"]["mode"] == "AUTO"


def test_stats_routes_absent_in_pubsub_mode():
    client = TestClient(create_app(Settings(mode="pubsub", timezone="UTC")))
    assert client.get("/api/stats/today").status_code == 404


def test_pubsub_routes_absent_in_stats_mode():
    client = TestClient(create_app(Settings(mode="stats", timezone="UTC")))
    assert client.post("/api/publish", json={"topic": "t"}).status_code in {404, 405}


def test_route_failure_becomes_500(client, context, monkeypatch):
    def explode(*args, **kwargs):
        raise ValueError("store exploded")

    monkeypatch.setattr(context.log_store, "snapshot", explode)

    response = client.get("/api/stats/emotions")

    assert response.status_code == 500
    assert response.json() == {"error": "store exploded"}


def test_lifespan_starts_and_stops_janitor(app, context):
    with TestClient(app) as client:
        assert client.get("/healthz").status_code == 200
        assert all(sweep.running for sweep in context.janitor.sweeps)

    assert not any(sweep.running for sweep in context.janitor.sweeps)
