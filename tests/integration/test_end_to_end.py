"""End-to-end checks against the composed console app."""

from __future__ import annotations

import time


def test_uptime_strictly_increases(live_client):
    first = live_client.get("/api/status").get_json()["uptimeSeconds"]
    time.sleep(1.1)
    second = live_client.get("/api/status").get_json()["uptimeSeconds"]

    assert second > first


def test_status_shape(live_client):
    response = live_client.get("/api/status")
    payload = response.get_json()

    assert response.status_code == 200
    assert response.headers["Cache-Control"] == "no-cache"
    assert isinstance(payload["deviceId"], str)
    assert isinstance(payload["uptimeSeconds"], int)
    assert isinstance(payload["version"], str)
    assert isinstance(payload["recording"], bool)


def test_telemetry_timestamps_are_wall_clock(live_client):
    before = int(time.time() * 1000)
    payload = live_client.get("/api/telemetry").get_json()
    after = int(time.time() * 1000)

    assert before <= payload["timestamp"] <= after


def test_position_telemetry(live_client):
    payload = live_client.get("/api/telemetry/position").get_json()

    assert -90 <= payload["lat"] <= 90
    assert -180 <= payload["lon"] <= 180
    assert payload["speedKph"] >= 0
    assert 0 <= payload["headingDeg"] < 360


def test_ui_and_not_found(live_client):
    index = live_client.get("/")
    script = live_client.get("/assets/main.js")
    missing = live_client.get("/nonexistent")

    assert index.status_code == 200
    assert "<!DOCTYPE html>" in index.get_data(as_text=True)
    assert script.headers["Content-Type"] == "application/javascript; charset=utf-8"
    assert missing.status_code == 404
