#!/usr/bin/env python3
# smoke_api.py - Exercise a running tactical console over HTTP

import sys
import time

import requests

# Configuration
BASE_URL = sys.argv[1].rstrip("/") if len(sys.argv) > 1 else "http://localhost:3000"
TIMEOUT = 5


def check_status():
    """GET /api/status returns the status shape with no-cache."""
    print("🔍 Testing GET /api/status...")
    response = requests.get(f"{BASE_URL}/api/status", timeout=TIMEOUT)
    print(f"   Status Code: {response.status_code}")
    if response.status_code != 200:
        print(f"   ❌ Request failed: {response.text}")
        return False

    data = response.json()
    ok = (
        isinstance(data.get("deviceId"), str)
        and isinstance(data.get("uptimeSeconds"), int)
        and isinstance(data.get("version"), str)
        and isinstance(data.get("recording"), bool)
        and response.headers.get("Cache-Control") == "no-cache"
    )
    print(f"   {'✅' if ok else '❌'} {data}")
    return ok


def check_uptime_increases():
    """Two status reads 1.1s apart: uptime strictly grows."""
    print("\n⏱  Testing uptime growth...")
    first = requests.get(f"{BASE_URL}/api/status", timeout=TIMEOUT).json()["uptimeSeconds"]
    time.sleep(1.1)
    second = requests.get(f"{BASE_URL}/api/status", timeout=TIMEOUT).json()["uptimeSeconds"]
    ok = second > first
    print(f"   {'✅' if ok else '❌'} {first}s -> {second}s")
    return ok


def check_telemetry(path):
    """Telemetry route answers JSON with a timestamp and no-cache."""
    print(f"\n📡 Testing GET {path}...")
    response = requests.get(f"{BASE_URL}{path}", timeout=TIMEOUT)
    if response.status_code != 200:
        print(f"   ❌ Request failed: {response.status_code}")
        return False

    data = response.json()
    ok = "timestamp" in data and response.headers.get("Cache-Control") == "no-cache"
    if "lat" in data:
        ok = ok and -90 <= data["lat"] <= 90 and -180 <= data["lon"] <= 180
        ok = ok and 0 <= data["headingDeg"] < 360 and data["speedKph"] >= 0
    print(f"   {'✅' if ok else '❌'} {data}")
    return ok


def check_index():
    """GET / serves the bundled HTML document."""
    print("\n🖥  Testing GET /...")
    response = requests.get(f"{BASE_URL}/", timeout=TIMEOUT)
    ok = (
        response.status_code == 200
        and "text/html" in response.headers.get("Content-Type", "")
        and "<!DOCTYPE html>" in response.text
    )
    print(f"   {'✅' if ok else '❌'} {response.status_code} {response.headers.get('Content-Type')}")
    return ok


def check_not_found():
    """Unknown paths answer 404."""
    print("\n🚫 Testing GET /nonexistent...")
    response = requests.get(f"{BASE_URL}/nonexistent", timeout=TIMEOUT)
    ok = response.status_code == 404
    print(f"   {'✅' if ok else '❌'} {response.status_code}")
    return ok


def main():
    print(f"🚀 Tactical console smoke test against {BASE_URL}")
    print("=" * 50)
    try:
        results = [
            check_status(),
            check_uptime_increases(),
            check_telemetry("/api/telemetry"),
            check_telemetry("/api/telemetry/orientation"),
            check_telemetry("/api/telemetry/position"),
            check_index(),
            check_not_found(),
        ]
    except requests.RequestException as e:
        print(f"❌ Error: {e}")
        return 1

    print("\n" + "=" * 50)
    print(f"{sum(results)}/{len(results)} checks passed")
    return 0 if all(results) else 1


if __name__ == "__main__":
    sys.exit(main())
