"""Tests for serving the bundled UI from the asset root."""

from __future__ import annotations

import pytest

import application.assets.resolver as resolver_module
from apps.console.bootstrap import get_runtime

from tests.utils.flask_client_factory import flask_test_client


@pytest.mark.parametrize("path", ["/", "/index.html"])
def test_index_document(api_client, path):
    response = api_client.get(path)

    assert response.status_code == 200
    assert response.headers["Content-Type"] == "text/html; charset=utf-8"
    body = response.get_data(as_text=True)
    assert "<!DOCTYPE html>" in body
    assert "Tactical Console" in body


@pytest.mark.parametrize(
    "path, content_type",
    [
        ("/assets/index.js", "application/javascript; charset=utf-8"),
        ("/assets/index.css", "text/css; charset=utf-8"),
        ("/assets/manifest.json", "application/json; charset=utf-8"),
        ("/logo.svg", "image/svg+xml"),
        ("/images/map.png", "image/png"),
        ("/images/photo.jpg", "image/jpeg"),
        ("/images/photo.jpeg", "image/jpeg"),
        ("/firmware.bin", "application/octet-stream"),
        ("/README", "application/octet-stream"),
    ],
)
def test_content_type_from_table(api_client, path, content_type):
    response = api_client.get(path)

    assert response.status_code == 200
    assert response.headers["Content-Type"] == content_type


def test_asset_body_and_length(api_client):
    response = api_client.get("/assets/index.js")

    assert response.data == b"console.log('tactical console');\n"
    assert response.headers["Content-Length"] == str(len(response.data))


@pytest.mark.parametrize("method", ["GET", "POST", "PUT", "DELETE", "TRACE", "PROPFIND", "CONNECT"])
def test_unknown_path_is_plain_text_404(api_client, method):
    response = api_client.open("/nonexistent", method=method)

    assert response.status_code == 404
    assert response.mimetype == "text/plain"
    assert response.data == b"Not Found"


def test_post_to_asset_serves_it(api_client):
    response = api_client.post("/index.html")

    assert response.status_code == 200
    assert "Tactical Console" in response.get_data(as_text=True)


def test_head_on_asset(api_client):
    response = api_client.head("/assets/index.css")

    assert response.status_code == 200
    assert response.headers["Content-Type"] == "text/css; charset=utf-8"
    assert response.data == b""


@pytest.mark.parametrize(
    "path",
    [
        "/../secret.txt",
        "/assets/../../secret.txt",
        "/%2e%2e/secret.txt",
        "/assets/%2e%2e/%2e%2e/secret.txt",
        "/..%5csecret.txt",
        "/assets",
        "/images/",
    ],
)
def test_outside_or_non_file_paths_are_404(api_client, path):
    response = api_client.get(path)

    assert response.status_code == 404
    assert b"do not serve" not in response.data


def test_static_prefix_is_not_reserved(api_client, asset_root):
    (asset_root / "static").mkdir()
    (asset_root / "static" / "app.js").write_text("// static", encoding="utf-8")

    response = api_client.get("/static/app.js")

    assert response.status_code == 200
    assert response.data == b"// static"


def test_unreadable_asset_is_404(api_client, monkeypatch):
    def _denied(*_args, **_kwargs):
        raise PermissionError("denied")

    monkeypatch.setattr(resolver_module, "open", _denied, raising=False)

    response = api_client.get("/index.html")

    assert response.status_code == 404
    assert response.data == b"Not Found"


def test_missing_asset_root_keeps_api_alive(create_console_app, tmp_path):
    builder = lambda: create_console_app(asset_root=str(tmp_path / "never-built"))  # noqa: E731
    with flask_test_client(builder) as (_app, client):
        index = client.get("/")
        status = client.get("/api/status")

    assert index.status_code == 404
    assert status.status_code == 200


def test_conditional_get_uses_last_modified(api_client):
    first = api_client.get("/assets/index.css")
    last_modified = first.headers["Last-Modified"]

    second = api_client.get("/assets/index.css", headers={"If-Modified-Since": last_modified})

    assert second.status_code == 304


@pytest.mark.parametrize("method", ["PROPFIND", "REPORT"])
def test_unregistered_method_still_serves_asset(api_client, method):
    response = api_client.open("/assets/index.js", method=method)

    assert response.status_code == 200
    assert response.headers["Content-Type"] == "application/javascript; charset=utf-8"
    assert response.headers["X-Content-Type-Options"] == "nosniff"


def test_conditional_hit_closes_file_handle(console_app, monkeypatch):
    resolver = get_runtime(console_app).assets
    original_open = resolver.open
    opened = []

    def _tracking_open(url_path):
        asset = original_open(url_path)
        opened.append(asset)
        return asset

    monkeypatch.setattr(resolver, "open", _tracking_open)
    with console_app.test_client() as client:
        last_modified = client.get("/assets/index.css").headers["Last-Modified"]
        opened.clear()

        response = client.get("/assets/index.css", headers={"If-Modified-Since": last_modified})

    assert response.status_code == 304
    assert len(opened) == 1
    assert opened[0].stream.closed
