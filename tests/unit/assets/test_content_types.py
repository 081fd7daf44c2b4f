"""Tests for the extension to Content-Type table."""

from __future__ import annotations

import pytest

from application.assets import CONTENT_TYPES, DEFAULT_CONTENT_TYPE, content_type_for


@pytest.mark.parametrize(
    "path, expected",
    [
        ("index.html", "text/html; charset=utf-8"),
        ("assets/index.js", "application/javascript; charset=utf-8"),
        ("assets/index.css", "text/css; charset=utf-8"),
        ("manifest.json", "application/json; charset=utf-8"),
        ("logo.svg", "image/svg+xml"),
        ("map.png", "image/png"),
        ("photo.jpg", "image/jpeg"),
        ("photo.jpeg", "image/jpeg"),
    ],
)
def test_known_extensions(path, expected):
    assert content_type_for(path) == expected


@pytest.mark.parametrize("path", ["firmware.bin", "model.xyz", "README", "archive.tar.gz", "font.woff2", ""])
def test_unknown_extensions_fall_back(path):
    assert content_type_for(path) == DEFAULT_CONTENT_TYPE
    assert DEFAULT_CONTENT_TYPE == "application/octet-stream"


@pytest.mark.parametrize("path", ["INDEX.HTML", "app.JS", "logo.Svg"])
def test_matching_is_case_sensitive(path):
    assert content_type_for(path) == DEFAULT_CONTENT_TYPE


def test_suffix_must_end_the_path():
    assert content_type_for("bundle.js.map") == DEFAULT_CONTENT_TYPE
    assert content_type_for("page.html.bak") == DEFAULT_CONTENT_TYPE


def test_table_is_ordered_and_complete():
    suffixes = [suffix for suffix, _ in CONTENT_TYPES]

    assert suffixes == [".html", ".js", ".css", ".json", ".svg", ".png", ".jpg", ".jpeg"]
