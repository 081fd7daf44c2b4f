"""Resolve URL paths to files under the pre-built asset root.

The resolver never raises for a bad lookup: missing files, traversal
attempts, and read errors all come back as ``None`` so the dispatcher can
answer 404. Nothing is cached; every lookup hits the filesystem.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import BinaryIO, Optional

from werkzeug.security import safe_join

from console_logging import get_logger as get_structured_logger

from .content_types import content_type_for


logger = get_structured_logger("assets.resolver")

INDEX_FILE = "index.html"
_INDEX_PATHS = frozenset({"/", "/index.html"})
_FORBIDDEN_CHARS = ("\x00", "\\")


@dataclass(frozen=True)
class AssetEntry:
    url_path: str
    file_path: str
    content_type: str


@dataclass
class OpenedAsset:
    """An asset with its file handle open, ready to be streamed."""

    entry: AssetEntry
    stream: BinaryIO
    size: int
    mtime: float

    def close(self) -> None:
        self.stream.close()


def _relative_path(url_path: str) -> Optional[str]:
    if url_path in _INDEX_PATHS:
        return INDEX_FILE
    if any(char in url_path for char in _FORBIDDEN_CHARS):
        return None
    relative = url_path.lstrip("/")
    return relative or None


class StaticAssetResolver:
    def __init__(self, root: str):
        self._root = os.path.realpath(root)

    @property
    def root(self) -> str:
        return self._root

    def is_available(self) -> bool:
        return os.path.isdir(self._root)

    def resolve(self, url_path: str) -> Optional[AssetEntry]:
        """Map ``url_path`` to an existing regular file under the root."""

        relative = _relative_path(url_path)
        candidate = safe_join(self._root, relative) if relative else None

        if candidate is None:
            logger.warning("Asset path rejected", extra={"path": url_path})
            return None

        if not self._contains(os.path.realpath(candidate)):
            logger.warning("Asset path escapes root", extra={"path": url_path})
            return None

        if not os.path.isfile(candidate):
            logger.debug("Asset not found", extra={"path": url_path})
            return None

        return AssetEntry(
            url_path=url_path,
            file_path=candidate,
            content_type=content_type_for(candidate),
        )

    def open(self, url_path: str) -> Optional[OpenedAsset]:
        """Resolve and open ``url_path``; read failures degrade to ``None``."""

        entry = self.resolve(url_path)
        if entry is None:
            return None

        try:
            stream = open(entry.file_path, "rb")
        except OSError as exc:
            logger.warning(
                "Asset read failed",
                extra={"path": url_path, "error": type(exc).__name__},
            )
            return None

        try:
            stat = os.fstat(stream.fileno())
        except OSError as exc:
            stream.close()
            logger.warning(
                "Asset stat failed",
                extra={"path": url_path, "error": type(exc).__name__},
            )
            return None

        return OpenedAsset(entry=entry, stream=stream, size=stat.st_size, mtime=stat.st_mtime)

    def _contains(self, real_path: str) -> bool:
        try:
            return os.path.commonpath([self._root, real_path]) == self._root
        except ValueError:
            return False
