"""Mask sensitive keys before records reach a sink."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Mapping

from .config import RedactionSettings
from .metrics import record_redaction


Redactor = Callable[[str, Any], Any]


def mask_value(_key: str, value: Any) -> str:
    text = str(value)
    if len(text) <= 8:
        return "***"
    return f"{text[:4]}...{text[-4:]}"


@dataclass
class RedactorRegistry:
    """Per-key redactors applied to top-level fields and the context mapping."""

    enabled: bool = True
    _redactors: Dict[str, Redactor] = field(default_factory=dict)

    def register(self, key: str, fn: Redactor) -> None:
        self._redactors[key.lower()] = fn

    def apply(self, record: Mapping[str, Any]) -> Dict[str, Any]:
        if not self.enabled or not self._redactors:
            return dict(record)

        count = 0

        def _scrub(mapping: Mapping[str, Any]) -> Dict[str, Any]:
            nonlocal count
            cleaned: Dict[str, Any] = {}
            for key, value in mapping.items():
                redactor = self._redactors.get(str(key).lower())
                if redactor is not None and value is not None:
                    cleaned[key] = redactor(key, value)
                    count += 1
                elif isinstance(value, Mapping):
                    cleaned[key] = _scrub(value)
                else:
                    cleaned[key] = value
            return cleaned

        sanitized = _scrub(record)
        record_redaction(count)
        return sanitized


def build_registry(settings: RedactionSettings) -> RedactorRegistry:
    registry = RedactorRegistry(enabled=settings.enabled)
    for key in settings.denylist:
        registry.register(key, mask_value)
    return registry
