"""Canonical structured log record and its size limits.

Every record carries the envelope fields below; call-site fields are merged
on top but can never overwrite the envelope. Oversized records are shrunk in
stages: long strings first, then the context mapping, then any remaining long
top-level strings.
"""

from __future__ import annotations

import datetime as _dt
import json
from typing import Any, Dict, Mapping

from .config import LoggingSettings
from .metrics import record_payload_truncation

SCHEMA_VERSION = 1

ENVELOPE_FIELDS = frozenset({"schema_version", "ts", "level", "service", "env", "component"})
REQUIRED_FIELDS = frozenset({"ts", "level", "service", "env", "message", "schema_version"})

_LAST_RESORT_LENGTH = 128


def _timestamp() -> str:
    now = _dt.datetime.now(tz=_dt.timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_log_record(
    *,
    level: str,
    message: str,
    settings: LoggingSettings,
    component: str,
    context: Mapping[str, Any] | None = None,
    **fields: Any,
) -> Dict[str, Any]:
    record: Dict[str, Any] = {key: value for key, value in fields.items() if key not in ENVELOPE_FIELDS}
    record.update(
        schema_version=SCHEMA_VERSION,
        ts=_timestamp(),
        level=level,
        service=settings.service,
        env=settings.env,
        message=message,
        component=component,
        context={"component": component, **(context or {})},
    )

    validate_record(record)
    enforce_payload_limits(record, settings)
    return record


def validate_record(record: Mapping[str, Any]) -> None:
    missing = REQUIRED_FIELDS - record.keys()
    if missing:
        raise ValueError(f"Log record missing required fields: {sorted(missing)}")

    if not isinstance(record.get("context", {}), Mapping):
        raise TypeError("record context must be a mapping")


def enforce_payload_limits(record: Dict[str, Any], settings: LoggingSettings) -> None:
    """Shrink ``record`` in place until it fits ``payload_limit_bytes``."""

    suffix = settings.redaction.truncate_suffix
    _clip_strings(record, settings.redaction.max_field_length, suffix, kind="field")
    if _encoded_size(record) <= settings.payload_limit_bytes:
        return

    component = record["context"].get("component")
    record["context"] = {"component": component} if component else {}
    record["context_truncated"] = True
    record_payload_truncation("context")
    if _encoded_size(record) <= settings.payload_limit_bytes:
        return

    record["payload_truncated"] = True
    record_payload_truncation("payload")
    for key, value in list(record.items()):
        if key not in ENVELOPE_FIELDS and isinstance(value, str) and len(value) > _LAST_RESORT_LENGTH:
            record[key] = value[:_LAST_RESORT_LENGTH] + suffix


def _clip_strings(record: Dict[str, Any], limit: int, suffix: str, *, kind: str) -> None:
    if limit <= 0:
        return

    def clip(value: Any) -> Any:
        if isinstance(value, str) and len(value) > limit:
            record_payload_truncation(kind)
            return value[:limit] + suffix
        return value

    for key, value in list(record.items()):
        if key in ENVELOPE_FIELDS:
            continue
        if key == "context":
            record[key] = {name: clip(item) for name, item in value.items()}
        else:
            record[key] = clip(value)


def _encoded_size(record: Mapping[str, Any]) -> int:
    return len(json.dumps(record, ensure_ascii=False, default=str).encode("utf-8"))
