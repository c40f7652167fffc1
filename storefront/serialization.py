"""
Wire format for RPC results.

JSON has no date type, so ``serialize`` writes datetimes as ISO strings and
records each one's path under ``meta.values``; ``deserialize`` turns those
strings back into datetimes on the receiving side.

    {"json": {"id": 1, "created_at": "2024-01-01T00:00:00+00:00"},
     "meta": {"values": {"created_at": "Date"}}}
"""

import dataclasses
from datetime import datetime

DATE = "Date"


def _path(prefix: str, key) -> str:
    return f"{prefix}.{key}" if prefix else str(key)


def _encode(value, prefix: str, values: dict):
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        value = {f.name: getattr(value, f.name) for f in dataclasses.fields(value)}
    if isinstance(value, datetime):
        values[prefix] = DATE
        return value.isoformat()
    if isinstance(value, dict):
        return {k: _encode(v, _path(prefix, k), values) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_encode(v, _path(prefix, i), values) for i, v in enumerate(value)]
    return value


def serialize(value) -> dict:
    """Encode a handler result into ``{"json": ..., "meta": ...}``."""
    values = {}
    payload = {"json": _encode(value, "", values)}
    if values:
        payload["meta"] = {"values": values}
    return payload


def _restore(node, parts: list[str]):
    """Replace the leaf at ``parts`` with a datetime; returns the new node."""
    if not parts:
        return datetime.fromisoformat(node) if isinstance(node, str) else node
    head, rest = parts[0], parts[1:]
    if isinstance(node, list):
        index = int(head)
        node[index] = _restore(node[index], rest)
    elif isinstance(node, dict) and head in node:
        node[head] = _restore(node[head], rest)
    return node


def deserialize(payload: dict):
    """Inverse of ``serialize``."""
    data = payload.get("json")
    values = (payload.get("meta") or {}).get("values") or {}
    for path, kind in values.items():
        if kind != DATE:
            continue
        data = _restore(data, path.split(".") if path else [])
    return data
