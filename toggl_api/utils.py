from __future__ import annotations

from datetime import datetime
from datetime import timezone
from typing import Any

from pydantic import BaseModel


def _to_query_value(key: str, val: Any) -> str:
    if isinstance(val, bool):
        return "true" if val else "false"
    if isinstance(val, (int, float, str)):
        return str(val)
    if isinstance(val, list):
        return ",".join(_to_query_value(key, item) for item in val)
    raise ValueError(f"Key {key} had unexpected value {val!r}")


def _flatten(data: dict[str, Any], params: dict[str, str]) -> None:
    for key, val in data.items():
        if val is None:
            continue
        if isinstance(val, dict):
            # nested parameter groups share the top-level namespace
            _flatten(val, params)
        elif isinstance(val, list) and any(isinstance(v, (dict, list)) for v in val):
            raise ValueError(f"Key {key} had unexpected value {val!r}")
        else:
            params[key] = _to_query_value(key, val)


def to_query_params(model: BaseModel) -> dict[str, str]:
    """
    Encode a parameter model as a flat query-string mapping.

    Unset fields are skipped, nested models are merged into the same
    namespace and lists become comma-joined strings.
    """
    params: dict[str, str] = {}
    _flatten(model.model_dump(mode="json", exclude_none=True), params)
    return params


def to_unix_timestamp(value: datetime) -> int:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return int(value.timestamp())
