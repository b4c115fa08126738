"""Decode report DTOs into flat records.

WHAT:
    Turns pydantic models or JSON-like mappings into ordered
    ``str -> scalar`` records consumed by the CSV and Sheets writers.

WHY:
    Records are decoded once at the API boundary, so the writers only ever
    see scalars and never need to inspect model classes.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping

from pydantic import BaseModel

from adsreport.errors import SerializationError
from adsreport.services.csv_export import Record


def _flatten(prefix: str, value: Mapping[str, Any], out: Dict[str, Any]) -> None:
    for key, item in value.items():
        name = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(item, Mapping):
            _flatten(name, item, out)
        elif isinstance(item, (list, tuple, set)):
            raise SerializationError(
                f"Field {name!r} holds a {type(item).__name__}, expected a scalar",
                field=name,
                value_type=type(item).__name__,
            )
        elif name in out:
            # {"a": {"b": 1}, "a.b": 2} would otherwise keep only one value
            raise SerializationError(
                f"Duplicate field {name!r} after flattening",
                field=name,
                value_type=type(item).__name__,
            )
        else:
            out[name] = item


def to_record(item: Any) -> Record:
    """Decode one DTO or mapping into a flat record.

    Nested mappings are flattened with dotted keys, e.g.
    ``{"metrics": {"clicks": 3}}`` becomes ``{"metrics.clicks": 3}``.
    """
    if isinstance(item, BaseModel):
        data = item.model_dump(mode="json")
    elif isinstance(item, Mapping):
        data = item
    else:
        raise SerializationError(
            f"Cannot decode {type(item).__name__} into a record",
            value_type=type(item).__name__,
        )
    out: Dict[str, Any] = {}
    _flatten("", data, out)
    return out


def to_records(items: Iterable[Any]) -> List[Record]:
    return [to_record(item) for item in items]
