"""Conversion of document and render trees into JSON-compatible values."""

import dataclasses
import json
import uuid
from datetime import datetime
from enum import Enum


def to_primitive(obj):
    """Recursively convert dataclasses, enums, UUIDs and datetimes.

    Dataclasses become dicts keyed by field name in declaration order, enums
    their value, UUIDs their canonical string and datetimes ISO 8601 text.
    """
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return {
            f.name: to_primitive(getattr(obj, f.name))
            for f in dataclasses.fields(obj)
        }
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, uuid.UUID):
        return str(obj)
    if isinstance(obj, datetime):
        return obj.isoformat()
    if isinstance(obj, (list, tuple)):
        return [to_primitive(item) for item in obj]
    if isinstance(obj, dict):
        return {str(k): to_primitive(v) for k, v in obj.items()}
    return obj


def to_json(obj, indent: int | None = 2) -> str:
    """Serialize a book or render tree to a JSON string."""
    return json.dumps(to_primitive(obj), ensure_ascii=False, indent=indent)
