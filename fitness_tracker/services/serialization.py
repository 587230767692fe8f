"""
JSON encoding and decoding of the persisted collections.

Decoding is all-or-nothing per collection: one malformed record makes
the whole collection unreadable, and the caller starts from empty.
"""

from __future__ import annotations

import dataclasses
import json
from datetime import date, datetime
from enum import Enum
from typing import Any

from fitness_tracker.config.categories import DEFAULT_CATEGORY_COLORS, is_palette_color
from fitness_tracker.lib.clock import format_local_instant
from fitness_tracker.lib.exceptions import SerializationError
from fitness_tracker.models.activity import Activity, ActivityCategory
from fitness_tracker.models.milestone import Milestone

_CATEGORY_VALUES: frozenset[str] = frozenset(c.value for c in ActivityCategory)


class TrackerJSONEncoder(json.JSONEncoder):
    """
    JSON encoder for tracker payloads that handles:
    - objects with a to_dict() method
    - dataclasses -> dict via dataclasses.asdict()
    - datetime -> naive ISO-8601, date -> .isoformat()
    - Enum -> .value
    """

    def default(self, obj: Any) -> Any:
        if hasattr(obj, "to_dict"):
            return obj.to_dict()

        if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
            return dataclasses.asdict(obj)

        if isinstance(obj, datetime):
            return format_local_instant(obj)

        if isinstance(obj, date):
            return obj.isoformat()

        if isinstance(obj, Enum):
            return obj.value

        return super().default(obj)


def dumps(payload: Any) -> str:
    """Serialize a payload with the tracker encoder."""
    return json.dumps(payload, cls=TrackerJSONEncoder)


def _load_array(raw: str, what: str) -> list[Any]:
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, TypeError) as exc:
        raise SerializationError(f"{what} payload is not valid JSON: {exc}") from exc
    if not isinstance(data, list):
        raise SerializationError(f"{what} payload must be a JSON array")
    return data


def load_activities(raw: str) -> list[Activity]:
    """Decode a persisted activity array.

    Raises:
        SerializationError: if the payload or any record is malformed
    """
    return [Activity.from_dict(item) for item in _load_array(raw, "activities")]


def load_milestones(raw: str) -> list[Milestone]:
    """Decode a persisted milestone array.

    Raises:
        SerializationError: if the payload or any record is malformed
    """
    return [Milestone.from_dict(item) for item in _load_array(raw, "milestones")]


def load_colors(raw: str) -> dict[ActivityCategory, str]:
    """Decode a persisted category color map onto the defaults.

    Unknown categories and off-palette values are ignored; categories
    missing from the payload keep their default color.

    Raises:
        SerializationError: if the payload is not a JSON object
    """
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, TypeError) as exc:
        raise SerializationError(f"colors payload is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise SerializationError("colors payload must be a JSON object")

    colors = dict(DEFAULT_CATEGORY_COLORS)
    for key, value in data.items():
        if key not in _CATEGORY_VALUES:
            continue
        if isinstance(value, str) and is_palette_color(value):
            colors[ActivityCategory(key)] = value.lower()
    return colors
