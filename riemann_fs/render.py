"""
Field rendering for event files.

Resolution order for a field name:
1. .json       - the whole event as a JSON object
2. attribute   - raw attribute value
3. fixed field - formatted per type (Tags joined, Time integer, Metric/Ttl %f)
4. anything else raises FieldNotFound

File sizes are computed by rendering, so getattr and read always agree.
"""

import json
import math

from .errors import FieldNotFound
from .models import EVENT_FIELDS, JSON_FILE, Event

TAG_SEPARATOR = ", "


def event_to_dict(event: Event) -> dict:
    """JSON-ready dict: fixed fields in listing order, then Attributes."""
    data = {name: event.fixed_field(name) for name in EVENT_FIELDS}
    data["Tags"] = list(event.tags)
    data["Attributes"] = dict(event.attributes)
    # JSON has no NaN or Infinity
    for name in ("Metric", "Ttl"):
        if not math.isfinite(data[name]):
            data[name] = None
    return data


def event_to_json(event: Event) -> bytes:
    return json.dumps(event_to_dict(event), allow_nan=False).encode("utf-8")


def format_decimal(value) -> str:
    """printf %f text, with +Inf, -Inf and NaN for non-finite values."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    return f"{value:f}"


def _format_fixed_field(event: Event, name: str) -> str:
    if name == "Tags":
        return TAG_SEPARATOR.join(event.tags)
    if name == "Time":
        return f"{event.time:d}"
    if name in ("Metric", "Ttl"):
        return format_decimal(event.fixed_field(name))
    return event.fixed_field(name)


def value_for_field(event: Event, name: str) -> bytes:
    """Render one field of an event as file content."""
    if name == JSON_FILE:
        return event_to_json(event)

    if name in event.attributes:
        return event.attributes[name].encode("utf-8")

    if name not in EVENT_FIELDS:
        raise FieldNotFound(f"Field not found: {name}")

    return _format_fixed_field(event, name).encode("utf-8")
