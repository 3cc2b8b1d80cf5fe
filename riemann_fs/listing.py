"""Directory entry construction from query results."""

import os
from typing import Callable, Iterable, Optional

from .errors import InvariantViolation
from .models import DIRECTORY, EVENT_FIELDS, FILE, JSON_FILE, QUERY_DIR, DirEntry, Event


def host_of(event: Event) -> str:
    return event.host


def service_of(event: Event) -> str:
    return event.service


def is_valid_name(name: str) -> bool:
    """Whether a value can be used as a directory entry name."""
    return bool(name) and os.sep not in name and name not in (".", "..")


def field_value_entries(events: Iterable[Event], extract: Callable[[Event], str]) -> list[DirEntry]:
    """One directory per distinct extracted value.

    Values that can't name a directory (empty, containing the path
    separator) are skipped.
    """
    values = {extract(event) for event in events}
    return [DirEntry(name=value, kind=DIRECTORY) for value in sorted(values) if is_valid_name(value)]


def root_entries(events: Iterable[Event]) -> list[DirEntry]:
    """Distinct hosts plus the .query namespace root."""
    entries = [e for e in field_value_entries(events, host_of) if e.name != QUERY_DIR]
    entries.append(DirEntry(name=QUERY_DIR, kind=DIRECTORY))
    return entries


def event_entries(event: Event) -> list[DirEntry]:
    """File entries for one event: fixed fields, attribute keys, then .json.

    Attribute keys are sorted so listings are reproducible. A key that
    shadows a fixed field (or .json) is only listed once.
    """
    entries = [DirEntry(name=name, kind=FILE) for name in EVENT_FIELDS]
    reserved = set(EVENT_FIELDS) | {JSON_FILE}
    for key in sorted(event.attributes):
        if key in reserved or not is_valid_name(key):
            continue
        entries.append(DirEntry(name=key, kind=FILE))
    entries.append(DirEntry(name=JSON_FILE, kind=FILE))
    return entries


def single_event(events: list[Event], query: Optional[str]) -> Optional[Event]:
    """The one event a (host, service) query may return, or None.

    Raises InvariantViolation when the index holds duplicates.
    """
    if not events:
        return None
    if len(events) > 1:
        raise InvariantViolation(
            f"Got {len(events)} events for query {query!r}, expected at most one"
        )
    return events[0]
