"""
EventTree - path-based view of the Riemann index.

Three operations, each starting from a tree path:
- list_directory(path) - child entries
- get_attributes(path) - node kind and size
- open_for_read(path)  - file content

Every call re-queries Riemann; nothing is cached between requests.
"""

import logging
import os
from typing import Optional

from .errors import (
    FieldNotFound, IsADirectory, NotFound, PermissionDenied, QueryFailure,
)
from .listing import (
    event_entries, field_value_entries, host_of, root_entries, service_of, single_event,
)
from .models import ADVANCED, DIRECTORY, FILE, Attributes, DirEntry, Event, Node
from .paths import classify, join_path, query_for_path, resolves_single_event, split_path
from .render import value_for_field

log = logging.getLogger(__name__)

WRITE_FLAGS = os.O_WRONLY | os.O_RDWR | os.O_APPEND | os.O_CREAT | os.O_TRUNC


def has_write_intent(flags: int) -> bool:
    return bool(flags & WRITE_FLAGS)


class EventTree:
    """Maps tree paths onto Riemann queries.

    executor is anything with an async query(expression) -> list[Event].
    With strict=False a failed query is logged and treated as no events.
    """

    def __init__(self, executor, strict: bool = False):
        self.executor = executor
        self.strict = strict

    async def _query(self, expression: str) -> list[Event]:
        try:
            return await self.executor.query(expression)
        except QueryFailure as e:
            if self.strict:
                raise
            log.error(f"Error while querying riemann: {e}")
            return []

    async def events_for_path(self, segments) -> list[Event]:
        query = query_for_path(segments)
        if query is None:
            return []
        return await self._query(query)

    async def resolve_event(self, segments) -> Optional[Event]:
        """The single event at or below a service-level path, if any."""
        events = await self.events_for_path(segments)
        return single_event(events, query_for_path(segments))

    async def list_directory(self, path: str) -> list[DirEntry]:
        node = classify(split_path(path))
        if node.kind != DIRECTORY:
            raise NotFound(f"Not a directory: {path}")
        return await self._list_node(node)

    async def _list_node(self, node: Node) -> list[DirEntry]:
        segments = node.segments

        if not segments:
            return root_entries(await self.events_for_path(segments))

        if resolves_single_event(segments):
            event = await self.resolve_event(segments)
            return event_entries(event) if event is not None else []

        # Host level lists services; the advanced filter level lists hosts
        extract = service_of
        if node.namespace == ADVANCED and len(segments) == 2:
            extract = host_of
        return field_value_entries(await self.events_for_path(segments), extract)

    async def get_attributes(self, path: str) -> Attributes:
        node = classify(split_path(path))
        if node.kind == DIRECTORY:
            return Attributes(kind=DIRECTORY)
        if node.kind == FILE:
            try:
                content = await self._read_node(node)
            except FieldNotFound:
                raise NotFound(f"No such field: {path}") from None
            return Attributes(kind=FILE, size=len(content))
        raise NotFound(f"No such node: {path}")

    async def open_for_read(self, path: str, flags: int = os.O_RDONLY) -> bytes:
        if has_write_intent(flags):
            raise PermissionDenied(f"Read-only filesystem: {path}")
        node = classify(split_path(path))
        if node.kind == DIRECTORY:
            raise IsADirectory(path)
        if node.kind != FILE:
            raise NotFound(f"No such node: {path}")
        return await self._read_node(node)

    async def _read_node(self, node: Node) -> bytes:
        event = await self.resolve_event(node.segments)
        if event is None:
            raise NotFound(f"No event for {join_path(node.segments[:-1])}")
        return value_for_field(event, node.field_name)
