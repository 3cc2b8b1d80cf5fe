"""
Path grammar: node classification and query construction.

Hierarchy:
- /                                   - Distinct hosts + .query/
- /{host}/                            - Services reported by host
- /{host}/{service}/                  - Fields of the single matching event
- /{host}/{service}/{field}           - Field value
- /.query/                            - Always empty (namespace root)
- /.query/{filter}/                   - Hosts of events matching filter
- /.query/{filter}/{host}/            - Services of host among matches
- /.query/{filter}/{host}/{service}/  - Fields of the single matching event
- /.query/{filter}/{host}/{service}/{field}

The filter segment is passed to Riemann untouched. When it is combined
with generated host/service clauses it is wrapped in parentheses.
"""

import os
from typing import Optional

from .models import ADVANCED, DIRECTORY, FILE, NOT_FOUND, PLAIN, QUERY_DIR, Node

# Number of segments at which a node becomes a file, per namespace
_FILE_DEPTH = {PLAIN: 3, ADVANCED: 5}


def split_path(path: str) -> tuple[str, ...]:
    """Split a tree path into segments. Root ('' or '/') has none."""
    path = path.strip(os.sep)
    if not path:
        return ()
    return tuple(path.split(os.sep))


def join_path(segments) -> str:
    """Inverse of split_path."""
    return os.sep.join(segments)


def namespace_of(segments) -> str:
    if segments and segments[0] == QUERY_DIR:
        return ADVANCED
    return PLAIN


def classify(segments) -> Node:
    """Classify a path as a directory, a file, or nothing."""
    segments = tuple(segments)
    namespace = namespace_of(segments)
    file_depth = _FILE_DEPTH[namespace]

    if len(segments) < file_depth:
        kind = DIRECTORY
    elif len(segments) == file_depth:
        kind = FILE
    else:
        kind = NOT_FOUND
    return Node(kind=kind, namespace=namespace, segments=segments)


def quote(value: str) -> str:
    """Render a value as a Riemann query string literal."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _host_clause(host: str) -> str:
    return f"host = {quote(host)}"


def _host_service_clause(host: str, service: str) -> str:
    return f"host = {quote(host)} and service = {quote(service)}"


def query_for_path(segments) -> Optional[str]:
    """Build the Riemann query for a path.

    Returns None for the .query namespace root, which never queries.
    Paths at or below the service level all resolve the same single event.
    """
    segments = tuple(segments)

    if namespace_of(segments) == ADVANCED:
        if len(segments) == 1:
            return None
        user_filter = segments[1]
        if len(segments) == 2:
            return user_filter
        if len(segments) == 3:
            return f"({user_filter}) and {_host_clause(segments[2])}"
        return f"({user_filter}) and {_host_service_clause(segments[2], segments[3])}"

    if not segments:
        return "true"
    if len(segments) == 1:
        return _host_clause(segments[0])
    return _host_service_clause(segments[0], segments[1])


def resolves_single_event(segments) -> bool:
    """True for paths at or below the service level of either namespace."""
    segments = tuple(segments)
    service_depth = _FILE_DEPTH[namespace_of(segments)] - 1
    return len(segments) >= service_depth
