"""Data models for the FUSE filesystem."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional, Union

# Node kinds
DIRECTORY = "directory"
FILE = "file"
NOT_FOUND = "not_found"

# Path namespaces
PLAIN = "plain"
ADVANCED = "advanced"

# Fixed event fields, in listing order
EVENT_FIELDS = ("Service", "Host", "Metric", "Description", "State", "Time", "Tags", "Ttl")

# Name of the advanced-namespace root and of the full-record file
QUERY_DIR = ".query"
JSON_FILE = ".json"


@dataclass(frozen=True)
class Event:
    """One Riemann event, as returned by an index query."""
    host: str = ""
    service: str = ""
    metric: Union[int, float] = 0.0
    description: str = ""
    state: str = ""
    time: int = 0
    tags: tuple[str, ...] = ()
    ttl: float = 0.0
    attributes: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        # Events are immutable once fetched
        object.__setattr__(self, "tags", tuple(self.tags))
        object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))

    @classmethod
    def from_dict(cls, data: dict) -> "Event":
        """Build an Event from a riemann-client event dict.

        The protobuf schema stores the metric in metric_sint64, metric_d or
        metric_f and may carry time_micros instead of time. Integer metrics
        arrive with a float32 metric_f alongside, so metric_f is the last
        resort and metric_sint64 stays an exact int.
        """
        metric = 0.0
        if data.get("metric") is not None:
            metric = data["metric"]
            if not isinstance(metric, int):
                metric = float(metric)
        elif data.get("metric_sint64") is not None:
            metric = int(data["metric_sint64"])
        elif data.get("metric_d") is not None:
            metric = float(data["metric_d"])
        elif data.get("metric_f") is not None:
            metric = float(data["metric_f"])

        time = data.get("time")
        if time is None and data.get("time_micros") is not None:
            time = int(data["time_micros"]) // 1_000_000

        attributes = data.get("attributes") or {}
        if not isinstance(attributes, Mapping):
            # Repeated protobuf Attribute messages
            attributes = {a.key: a.value for a in attributes}

        return cls(
            host=data.get("host") or "",
            service=data.get("service") or "",
            metric=metric,
            description=data.get("description") or "",
            state=data.get("state") or "",
            time=int(time or 0),
            tags=tuple(data.get("tags") or ()),
            ttl=float(data.get("ttl") or 0.0),
            attributes={str(k): str(v) for k, v in attributes.items()},
        )

    def fixed_field(self, name: str):
        """Value of one of EVENT_FIELDS, by its capitalised name."""
        return getattr(self, name.lower())


@dataclass(frozen=True)
class DirEntry:
    """One child of a directory listing."""
    name: str
    kind: str

    @property
    def is_dir(self) -> bool:
        return self.kind == DIRECTORY


@dataclass(frozen=True)
class Node:
    """A classified path.

    kind is DIRECTORY, FILE or NOT_FOUND; namespace is PLAIN or ADVANCED
    (root is PLAIN).
    """
    kind: str
    namespace: str
    segments: tuple[str, ...]

    @property
    def field_name(self) -> Optional[str]:
        """Last segment for file nodes."""
        if self.kind == FILE:
            return self.segments[-1]
        return None


@dataclass(frozen=True)
class Attributes:
    """Metadata reported for a node."""
    kind: str
    size: int = 0


@dataclass
class InodeEntry:
    """Inode table row: maps a kernel inode number to its tree path."""
    path: str
    kind: str
    parent: Optional[int]
    lookups: int = 0
