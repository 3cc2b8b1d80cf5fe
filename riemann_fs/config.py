"""
Configuration management for riemann-fs.

Settings resolution (highest → lowest):
  1. CLI flags (--host, --port, --timeout, --strict, --debug)
  2. ~/.config/riemann-fs/config.json
  3. Built-in defaults
"""

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

log = logging.getLogger(__name__)

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 5555


# --- Data classes ---

@dataclass
class StoreConfig:
    """Where the Riemann server listens (TCP protobuf transport)."""
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    timeout: Optional[float] = None  # Socket timeout; None = block

    @property
    def address(self) -> str:
        return f"{self.host}:{self.port}"


@dataclass
class RiemannFSConfig:
    """Full riemann-fs configuration."""
    store: StoreConfig = field(default_factory=StoreConfig)
    mountpoint: str = ""
    debug: bool = False
    # Strict: a failed query surfaces as EIO. Lenient: logged, treated as no events.
    strict_queries: bool = False


# --- Path helpers ---

def get_config_dir() -> Path:
    """Get riemann-fs config directory (~/.config/riemann-fs/)."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME", os.path.expanduser("~/.config"))
    return Path(xdg_config) / "riemann-fs"


def get_config_path() -> Path:
    return get_config_dir() / "config.json"


# --- Loading ---

def read_config_file(path: Optional[Path] = None) -> Optional[dict]:
    """Read config.json. Returns None if missing or unreadable."""
    path = path or get_config_path()
    if not path.exists():
        return None
    try:
        data = json.loads(path.read_text())
    except (json.JSONDecodeError, OSError) as e:
        log.warning(f"Could not read config at {path}: {e}")
        return None
    if not isinstance(data, dict):
        log.warning(f"Ignoring config at {path}: expected a JSON object")
        return None
    return data


def _file_value(file_data: dict, key: str, convert, default):
    """Convert a config.json value, falling back to default with a warning."""
    value = file_data.get(key)
    if value is None:
        return default
    try:
        return convert(value)
    except (TypeError, ValueError) as e:
        log.warning(f"Ignoring invalid {key} {value!r} in config: {e}")
        return default


def load_config(
    mountpoint: str = "",
    cli_host: Optional[str] = None,
    cli_port: Optional[int] = None,
    cli_timeout: Optional[float] = None,
    cli_strict: bool = False,
    cli_debug: bool = False,
    config_path: Optional[Path] = None,
) -> RiemannFSConfig:
    """Merge CLI flags over config.json over defaults."""
    file_data = read_config_file(config_path) or {}

    store = StoreConfig(
        host=cli_host or file_data.get("host", DEFAULT_HOST),
        port=cli_port if cli_port is not None else _file_value(file_data, "port", int, DEFAULT_PORT),
        timeout=cli_timeout if cli_timeout is not None else _file_value(file_data, "timeout", float, None),
    )

    return RiemannFSConfig(
        store=store,
        mountpoint=mountpoint,
        debug=cli_debug or bool(file_data.get("debug", False)),
        strict_queries=cli_strict or bool(file_data.get("strict_queries", False)),
    )
