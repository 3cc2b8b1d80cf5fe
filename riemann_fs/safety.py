"""
Safety fences for riemann-fs.

Mountpoint validation before mounting: refuse system directories,
paths that are already FUSE mounts, non-directories and non-empty
directories.
"""

import logging
import os
from pathlib import Path
from typing import Optional

log = logging.getLogger(__name__)

FSNAME = "riemann-fs"

# System paths that must never be used as mountpoints
BLOCKED_PATHS = frozenset({
    "/", "/home", "/etc", "/usr", "/var", "/tmp", "/boot",
    "/bin", "/sbin", "/lib", "/lib64", "/dev", "/proc", "/sys",
    "/root", "/opt", "/srv", "/run", "/mnt",
})


def find_fuse_mounts(mounts_path: Path = Path("/proc/mounts")) -> list[dict]:
    """Find all FUSE mounts on the system.

    Returns list of {"source": str, "mountpoint": str, "fstype": str, "is_ours": bool}.
    """
    mounts = []
    try:
        for line in mounts_path.read_text().splitlines():
            parts = line.split()
            if len(parts) >= 3 and "fuse" in parts[2].lower():
                mounts.append({
                    "source": parts[0],
                    "mountpoint": parts[1],
                    "fstype": parts[2],
                    "is_ours": parts[0] == FSNAME,
                })
    except OSError as e:
        log.debug(f"Could not read {mounts_path}: {e}")
    return mounts


def validate_mountpoint(path: str) -> Optional[str]:
    """Validate a mountpoint path. Returns error message or None if OK."""
    resolved = os.path.realpath(path)

    if resolved in BLOCKED_PATHS:
        return (
            f"Refusing to mount at {resolved}: this is a system directory.\n"
            f"Use a dedicated empty directory instead, e.g. ~/riemann"
        )

    for m in find_fuse_mounts():
        if os.path.realpath(m["mountpoint"]) == resolved:
            if m["is_ours"]:
                return (
                    f"{resolved} already has a riemann-fs mount active.\n"
                    f"Unmount first: fusermount -u {resolved}"
                )
            return f"{resolved} is already a FUSE mount ({m['source']}, type {m['fstype']})."

    if not os.path.exists(resolved):
        return f"{resolved} does not exist."
    if not os.path.isdir(resolved):
        return f"{resolved} is not a directory."

    try:
        contents = os.listdir(resolved)
    except PermissionError:
        return f"Cannot read {resolved}: permission denied."
    if contents:
        count = len(contents)
        return (
            f"{resolved} is not empty (contains {count} item{'s' if count != 1 else ''}).\n"
            f"FUSE mounts shadow existing directory contents until unmount."
        )

    return None
