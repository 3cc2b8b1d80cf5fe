"""
BaseMixin — Lifecycle and core FUSE plumbing.

Handles init, destroy, access checks, statfs, shared attribute helpers,
and translation of tree errors into FUSE errors.
"""

import errno
import logging
import os
import stat
import time
from contextlib import contextmanager
from typing import Optional

import pyfuse3

from ..config import RiemannFSConfig
from ..errors import InvariantViolation, QueryFailure, RiemannFSError
from ..models import DIRECTORY, InodeEntry
from ..query import RiemannQueryExecutor
from ..tree import EventTree

log = logging.getLogger(__name__)


class BaseMixin(pyfuse3.Operations):
    """Lifecycle and core FUSE plumbing."""

    ROOT_INODE = pyfuse3.ROOT_INODE  # 1

    def __init__(self, config: Optional[RiemannFSConfig] = None,
                 executor: Optional[RiemannQueryExecutor] = None):
        super().__init__()
        self.config = config or RiemannFSConfig()

        # Shared Riemann connection, closed in destroy()
        self._executor = executor or RiemannQueryExecutor(self.config.store)
        self._tree = EventTree(self._executor, strict=self.config.strict_queries)

        # Inode table: root is fixed, everything else is allocated on lookup
        self._inodes: dict[int, InodeEntry] = {
            self.ROOT_INODE: InodeEntry(path="", kind=DIRECTORY, parent=None),
        }
        self._path_inodes: dict[str, int] = {"": self.ROOT_INODE}
        self._next_inode = self.ROOT_INODE + 1

        # Open handles: directory listings and file contents captured at open
        self._dir_handles: dict[int, tuple] = {}  # fh -> (inode, path, entries)
        self._file_handles: dict[int, bytes] = {}
        self._next_fh = 1

    def _allocate_fh(self) -> int:
        fh = self._next_fh
        self._next_fh += 1
        return fh

    def _make_attr(self, inode: int, is_dir: bool = False, size: int = 0) -> pyfuse3.EntryAttributes:
        """Create read-only attributes.

        Timeouts are zero so the kernel asks again on every access; the
        index can change at any time.
        """
        attr = pyfuse3.EntryAttributes()
        attr.st_ino = inode
        attr.st_mode = (stat.S_IFDIR | 0o555) if is_dir else (stat.S_IFREG | 0o444)
        attr.st_nlink = 2 if is_dir else 1
        attr.st_size = size
        now_ns = int(time.time() * 1e9)
        attr.st_atime_ns = now_ns
        attr.st_mtime_ns = now_ns
        attr.st_ctime_ns = now_ns
        attr.st_uid = os.getuid()
        attr.st_gid = os.getgid()
        attr.attr_timeout = 0
        attr.entry_timeout = 0
        return attr

    @contextmanager
    def _fuse_errors(self, operation: str, path: str):
        """Translate tree errors into FUSEError with the matching errno."""
        try:
            yield
        except (InvariantViolation, QueryFailure) as e:
            log.error(f"{operation}({path!r}) failed: {e}")
            raise pyfuse3.FUSEError(e.errno) from e
        except RiemannFSError as e:
            log.debug(f"{operation}({path!r}): {type(e).__name__}: {e}")
            raise pyfuse3.FUSEError(e.errno) from e

    async def statfs(self, ctx: pyfuse3.RequestContext) -> pyfuse3.StatvfsData:
        """Return filesystem stats. Nothing is writable, so no free space."""
        s = pyfuse3.StatvfsData()
        s.f_bsize = 4096
        s.f_frsize = 4096
        s.f_blocks = 0
        s.f_bfree = 0
        s.f_bavail = 0
        s.f_files = len(self._inodes)
        s.f_ffree = 0
        s.f_favail = 0
        s.f_namemax = 255
        return s

    async def access(self, inode: int, mode: int, ctx: pyfuse3.RequestContext) -> bool:
        """Deny write access everywhere; allow reads and traversal."""
        if inode not in self._inodes:
            raise pyfuse3.FUSEError(errno.ENOENT)
        return not (mode & os.W_OK)

    # ── Lifecycle ─────────────────────────────────────────────────────

    async def destroy(self) -> None:
        """Clean up resources on unmount."""
        log.info("Destroying filesystem, closing Riemann connection")
        await self._executor.close()
        self._dir_handles.clear()
        self._file_handles.clear()

    async def connect(self) -> None:
        """Open the Riemann connection up front so a bad address fails at mount."""
        await self._executor.open()
