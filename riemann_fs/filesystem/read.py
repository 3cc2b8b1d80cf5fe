"""
ReadMixin — File open and read operations.

Content is rendered once at open and served from the handle, so a file
read in several chunks comes from one event snapshot.
"""

import errno
import logging

import pyfuse3

from ..models import FILE
from ..tree import has_write_intent

log = logging.getLogger(__name__)


class ReadMixin:
    """File open and read operations."""

    async def open(self, inode: int, flags: int, ctx: pyfuse3.RequestContext) -> pyfuse3.FileInfo:
        """Open a file for reading."""
        entry = self._entry(inode)
        log.debug(f"open: {entry.path!r}, flags={flags:#o}")

        # Checked before anything touches the index
        if has_write_intent(flags):
            log.warning(f"open rejected: write intent on read-only file {entry.path!r}")
            raise pyfuse3.FUSEError(errno.EPERM)
        if entry.kind != FILE:
            raise pyfuse3.FUSEError(errno.EISDIR)

        with self._fuse_errors("open", entry.path):
            content = await self._tree.open_for_read(entry.path, flags)

        fh = self._allocate_fh()
        self._file_handles[fh] = content

        # Sizes can change between getattr and open; bypass the page cache
        # so reads aren't cut off at a stale st_size.
        fi = pyfuse3.FileInfo(fh=fh)
        fi.direct_io = True
        return fi

    async def read(self, fh: int, off: int, size: int) -> bytes:
        """Read file contents captured at open."""
        content = self._file_handles.get(fh)
        if content is None:
            raise pyfuse3.FUSEError(errno.EBADF)
        return content[off:off + size]

    async def release(self, fh: int) -> None:
        self._file_handles.pop(fh, None)
