"""
DirectoryMixin — Directory open, listing, and release.

The listing is taken once at opendir and replayed by readdir, so a
directory read in several chunks sees one consistent snapshot.
"""

import errno
import logging

import pyfuse3

from ..models import DIRECTORY, FILE

log = logging.getLogger(__name__)


class DirectoryMixin:
    """Directory open, listing, and release."""

    async def opendir(self, inode: int, ctx: pyfuse3.RequestContext) -> int:
        """Open a directory: query the index and keep the listing."""
        entry = self._entry(inode)
        if entry.kind != DIRECTORY:
            raise pyfuse3.FUSEError(errno.ENOTDIR)

        log.debug(f"opendir: {entry.path!r}")
        with self._fuse_errors("opendir", entry.path):
            listing = await self._tree.list_directory(entry.path)

        fh = self._allocate_fh()
        self._dir_handles[fh] = (inode, entry.path, listing)
        return fh

    async def readdir(self, fh: int, start_id: int, token: pyfuse3.ReaddirToken) -> None:
        """Emit directory entries starting from start_id."""
        handle = self._dir_handles.get(fh)
        if handle is None:
            raise pyfuse3.FUSEError(errno.EBADF)
        parent_inode, parent_path, listing = handle
        log.debug(f"readdir: {parent_path!r}, start_id={start_id}, entries={len(listing)}")

        for idx, dir_entry in enumerate(listing):
            if idx < start_id:
                continue
            path = self._child_path(parent_path, dir_entry.name)
            kind = DIRECTORY if dir_entry.is_dir else FILE
            inode = self._get_or_create_inode(path, kind, parent_inode)
            attr = self._make_attr(inode, is_dir=dir_entry.is_dir)
            if not pyfuse3.readdir_reply(token, dir_entry.name.encode("utf-8"), attr, idx + 1):
                break
            # A successful readdir_reply counts as one lookup
            self._inodes[inode].lookups += 1

    async def releasedir(self, fh: int) -> None:
        """Release (close) a directory handle."""
        self._dir_handles.pop(fh, None)
