"""
InodeMixin — Inode table management and attribute resolution.

Inodes are handed out per tree path on lookup and dropped again when the
kernel forgets them. Attributes are always resolved against the index.
"""

import errno
import logging

import pyfuse3

from ..models import DIRECTORY, FILE, InodeEntry
from ..paths import join_path, split_path

log = logging.getLogger(__name__)


class InodeMixin:
    """Inode table management and attribute resolution."""

    def _entry(self, inode: int) -> InodeEntry:
        entry = self._inodes.get(inode)
        if entry is None:
            raise pyfuse3.FUSEError(errno.ENOENT)
        return entry

    def _child_path(self, parent_path: str, name: str) -> str:
        return join_path(split_path(parent_path) + (name,))

    def _get_or_create_inode(self, path: str, kind: str, parent: int) -> int:
        """Get or create the inode for a tree path."""
        inode = self._path_inodes.get(path)
        if inode is not None:
            entry = self._inodes[inode]
            entry.kind = kind
            return inode

        inode = self._next_inode
        self._next_inode += 1
        self._inodes[inode] = InodeEntry(path=path, kind=kind, parent=parent)
        self._path_inodes[path] = inode
        return inode

    async def getattr(self, inode: int, ctx: pyfuse3.RequestContext) -> pyfuse3.EntryAttributes:
        """Get file/directory attributes."""
        entry = self._entry(inode)
        with self._fuse_errors("getattr", entry.path):
            attrs = await self._tree.get_attributes(entry.path)
        return self._make_attr(inode, is_dir=attrs.kind == DIRECTORY, size=attrs.size)

    async def lookup(self, parent_inode: int, name: bytes, ctx: pyfuse3.RequestContext) -> pyfuse3.EntryAttributes:
        """Look up a directory entry by name."""
        name_str = name.decode("utf-8")
        parent = self._entry(parent_inode)
        log.debug(f"lookup: parent={parent.path!r}, name={name_str}")

        if parent.kind != DIRECTORY:
            raise pyfuse3.FUSEError(errno.ENOTDIR)
        if name_str in (".", ".."):
            raise pyfuse3.FUSEError(errno.ENOENT)

        path = self._child_path(parent.path, name_str)
        with self._fuse_errors("lookup", path):
            attrs = await self._tree.get_attributes(path)

        kind = DIRECTORY if attrs.kind == DIRECTORY else FILE
        inode = self._get_or_create_inode(path, kind, parent_inode)
        self._inodes[inode].lookups += 1
        return self._make_attr(inode, is_dir=kind == DIRECTORY, size=attrs.size)

    async def forget(self, inode_list: list[tuple[int, int]]) -> None:
        """Drop inodes the kernel no longer references."""
        for inode, nlookup in inode_list:
            entry = self._inodes.get(inode)
            if entry is None or inode == self.ROOT_INODE:
                continue
            entry.lookups -= nlookup
            if entry.lookups <= 0:
                del self._inodes[inode]
                self._path_inodes.pop(entry.path, None)
