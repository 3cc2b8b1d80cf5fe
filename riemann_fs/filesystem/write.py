"""
WriteMixin — Rejection of every mutating operation.

The tree mirrors the Riemann index and is read-only: create, write,
setattr, mkdir, rmdir, unlink, rename, symlink, link and mknod all fail
with EROFS.
"""

import errno
import logging

import pyfuse3

log = logging.getLogger(__name__)


def _read_only(operation: str):
    log.warning(f"{operation} rejected: read-only filesystem")
    return pyfuse3.FUSEError(errno.EROFS)


class WriteMixin:
    """Rejection of every mutating operation."""

    async def create(self, parent_inode, name, mode, flags, ctx):
        raise _read_only("create")

    async def write(self, fh, off, buf):
        raise _read_only("write")

    async def setattr(self, inode, attr, fields, fh, ctx):
        raise _read_only("setattr")

    async def mkdir(self, parent_inode, name, mode, ctx):
        raise _read_only("mkdir")

    async def rmdir(self, parent_inode, name, ctx):
        raise _read_only("rmdir")

    async def unlink(self, parent_inode, name, ctx):
        raise _read_only("unlink")

    async def rename(self, parent_inode_old, name_old, parent_inode_new, name_new, flags, ctx):
        raise _read_only("rename")

    async def symlink(self, parent_inode, name, target, ctx):
        raise _read_only("symlink")

    async def link(self, inode, new_parent_inode, new_name, ctx):
        raise _read_only("link")

    async def mknod(self, parent_inode, name, mode, rdev, ctx):
        raise _read_only("mknod")

    async def setxattr(self, inode, name, value, ctx):
        raise _read_only("setxattr")

    async def removexattr(self, inode, name, ctx):
        raise _read_only("removexattr")
