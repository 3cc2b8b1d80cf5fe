"""Error kinds raised by the path/query core.

Each error carries the errno the FUSE layer reports for it, so the
pyfuse3 operations can translate any of them with a single except clause.
"""

import errno


class RiemannFSError(Exception):
    """Base class for all riemann-fs errors."""

    errno = errno.EIO


class NotFound(RiemannFSError):
    """Path does not name a node, or no event resolves for it."""

    errno = errno.ENOENT


class FieldNotFound(NotFound):
    """Field is neither a fixed event field nor an attribute key."""


class PermissionDenied(RiemannFSError):
    """Write intent on the read-only tree."""

    errno = errno.EPERM


class IsADirectory(RiemannFSError):
    """Content was requested for a directory node."""

    errno = errno.EISDIR


class QueryFailure(RiemannFSError):
    """The Riemann query itself failed (transport or server error)."""

    errno = errno.EIO


class InvariantViolation(RiemannFSError):
    """More than one event came back for a single (host, service) pair."""

    errno = errno.EIO
