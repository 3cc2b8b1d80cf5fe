"""
Riemann FUSE Filesystem — mixin composition.

Hierarchy:
- /                                      - Hosts in the index + .query/
- /{host}/                               - Services reported by host
- /{host}/{service}/                     - Fields of the event (files)
- /{host}/{service}/{field}              - Field value
- /{host}/{service}/.json                - Whole event as JSON
- /.query/{filter}/                      - Hosts of events matching filter
- /.query/{filter}/{host}/{service}/...  - Same as above, within filter

Every operation re-queries Riemann. The tree is read-only.
"""

from .base import BaseMixin
from .directory import DirectoryMixin
from .inode import InodeMixin
from .read import ReadMixin
from .write import WriteMixin


class RiemannFS(
    WriteMixin,        # create, write, mkdir, unlink, ... → EROFS
    ReadMixin,         # open, read, release
    DirectoryMixin,    # opendir, readdir, releasedir
    InodeMixin,        # getattr, lookup, forget, inode table
    BaseMixin,         # __init__, destroy, statfs, access (MUST be last)
):
    """Riemann FUSE Filesystem.

    Composed from domain-specific mixins. BaseMixin must be last in MRO
    so its __init__ runs first and sets up all shared state.
    """
    pass


__all__ = ["RiemannFS"]
