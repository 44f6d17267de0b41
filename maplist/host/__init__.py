"""Host environments maplist can run against.

The filesystem-backed host lives in maplist.host.local.
"""

from maplist.host.base import HostEnvironment

__all__ = ["HostEnvironment"]
