"""Protocol for host environments.

The host owns the resource registry and performs the actual open. The
catalog, resolver and launcher only ever talk to it through this interface,
so tests and other applications can supply their own implementation.
"""

from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from maplist.core.resource import PhysicalPath


@runtime_checkable
class HostEnvironment(Protocol):
    """Capabilities maplist needs from its surrounding application.

    Uses structural typing (Protocol) for flexibility.
    """

    def query_resources_by_type(
        self, resource_type: str, include_derived: bool
    ) -> Sequence[tuple[str, str]]:
        """Enumerate the registry.

        Args:
            resource_type: Type name to query
            include_derived: Also report resources of derived types

        Returns:
            (logical id, type name) pairs in the registry's own order
        """
        ...

    def namespace_root_to_directory(self, root: str) -> Path:
        """Map a logical namespace root to its physical base directory.

        Raises:
            UnmappedRootError: If the host has no directory for ``root``
        """
        ...

    def path_exists(self, path: "PhysicalPath") -> bool:
        """Check that ``path`` exists and is readable right now."""
        ...

    def open_resource(self, path: "PhysicalPath") -> None:
        """Open/activate the resource at ``path``.

        Raises:
            HostRejectedError: If the host declines, e.g. no editable context
        """
        ...
