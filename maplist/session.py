"""Session object tying a host to its catalog and launcher.

A Session is the handle a presentation layer (the CLI, an editor panel, a
script) owns. It keeps the most recent snapshot so a selection made from a
rendered list can be opened by id.
"""

from maplist.config import MaplistConfig
from maplist.core.catalog import CatalogIndex
from maplist.core.launcher import LaunchOutcome, Launcher
from maplist.core.registry import TypeRegistry
from maplist.core.resource import CatalogEntry
from maplist.exceptions import MalformedIdError, ResourceNotFoundError
from maplist.handle import parse_logical_id
from maplist.host.base import HostEnvironment
from maplist.host.local import LocalHost


class Session:
    """Coordinates snapshot and launch calls for one presentation layer."""

    def __init__(
        self,
        host: HostEnvironment,
        types: TypeRegistry | None = None,
        *,
        include_derived: bool = True,
    ) -> None:
        """Initialize the session.

        Args:
            host: Host environment to catalog and open through
            types: Type registry; a registry with built-in specs if None
            include_derived: Include derived resource types in snapshots
        """
        self._host = host
        self._catalog = CatalogIndex(host, types, include_derived=include_derived)
        self._launcher = Launcher(host)
        self._entries: list[CatalogEntry] = []

    @classmethod
    def from_config(cls, config: MaplistConfig) -> "Session":
        """Create a session over a LocalHost described by ``config``."""
        host = LocalHost.from_config(config)
        return cls(host, host.types, include_derived=config.include_derived)

    @property
    def catalog(self) -> CatalogIndex:
        """Get the catalog index."""
        return self._catalog

    @property
    def launcher(self) -> Launcher:
        """Get the launcher."""
        return self._launcher

    @property
    def entries(self) -> list[CatalogEntry]:
        """Entries from the most recent refresh."""
        return list(self._entries)

    def refresh(self, resource_type: str, path_prefix: str) -> list[CatalogEntry]:
        """Take a new snapshot and remember it.

        Returns:
            The new snapshot
        """
        self._entries = self._catalog.snapshot(resource_type, path_prefix)
        return list(self._entries)

    def find(self, logical_id: str) -> CatalogEntry:
        """Look up an entry of the latest snapshot by id (case-insensitive).

        Raises:
            ResourceNotFoundError: If no entry has this id
        """
        try:
            wanted = parse_logical_id(logical_id).to_id().casefold()
        except MalformedIdError:
            wanted = logical_id.casefold()

        for entry in self._entries:
            if entry.id.casefold() == wanted:
                return entry
        raise ResourceNotFoundError(f"'{logical_id}' is not in the catalog")

    def launch(self, entry: CatalogEntry) -> LaunchOutcome:
        """Launch an entry through the session's launcher."""
        return self._launcher.launch(entry)

    def open(self, logical_id: str) -> LaunchOutcome:
        """Find ``logical_id`` in the latest snapshot and launch it.

        Raises:
            ResourceNotFoundError: If no entry has this id
        """
        return self.launch(self.find(logical_id))
