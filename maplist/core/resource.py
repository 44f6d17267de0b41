"""Resource type definitions and catalog values.

This module defines the core value types shared by the resolver, the
catalog and the launcher.
"""

from dataclasses import dataclass
from pathlib import Path

from maplist.exceptions import ResolutionError


def normalize_extension(extension: str) -> str:
    """Return ``extension`` with exactly one leading dot.

    Examples:
        >>> normalize_extension("umap")
        '.umap'
        >>> normalize_extension(".umap")
        '.umap'
    """
    if not extension:
        return ""
    return "." + extension.lstrip(".")


@dataclass(frozen=True)
class ResourceSpec:
    """Specification for a resource type.

    Defines the type tag the catalog enumerates and the file extension its
    resources carry on disk.
    """

    name: str  # e.g., "World"
    extension: str  # e.g., ".umap"
    parent: str | None = None  # Base type name for derived types
    class_path: str | None = None  # Host alias, e.g. "/Script/Engine.World"

    def __post_init__(self) -> None:
        object.__setattr__(self, "extension", normalize_extension(self.extension))

    def matches(self, type_name: str) -> bool:
        """Check if ``type_name`` names this spec (by name or class path)."""
        folded = type_name.casefold()
        if folded == self.name.casefold():
            return True
        return self.class_path is not None and folded == self.class_path.casefold()


@dataclass(frozen=True)
class PhysicalPath:
    """A normalized filesystem location produced by the resolver."""

    path: Path
    logical_id: str

    def __str__(self) -> str:
        return str(self.path)


@dataclass(frozen=True)
class CatalogEntry:
    """A single resource as listed by the catalog.

    Entries whose id could not be resolved are still listed, with
    ``resolved_path`` absent and ``error`` explaining why.
    """

    id: str
    display_name: str
    resource_type: str
    resolved_path: PhysicalPath | None = None
    error: ResolutionError | None = None

    @property
    def is_launchable(self) -> bool:
        """True when the entry has a physical path to open."""
        return self.resolved_path is not None
