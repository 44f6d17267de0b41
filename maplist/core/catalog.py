"""Catalog snapshots of host resources.

This module enumerates the resources of a type below a logical prefix and
turns them into CatalogEntry values. A snapshot is a complete view: entries
that cannot be resolved are listed as non-launchable rather than dropped.
"""

import logging

from maplist.core.registry import TypeRegistry
from maplist.core.resolver import PathResolver
from maplist.core.resource import CatalogEntry, ResourceSpec
from maplist.exceptions import MalformedIdError, ResolutionError
from maplist.handle import leaf_name, parse_logical_id, parse_prefix, textually_under
from maplist.host.base import HostEnvironment

logger = logging.getLogger(__name__)


class CatalogIndex:
    """Produces catalog snapshots from a host registry."""

    def __init__(
        self,
        host: HostEnvironment,
        types: TypeRegistry | None = None,
        *,
        include_derived: bool = True,
    ) -> None:
        """Initialize the catalog.

        Args:
            host: Host environment owning the registry
            types: Type registry; a registry with built-in specs if None
            include_derived: Default for including derived resource types
        """
        self._host = host
        self._types = types if types is not None else TypeRegistry()
        self._resolver = PathResolver(host)
        self.include_derived = include_derived

    @property
    def types(self) -> TypeRegistry:
        """Get the type registry."""
        return self._types

    def snapshot(
        self,
        resource_type: str | ResourceSpec,
        path_prefix: str,
        *,
        include_derived: bool | None = None,
    ) -> list[CatalogEntry]:
        """List resources of ``resource_type`` below ``path_prefix``.

        Args:
            resource_type: Type name, class path alias, or spec
            path_prefix: Logical prefix (e.g., "/Game" or "/Game/Maps/")
            include_derived: Override the catalog's derived-type default

        Returns:
            Entries in registry order; empty if nothing matches

        Raises:
            ValueError: If ``resource_type`` is missing
            UnknownResourceTypeError: If the type is not registered
            MalformedIdError: If ``path_prefix`` is not a valid id
        """
        if not resource_type:
            raise ValueError("resource_type is required")

        if isinstance(resource_type, ResourceSpec):
            spec = resource_type
        else:
            spec = self._types.require(resource_type)
        if include_derived is None:
            include_derived = self.include_derived

        prefix = parse_prefix(path_prefix)
        root = prefix.to_id()

        rows = self._host.query_resources_by_type(spec.name, include_derived)
        entries: list[CatalogEntry] = []

        for raw_id, type_name in rows:
            try:
                parsed = parse_logical_id(raw_id)
            except MalformedIdError as e:
                # Listed only if it visibly belongs to the prefix
                if textually_under(raw_id, prefix):
                    entries.append(
                        CatalogEntry(
                            id=raw_id,
                            display_name=leaf_name(raw_id),
                            resource_type=type_name,
                            error=e,
                        )
                    )
                continue

            if not parsed.is_below(prefix):
                continue

            entries.append(self._make_entry(parsed.to_id(), parsed.name, type_name, root, spec))

        logger.debug(
            "snapshot %s under %s: %d of %d registry rows",
            spec.name, root, len(entries), len(rows),
        )
        return entries

    def _make_entry(
        self,
        logical_id: str,
        display_name: str,
        type_name: str,
        root: str,
        requested: ResourceSpec,
    ) -> CatalogEntry:
        """Resolve one id into an entry, keeping failures on the entry."""
        own_spec = None if requested.matches(type_name) else self._types.get(type_name)
        extension = own_spec.extension if own_spec is not None else requested.extension

        try:
            resolved = self._resolver.resolve(logical_id, root, extension)
        except ResolutionError as e:
            logger.debug("cannot resolve %s: %s", logical_id, e)
            return CatalogEntry(
                id=logical_id,
                display_name=display_name,
                resource_type=type_name,
                error=e,
            )

        return CatalogEntry(
            id=logical_id,
            display_name=display_name,
            resource_type=type_name,
            resolved_path=resolved,
        )
