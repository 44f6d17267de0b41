"""Resolution of logical ids to physical paths.

Resolution is purely structural: the namespace root is mapped to a base
directory by the host, the remainder of the id is appended, and the
extension of the resource type is added. Nothing is checked on disk.
"""

import os
from pathlib import Path

from maplist.core.resource import PhysicalPath, normalize_extension
from maplist.handle import parse_logical_id, parse_prefix
from maplist.host.base import HostEnvironment


class PathResolver:
    """Turns logical ids into PhysicalPath values."""

    def __init__(self, host: HostEnvironment) -> None:
        self._host = host

    def resolve(self, logical_id: str, root: str, extension: str) -> PhysicalPath:
        """Resolve ``logical_id`` below ``root``.

        Args:
            logical_id: Id to resolve (e.g., "/Game/Maps/Arena")
            root: Namespace root the id must lie under (e.g., "/Game")
            extension: File extension of the resource type (e.g., ".umap")

        Returns:
            PhysicalPath with a normalized absolute path

        Raises:
            MalformedIdError: If ``logical_id`` or ``root`` is invalid
            OutOfScopeError: If ``logical_id`` is not below ``root``
            UnmappedRootError: If the host cannot map ``root``
        """
        parsed = parse_logical_id(logical_id)
        parsed_root = parse_prefix(root)
        remainder = parsed.relative_to(parsed_root)

        base_dir = self._host.namespace_root_to_directory(parsed_root.to_id())
        *folders, leaf = remainder
        filename = leaf + normalize_extension(extension)
        joined = os.path.join(os.fspath(base_dir), *folders, filename)

        return PhysicalPath(
            path=Path(os.path.normpath(os.path.abspath(joined))),
            logical_id=parsed.to_id(),
        )
