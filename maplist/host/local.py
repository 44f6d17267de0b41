"""Filesystem-backed host environment.

Mounts map logical namespace roots to directories (``/Game`` -> the
project's ``Content/`` folder). The registry is either a walk of the mount
directories or a manifest listed in maplist.toml. Opening a resource either
spawns a configured editor command or hands the file to the OS opener.
"""

import logging
import os
import shutil
import subprocess
from collections.abc import Sequence
from pathlib import Path

import click

from maplist.config import MaplistConfig
from maplist.constants import ID_SEPARATOR, REGISTRY_MANIFEST, REGISTRY_SCAN
from maplist.core.registry import TypeRegistry
from maplist.core.resource import PhysicalPath, ResourceSpec
from maplist.exceptions import HostRejectedError, UnmappedRootError
from maplist.handle import ParsedId, parse_prefix

logger = logging.getLogger(__name__)


class LocalHost:
    """Host environment over plain directories."""

    def __init__(
        self,
        mounts: dict[str, Path],
        types: TypeRegistry | None = None,
        *,
        registry: str = REGISTRY_SCAN,
        manifest: Sequence[tuple[str, str]] = (),
        editor_command: list[str] | None = None,
        project_dir: Path | None = None,
    ) -> None:
        """Initialize the host.

        Args:
            mounts: Logical namespace roots mapped to directories
            types: Type registry used for extensions and derived types
            registry: "scan" to walk mounts, "manifest" to use ``manifest``
            manifest: (logical id, type name) rows for the manifest registry
            editor_command: Command used to open resources; ``{path}`` and
                ``{project}`` are substituted. None uses the OS opener.
            project_dir: Substituted for ``{project}``
        """
        if registry not in (REGISTRY_SCAN, REGISTRY_MANIFEST):
            raise ValueError(f"Unknown registry source: {registry}")

        self._mounts: list[tuple[ParsedId, Path]] = [
            (parse_prefix(root), Path(os.path.abspath(directory)))
            for root, directory in mounts.items()
        ]
        self._types = types if types is not None else TypeRegistry()
        self._registry = registry
        self._manifest = list(manifest)
        self._editor_command = list(editor_command) if editor_command else None
        self._project_dir = project_dir

    @classmethod
    def from_config(cls, config: MaplistConfig) -> "LocalHost":
        """Build a host from a MaplistConfig."""
        return cls(
            config.mount_directories(),
            config.build_type_registry(),
            registry=config.registry,
            manifest=config.manifest_rows(),
            editor_command=config.editor_command,
            project_dir=config.project_dir,
        )

    @property
    def types(self) -> TypeRegistry:
        """Get the type registry."""
        return self._types

    # --- Registry ---

    def query_resources_by_type(
        self, resource_type: str, include_derived: bool
    ) -> list[tuple[str, str]]:
        """Enumerate resources of ``resource_type`` in registry order.

        Raises:
            UnknownResourceTypeError: If the type is not registered
        """
        family = self._types.family(resource_type, include_derived=include_derived)

        if self._registry == REGISTRY_MANIFEST:
            names = {spec.name.casefold() for spec in family}
            rows = []
            for logical_id, type_name in self._manifest:
                spec = self._types.get(type_name)
                key = (spec.name if spec else type_name).casefold()
                if key in names:
                    rows.append((logical_id, spec.name if spec else type_name))
            return rows

        return self._scan(family)

    def _scan(self, family: list[ResourceSpec]) -> list[tuple[str, str]]:
        """Walk every mount for files carrying one of the family's extensions."""
        by_extension: dict[str, ResourceSpec] = {}
        for spec in family:
            # First spec wins when derived types share an extension
            by_extension.setdefault(spec.extension, spec)

        rows: list[tuple[str, str]] = []
        for root, directory in self._mounts:
            if not directory.is_dir():
                logger.debug("mount %s: %s is not a directory", root.to_id(), directory)
                continue

            for dirpath, dirnames, filenames in os.walk(directory):
                dirnames.sort()
                for filename in sorted(filenames):
                    stem, suffix = os.path.splitext(filename)
                    # Exact suffix; resolved paths are rebuilt from spec.extension
                    spec = by_extension.get(suffix)
                    if spec is None or not stem:
                        continue
                    rel_dir = Path(dirpath).relative_to(directory)
                    parts = [*root.segments, *rel_dir.parts, stem]
                    logical_id = ID_SEPARATOR.join(parts)
                    if root.rooted:
                        logical_id = ID_SEPARATOR + logical_id
                    rows.append((logical_id, spec.name))
        return rows

    # --- Namespace mapping ---

    def namespace_root_to_directory(self, root: str) -> Path:
        """Map a logical path to a directory through the longest matching mount.

        Raises:
            MalformedIdError: If ``root`` is not a valid logical id
            UnmappedRootError: If no mount covers ``root``
        """
        parsed = parse_prefix(root)
        best: tuple[ParsedId, Path] | None = None
        for mount, directory in self._mounts:
            covers = parsed.folded == mount.folded or parsed.is_below(mount)
            if parsed.rooted != mount.rooted or not covers:
                continue
            if best is None or len(mount.segments) > len(best[0].segments):
                best = (mount, directory)

        if best is None:
            raise UnmappedRootError(f"No directory is mounted for '{parsed.to_id()}'")

        mount, directory = best
        remainder = parsed.segments[len(mount.segments):]
        return directory.joinpath(*remainder)

    # --- Files ---

    def path_exists(self, path: PhysicalPath) -> bool:
        """Check that ``path`` is a readable regular file."""
        return path.path.is_file() and os.access(path.path, os.R_OK)

    def open_resource(self, path: PhysicalPath) -> None:
        """Open ``path`` in the editor or with the OS default application.

        Raises:
            HostRejectedError: If no editor is available or spawning fails
        """
        logger.info("Attempting to open map: %s", path)

        if self._editor_command is None:
            code = click.launch(str(path.path), wait=False)
            if code != 0:
                raise HostRejectedError(
                    f"No application is available to open {path} (exit code {code})"
                )
            return

        program = self._editor_command[0]
        if shutil.which(program) is None:
            raise HostRejectedError(
                f"Editor '{program}' not found. Is the editor installed and on PATH?"
            )

        args = [self._substitute(part, path) for part in self._editor_command]
        try:
            subprocess.Popen(args, cwd=str(self._project_dir) if self._project_dir else None)
        except OSError as e:
            raise HostRejectedError(f"Failed to start editor '{program}': {e}")

    def _substitute(self, part: str, path: PhysicalPath) -> str:
        """Fill ``{path}`` and ``{project}`` placeholders in a command part."""
        project = str(self._project_dir) if self._project_dir else ""
        return part.replace("{path}", str(path.path)).replace("{project}", project)

