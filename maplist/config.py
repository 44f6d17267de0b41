"""Configuration management for maplist.toml."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tomli
import tomli_w

from maplist.constants import (
    CONFIG_FILENAME,
    DEFAULT_CONTENT_DIR,
    DEFAULT_NAMESPACE_ROOT,
    DEFAULT_RESOURCE_TYPE,
    REGISTRY_MANIFEST,
    REGISTRY_SCAN,
)
from maplist.core.registry import TypeRegistry
from maplist.core.resource import ResourceSpec
from maplist.exceptions import (
    ConfigNotFoundError,
    ConfigParseError,
    ConfigValidationError,
    MalformedIdError,
)
from maplist.handle import parse_prefix


@dataclass
class TypeConfig:
    """A resource type declared in maplist.toml.

    Example:
        [types.Level]
        extension = ".umap"
        parent = "World"
    """

    name: str
    extension: str
    parent: str | None = None
    class_path: str | None = None

    @classmethod
    def from_dict(cls, name: str, data: dict[str, Any]) -> "TypeConfig":
        """Create a TypeConfig from a TOML dict entry."""
        extension = data.get("extension")
        if not isinstance(extension, str) or not extension.strip("."):
            raise ConfigValidationError(f"Type '{name}' missing required 'extension' field")
        return cls(
            name=name,
            extension=extension,
            parent=data.get("parent"),
            class_path=data.get("class_path"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to a TOML-serializable dict."""
        result: dict[str, Any] = {"extension": self.extension}
        if self.parent:
            result["parent"] = self.parent
        if self.class_path:
            result["class_path"] = self.class_path
        return result

    def to_spec(self) -> ResourceSpec:
        """Build the ResourceSpec this entry declares."""
        return ResourceSpec(
            name=self.name,
            extension=self.extension,
            parent=self.parent,
            class_path=self.class_path,
        )


@dataclass
class ManifestResource:
    """A registry row listed in maplist.toml.

    Example:
        [[resource]]
        id = "/Game/Maps/Arena"
        type = "World"
    """

    id: str
    type: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ManifestResource":
        """Create a ManifestResource from a TOML dict entry."""
        if "id" not in data:
            raise ConfigValidationError("Resource entry missing required 'id' field")
        if "type" not in data:
            raise ConfigValidationError(f"Resource '{data['id']}' missing required 'type' field")
        return cls(id=str(data["id"]), type=str(data["type"]))

    def to_dict(self) -> dict[str, Any]:
        """Convert to a TOML-serializable dict."""
        return {"id": self.id, "type": self.type}


@dataclass
class MaplistConfig:
    """Configuration from maplist.toml."""

    path: Path
    default_type: str = DEFAULT_RESOURCE_TYPE
    default_prefix: str = DEFAULT_NAMESPACE_ROOT
    include_derived: bool = True
    registry: str = REGISTRY_SCAN
    mounts: dict[str, str] = field(
        default_factory=lambda: {DEFAULT_NAMESPACE_ROOT: DEFAULT_CONTENT_DIR}
    )
    types: dict[str, TypeConfig] = field(default_factory=dict)
    editor_command: list[str] | None = None
    resources: list[ManifestResource] = field(default_factory=list)

    @property
    def project_dir(self) -> Path:
        """Directory relative paths in the config are resolved against."""
        return self.path.parent.resolve()

    @classmethod
    def load(cls, path: Path) -> "MaplistConfig":
        """Load configuration from maplist.toml.

        Args:
            path: Path to the maplist.toml file

        Returns:
            Parsed MaplistConfig

        Raises:
            ConfigNotFoundError: If the file doesn't exist
            ConfigParseError: If the file cannot be parsed
            ConfigValidationError: If the configuration is invalid
        """
        if not path.exists():
            raise ConfigNotFoundError(f"Config file not found: {path}")

        try:
            with open(path, "rb") as f:
                data = tomli.load(f)
        except tomli.TOMLDecodeError as e:
            raise ConfigParseError(f"Failed to parse {path}: {e}")

        return cls._from_dict(path, data)

    @classmethod
    def _from_dict(cls, path: Path, data: dict[str, Any]) -> "MaplistConfig":
        """Create a MaplistConfig from a parsed TOML dict."""
        config = cls(path=path)

        project = _table(data, "project")
        config.default_type = str(project.get("default_type", config.default_type))
        config.default_prefix = str(project.get("default_prefix", config.default_prefix))
        include_derived = project.get("include_derived", config.include_derived)
        if not isinstance(include_derived, bool):
            raise ConfigValidationError(
                f"'include_derived' must be true or false, got {include_derived!r}"
            )
        config.include_derived = include_derived

        registry = project.get("registry", config.registry)
        if registry not in (REGISTRY_SCAN, REGISTRY_MANIFEST):
            raise ConfigValidationError(
                f"Invalid registry '{registry}'. Must be '{REGISTRY_SCAN}' or '{REGISTRY_MANIFEST}'"
            )
        config.registry = registry

        # Parse mounts
        mounts_data = _table(data, "mounts")
        if mounts_data:
            config.mounts = {}
        for root, directory in mounts_data.items():
            if not isinstance(directory, str):
                raise ConfigValidationError(
                    f"Mount '{root}' must be a path string, got {type(directory).__name__}"
                )
            try:
                normalized = parse_prefix(root).to_id()
            except MalformedIdError as e:
                raise ConfigValidationError(f"Invalid mount root '{root}': {e}")
            config.mounts[normalized] = directory

        # Parse types
        for name, type_data in _table(data, "types").items():
            if not isinstance(type_data, dict):
                raise ConfigValidationError(
                    f"Type '{name}' must be a table, got {type(type_data).__name__}"
                )
            config.types[name] = TypeConfig.from_dict(name, type_data)

        # Parse editor
        editor = _table(data, "editor")
        command = editor.get("command")
        if command is not None:
            if isinstance(command, str):
                command = [command]
            if not command or not all(isinstance(part, str) for part in command):
                raise ConfigValidationError("Editor 'command' must be a non-empty list of strings")
            config.editor_command = list(command)

        # Parse manifest resources
        resources_data = data.get("resource", [])
        if not isinstance(resources_data, list):
            raise ConfigValidationError("'resource' must be an array of tables")
        for res_data in resources_data:
            if not isinstance(res_data, dict):
                raise ConfigValidationError(
                    f"Resource entry must be a table, got {type(res_data).__name__}"
                )
            config.resources.append(ManifestResource.from_dict(res_data))

        return config

    def save(self) -> None:
        """Save configuration to maplist.toml."""
        data = self._to_dict()
        with open(self.path, "wb") as f:
            tomli_w.dump(data, f)

    def _to_dict(self) -> dict[str, Any]:
        """Convert to a TOML-serializable dict."""
        data: dict[str, Any] = {
            "project": {
                "default_type": self.default_type,
                "default_prefix": self.default_prefix,
                "include_derived": self.include_derived,
                "registry": self.registry,
            },
            "mounts": dict(self.mounts),
        }

        if self.types:
            data["types"] = {name: t.to_dict() for name, t in self.types.items()}

        if self.editor_command:
            data["editor"] = {"command": list(self.editor_command)}

        if self.resources:
            data["resource"] = [res.to_dict() for res in self.resources]

        return data

    def mount_directories(self) -> dict[str, Path]:
        """Mounts with their directories made absolute.

        Relative directories are resolved against the config file's directory.
        """
        result: dict[str, Path] = {}
        for root, directory in self.mounts.items():
            path = Path(directory).expanduser()
            if not path.is_absolute():
                path = self.project_dir / path
            result[root] = path
        return result

    def build_type_registry(self) -> TypeRegistry:
        """Built-in types plus the types declared in the config."""
        registry = TypeRegistry()
        for type_config in self.types.values():
            registry.register(type_config.to_spec())
        return registry

    def manifest_rows(self) -> list[tuple[str, str]]:
        """Manifest resources as (logical id, type name) rows."""
        return [(res.id, res.type) for res in self.resources]


def _table(data: dict[str, Any], key: str) -> dict[str, Any]:
    """Get a top-level table, validating its shape."""
    value = data.get(key, {})
    if not isinstance(value, dict):
        raise ConfigValidationError(f"'{key}' must be a table, got {type(value).__name__}")
    return value


def find_config(start_path: Path | None = None) -> Path | None:
    """Find maplist.toml by walking up the directory tree.

    Args:
        start_path: Starting directory (defaults to current working directory)

    Returns:
        Path to maplist.toml if found, None otherwise
    """
    if start_path is None:
        start_path = Path.cwd()

    current = start_path.resolve()

    while True:
        config_path = current / CONFIG_FILENAME
        if config_path.exists():
            return config_path

        parent = current.parent
        if parent == current:
            # Reached filesystem root
            return None
        current = parent

