"""Centralized constants for the maplist package."""

# Config file looked up from the working directory upwards
CONFIG_FILENAME = "maplist.toml"

# Logical id separator
ID_SEPARATOR = "/"

# Defaults mirroring a game project layout: /Game/... lives under Content/
DEFAULT_NAMESPACE_ROOT = "/Game"
DEFAULT_CONTENT_DIR = "Content"
DEFAULT_RESOURCE_TYPE = "World"

# Registry sources understood by the local host
REGISTRY_SCAN = "scan"
REGISTRY_MANIFEST = "manifest"
