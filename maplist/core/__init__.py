"""Core abstractions for maplist.

This module provides the catalog and launch pipeline:

- ResourceSpec: Specification for a resource type
- TypeRegistry: Registered resource types and their derivations
- PathResolver: Logical id to physical path resolution
- CatalogIndex: Snapshots of resources below a logical prefix
- Launcher: Single-flight open of catalog entries

Built-in specs:
- WORLD_SPEC: World (map) resource specification
"""

from maplist.core.catalog import CatalogIndex
from maplist.core.launcher import LaunchOutcome, LaunchRequest, LaunchStatus, Launcher
from maplist.core.registry import TypeRegistry
from maplist.core.resolver import PathResolver
from maplist.core.resource import CatalogEntry, PhysicalPath, ResourceSpec
from maplist.core.specs import WORLD_SPEC

__all__ = [
    # Values
    "ResourceSpec",
    "PhysicalPath",
    "CatalogEntry",
    # Built-in specs
    "WORLD_SPEC",
    # Registry
    "TypeRegistry",
    # Pipeline
    "PathResolver",
    "CatalogIndex",
    "Launcher",
    "LaunchRequest",
    "LaunchOutcome",
    "LaunchStatus",
]
