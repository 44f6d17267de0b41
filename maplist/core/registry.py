"""Registry for resource type specifications.

Provides registration and lookup of resource types, including the parent
chains used to answer "this type and everything derived from it".

Thread-safe: All registry operations are protected by a lock.
"""

import threading

from maplist.core.resource import ResourceSpec
from maplist.exceptions import UnknownResourceTypeError


class TypeRegistry:
    """Registry of resource type specs.

    Lookups accept a type name or a spec's class path alias,
    case-insensitively. Registration order is preserved.
    """

    def __init__(self, *, builtins: bool = True) -> None:
        """Initialize the registry.

        Args:
            builtins: Register the built-in specs (see maplist.core.specs)
        """
        self._lock = threading.Lock()
        self._specs: dict[str, ResourceSpec] = {}
        if builtins:
            self._register_defaults()

    def _register_defaults(self) -> None:
        """Register built-in resource specs."""
        from maplist.core.specs import BUILTIN_SPECS

        for spec in BUILTIN_SPECS:
            self.register(spec)

    def register(self, spec: ResourceSpec) -> None:
        """Register a resource spec, replacing any spec of the same name.

        Args:
            spec: The resource spec to register
        """
        with self._lock:
            self._specs[spec.name.casefold()] = spec

    def get(self, type_name: str) -> ResourceSpec | None:
        """Get a spec by name or class path.

        Args:
            type_name: Type name (e.g., "World") or class path alias

        Returns:
            The ResourceSpec or None if not registered
        """
        with self._lock:
            spec = self._specs.get(type_name.casefold())
            if spec is not None:
                return spec
            for candidate in self._specs.values():
                if candidate.matches(type_name):
                    return candidate
        return None

    def require(self, type_name: str) -> ResourceSpec:
        """Get a spec or raise.

        Raises:
            UnknownResourceTypeError: If the type is not registered
        """
        spec = self.get(type_name)
        if spec is None:
            raise UnknownResourceTypeError(f"Unknown resource type: {type_name}")
        return spec

    def all(self) -> list[ResourceSpec]:
        """Get all registered specs in registration order."""
        with self._lock:
            return list(self._specs.values())

    def is_derived_from(self, type_name: str, base: str) -> bool:
        """Check whether ``type_name`` is ``base`` or derives from it.

        Unknown names are only equal to themselves. Parent cycles stop the
        walk rather than loop forever.
        """
        base_spec = self.get(base)
        base_key = (base_spec.name if base_spec else base).casefold()

        current: str | None = type_name
        seen: set[str] = set()
        while current is not None:
            spec = self.get(current)
            key = (spec.name if spec else current).casefold()
            if key == base_key:
                return True
            if key in seen or spec is None:
                return False
            seen.add(key)
            current = spec.parent
        return False

    def family(self, base: str, *, include_derived: bool = True) -> list[ResourceSpec]:
        """Get ``base`` and, optionally, every spec derived from it.

        Raises:
            UnknownResourceTypeError: If ``base`` is not registered
        """
        base_spec = self.require(base)
        if not include_derived:
            return [base_spec]
        return [
            spec for spec in self.all()
            if self.is_derived_from(spec.name, base_spec.name)
        ]
