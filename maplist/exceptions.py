"""Shared exception classes for maplist."""


class MaplistError(Exception):
    """Base exception for maplist errors."""


class ResolutionError(MaplistError):
    """Raised when a logical id cannot be turned into a physical path.

    ``kind`` is the short, stable name of the failure shown to users.
    """

    kind = "unresolvable"


class MalformedIdError(ResolutionError):
    """Raised when a logical id is structurally invalid."""

    kind = "malformed-id"


class OutOfScopeError(ResolutionError):
    """Raised when a logical id does not lie below the requested root."""

    kind = "out-of-scope"


class UnmappedRootError(ResolutionError):
    """Raised when the host has no directory for a namespace root."""

    kind = "unmapped-root"


class HostRejectedError(MaplistError):
    """Raised by a host when it declines to open a resource."""


class ResourceNotFoundError(MaplistError):
    """Raised when a logical id is not present in the catalog."""


class UnknownResourceTypeError(MaplistError):
    """Raised when a resource type name is not registered."""


class ConfigNotFoundError(MaplistError):
    """Raised when maplist.toml is not found."""


class ConfigParseError(MaplistError):
    """Raised when maplist.toml cannot be parsed."""


class ConfigValidationError(MaplistError):
    """Raised when maplist.toml contains invalid configuration."""
