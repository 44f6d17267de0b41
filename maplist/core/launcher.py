"""Single-flight launching of catalog entries.

The Launcher re-validates an entry's physical path and hands it to the host
for opening. At most one launch is in flight at any time; a concurrent
caller gets a BUSY outcome instead of waiting.
"""

import itertools
import logging
import threading
from dataclasses import dataclass
from enum import Enum

from maplist.core.resource import CatalogEntry
from maplist.exceptions import HostRejectedError
from maplist.host.base import HostEnvironment

logger = logging.getLogger(__name__)


class LaunchStatus(Enum):
    """Outcome kinds of a launch."""

    SUCCESS = "success"
    UNRESOLVABLE = "unresolvable"
    NOT_FOUND = "not-found"
    BUSY = "busy"
    HOST_REJECTED = "host-rejected"


@dataclass(frozen=True)
class LaunchRequest:
    """The launch currently holding the single-flight slot."""

    entry: CatalogEntry
    token: int


@dataclass(frozen=True)
class LaunchOutcome:
    """Result of a launch operation."""

    status: LaunchStatus
    entry: CatalogEntry
    token: int | None = None
    message: str = ""

    @property
    def ok(self) -> bool:
        """True if the host opened the resource."""
        return self.status is LaunchStatus.SUCCESS


class Launcher:
    """Dispatches open operations to the host, one at a time."""

    def __init__(self, host: HostEnvironment) -> None:
        self._host = host
        self._lock = threading.Lock()
        self._active: LaunchRequest | None = None
        self._tokens = itertools.count(1)

    @property
    def active_request(self) -> LaunchRequest | None:
        """Get the launch currently in flight, if any."""
        with self._lock:
            return self._active

    def launch(self, entry: CatalogEntry) -> LaunchOutcome:
        """Open ``entry`` through the host.

        Preconditions are checked in order: the entry must have a resolved
        path, the path must exist now, and no other launch may be active.

        Args:
            entry: Catalog entry to open

        Returns:
            LaunchOutcome describing success or the failure kind
        """
        path = entry.resolved_path
        if path is None:
            reason = str(entry.error) if entry.error else "no physical path"
            return LaunchOutcome(
                status=LaunchStatus.UNRESOLVABLE,
                entry=entry,
                message=f"'{entry.id}' cannot be opened: {reason}",
            )

        if not self._host.path_exists(path):
            return LaunchOutcome(
                status=LaunchStatus.NOT_FOUND,
                entry=entry,
                message=f"File not found at path: {path}",
            )

        request = self._acquire(entry)
        if request is None:
            return LaunchOutcome(
                status=LaunchStatus.BUSY,
                entry=entry,
                message="Another launch is already in progress",
            )

        logger.debug("launch #%d: opening %s", request.token, path)
        try:
            self._host.open_resource(path)
        except HostRejectedError as e:
            return LaunchOutcome(
                status=LaunchStatus.HOST_REJECTED,
                entry=entry,
                token=request.token,
                message=str(e),
            )
        finally:
            self._release(request)

        return LaunchOutcome(
            status=LaunchStatus.SUCCESS,
            entry=entry,
            token=request.token,
            message=f"Opened {entry.display_name}",
        )

    def _acquire(self, entry: CatalogEntry) -> LaunchRequest | None:
        """Take the single-flight slot, or return None if it is held."""
        with self._lock:
            if self._active is not None:
                return None
            self._active = LaunchRequest(entry=entry, token=next(self._tokens))
            return self._active

    def _release(self, request: LaunchRequest) -> None:
        """Clear the slot if ``request`` still holds it."""
        with self._lock:
            if self._active is not None and self._active.token == request.token:
                self._active = None
