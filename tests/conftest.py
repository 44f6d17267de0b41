"""Test configuration and fixtures."""

import threading
from pathlib import Path

import pytest

from maplist.core.resource import PhysicalPath
from maplist.exceptions import HostRejectedError, UnmappedRootError
from maplist.handle import parse_prefix


class FakeHost:
    """In-memory host environment recording every call."""

    def __init__(
        self,
        rows: list[tuple[str, str]] | None = None,
        mounts: dict[str, Path] | None = None,
        derived: dict[str, set[str]] | None = None,
    ) -> None:
        self.rows = list(rows or [])
        self.mounts = {parse_prefix(k).to_id().casefold(): v for k, v in (mounts or {}).items()}
        self.derived = derived or {}
        self.existing: set[Path] = set()
        self.opened: list[PhysicalPath] = []
        self.reject_with: str | None = None
        self.queries: list[tuple[str, bool]] = []
        self.exists_checks: list[PhysicalPath] = []
        self.mapped_roots: list[str] = []

    def query_resources_by_type(self, resource_type, include_derived):
        self.queries.append((resource_type, include_derived))
        wanted = {resource_type}
        if include_derived:
            wanted |= self.derived.get(resource_type, set())
        return [row for row in self.rows if row[1] in wanted]

    def namespace_root_to_directory(self, root):
        self.mapped_roots.append(root)
        directory = self.mounts.get(root.casefold())
        if directory is None:
            raise UnmappedRootError(f"No directory is mounted for '{root}'")
        return directory

    def path_exists(self, path):
        self.exists_checks.append(path)
        return path.path in self.existing

    def open_resource(self, path):
        self.opened.append(path)
        if self.reject_with is not None:
            raise HostRejectedError(self.reject_with)


class BlockingHost(FakeHost):
    """FakeHost whose open call waits until released."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.entered = threading.Event()
        self.release = threading.Event()

    def open_resource(self, path):
        self.opened.append(path)
        self.entered.set()
        if not self.release.wait(timeout=5):
            raise RuntimeError("test host was never released")
        if self.reject_with is not None:
            raise HostRejectedError(self.reject_with)


@pytest.fixture
def fake_host():
    """Host with three World resources under A and B, mounted at /proj."""
    return FakeHost(
        rows=[("A/X", "World"), ("A/Y", "World"), ("B/Z", "World")],
        mounts={"A": Path("/proj/A"), "B": Path("/proj/B")},
    )


@pytest.fixture
def game_project(tmp_path: Path, monkeypatch):
    """A project directory with a Content folder of maps and a maplist.toml."""
    content = tmp_path / "Content"
    (content / "Maps").mkdir(parents=True)
    (content / "Maps" / "Arena.umap").write_text("arena")
    (content / "Maps" / "Lobby.umap").write_text("lobby")
    (content / "Textures").mkdir()
    (content / "Textures" / "Rock.uasset").write_text("rock")
    (tmp_path / "maplist.toml").write_text(
        '[project]\ndefault_prefix = "/Game"\n\n[mounts]\n"/Game" = "Content"\n'
    )
    monkeypatch.chdir(tmp_path)
    return tmp_path
