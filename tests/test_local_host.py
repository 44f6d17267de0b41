"""Tests for maplist.host.local module."""

import os
from pathlib import Path

import pytest

from maplist.config import MaplistConfig
from maplist.core.launcher import LaunchStatus
from maplist.core.registry import TypeRegistry
from maplist.core.resource import PhysicalPath, ResourceSpec
from maplist.exceptions import HostRejectedError, UnknownResourceTypeError, UnmappedRootError
from maplist.host import HostEnvironment
from maplist.host import local as local_module
from maplist.host.local import LocalHost
from maplist.session import Session


@pytest.fixture
def content(game_project: Path) -> Path:
    return game_project / "Content"


class TestProtocol:
    """Tests for the HostEnvironment protocol."""

    def test_local_host_satisfies_protocol(self, tmp_path):
        assert isinstance(LocalHost({"/Game": tmp_path}), HostEnvironment)

    def test_unknown_registry_source(self, tmp_path):
        with pytest.raises(ValueError):
            LocalHost({"/Game": tmp_path}, registry="database")


class TestScanRegistry:
    """Tests for enumerating resources by walking mounts."""

    def test_finds_files_with_type_extension(self, content):
        host = LocalHost({"/Game": content})
        rows = host.query_resources_by_type("World", True)
        assert rows == [("/Game/Maps/Arena", "World"), ("/Game/Maps/Lobby", "World")]

    def test_walk_order_is_stable(self, content):
        (content / "Alpha").mkdir()
        (content / "Alpha" / "Zed.umap").write_text("")
        (content / "Alpha" / "Bee.umap").write_text("")
        host = LocalHost({"/Game": content})
        ids = [row[0] for row in host.query_resources_by_type("World", True)]
        assert ids == [
            "/Game/Alpha/Bee",
            "/Game/Alpha/Zed",
            "/Game/Maps/Arena",
            "/Game/Maps/Lobby",
        ]

    def test_extension_match_is_exact(self, content):
        """A file whose suffix differs in case is not listed as a map."""
        (content / "Maps" / "Loud.UMAP").write_text("")
        host = LocalHost({"/Game": content})
        ids = [row[0] for row in host.query_resources_by_type("World", True)]
        assert "/Game/Maps/Loud" not in ids

    def test_every_scanned_entry_opens(self, content, monkeypatch):
        """Scanned entries resolve to files that exist and launch."""
        (content / "Maps" / "Loud.UMAP").write_text("")
        monkeypatch.setattr(local_module.click, "launch", lambda url, wait=False: 0)
        session = Session(LocalHost({"/Game": content}))
        entries = session.refresh("World", "/Game")
        assert entries
        for entry in entries:
            assert session.launch(entry).status is LaunchStatus.SUCCESS

    def test_derived_types(self, content):
        (content / "Maps" / "Duel.arena").write_text("")
        types = TypeRegistry()
        types.register(ResourceSpec(name="Arena", extension=".arena", parent="World"))
        host = LocalHost({"/Game": content}, types)

        with_derived = host.query_resources_by_type("World", True)
        assert ("/Game/Maps/Duel", "Arena") in with_derived

        without = host.query_resources_by_type("World", False)
        assert ("/Game/Maps/Duel", "Arena") not in without

    def test_relative_mount_root(self, content):
        host = LocalHost({"Project": content})
        rows = host.query_resources_by_type("World", True)
        assert rows[0] == ("Project/Maps/Arena", "World")

    def test_missing_mount_directory_skipped(self, content, tmp_path):
        host = LocalHost({"/Game": content, "/Gone": tmp_path / "gone"})
        assert len(host.query_resources_by_type("World", True)) == 2

    def test_unknown_type(self, content):
        with pytest.raises(UnknownResourceTypeError):
            LocalHost({"/Game": content}).query_resources_by_type("Sound", True)


class TestManifestRegistry:
    """Tests for enumerating resources from a manifest."""

    def test_rows_filtered_by_family(self, tmp_path):
        types = TypeRegistry()
        types.register(ResourceSpec(name="Level", extension=".umap", parent="World"))
        types.register(ResourceSpec(name="Texture", extension=".uasset"))
        host = LocalHost(
            {"/Game": tmp_path},
            types,
            registry="manifest",
            manifest=[
                ("/Game/Maps/B", "world"),
                ("/Game/Rock", "Texture"),
                ("/Game/Maps/A", "Level"),
                ("/Game//Bad", "World"),
            ],
        )
        rows = host.query_resources_by_type("World", True)
        assert rows == [
            ("/Game/Maps/B", "World"),
            ("/Game/Maps/A", "Level"),
            ("/Game//Bad", "World"),
        ]
        assert host.query_resources_by_type("World", False) == [
            ("/Game/Maps/B", "World"),
            ("/Game//Bad", "World"),
        ]


class TestNamespaceMapping:
    """Tests for namespace_root_to_directory."""

    def test_exact_mount(self, tmp_path):
        host = LocalHost({"/Game": tmp_path / "Content"})
        assert host.namespace_root_to_directory("/Game") == tmp_path / "Content"

    def test_case_insensitive(self, tmp_path):
        host = LocalHost({"/Game": tmp_path / "Content"})
        assert host.namespace_root_to_directory("/game/") == tmp_path / "Content"

    def test_below_mount(self, tmp_path):
        host = LocalHost({"/Game": tmp_path / "Content"})
        assert host.namespace_root_to_directory("/Game/Maps") == tmp_path / "Content" / "Maps"

    def test_longest_mount_wins(self, tmp_path):
        host = LocalHost({"/Game": tmp_path / "Content", "/Game/DLC": tmp_path / "DLC"})
        assert host.namespace_root_to_directory("/Game/DLC/Pack") == tmp_path / "DLC" / "Pack"

    def test_unmapped(self, tmp_path):
        host = LocalHost({"/Game": tmp_path})
        with pytest.raises(UnmappedRootError):
            host.namespace_root_to_directory("/Engine")

    def test_rooted_and_relative_differ(self, tmp_path):
        host = LocalHost({"/Game": tmp_path})
        with pytest.raises(UnmappedRootError):
            host.namespace_root_to_directory("Game")

    def test_relative_mount_made_absolute(self, game_project):
        host = LocalHost({"/Game": Path("Content")})
        assert host.namespace_root_to_directory("/Game") == Path(os.path.abspath("Content"))


class TestPathExists:
    """Tests for path_exists."""

    def test_existing_file(self, content):
        host = LocalHost({"/Game": content})
        path = PhysicalPath(path=content / "Maps" / "Arena.umap", logical_id="/Game/Maps/Arena")
        assert host.path_exists(path)

    def test_missing_file(self, content):
        host = LocalHost({"/Game": content})
        path = PhysicalPath(path=content / "Maps" / "Nope.umap", logical_id="/Game/Maps/Nope")
        assert not host.path_exists(path)

    def test_directory_is_not_a_resource(self, content):
        host = LocalHost({"/Game": content})
        assert not host.path_exists(PhysicalPath(path=content / "Maps", logical_id="/Game/Maps"))


class TestOpenResource:
    """Tests for open_resource."""

    @pytest.fixture
    def arena(self, content):
        return PhysicalPath(path=content / "Maps" / "Arena.umap", logical_id="/Game/Maps/Arena")

    def test_os_opener_used_without_editor(self, content, arena, monkeypatch):
        launched = []
        monkeypatch.setattr(
            local_module.click, "launch", lambda url, wait=False: launched.append(url) or 0
        )
        LocalHost({"/Game": content}).open_resource(arena)
        assert launched == [str(arena.path)]

    def test_os_opener_failure(self, content, arena, monkeypatch):
        monkeypatch.setattr(local_module.click, "launch", lambda url, wait=False: 1)
        with pytest.raises(HostRejectedError):
            LocalHost({"/Game": content}).open_resource(arena)

    def test_editor_command_substituted(self, game_project, content, arena, monkeypatch):
        spawned = []
        monkeypatch.setattr(local_module.shutil, "which", lambda name: f"/usr/bin/{name}")
        monkeypatch.setattr(
            local_module.subprocess,
            "Popen",
            lambda args, cwd=None: spawned.append((args, cwd)),
        )
        host = LocalHost(
            {"/Game": content},
            editor_command=["UnrealEditor", "{project}", "{path}", "-log"],
            project_dir=game_project,
        )
        host.open_resource(arena)
        assert spawned == [
            (
                ["UnrealEditor", str(game_project), str(arena.path), "-log"],
                str(game_project),
            )
        ]

    def test_editor_not_on_path(self, content, arena, monkeypatch):
        monkeypatch.setattr(local_module.shutil, "which", lambda name: None)
        host = LocalHost({"/Game": content}, editor_command=["UnrealEditor", "{path}"])
        with pytest.raises(HostRejectedError, match="not found"):
            host.open_resource(arena)

    def test_spawn_failure(self, content, arena, monkeypatch):
        def refuse(args, cwd=None):
            raise PermissionError("denied")

        monkeypatch.setattr(local_module.shutil, "which", lambda name: f"/usr/bin/{name}")
        monkeypatch.setattr(local_module.subprocess, "Popen", refuse)
        host = LocalHost({"/Game": content}, editor_command=["UnrealEditor"])
        with pytest.raises(HostRejectedError, match="Failed to start"):
            host.open_resource(arena)


class TestFromConfig:
    """Tests for LocalHost.from_config."""

    def test_uses_config_mounts_and_types(self, game_project):
        config = MaplistConfig.load(game_project / "maplist.toml")
        host = LocalHost.from_config(config)
        assert host.namespace_root_to_directory("/Game") == game_project.resolve() / "Content"
        assert host.types.get("World") is not None
        assert len(host.query_resources_by_type("World", True)) == 2
