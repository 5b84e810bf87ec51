from __future__ import annotations

import os
from pathlib import Path

import pytest

from albumrouter.domain.errors import RepositoryDiscoveryError, RepositoryOpenError
from albumrouter.domain.registry import RepositoryRegistry, discover_repositories
from tests.helpers.albums import RecordingOpener


def _make_tree(root: Path, *relative: str) -> None:
    for name in relative:
        (root / name).mkdir(parents=True, exist_ok=True)


def test_discovers_marker_directories_at_any_depth(tmp_path: Path) -> None:
    _make_tree(tmp_path, "2023/summer.git", "2023/trips/alps.git", "family.git", "misc/empty")
    opener = RecordingOpener()

    registry = discover_repositories(tmp_path, opener=opener)

    assert set(registry) == {
        tmp_path / "2023" / "summer.git",
        tmp_path / "2023" / "trips" / "alps.git",
        tmp_path / "family.git",
    }
    assert all(registry[path].path == path for path in registry)


def test_does_not_descend_into_repositories(tmp_path: Path) -> None:
    _make_tree(tmp_path, "outer.git/objects/nested.git")
    opener = RecordingOpener()

    registry = discover_repositories(tmp_path, opener=opener)

    assert list(registry) == [tmp_path / "outer.git"]
    assert opener.opened == [tmp_path / "outer.git"]


def test_ignores_plain_files_with_marker_suffix(tmp_path: Path) -> None:
    (tmp_path / "notes.git").write_text("not a directory")

    registry = discover_repositories(tmp_path, opener=RecordingOpener())

    assert len(registry) == 0


def test_custom_marker_suffix(tmp_path: Path) -> None:
    _make_tree(tmp_path, "a.album", "b.git")

    registry = discover_repositories(tmp_path, opener=RecordingOpener(), marker_suffix=".album")

    assert list(registry) == [tmp_path / "a.album"]


def test_discovery_order_is_deterministic(tmp_path: Path) -> None:
    _make_tree(tmp_path, "b/z.git", "a/y.git", "c.git", "a/x.git")

    first = discover_repositories(tmp_path, opener=RecordingOpener())
    second = discover_repositories(tmp_path, opener=RecordingOpener())

    assert list(first) == list(second) == [
        tmp_path / "a" / "x.git",
        tmp_path / "a" / "y.git",
        tmp_path / "b" / "z.git",
        tmp_path / "c.git",
    ]


def test_malformed_repository_aborts_discovery(tmp_path: Path) -> None:
    _make_tree(tmp_path, "good.git", "broken.git")
    opener = RecordingOpener(broken={"broken.git"})

    with pytest.raises(RepositoryDiscoveryError, match="broken.git") as excinfo:
        discover_repositories(tmp_path, opener=opener)

    assert isinstance(excinfo.value.__cause__, RepositoryOpenError)


def test_missing_root_yields_empty_registry(tmp_path: Path) -> None:
    registry = discover_repositories(tmp_path / "does-not-exist", opener=RecordingOpener())

    assert registry == RepositoryRegistry()


@pytest.mark.skipif(
    os.name == "nt" or (hasattr(os, "geteuid") and os.geteuid() == 0),
    reason="permission bits are not enforced",
)
def test_unlistable_directory_is_skipped(tmp_path: Path) -> None:
    _make_tree(tmp_path, "locked/hidden.git", "open/visible.git")
    locked = tmp_path / "locked"
    locked.chmod(0)
    try:
        registry = discover_repositories(tmp_path, opener=RecordingOpener())
    finally:
        locked.chmod(0o755)

    assert list(registry) == [tmp_path / "open" / "visible.git"]


def test_unlistable_directory_is_skipped_when_scandir_fails(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    _make_tree(tmp_path, "locked/hidden.git", "open/visible.git")
    real_scandir = os.scandir
    locked = tmp_path / "locked"

    def flaky_scandir(path: os.PathLike[str] | str) -> object:
        if Path(path) == locked:
            raise PermissionError(13, "Permission denied", str(path))
        return real_scandir(path)

    monkeypatch.setattr("albumrouter.domain.registry.os.scandir", flaky_scandir)

    registry = discover_repositories(tmp_path, opener=RecordingOpener())

    assert list(registry) == [tmp_path / "open" / "visible.git"]


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unsupported")
def test_symlink_loops_terminate(tmp_path: Path) -> None:
    _make_tree(tmp_path, "photos/a.git")
    (tmp_path / "photos" / "loop").symlink_to(tmp_path, target_is_directory=True)

    registry = discover_repositories(tmp_path, opener=RecordingOpener())

    assert tmp_path / "photos" / "a.git" in registry
