from __future__ import annotations

import json
import shutil
from typing import TYPE_CHECKING

import pytest

from albumrouter.adapters.git import ALBUM_METADATA_FILENAME, BareGitRepository
from tests.helpers.git import GIT_CONFIG, init_bare

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from pathlib import Path


@pytest.fixture(autouse=True)
def _require_git() -> None:
    if shutil.which("git") is None:
        pytest.skip("git executable not available")


@pytest.fixture
def make_bare_repository(tmp_path: Path) -> Callable[..., Path]:
    def factory(name: str = "album.git", *, autoadd: Sequence[str] | None = None) -> Path:
        path = init_bare(tmp_path / name)
        if autoadd is not None:
            document = tmp_path / f"{name}-metadata.json"
            document.write_text(json.dumps({"name": name, "autoadd": list(autoadd)}))
            writer = BareGitRepository.open(path, config=GIT_CONFIG).create_writer()
            assert writer.stage(document, ALBUM_METADATA_FILENAME)
            assert writer.commit()
        return path

    return factory
