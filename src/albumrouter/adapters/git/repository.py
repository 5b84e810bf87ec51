"""Album repositories stored as bare git repositories."""

from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass, field
from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING

from albumrouter.config.git import GitConfig
from albumrouter.domain.errors import RepositoryOpenError

from .client import GitClient, GitCommandError
from .schema import ALBUM_METADATA_FILENAME, AlbumMetadata

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import datetime

log = getLogger(__name__)

_BLOB_MODE = "100644"


@dataclass(slots=True)
class GitWriter:
    """Collects blobs for one repository and records them in a single commit."""

    client: GitClient
    message: str = "Import media files"
    _staged: dict[str, str] = field(default_factory=dict, init=False)

    @property
    def staged(self) -> dict[str, str]:
        return dict(self._staged)

    def stage(self, source_path: Path, target_name: str) -> bool:
        try:
            blob = self.client.run("hash-object", "-w", "--", str(source_path))
        except GitCommandError as exc:
            log.warning("Cannot store %s in %s: %s", source_path, self.client.git_dir, exc)
            return False

        head = self.client.head()
        existing = self.client.tree_entry(head, target_name) if head else None
        if existing is not None:
            if existing == blob:
                log.info("%s already present in %s", target_name, self.client.git_dir)
                return True
            log.warning(
                "%s already exists in %s with different content", target_name, self.client.git_dir
            )
            return False

        previous = self._staged.get(target_name)
        if previous is not None and previous != blob:
            log.warning("%s staged twice with different content", target_name)
            return False

        self._staged[target_name] = blob
        return True

    def commit(self) -> bool:
        if not self._staged:
            return True
        try:
            self._commit_staged()
        except GitCommandError:
            log.exception("Cannot commit into %s", self.client.git_dir)
            return False
        finally:
            count = len(self._staged)
            self._staged.clear()
        log.info("Committed %s files into %s", count, self.client.git_dir)
        return True

    def _commit_staged(self) -> None:
        head = self.client.head()
        fd, index_name = tempfile.mkstemp(prefix="albumrouter-index-")
        os.close(fd)
        index_path = Path(index_name)
        # git refuses an empty file as index; it must not exist beforehand
        index_path.unlink()
        index_env = {"GIT_INDEX_FILE": str(index_path)}
        try:
            if head:
                self.client.run("read-tree", head, extra_env=index_env)
            for name, blob in sorted(self._staged.items()):
                self.client.run(
                    "update-index",
                    "--add",
                    "--cacheinfo",
                    f"{_BLOB_MODE},{blob},{name}",
                    extra_env=index_env,
                )
            tree = self.client.run("write-tree", extra_env=index_env)
        finally:
            index_path.unlink(missing_ok=True)

        parents = ("-p", head) if head else ()
        commit = self.client.run("commit-tree", tree, *parents, input_text=self.message)
        if head:
            self.client.run("update-ref", "HEAD", commit, head)
        else:
            self.client.run("update-ref", "HEAD", commit)


@dataclass(slots=True)
class BareGitRepository:
    """Repository handle backed by a bare git repository."""

    client: GitClient

    @property
    def path(self) -> Path:
        return self.client.git_dir

    @classmethod
    def open(cls, path: Path, *, config: GitConfig | None = None) -> BareGitRepository:
        settings = config or GitConfig()
        client = GitClient(
            git_dir=path, executable=settings.executable, env=settings.identity_env()
        )
        try:
            is_bare = client.run("rev-parse", "--is-bare-repository")
        except GitCommandError as exc:
            raise RepositoryOpenError(f"{path} is not a git repository", path=path) from exc
        if is_bare != "true":
            raise RepositoryOpenError(f"{path} is not a bare git repository", path=path)
        return cls(client=client)

    def read_metadata(self) -> AlbumMetadata:
        head = self.client.head()
        if head is None:
            log.info("Repository %s has no commits yet", self.path)
            return AlbumMetadata()
        document = self.client.try_run("show", f"{head}:{ALBUM_METADATA_FILENAME}")
        if document is None:
            log.info("Repository %s has no %s", self.path, ALBUM_METADATA_FILENAME)
            return AlbumMetadata()
        return AlbumMetadata.model_validate_json(document)

    def list_boundary_timestamps(self) -> list[datetime]:
        return list(self.read_metadata().autoadd)

    def create_writer(self) -> GitWriter:
        return GitWriter(client=self.client)


def bare_git_opener(config: GitConfig | None = None) -> Callable[[Path], BareGitRepository]:
    """Return a ``RepositoryOpener`` bound to ``config``."""

    def _open(path: Path) -> BareGitRepository:
        return BareGitRepository.open(path, config=config)

    return _open


__all__ = ["BareGitRepository", "GitWriter", "bare_git_opener"]
