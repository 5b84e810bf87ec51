"""Thin subprocess wrapper around the ``git`` executable."""

from __future__ import annotations

import os
import subprocess
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from albumrouter.domain.errors import RepositoryWriteError

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

log = getLogger(__name__)


class GitCommandError(RepositoryWriteError):
    """Raised when a git invocation exits with a non-zero status."""

    def __init__(self, message: str, *, args: tuple[str, ...], stderr: str = "") -> None:
        super().__init__(message)
        self.command = args
        self.stderr = stderr


@dataclass(slots=True)
class GitClient:
    """Run git plumbing commands against one bare repository."""

    git_dir: Path
    executable: str = "git"
    env: Mapping[str, str] = field(default_factory=dict)

    def run(
        self,
        *args: str,
        input_text: str | None = None,
        extra_env: Mapping[str, str] | None = None,
    ) -> str:
        command = (self.executable, "--git-dir", str(self.git_dir), *args)
        environment = {**os.environ, **self.env, **(extra_env or {})}
        log.debug("Running %s", " ".join(command))
        try:
            result = subprocess.run(  # noqa: S603
                command,
                input=input_text,
                capture_output=True,
                text=True,
                check=True,
                env=environment,
            )
        except subprocess.CalledProcessError as exc:
            stderr = (exc.stderr or "").strip()
            raise GitCommandError(
                f"git {args[0]} failed in {self.git_dir}: {stderr or exc.returncode}",
                args=args,
                stderr=stderr,
            ) from exc
        except OSError as exc:
            raise GitCommandError(
                f"Cannot run {self.executable} in {self.git_dir}: {exc}", args=args
            ) from exc
        return result.stdout.strip()

    def try_run(self, *args: str) -> str | None:
        """Like ``run`` but return ``None`` instead of raising on failure."""

        try:
            return self.run(*args)
        except GitCommandError as exc:
            log.debug("%s", exc)
            return None

    def head(self) -> str | None:
        return self.try_run("rev-parse", "--verify", "--quiet", "HEAD^{commit}")

    def tree_entry(self, revision: str, name: str) -> str | None:
        """Return the object id of ``name`` in ``revision``'s tree, if present."""

        output = self.try_run("ls-tree", revision, "--", name)
        if not output:
            return None
        # "<mode> <type> <object>\t<path>"
        meta, _, _path = output.partition("\t")
        return meta.split()[2]


__all__ = ["GitClient", "GitCommandError"]
