"""Git backend configuration values."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from .env import optional_env_var

AUTHOR_NAME_VAR: Final[str] = "ALBUMROUTER_GIT_AUTHOR_NAME"
AUTHOR_EMAIL_VAR: Final[str] = "ALBUMROUTER_GIT_AUTHOR_EMAIL"
GIT_EXECUTABLE_VAR: Final[str] = "ALBUMROUTER_GIT_EXECUTABLE"


@dataclass(frozen=True, slots=True)
class GitConfig:
    """Identity and executable used when writing into album repositories."""

    author_name: str = "albumrouter"
    author_email: str = "albumrouter@localhost"
    executable: str = "git"

    def identity_env(self) -> dict[str, str]:
        return {
            "GIT_AUTHOR_NAME": self.author_name,
            "GIT_AUTHOR_EMAIL": self.author_email,
            "GIT_COMMITTER_NAME": self.author_name,
            "GIT_COMMITTER_EMAIL": self.author_email,
        }


def get_git_config() -> GitConfig:
    defaults = GitConfig()
    return GitConfig(
        author_name=optional_env_var(AUTHOR_NAME_VAR) or defaults.author_name,
        author_email=optional_env_var(AUTHOR_EMAIL_VAR) or defaults.author_email,
        executable=optional_env_var(GIT_EXECUTABLE_VAR) or defaults.executable,
    )
