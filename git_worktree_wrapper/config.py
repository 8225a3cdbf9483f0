"""Environment and repository configuration helpers."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from .exceptions import MissingEnvError, RepoDetectionError
from .git import GitRunner, git_output, remote_url

DEFAULT_ROOT_PARTS = ("devel", "worktrees")


@dataclass(frozen=True, slots=True)
class Settings:
    worktree_root_override: Path | None = None
    home: Path | None = None
    no_colour: bool = False


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    env = os.environ if environ is None else environ
    return Settings(
        worktree_root_override=_optional_path(env.get("WORKTREE_ROOT")),
        home=_optional_path(env.get("HOME")),
        no_colour="GWW_NO_COLOUR" in env,
    )


def _optional_path(raw: str | None) -> Path | None:
    if not raw:
        return None
    return Path(raw).expanduser()


def resolve_worktree_root(settings: Settings) -> Path:
    if settings.worktree_root_override is not None:
        return settings.worktree_root_override
    if settings.home is None:
        raise MissingEnvError("HOME not set")
    return settings.home.joinpath(*DEFAULT_ROOT_PARTS)


def repo_name_from_url(url: str) -> str | None:
    """Return the last path segment of a remote URL without ``.git``.

    >>> repo_name_from_url("git@host:org/my-repo.git")
    'my-repo'
    """

    cleaned = url.strip().rstrip("/")
    name = cleaned.rsplit("/", 1)[-1]
    if name.endswith(".git"):
        name = name[: -len(".git")]
    return name or None


def resolve_repo_identity(runner: GitRunner) -> str:
    origin = remote_url(runner)
    if origin:
        name = repo_name_from_url(origin)
        if name:
            return name
    toplevel = git_output(runner, ["rev-parse", "--show-toplevel"]).strip()
    name = Path(toplevel).name if toplevel else ""
    if not name:
        raise RepoDetectionError("Unable to determine repository name")
    return name


__all__ = [
    "Settings",
    "load_settings",
    "resolve_worktree_root",
    "repo_name_from_url",
    "resolve_repo_identity",
]
