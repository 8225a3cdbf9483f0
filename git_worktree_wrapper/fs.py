"""Filesystem helpers for gww."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .config import Settings, resolve_repo_identity, resolve_worktree_root
from .git import GitRunner


@dataclass(frozen=True, slots=True)
class PathPlanner:
    """Maps branch names to ``<worktree_root>/<repo_identity>/<branch>``."""

    worktree_root: Path
    repo_identity: str

    @property
    def repo_root(self) -> Path:
        return self.worktree_root / self.repo_identity

    def plan(self, branch: str) -> Path:
        return self.repo_root / branch


def build_planner(settings: Settings, runner: GitRunner) -> PathPlanner:
    return PathPlanner(
        worktree_root=resolve_worktree_root(settings),
        repo_identity=resolve_repo_identity(runner),
    )


def ensure_directory(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


__all__ = ["PathPlanner", "build_planner", "ensure_directory"]
