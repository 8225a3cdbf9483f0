"""High-level orchestration for worktree operations."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Sequence

from . import git
from .candidates import resolve_candidates, strip_remote_prefix
from .config import Settings
from .exceptions import BranchMissingError, FilesystemError, ValidationError
from .fs import PathPlanner, build_planner, ensure_directory
from .interactive import Confirmer, Picker
from .models import (
    Action,
    BranchCandidate,
    CreateFromLocal,
    CreateFromRemote,
    CreateNew,
    Reuse,
    WorktreeRecord,
)
from .selection import select_branch, select_worktree_branch

logger = logging.getLogger(__name__)


def worktree_for_branch(worktrees: Sequence[WorktreeRecord], branch: str) -> WorktreeRecord | None:
    return next((record for record in worktrees if record.branch == branch), None)


def match_remote_branch(branch: str, remotes: Sequence[str]) -> str | None:
    """Find a remote ref by exact name, then by its name without the remote."""

    if branch in remotes:
        return branch
    for remote in remotes:
        if strip_remote_prefix(remote) == branch:
            return remote
    return None


def ensure_branch_or_prompt(branch: str, *, create: bool, confirmer: Confirmer) -> None:
    if create:
        return
    if confirmer.confirm(f"Branch '{branch}' does not exist. Create it?", default=True):
        return
    raise BranchMissingError(f"Branch '{branch}' does not exist")


def decide(
    resolved_name: str,
    worktrees: Sequence[WorktreeRecord],
    locals_: Sequence[str],
    remotes: Sequence[str],
    *,
    plan_path: Callable[[str], Path],
    confirmer: Confirmer,
    create: bool = False,
) -> Action:
    existing = worktree_for_branch(worktrees, resolved_name)
    if existing is not None:
        return Reuse(existing.path)

    if resolved_name in locals_:
        return CreateFromLocal(plan_path(resolved_name), resolved_name)

    remote_ref = match_remote_branch(resolved_name, remotes)
    if remote_ref is not None:
        local_name = strip_remote_prefix(remote_ref)
        existing = worktree_for_branch(worktrees, local_name)
        if existing is not None:
            return Reuse(existing.path)
        if local_name in locals_:
            return CreateFromLocal(plan_path(local_name), local_name)
        return CreateFromRemote(plan_path(local_name), local_name, remote_ref)

    ensure_branch_or_prompt(resolved_name, create=create, confirmer=confirmer)
    return CreateNew(plan_path(resolved_name), resolved_name)


def apply_action(action: Action, runner: git.GitRunner) -> Path:
    """Carry out ``action`` and return the worktree path to switch to."""

    if isinstance(action, Reuse):
        return action.path
    parent = action.path.parent
    try:
        ensure_directory(parent)
    except OSError as exc:
        raise FilesystemError(f"Failed to create {parent}: {exc.strerror or exc}") from exc
    if isinstance(action, CreateFromLocal):
        git.worktree_add(runner, action.path, branch=action.branch)
    elif isinstance(action, CreateFromRemote):
        git.worktree_add(
            runner,
            action.path,
            new_branch=action.local_branch,
            start_point=action.remote_ref,
        )
    else:
        git.worktree_add(runner, action.path, new_branch=action.branch)
    return action.path


@dataclass
class WorktreeService:
    runner: git.GitRunner
    settings: Settings
    picker: Picker
    confirmer: Confirmer
    _planner: PathPlanner | None = field(default=None, init=False, repr=False)

    def plan_path(self, branch: str) -> Path:
        # Built on first use so reusing a worktree needs neither HOME nor a remote.
        if self._planner is None:
            self._planner = build_planner(self.settings, self.runner)
        return self._planner.plan(branch)

    def list_worktrees(self) -> list[WorktreeRecord]:
        git.ensure_git_repo(self.runner)
        return git.list_worktrees(self.runner)

    def build_candidates(
        self,
        worktrees: Sequence[WorktreeRecord],
        locals_: Sequence[str],
        remotes: Sequence[str],
    ) -> list[BranchCandidate]:
        metadata = git.batch_branch_metadata(self.runner)
        current = git.current_branch(self.runner)
        return resolve_candidates(worktrees, locals_, remotes, metadata, current)

    def timed_candidates(self) -> tuple[list[BranchCandidate], float]:
        git.ensure_git_repo(self.runner)
        start = time.perf_counter()
        candidates = self.build_candidates(
            git.list_worktrees(self.runner),
            git.list_local_branches(self.runner),
            git.list_remote_branches(self.runner),
        )
        return candidates, time.perf_counter() - start

    def checkout(self, branch: str | None = None, *, create: bool = False) -> Path:
        git.ensure_git_repo(self.runner)
        worktrees = git.list_worktrees(self.runner)
        locals_ = git.list_local_branches(self.runner)
        remotes = git.list_remote_branches(self.runner)

        candidates: list[BranchCandidate] = []
        if not branch:
            candidates = self.build_candidates(worktrees, locals_, remotes)
        selected = select_branch(branch, candidates, self.picker)

        action = decide(
            selected,
            worktrees,
            locals_,
            remotes,
            plan_path=self.plan_path,
            confirmer=self.confirmer,
            create=create,
        )
        logger.debug("Resolved %r to %s", selected, action)
        return apply_action(action, self.runner)

    def remove(self, branch: str | None = None) -> Path:
        git.ensure_git_repo(self.runner)
        worktrees = git.list_worktrees(self.runner)
        selected = select_worktree_branch(branch, worktrees, self.picker)
        record = worktree_for_branch(worktrees, selected)
        if record is None:
            raise ValidationError(f"No worktree found for branch '{selected}'")
        git.worktree_remove(self.runner, record.path)
        return record.path


__all__ = [
    "worktree_for_branch",
    "match_remote_branch",
    "ensure_branch_or_prompt",
    "decide",
    "apply_action",
    "WorktreeService",
]
