"""Resolve the branch the user wants, by name or through the picker."""

from __future__ import annotations

from typing import Sequence

from .candidates import format_candidate, worktree_branches
from .exceptions import SelectionError, UserAbort
from .interactive import Picker
from .models import BranchCandidate, WorktreeRecord


def select_branch(
    explicit_name: str | None,
    candidates: Sequence[BranchCandidate],
    picker: Picker,
) -> str:
    # Explicit names are matched against worktrees and refs later, by the decider.
    if explicit_name:
        return explicit_name
    if not candidates:
        raise SelectionError("No branches found")
    labels = [format_candidate(candidate) for candidate in candidates]
    index = picker.present("Select branch", labels, default_index=0)
    if index is None:
        raise UserAbort("Selection cancelled")
    return candidates[index].name


def select_worktree_branch(
    explicit_name: str | None,
    worktrees: Sequence[WorktreeRecord],
    picker: Picker,
) -> str:
    if explicit_name:
        return explicit_name
    branches = worktree_branches(worktrees)
    if not branches:
        raise SelectionError("No worktrees found")
    index = picker.present("Select worktree", branches, default_index=0)
    if index is None:
        raise UserAbort("Selection cancelled")
    return branches[index]


__all__ = ["select_branch", "select_worktree_branch"]
