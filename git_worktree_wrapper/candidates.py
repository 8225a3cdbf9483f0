"""Merge worktrees, local and remote branches into one ranked candidate list."""

from __future__ import annotations

from typing import Iterable, Mapping, Sequence

from .models import BranchCandidate, BranchMetadata, BranchSource, BranchSummary, WorktreeRecord


def strip_remote_prefix(name: str) -> str:
    """Drop the leading ``<remote>/`` segment, if any."""

    _, sep, rest = name.partition("/")
    return rest if sep else name


def sort_by_recent(names: Iterable[str], metadata: Mapping[str, BranchMetadata]) -> list[str]:
    """De-duplicate, newest commit first, then by name. Unknown refs sort last."""

    unique = list(dict.fromkeys(names))

    def _key(name: str) -> tuple[int, str]:
        info = metadata.get(name)
        timestamp = info.timestamp_unix if info else 0
        return -timestamp, name

    return sorted(unique, key=_key)


def _summary_for(name: str, metadata: Mapping[str, BranchMetadata]) -> BranchSummary:
    info = metadata.get(name)
    return info.summary if info else BranchSummary.placeholder()


def resolve_candidates(
    worktrees: Sequence[WorktreeRecord],
    locals_: Sequence[str],
    remotes: Sequence[str],
    metadata: Mapping[str, BranchMetadata],
    current_branch: str | None,
) -> list[BranchCandidate]:
    worktree_set = {record.branch for record in worktrees if record.branch}
    local_set = set(locals_)

    worktree_names = sort_by_recent(worktree_set, metadata)
    if current_branch in worktree_names:
        worktree_names.remove(current_branch)
        worktree_names.insert(0, current_branch)

    candidates: list[BranchCandidate] = []
    for name in worktree_names:
        candidates.append(
            BranchCandidate(
                name=name,
                source=BranchSource.WORKTREE,
                summary=_summary_for(name, metadata),
                is_current=name == current_branch,
            )
        )

    for name in sort_by_recent(locals_, metadata):
        if name in worktree_set:
            continue
        candidates.append(
            BranchCandidate(
                name=name,
                source=BranchSource.LOCAL,
                summary=_summary_for(name, metadata),
                is_current=name == current_branch,
            )
        )

    for name in sort_by_recent(remotes, metadata):
        local_name = strip_remote_prefix(name)
        if local_name in worktree_set or local_name in local_set:
            continue
        candidates.append(
            BranchCandidate(
                name=name,
                source=BranchSource.REMOTE,
                summary=_summary_for(name, metadata),
                is_current=local_name == current_branch,
            )
        )
    return candidates


def format_candidate(candidate: BranchCandidate) -> str:
    marker = "*" if candidate.is_current else " "
    tag = f"[{candidate.source.label}{marker}]"
    summary = candidate.summary
    return (
        f"{tag:<4} {candidate.name} \"{summary.subject}\" "
        f"[{summary.author}] ({summary.timestamp_label})"
    )


def worktree_branches(worktrees: Iterable[WorktreeRecord]) -> list[str]:
    return sorted({record.branch for record in worktrees if record.branch})


__all__ = [
    "strip_remote_prefix",
    "sort_by_recent",
    "resolve_candidates",
    "format_candidate",
    "worktree_branches",
]
