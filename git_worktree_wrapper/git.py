"""Thin wrappers around git CLI commands."""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, Sequence

from .exceptions import GitCommandError, RepoDetectionError
from .models import BranchMetadata, BranchSummary, WorktreeRecord

logger = logging.getLogger(__name__)

FIELD_SEPARATOR = "\x1f"
METADATA_FORMAT = (
    "%(refname:short)%1f%(committerdate:unix)%1f%(committerdate:iso8601-strict)"
    "%1f%(authorname)%1f%(subject)"
)


@dataclass(frozen=True, slots=True)
class GitResult:
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class GitRunner(Protocol):
    """Anything able to run a git command and report how it went."""

    def run(self, args: Sequence[str]) -> GitResult:
        ...


@dataclass(slots=True)
class SubprocessGitRunner:
    cwd: Path | None = None

    def run(self, args: Sequence[str]) -> GitResult:
        proc = run_git(args, cwd=self.cwd)
        return GitResult(proc.returncode, proc.stdout, proc.stderr)


def run_git(
    args: Sequence[str],
    *,
    cwd: Path | None = None,
) -> subprocess.CompletedProcess[str]:
    command = ["git", *args]
    logger.debug("Running %s", " ".join(command))
    try:
        return subprocess.run(
            command,
            cwd=str(cwd) if cwd else None,
            text=True,
            capture_output=True,
            check=False,
        )
    except FileNotFoundError as exc:
        raise GitCommandError(command, 127, "git executable not found in PATH") from exc


def git_output(runner: GitRunner, args: Sequence[str]) -> str:
    """Run ``git <args>`` and return stdout, raising with git's stderr on failure."""

    result = runner.run(args)
    if not result.ok:
        raise GitCommandError(["git", *args], result.returncode, result.stderr)
    return result.stdout


def ensure_git_repo(runner: GitRunner) -> Path:
    try:
        output = git_output(runner, ["rev-parse", "--show-toplevel"])
    except GitCommandError as exc:
        raise RepoDetectionError("Not a git repository") from exc
    return Path(output.strip())


def parse_worktree_list(text: str) -> list[WorktreeRecord]:
    """Parse ``git worktree list --porcelain`` output in discovery order."""

    records: list[WorktreeRecord] = []
    current_path: Path | None = None
    current_branch: str | None = None
    for line in text.splitlines():
        if line.startswith("worktree "):
            if current_path is not None:
                records.append(WorktreeRecord(path=current_path, branch=current_branch))
            current_path = Path(line[len("worktree "):])
            current_branch = None
        elif line.startswith("branch ") and current_path is not None:
            ref = line[len("branch "):].strip()
            if ref.startswith("refs/heads/"):
                current_branch = ref[len("refs/heads/"):]
            else:
                current_branch = None
    if current_path is not None:
        records.append(WorktreeRecord(path=current_path, branch=current_branch))
    return records


def list_worktrees(runner: GitRunner) -> list[WorktreeRecord]:
    return parse_worktree_list(git_output(runner, ["worktree", "list", "--porcelain"]))


def parse_ref_names(text: str) -> list[str]:
    return [line.strip() for line in text.splitlines() if line.strip()]


def list_local_branches(runner: GitRunner) -> list[str]:
    output = git_output(runner, ["for-each-ref", "refs/heads", "--format=%(refname:short)"])
    return parse_ref_names(output)


def list_remote_branches(runner: GitRunner) -> list[str]:
    output = git_output(runner, ["for-each-ref", "refs/remotes", "--format=%(refname:short)"])
    # Newer git shortens refs/remotes/<remote>/HEAD to plain "<remote>".
    return [
        name
        for name in parse_ref_names(output)
        if "/" in name and not name.endswith("/HEAD")
    ]


def parse_branch_metadata(text: str) -> dict[str, BranchMetadata]:
    """Parse the batched ``for-each-ref`` metadata listing.

    Sparse lines keep whatever fields they carry; missing trailing fields fall
    back to empty strings and an unparseable timestamp to zero.
    """

    metadata: dict[str, BranchMetadata] = {}
    for line in text.splitlines():
        if not line.strip():
            continue
        parts = [part.strip() for part in line.split(FIELD_SEPARATOR)]
        parts += [""] * (5 - len(parts))
        name, raw_timestamp, label, author, subject = parts[:5]
        if not name:
            continue
        try:
            timestamp = int(raw_timestamp)
        except ValueError:
            timestamp = 0
        metadata[name] = BranchMetadata(
            timestamp_unix=timestamp,
            summary=BranchSummary(timestamp_label=label, author=author, subject=subject),
        )
    return metadata


def batch_branch_metadata(runner: GitRunner) -> dict[str, BranchMetadata]:
    output = git_output(
        runner,
        ["for-each-ref", "refs/heads", "refs/remotes", f"--format={METADATA_FORMAT}"],
    )
    return parse_branch_metadata(output)


def current_branch(runner: GitRunner) -> str | None:
    result = runner.run(["rev-parse", "--abbrev-ref", "HEAD"])
    if not result.ok:
        # Unborn HEAD in a fresh repository.
        return None
    lines = result.stdout.splitlines()
    name = lines[0].strip() if lines else ""
    if not name or name == "HEAD":
        return None
    return name


def remote_url(runner: GitRunner, remote: str = "origin") -> str | None:
    result = runner.run(["remote", "get-url", remote])
    if not result.ok:
        return None
    return result.stdout.strip() or None


def worktree_add(
    runner: GitRunner,
    target: Path,
    *,
    branch: str | None = None,
    new_branch: str | None = None,
    start_point: str | None = None,
) -> None:
    args = ["worktree", "add", str(target)]
    if new_branch:
        args += ["-b", new_branch]
        if start_point:
            args.append(start_point)
    elif branch:
        args.append(branch)
    git_output(runner, args)


def worktree_remove(runner: GitRunner, target: Path) -> None:
    git_output(runner, ["worktree", "remove", str(target)])


__all__ = [
    "GitResult",
    "GitRunner",
    "SubprocessGitRunner",
    "run_git",
    "git_output",
    "ensure_git_repo",
    "parse_worktree_list",
    "list_worktrees",
    "parse_ref_names",
    "list_local_branches",
    "list_remote_branches",
    "parse_branch_metadata",
    "batch_branch_metadata",
    "current_branch",
    "remote_url",
    "worktree_add",
    "worktree_remove",
]
