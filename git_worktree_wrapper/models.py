"""Shared dataclasses used throughout the CLI."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Union


@dataclass(frozen=True, slots=True)
class WorktreeRecord:
    """A single worktree reported by ``git worktree list``."""

    path: Path
    branch: str | None = None


@dataclass(frozen=True, slots=True)
class BranchSummary:
    timestamp_label: str
    author: str
    subject: str

    @classmethod
    def placeholder(cls) -> "BranchSummary":
        return cls(
            timestamp_label="unknown time",
            author="unknown author",
            subject="unknown subject",
        )


@dataclass(frozen=True, slots=True)
class BranchMetadata:
    """Last-commit details for a ref, keyed elsewhere by short name."""

    timestamp_unix: int
    summary: BranchSummary

    @property
    def timestamp_label(self) -> str:
        return self.summary.timestamp_label

    @property
    def author(self) -> str:
        return self.summary.author

    @property
    def subject(self) -> str:
        return self.summary.subject


class BranchSource(Enum):
    WORKTREE = "T"
    LOCAL = "L"
    REMOTE = "R"

    @property
    def label(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class BranchCandidate:
    name: str
    source: BranchSource
    summary: BranchSummary
    is_current: bool = False


@dataclass(frozen=True, slots=True)
class Reuse:
    """An existing worktree already holds the branch."""

    path: Path


@dataclass(frozen=True, slots=True)
class CreateFromLocal:
    path: Path
    branch: str


@dataclass(frozen=True, slots=True)
class CreateFromRemote:
    path: Path
    local_branch: str
    remote_ref: str


@dataclass(frozen=True, slots=True)
class CreateNew:
    path: Path
    branch: str


Action = Union[Reuse, CreateFromLocal, CreateFromRemote, CreateNew]


__all__ = [
    "WorktreeRecord",
    "BranchSummary",
    "BranchMetadata",
    "BranchSource",
    "BranchCandidate",
    "Reuse",
    "CreateFromLocal",
    "CreateFromRemote",
    "CreateNew",
    "Action",
]
