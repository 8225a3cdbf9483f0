"""Tests for branch selection by name and through the picker."""

from __future__ import annotations

import unittest
from pathlib import Path

from git_worktree_wrapper.exceptions import SelectionError, UserAbort
from git_worktree_wrapper.models import BranchCandidate, BranchSource, BranchSummary, WorktreeRecord
from git_worktree_wrapper.selection import select_branch, select_worktree_branch

from tests.fakes import ScriptedPicker


def candidate(name: str, source: BranchSource = BranchSource.LOCAL) -> BranchCandidate:
    return BranchCandidate(name=name, source=source, summary=BranchSummary.placeholder())


class SelectBranchTests(unittest.TestCase):
    def test_explicit_name_returned_verbatim(self) -> None:
        picker = ScriptedPicker()
        self.assertEqual(select_branch("not-a-candidate", [], picker), "not-a-candidate")
        self.assertEqual(picker.calls, [])

    def test_empty_candidates_fail_before_picker(self) -> None:
        picker = ScriptedPicker()
        with self.assertRaisesRegex(SelectionError, "No branches found"):
            select_branch(None, [], picker)
        self.assertEqual(picker.calls, [])

    def test_picker_seeded_in_order_with_first_default(self) -> None:
        picker = ScriptedPicker(choice=1)
        candidates = [candidate("main", BranchSource.WORKTREE), candidate("origin/feat", BranchSource.REMOTE)]

        self.assertEqual(select_branch(None, candidates, picker), "origin/feat")
        message, items, default_index = picker.calls[0]
        self.assertEqual(message, "Select branch")
        self.assertEqual(default_index, 0)
        self.assertTrue(items[0].startswith("[T ] main"))
        self.assertTrue(items[1].startswith("[R ] origin/feat"))

    def test_cancelled_pick_is_failure(self) -> None:
        with self.assertRaisesRegex(UserAbort, "Selection cancelled"):
            select_branch(None, [candidate("main")], ScriptedPicker(choice=None))


class SelectWorktreeBranchTests(unittest.TestCase):
    def setUp(self) -> None:
        self.worktrees = [
            WorktreeRecord(Path("/r/zeta"), "zeta"),
            WorktreeRecord(Path("/r/alpha"), "alpha"),
            WorktreeRecord(Path("/r/detached"), None),
        ]

    def test_offers_sorted_worktree_branches(self) -> None:
        picker = ScriptedPicker(choice=1)
        self.assertEqual(select_worktree_branch(None, self.worktrees, picker), "zeta")
        self.assertEqual(picker.calls[0][1], ["alpha", "zeta"])

    def test_no_worktrees(self) -> None:
        with self.assertRaisesRegex(SelectionError, "No worktrees found"):
            select_worktree_branch(None, [WorktreeRecord(Path("/r/d"))], ScriptedPicker())

    def test_cancelled(self) -> None:
        with self.assertRaises(UserAbort):
            select_worktree_branch(None, self.worktrees, ScriptedPicker(choice=None))


if __name__ == "__main__":
    unittest.main()
