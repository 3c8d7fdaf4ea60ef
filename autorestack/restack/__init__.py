"""Stack update after a squash merge.

When a PR is squash-merged, every PR based on its branch (a direct target) and
everything stacked above those (indirect targets) still carries the merged
branch's original commits. This module merges the new base into each of them
so that history records the squash commit without re-applying its content.
"""

import logging
from typing import List, Optional, Set

from .models import (
    ConflictRecord, MergeEvent, RunReport, StackNode, UpdateResult,
)
from .report import ConflictReporter
from ..config.models import RestackConfig
from ..git import BEFORE_REF, SQUASH_REF
from ..typing import GitError, GitInterface, PRDirectoryInterface

logger = logging.getLogger(__name__)

__all__ = [
    'ConflictRecord', 'ConflictReporter', 'MergeEvent', 'RunReport', 'StackNode',
    'StackUpdater', 'StackWalker', 'UpdateResult', 'discover_stack',
]

class StackUpdater:
    """Per-branch update logic.

    Every update runs inside `checkout_for_update`, so a branch is either
    updated or left at its original tip before the next branch is touched.
    """

    def __init__(self, config: RestackConfig, git_cmd: GitInterface, event: MergeEvent):
        self.config = config
        self.git_cmd = git_cmd
        self.event = event

    def remote_ref(self, branch: str) -> str:
        return f"{self.config.repo.github_remote}/{branch}"

    def skip_if_clean(self, branch: str, base: str) -> bool:
        """True if base and the squash commit are both already in branch's history."""
        tip = self.git_cmd.ref_for(branch)
        return (self.git_cmd.is_ancestor(self.git_cmd.ref_for(base), tip)
                and self.git_cmd.is_ancestor(SQUASH_REF, tip))

    def update_direct(self, branch: str) -> UpdateResult:
        """Update a branch whose PR was based on the merged branch.

        Merges the merged branch's remote tip and the squash commit's first
        parent, then records the squash commit as a third parent of a
        synthetic merge commit whose tree is the result of those two merges.
        """
        target = self.event.target_branch
        if self.skip_if_clean(branch, target):
            logger.info(f"✓ {branch} already up-to-date; skipping")
            return UpdateResult.skipped(branch)

        merged_ref = self.remote_ref(self.event.merged_branch)
        logger.info(f"Updating direct target {branch} (from {self.event.merged_branch} to {target})")
        with self.git_cmd.checkout_for_update(branch):
            conflicts: List[str] = []
            if not self.git_cmd.merge(merged_ref):
                conflicts.append(merged_ref)
                self.git_cmd.merge_abort()

            squash_parent = self.git_cmd.rev_parse(f"{SQUASH_REF}~")
            if not self.git_cmd.merge(squash_parent):
                conflicts.append(squash_parent)
                self.git_cmd.merge_abort()

            if conflicts:
                # The first merge may have succeeded; drop it too
                self.git_cmd.reset_hard(BEFORE_REF)
                logger.info(f"Merge conflict updating {branch}; leaving it unchanged")
                return UpdateResult.conflicted(ConflictRecord(branch, conflicts))

            if not self.git_cmd.merge(SQUASH_REF, strategy="ours"):
                raise GitError(f"Failed to record squash commit in {branch}")
            tree = self.git_cmd.rev_parse("HEAD^{tree}")
            commit = self.git_cmd.commit_tree(
                tree,
                [BEFORE_REF, merged_ref, SQUASH_REF],
                f"Merge updates from {target} and squash commit",
            )
            self.git_cmd.reset_hard(commit)
        return UpdateResult.updated(branch, commit)

    def update_indirect(self, branch: str, base: str) -> UpdateResult:
        """Merge base (as updated earlier in this run) into a branch stacked on it."""
        if self.skip_if_clean(branch, base):
            logger.info(f"✓ {branch} already up-to-date with {base}; skipping")
            return UpdateResult.skipped(branch)

        logger.info(f"Updating indirect target {branch} (based on {base})")
        with self.git_cmd.checkout_for_update(branch) as before:
            if not self.git_cmd.merge(self.git_cmd.ref_for(base)):
                self.git_cmd.merge_abort()
                logger.info(f"Merge conflict updating {branch}; leaving it unchanged")
                return UpdateResult.conflicted(ConflictRecord(branch, [self.remote_ref(base)]))
            commit = self.git_cmd.rev_parse("HEAD")
        if commit == before:
            # "Already up to date"
            logger.info(f"✓ {branch} already contains {base}; nothing merged")
            return UpdateResult.skipped(branch)
        return UpdateResult.updated(branch, commit)

def discover_stack(github: PRDirectoryInterface, branch: str, seen: Optional[Set[str]] = None) -> StackNode:
    """Build the tree of PR branches based (transitively) on branch."""
    if seen is None:
        seen = set()
    seen.add(branch)
    children: List[StackNode] = []
    for child in github.list_head_branches(branch):
        if child in seen:
            logger.warning(f"Skipping {child}: already part of the stack (cycle in PR bases?)")
            continue
        children.append(discover_stack(github, child, seen))
    return StackNode(branch, tuple(children))

class StackWalker:
    """Drives a whole run: discover the stack, update it, retarget and push."""

    def __init__(self, config: RestackConfig, git_cmd: GitInterface, github: PRDirectoryInterface,
                 event: MergeEvent, updater: Optional[StackUpdater] = None,
                 reporter: Optional[ConflictReporter] = None):
        self.config = config
        self.git_cmd = git_cmd
        self.github = github
        self.event = event
        self.updater = updater or StackUpdater(config, git_cmd, event)
        self.reporter = reporter or ConflictReporter(config, github)

    def _apply(self, report: RunReport, result: UpdateResult) -> None:
        report.record(result)
        if result.conflict is not None:
            self.reporter.report(result.conflict)

    def run(self) -> RunReport:
        self.git_cmd.update_ref(SQUASH_REF, self.event.squash_commit)
        try:
            return self._run()
        finally:
            for ref in (SQUASH_REF, BEFORE_REF):
                self.git_cmd.delete_ref(ref)

    def _run(self) -> RunReport:
        event = self.event
        # Discover everything before changing anything
        stack = discover_stack(self.github, event.merged_branch)
        direct_targets = stack.children
        for line in stack.render():
            logger.info(line)

        report = RunReport()
        for node in direct_targets:
            self._apply(report, self.updater.update_direct(node.branch))
            for base, child in node.walk():
                self._apply(report, self.updater.update_indirect(child.branch, base))

        for node in direct_targets:
            self.github.set_base(node.branch, event.target_branch)
            report.retargeted.append(node.branch)

        touched = stack.branches()[1:]
        delete: Optional[str] = event.merged_branch
        if not self.git_cmd.remote_branch_exists(event.merged_branch):
            logger.info(f"{event.merged_branch} is already gone from the remote; not deleting it")
            delete = None
        self.git_cmd.push(touched, delete=delete)
        report.pushed = touched
        report.deleted = delete
        return report
