"""Common types used across the codebase."""

from typing import ContextManager, List, Optional, Protocol, Sequence


class RestackError(Exception):
    """Base class for errors raised while updating a PR stack."""


class ConfigurationError(RestackError):
    """A required input is missing."""


class GitError(RestackError):
    """A git command failed outside of an anticipated merge conflict."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class PullRequestNotFoundError(RestackError):
    """No open pull request exists for a branch."""

    def __init__(self, branch: str):
        super().__init__(f"No open pull request found for branch {branch}")
        self.branch = branch


class GitInterface(Protocol):
    """Operations the stack update consumes from the version-control store."""

    def run_cmd(self, command: str) -> str:
        ...

    def must_git(self, command: str) -> str:
        ...

    def is_ancestor(self, ancestor: str, descendant: str) -> bool:
        ...

    def rev_parse(self, rev: str) -> str:
        ...

    def update_ref(self, name: str, value: str) -> None:
        ...

    def delete_ref(self, name: str) -> None:
        ...

    def ref_for(self, branch: str) -> str:
        """Ref naming the branch's most recent tip in this run."""
        ...

    def remote_branch_exists(self, branch: str) -> bool:
        ...

    def checkout_for_update(self, branch: str) -> ContextManager[str]:
        """Check out the branch; yields its pre-update tip."""
        ...

    def merge(self, ref: str, strategy: Optional[str] = None) -> bool:
        """Merge ref into HEAD; False on conflict."""
        ...

    def merge_abort(self) -> None:
        ...

    def commit_tree(self, tree: str, parents: Sequence[str], message: str) -> str:
        ...

    def reset_hard(self, rev: str) -> None:
        ...

    def push(self, branches: Sequence[str], delete: Optional[str] = None) -> None:
        ...


class PRDirectoryInterface(Protocol):
    """Operations the stack update consumes from the pull request service."""

    def list_head_branches(self, base: str) -> List[str]:
        """Head branches of open PRs whose base is `base`."""
        ...

    def set_base(self, branch: str, base: str) -> None:
        ...

    def comment(self, branch: str, body: str) -> None:
        ...

    def add_label(self, branch: str, label: str) -> None:
        ...
