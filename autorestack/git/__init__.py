"""Git interfaces and implementation."""

import os
import shlex
import logging
from contextlib import contextmanager
from typing import Iterator, List, Optional, Sequence, Set
import git
from git.exc import GitCommandError, InvalidGitRepositoryError, NoSuchPathError
from ..typing import GitError
from ..config.models import RestackConfig
from ..util import unique

# Get module logger
logger = logging.getLogger(__name__)

# Internal refs holding commits for the duration of one run
SQUASH_REF = "refs/autorestack/squash-commit"
BEFORE_REF = "refs/autorestack/before-merge"

class RealGit:
    """Real Git implementation backed by GitPython."""
    def __init__(self, config: RestackConfig, directory: Optional[str] = None):
        """Initialize with config and the working checkout to operate in."""
        self.config: RestackConfig = config
        self.directory = directory or os.getcwd()
        self._repo: Optional[git.Repo] = None
        # Branches checked out (and possibly rewritten) during this run
        self._prepared: Set[str] = set()

    @property
    def repo(self) -> git.Repo:
        if self._repo is None:
            try:
                self._repo = git.Repo(self.directory, search_parent_directories=True)
            except (InvalidGitRepositoryError, NoSuchPathError):
                raise GitError(f"Not in a git repository: {self.directory}")
        return self._repo

    @property
    def remote(self) -> str:
        return self.config.repo.github_remote

    def _git(self, *args: str) -> str:
        cmd_str = " ".join(shlex.quote(a) for a in args)
        if self.config.user.log_git_commands:
            logger.info(f"> git {cmd_str}")
        else:
            logger.debug(f"> git {cmd_str}")
        method = getattr(self.repo.git, args[0].replace('-', '_'))
        try:
            result = method(*args[1:])
        except GitCommandError as e:
            raise GitError(f"Git command failed: {e}", status=e.status) from e
        return result if isinstance(result, str) else str(result)

    def run_cmd(self, command: str) -> str:
        """Run git command given as a single string."""
        return self._git(*shlex.split(command.strip()))

    def must_git(self, command: str) -> str:
        """Run git command, failing on error."""
        return self.run_cmd(command)

    def is_ancestor(self, ancestor: str, descendant: str) -> bool:
        """Check whether ancestor is reachable from descendant."""
        try:
            self._git("merge-base", "--is-ancestor", ancestor, descendant)
        except GitError as e:
            # Exit status 1 means "not an ancestor"; anything else is a real error
            if e.status == 1:
                return False
            raise
        return True

    def rev_parse(self, rev: str) -> str:
        return self._git("rev-parse", rev).strip()

    def update_ref(self, name: str, value: str) -> None:
        self._git("update-ref", name, value)

    def delete_ref(self, name: str) -> None:
        """Delete ref if it exists."""
        if self.ref_exists(name):
            self._git("update-ref", "-d", name)

    def ref_exists(self, name: str) -> bool:
        try:
            self._git("rev-parse", "--verify", "--quiet", name)
        except GitError:
            return False
        return True

    def current_branch(self) -> str:
        return self._git("rev-parse", "--abbrev-ref", "HEAD").strip()

    def ref_for(self, branch: str) -> str:
        """Local branch once it has been checked out for update, else its remote-tracking ref."""
        if branch in self._prepared:
            return branch
        return f"{self.remote}/{branch}"

    def remote_branch_exists(self, branch: str) -> bool:
        return self.ref_exists(f"refs/remotes/{self.remote}/{branch}")

    @contextmanager
    def checkout_for_update(self, branch: str) -> Iterator[str]:
        """Check out branch at its remote tip and yield the pre-update commit.

        The tip is stashed under BEFORE_REF. If the body raises, any in-progress
        merge is aborted and the branch is reset to that tip before re-raising,
        so the checkout is never left half-merged.
        """
        if branch in self._prepared:
            self._git("checkout", branch)
        else:
            self._git("checkout", "-B", branch, f"{self.remote}/{branch}")
            self._prepared.add(branch)
        self.update_ref(BEFORE_REF, "HEAD")
        before = self.rev_parse("HEAD")
        try:
            yield before
        except Exception:
            logger.error(f"Restoring {branch} to {before[:8]} after failure")
            if self.merge_in_progress():
                self.merge_abort()
            self.reset_hard(before)
            raise

    def merge(self, ref: str, strategy: Optional[str] = None) -> bool:
        """Merge ref into HEAD. Returns False if the merge stopped on conflicts."""
        args: List[str] = ["merge", "--no-edit"]
        if strategy:
            args += ["-s", strategy]
        try:
            self._git(*args, ref)
        except GitError as e:
            logger.info(f"Merge of {ref} failed: {e}")
            return False
        return True

    def merge_in_progress(self) -> bool:
        return os.path.exists(os.path.join(self.repo.git_dir, "MERGE_HEAD"))

    def merge_abort(self) -> None:
        self._git("merge", "--abort")

    def commit_tree(self, tree: str, parents: Sequence[str], message: str) -> str:
        """Create a commit object from an explicit tree and parent list."""
        args: List[str] = ["commit-tree", tree]
        for parent in parents:
            args += ["-p", parent]
        args += ["-m", message]
        return self._git(*args).strip()

    def reset_hard(self, rev: str) -> None:
        self._git("reset", "--hard", rev)

    def push(self, branches: Sequence[str], delete: Optional[str] = None) -> None:
        """Push branches and delete one remote branch in a single push."""
        refspecs = [f"{self.ref_for(b)}:refs/heads/{b}" for b in unique(list(branches))]
        if delete:
            refspecs.insert(0, f":refs/heads/{delete}")
        if not refspecs:
            logger.info("Nothing to push")
            return
        if self.config.tool.pretend:
            logger.info(f"[PRETEND] Would run: git push {self.remote} {' '.join(refspecs)}")
            return
        self._git("push", self.remote, *refspecs)
