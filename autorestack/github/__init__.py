"""Pull request directory backed by the GitHub API."""

import os
import logging
from pathlib import Path
from typing import Dict, List, Optional, Protocol, runtime_checkable

import yaml

from .types import PullRequestSummary
from ..config.models import RestackConfig
from ..typing import PullRequestNotFoundError

# Get module logger
logger = logging.getLogger(__name__)

# The slice of PyGithub's object model this package touches. Both the real
# library (via adapters) and the in-memory fake used by tests satisfy these.
@runtime_checkable
class GitHubRefProtocol(Protocol):
    """Base or head of a pull request."""
    @property
    def ref(self) -> str:
        ...

    @property
    def sha(self) -> str:
        ...

@runtime_checkable
class GitHubPullRequestProtocol(Protocol):
    @property
    def number(self) -> int:
        ...

    @property
    def title(self) -> str:
        ...

    @property
    def state(self) -> str:
        """open or closed"""
        ...

    @property
    def base(self) -> GitHubRefProtocol:
        ...

    @property
    def head(self) -> GitHubRefProtocol:
        ...

    def edit(self, title: Optional[str] = None, body: Optional[str] = None, state: Optional[str] = None,
             base: Optional[str] = None, **kwargs: object) -> None:
        ...

    def create_issue_comment(self, body: str) -> None:
        ...

    def add_to_labels(self, *labels: str) -> None:
        ...

@runtime_checkable
class GitHubRepoProtocol(Protocol):
    def get_pulls(self, state: str = "open", sort: str = "",
                  direction: str = "", head: str = "", base: str = "") -> List[GitHubPullRequestProtocol]:
        """Pull requests filtered by state, `owner:branch` head and base branch."""
        ...

@runtime_checkable
class PyGithubProtocol(Protocol):
    """Entry point object, `github.Github` or the test fake."""
    def get_repo(self, full_name_or_id: str) -> GitHubRepoProtocol:
        ...

def find_github_token() -> Optional[str]:
    """Find GitHub token from env vars or gh CLI config."""
    for var in ("GITHUB_TOKEN", "GH_TOKEN"):
        token = os.environ.get(var)
        if token:
            return token

    # Then try gh CLI config at ~/.config/gh/hosts.yml
    try:
        gh_config_path = Path.home() / ".config" / "gh" / "hosts.yml"
        if gh_config_path.exists():
            with open(gh_config_path, "r") as f:
                gh_config = yaml.safe_load(f)
                if gh_config and "github.com" in gh_config:
                    github_config: Dict[str, object] = gh_config["github.com"]
                    token = github_config.get("oauth_token")
                    if isinstance(token, str):
                        return token
    except Exception as e:
        logger.error(f"Error reading gh CLI config: {e}")
    return None


class GitHubClient:
    """Pull request directory backed by the GitHub API."""
    def __init__(self, config: RestackConfig, github_client: PyGithubProtocol):
        """Initialize with config and GitHub client implementation (real or fake)."""
        self.config = config
        self.client = github_client
        self._repo: Optional[GitHubRepoProtocol] = None

    @property
    def repo(self) -> GitHubRepoProtocol:
        """Get GitHub repository."""
        if self._repo is None:
            owner = self.config.repo.github_repo_owner
            name = self.config.repo.github_repo_name
            if not owner or not name:
                raise ValueError("GitHub repository owner/name not configured")
            self._repo = self.client.get_repo(f"{owner}/{name}")
        return self._repo

    @property
    def pretend(self) -> bool:
        return self.config.tool.pretend

    def list_pull_requests(self, base: str) -> List[PullRequestSummary]:
        """List open pull requests whose base is the given branch."""
        logger.info(f"> github pr list --base {base}")
        pulls = self.repo.get_pulls(state="open", base=base)
        result = [PullRequestSummary(number=pr.number, title=pr.title,
                                     head_ref=pr.head.ref, base_ref=pr.base.ref)
                  for pr in pulls]
        for pr in result:
            logger.debug(f"  PR #{pr.number}: base={pr.base_ref} head={pr.head_ref}")
        return result

    def list_head_branches(self, base: str) -> List[str]:
        """Head branch names of open pull requests based on `base`, in API order."""
        return [pr.head_ref for pr in self.list_pull_requests(base)]

    def get_pull_request_for_branch(self, branch_name: str) -> GitHubPullRequestProtocol:
        """Get the open pull request whose head is branch_name."""
        owner = self.config.repo.github_repo_owner
        head_filter = f"{owner}:{branch_name}"
        logger.debug(f"Using head filter: {head_filter}")
        for pr in self.repo.get_pulls(state='open', head=head_filter):
            if pr.head.ref == branch_name:
                return pr
        raise PullRequestNotFoundError(branch_name)

    def set_base(self, branch: str, base: str) -> None:
        """Point the pull request for branch at a new base branch."""
        if self.pretend:
            logger.info(f"[PRETEND] Would run: github pr edit {branch} --base {base}")
            return
        pr = self.get_pull_request_for_branch(branch)
        logger.info(f"> github pr edit #{pr.number} ({branch}) --base {base}")
        pr.edit(base=base)

    def comment(self, branch: str, body: str) -> None:
        """Comment on the pull request for branch."""
        if self.pretend:
            logger.info(f"[PRETEND] Would comment on {branch}:\n{body}")
            return
        pr = self.get_pull_request_for_branch(branch)
        logger.info(f"> github pr comment #{pr.number} ({branch})")
        pr.create_issue_comment(body)

    def add_label(self, branch: str, label: str) -> None:
        """Add a label to the pull request for branch."""
        if self.pretend:
            logger.info(f"[PRETEND] Would label {branch} with {label}")
            return
        pr = self.get_pull_request_for_branch(branch)
        logger.info(f"> github pr edit #{pr.number} ({branch}) --add-label {label}")
        pr.add_to_labels(label)
