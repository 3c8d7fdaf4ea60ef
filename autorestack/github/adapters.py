"""Wrap PyGithub objects in the protocols GitHubClient talks to."""

from typing import Any, Dict, List, Optional
import logging

from github import Github
from github.Repository import Repository
from github.PullRequest import PullRequest as PyGithubPullRequest
from github.GithubObject import NotSet

from . import (
    PyGithubProtocol,
    GitHubRepoProtocol,
    GitHubPullRequestProtocol,
    GitHubRefProtocol,
)

logger = logging.getLogger(__name__)

def _drop_unset(**kwargs: Any) -> Dict[str, Any]:
    """PyGithub wants NotSet, not None or "", for arguments left out."""
    return {k: (v if v not in (None, "") else NotSet) for k, v in kwargs.items()}


class PyGithubPullRequestAdapter(GitHubPullRequestProtocol):
    """A PyGithub pull request."""

    def __init__(self, pr: PyGithubPullRequest) -> None:
        self._pr = pr

    @property
    def number(self) -> int:
        return self._pr.number

    @property
    def title(self) -> str:
        return self._pr.title

    @property
    def state(self) -> str:
        return self._pr.state

    @property
    def base(self) -> GitHubRefProtocol:
        return self._pr.base

    @property
    def head(self) -> GitHubRefProtocol:
        return self._pr.head

    def edit(self, title: Optional[str] = None, body: Optional[str] = None,
             state: Optional[str] = None, base: Optional[str] = None, **kwargs: object) -> None:
        self._pr.edit(**_drop_unset(title=title, body=body, state=state, base=base))

    def create_issue_comment(self, body: str) -> None:
        self._pr.create_issue_comment(body)

    def add_to_labels(self, *labels: str) -> None:
        self._pr.add_to_labels(*labels)


class PyGithubRepoAdapter(GitHubRepoProtocol):
    """A PyGithub repository; only pull request listing is needed."""

    def __init__(self, repo: Repository) -> None:
        self._repo = repo

    def get_pulls(self, state: str = "open", sort: str = "",
                  direction: str = "", head: str = "", base: str = "") -> List[GitHubPullRequestProtocol]:
        # Paginates through every matching PR
        pulls = self._repo.get_pulls(state=state, **_drop_unset(sort=sort, direction=direction, head=head, base=base))
        return [PyGithubPullRequestAdapter(pr) for pr in pulls]


class PyGithubAdapter(PyGithubProtocol):
    def __init__(self, github: Github) -> None:
        self._github = github

    def get_repo(self, full_name_or_id: str) -> GitHubRepoProtocol:
        return PyGithubRepoAdapter(self._github.get_repo(full_name_or_id))


def create_github_adapter(token: str, base_url: Optional[str] = None) -> PyGithubAdapter:
    """Real PyGithub client; base_url points at GitHub Enterprise when set."""
    if base_url:
        logger.debug(f"Using GitHub API at {base_url}")
        return PyGithubAdapter(Github(token, base_url=base_url))
    return PyGithubAdapter(Github(token))
