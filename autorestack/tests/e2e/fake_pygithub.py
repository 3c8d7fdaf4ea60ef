"""Fake PyGithub implementation for testing."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Any, Optional

logger = logging.getLogger(__name__)

@dataclass
class FakeRef:
    """Fake implementation of the base/head ref of a PyGithub pull request."""
    ref: str
    sha: str = ""

@dataclass
class FakePullRequestData:
    """Database record for a pull request."""
    number: int
    title: str
    body: str
    state: str
    owner_login: str
    repository_name: str
    base_ref: str
    head_ref: str
    labels: List[str] = field(default_factory=list)
    comments: List[str] = field(default_factory=list)

@dataclass
class FakePullRequest:
    """API response object for a pull request."""
    data_record: FakePullRequestData

    @property
    def data(self) -> FakePullRequestData:
        return self.data_record

    @property
    def number(self) -> int:
        return self.data_record.number

    @property
    def title(self) -> str:
        return self.data_record.title

    @property
    def body(self) -> str:
        return self.data_record.body

    @property
    def state(self) -> str:
        return self.data_record.state

    @property
    def base(self) -> FakeRef:
        return FakeRef(ref=self.data_record.base_ref)

    @property
    def head(self) -> FakeRef:
        return FakeRef(ref=self.data_record.head_ref)

    @property
    def labels(self) -> List[str]:
        return list(self.data_record.labels)

    @property
    def comments(self) -> List[str]:
        return list(self.data_record.comments)

    def edit(self, title: str | None = None, body: str | None = None, state: str | None = None,
             base: str | None = None, **kwargs: Any) -> None:
        """Update pull request properties."""
        if title is not None:
            self.data_record.title = title
        if body is not None:
            self.data_record.body = body
        if state is not None:
            self.data_record.state = state
        if base is not None:
            self.data_record.base_ref = base

    def create_issue_comment(self, body: str) -> None:
        """Add a comment to the pull request."""
        logger.info(f"PR #{self.number} comment: {body}")
        self.data_record.comments.append(body)

    def add_to_labels(self, *labels: str) -> None:
        """Add labels to the pull request."""
        for label in labels:
            if str(label) not in self.data_record.labels:
                self.data_record.labels.append(str(label))
        logger.info(f"PR #{self.number} labels: {labels}")

@dataclass
class FakeRepository:
    """Fake implementation of the Repository class from PyGithub."""
    owner_login: str
    name: str
    full_name: str
    next_pr_number: int = 1
    pulls: Dict[int, FakePullRequest] = field(default_factory=dict)

    def get_pull(self, number: int) -> FakePullRequest:
        """Get pull request by number."""
        if number not in self.pulls:
            raise FakeUnknownObjectException(f"PR #{number} not found in repository {self.full_name}")
        return self.pulls[number]

    def get_pulls(self, state: str = "open", sort: str = "",
                  direction: str = "", head: str = "", base: str = "") -> List[FakePullRequest]:
        """Get pull requests with optional filtering, oldest first.

        Like the real API, `head` is given as `owner:branch`.
        """
        head_owner, _, head_ref = head.rpartition(":")
        result: List[FakePullRequest] = []
        for pr in self.pulls.values():
            if state and state != "all" and pr.state != state:
                continue
            if head and (pr.head.ref != head_ref or (head_owner and head_owner != self.owner_login)):
                continue
            if base and pr.base.ref != base:
                continue
            result.append(pr)
        return result

    def create_pull(self, title: str, body: str, base: str, head: str,
                    maintainer_can_modify: bool = True, draft: bool = False) -> FakePullRequest:
        """Create a new pull request."""
        if self.get_pulls(state="open", head=f"{self.owner_login}:{head}"):
            raise FakeGithubException(f"A pull request already exists for {self.owner_login}:{head}.")
        pr = FakePullRequest(FakePullRequestData(
            number=self.next_pr_number,
            title=title,
            body=body,
            state="open",
            owner_login=self.owner_login,
            repository_name=self.name,
            base_ref=base,
            head_ref=head,
        ))
        self.pulls[pr.number] = pr
        self.next_pr_number += 1
        return pr

@dataclass
class FakeGithub:
    """Fake implementation of the Github class from PyGithub."""
    token: str = ""
    repositories: Dict[str, FakeRepository] = field(default_factory=dict)

    def get_repo(self, full_name_or_id: str) -> FakeRepository:
        """Get repository by full name, creating it on first use."""
        if full_name_or_id not in self.repositories:
            owner_login, name = full_name_or_id.split('/')
            self.repositories[full_name_or_id] = FakeRepository(
                owner_login=owner_login, name=name, full_name=full_name_or_id)
        return self.repositories[full_name_or_id]

    def find_pull(self, head: str, repo_name: Optional[str] = None) -> FakePullRequest:
        """Find the most recent pull request for a head branch, in any state."""
        repos = [self.get_repo(repo_name)] if repo_name else list(self.repositories.values())
        matches = [pr for repo in repos for pr in repo.pulls.values() if pr.head.ref == head]
        if not matches:
            raise FakeUnknownObjectException(f"No pull request with head {head}")
        return matches[-1]

# Fake exceptions
class FakeGithubException(Exception):
    """Base exception class for fake GitHub."""
    pass

class FakeUnknownObjectException(FakeGithubException):
    """Fake unknown object exception."""
    pass
