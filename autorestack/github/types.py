"""Type definitions for GitHub API responses."""

from pydantic import BaseModel

class PullRequestSummary(BaseModel):
    """The fields of an open pull request the stack walk needs."""
    number: int
    title: str = ""
    head_ref: str
    base_ref: str
