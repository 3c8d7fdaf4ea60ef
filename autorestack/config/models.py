"""Pydantic models for config types."""

from typing import Optional
from pydantic import BaseModel, Field

class RepoConfig(BaseModel):
    """Repository configuration."""
    github_remote: str = "origin"
    github_repo_owner: Optional[str] = None
    github_repo_name: Optional[str] = None
    github_api_url: Optional[str] = None
    conflict_label: str = "autorestack-needs-conflict-resolution"

    class Config:
        """Pydantic config."""
        extra = "allow"

class UserConfig(BaseModel):
    """User configuration."""
    log_git_commands: bool = True

    class Config:
        """Pydantic config."""
        extra = "allow"

class ToolConfig(BaseModel):
    """Tool configuration."""
    pretend: bool = False

    class Config:
        """Pydantic config."""
        extra = "allow"

class RestackConfig(BaseModel):
    """Full autorestack configuration."""
    repo: RepoConfig = Field(default_factory=RepoConfig)
    user: UserConfig = Field(default_factory=UserConfig)
    tool: ToolConfig = Field(default_factory=ToolConfig)

    class Config:
        """Pydantic config."""
        extra = "allow"
