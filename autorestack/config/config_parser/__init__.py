"""Config parser logic."""

import os
from typing import Any, Dict, Mapping, Optional, Tuple
import logging
import yaml

from ...typing import ConfigurationError, GitInterface
from ...restack.models import MergeEvent

# Get module logger
logger = logging.getLogger(__name__)

RepoConfig = Dict[str, Any]  # Use Any since yaml can return various types
Config = Dict[str, RepoConfig]

CONFIG_FILE = '.autorestack.yaml'
REQUIRED_ENV_VARS = ('SQUASH_COMMIT', 'MERGED_BRANCH', 'TARGET_BRANCH')

def parse_repo_slug(remote_url: str) -> Optional[Tuple[str, str]]:
    """Extract (owner, name) from an SSH or HTTPS remote url."""
    if "://" in remote_url:
        # HTTPS format: https://github.com/owner/repo.git
        repo_part = remote_url.split("://", 1)[1].split("/", 1)[-1]
    elif "@" in remote_url:
        # SSH format: git@github.com:owner/repo.git
        repo_part = remote_url.split(":")[-1]
    else:
        return None
    repo_part = repo_part.strip()
    if repo_part.endswith(".git"):
        repo_part = repo_part[:-len(".git")]
    parts = [p for p in repo_part.split("/") if p]
    if len(parts) < 2:
        return None
    return parts[-2], parts[-1]

def parse_config(git_cmd: GitInterface, environ: Optional[Mapping[str, str]] = None) -> Config:
    """Parse config from the repository config file, environment and git remote."""
    if environ is None:
        environ = os.environ
    config: Config = {
        'repo': {
            'github_remote': 'origin',
            'conflict_label': 'autorestack-needs-conflict-resolution',
        },
        'user': {},
        'tool': {
            'autorestack': {
                'pretend': False
            }
        }
    }
    
    try:
        with open(CONFIG_FILE, 'r') as f:
            logger.info(f"Found {CONFIG_FILE}, loading...")
            repo_config = yaml.safe_load(f)
            logger.debug(f"Config from {CONFIG_FILE}: {repo_config}")
            if repo_config:
                if 'repo' in repo_config and isinstance(repo_config['repo'], dict):
                    config['repo'].update(repo_config['repo'])
                if 'user' in repo_config and isinstance(repo_config['user'], dict):
                    config['user'].update(repo_config['user'])
    except FileNotFoundError:
        logger.debug(f"No {CONFIG_FILE} found, using defaults")

    # Set by GitHub Actions
    slug = environ.get('GITHUB_REPOSITORY', '')
    if '/' in slug:
        owner, name = slug.split('/', 1)
        config['repo'].setdefault('github_repo_owner', owner)
        config['repo'].setdefault('github_repo_name', name)
    api_url = environ.get('GITHUB_API_URL')
    if api_url:
        config['repo'].setdefault('github_api_url', api_url)
            
    if not config['repo'].get('github_repo_owner') or not config['repo'].get('github_repo_name'):
        remote = config['repo']['github_remote']
        try:
            remote_url = git_cmd.run_cmd(f"remote get-url {remote}")
            parsed = parse_repo_slug(remote_url)
            if parsed:
                if not config['repo'].get('github_repo_owner'):
                    config['repo']['github_repo_owner'] = parsed[0]
                if not config['repo'].get('github_repo_name'):
                    config['repo']['github_repo_name'] = parsed[1]
        except Exception as e:
            logger.error(f"Failed to parse git remote: {e}")

    return config

def check_env_var(environ: Mapping[str, Optional[str]], name: str) -> str:
    """Return a required variable, raising ConfigurationError if unset or empty."""
    value = environ.get(name)
    if not value:
        raise ConfigurationError(f"{name} is not set")
    return value

def merge_event_from_env(environ: Optional[Mapping[str, Optional[str]]] = None) -> MergeEvent:
    """Build the triggering merge event from SQUASH_COMMIT, MERGED_BRANCH and TARGET_BRANCH."""
    if environ is None:
        environ = os.environ
    squash_commit, merged_branch, target_branch = (
        check_env_var(environ, name) for name in REQUIRED_ENV_VARS)
    return MergeEvent(squash_commit=squash_commit,
                      merged_branch=merged_branch,
                      target_branch=target_branch)
