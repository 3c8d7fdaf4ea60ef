"""Shared utilities for autorestack tests."""
import subprocess
from typing import List, Optional
import logging

logger = logging.getLogger(__name__)

def run_cmd(cmd: str, cwd: Optional[str] = None, check: bool = True) -> str:
    """Run shell command and return output.
    
    Args:
        cmd: Command to run
        cwd: Working directory
        check: Whether to check return code
        
    Returns:
        str: Command output
    """
    logger.debug(f"Running command: {cmd}")
    result = subprocess.run(
        cmd, shell=True, check=check, cwd=cwd,
        capture_output=True, text=True
    )
    logger.debug(f"Command output: {result.stdout.strip()}")
    if result.stderr:
        logger.debug(f"Command stderr: {result.stderr.strip()}")
    return result.stdout.strip()

def try_rev_parse(rev: str, cwd: str) -> Optional[str]:
    """Resolve rev in the repository at cwd, or None if it does not exist."""
    result = subprocess.run(
        ["git", "rev-parse", "--verify", "--quiet", rev], cwd=cwd,
        capture_output=True, text=True
    )
    return result.stdout.strip() if result.returncode == 0 else None

def commit_parents(commit: str, cwd: str) -> List[str]:
    """Parents of commit, in order."""
    return run_cmd(f"git rev-list --parents -n 1 {commit}", cwd=cwd).split()[1:]
