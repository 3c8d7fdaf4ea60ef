"""Configuration for pytest."""

import shutil
import pytest

# Import fixtures to make them available to all tests
from autorestack.tests.e2e.fixtures import stack_repo_ctx  # noqa: F401

def pytest_collection_modifyitems(config: pytest.Config, items: list) -> None:
    """Skip end-to-end tests when no git executable is available."""
    if shutil.which("git"):
        return
    skip = pytest.mark.skip(reason="git executable not found")
    for item in items:
        if "e2e" in str(item.path):
            item.add_marker(skip)
