"""Test fixtures for end-to-end tests with real git and fake GitHub."""

import os
import logging
from pathlib import Path
from typing import Generator
import pytest

from autorestack.tests.e2e.test_helpers import StackRepoContext, create_stack_repo_context

logger = logging.getLogger(__name__)

@pytest.fixture
def stack_repo_ctx(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[StackRepoContext, None, None]:
    """Local remote plus clones, isolated from the user's git configuration."""
    monkeypatch.setenv("GIT_CONFIG_GLOBAL", os.devnull)
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("GIT_TERMINAL_PROMPT", "0")
    yield from create_stack_repo_context("octo", "stack", str(tmp_path))
