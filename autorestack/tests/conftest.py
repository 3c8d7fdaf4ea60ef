"""Configuration for pytest."""

from typing import Generator
import pytest

from autorestack import setup_logging

@pytest.fixture(autouse=True)
def reset_logging() -> Generator[None, None, None]:
    """CLI commands rebind the log handler to their own stderr; put it back afterwards."""
    yield
    setup_logging()
