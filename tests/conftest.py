"""
Pytest configuration and shared fixtures for toolenv tests.
"""

import pytest

# Import test fixtures to make them available to all tests
# These imports register the fixtures with pytest's fixture discovery system
# ruff: noqa: F401
from tests.fixtures.asdf import (
    isolated_home,
    asdf_data_dir,
    project_dir,
    settings,
    version_manager,
    watcher,
)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
