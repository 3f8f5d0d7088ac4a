"""Test fixtures for toolenv tests.

This package provides reusable pytest fixtures for testing toolenv components.
Fixtures are organized by type:

- asdf: Fake asdf data directories (plugins, installs) and watchers

Import fixtures in your tests using:
    from tests.fixtures.asdf import asdf_data_dir, make_plugin
"""

__all__ = [
    "asdf",
]
