"""
Tests for whole-directory environment building and plugin ordering.
"""

import logging
from unittest.mock import patch

import pytest

from tests.fixtures.asdf import make_plugin
from toolenv.core.exceptions import (
    PluginNotFoundError,
    PluginNotInstalledError,
    VersionManagerError,
)
from toolenv.environment.builder import EnvironmentBuilder
from toolenv.environment.operations import PathPrepend, StatusMessage, WatchFile
from toolenv.resolution.version_manager import AsdfVersionManager


@pytest.fixture
def data_dir(tmp_path):
    data_dir = tmp_path / "asdf-abcd"
    for name in ("a", "b", "c", "d"):
        make_plugin(data_dir, name, ["v1", "v2"])
    return data_dir


@pytest.fixture
def builder(data_dir, isolated_home):
    manager = AsdfVersionManager(data_dir, home=isolated_home, environ={})
    return EnvironmentBuilder(manager)


def statuses(operations):
    return [op.text for op in operations if isinstance(op, StatusMessage)]


class TestPluginOrder:
    """Tests for EnvironmentBuilder.plugin_order."""

    def test_global_then_local_reversed(self, builder, project_dir):
        """Test both groups come back in reverse order."""
        versions_file = project_dir / ".tool-versions"
        versions_file.write_text("a v1\nb v2\n")

        global_plugins, local_plugins = builder.plugin_order(versions_file)

        assert global_plugins == ["d", "c"]
        assert local_plugins == ["b", "a"]

    def test_without_versions_file(self, builder):
        """Test every installed plugin is global without a file."""
        global_plugins, local_plugins = builder.plugin_order(None)

        assert global_plugins == ["d", "c", "b", "a"]
        assert local_plugins == []


class TestBuild:
    """Tests for EnvironmentBuilder.build."""

    def test_group_ordering(self, builder, project_dir, isolated_home):
        """Test global plugins are emitted before local ones, each reversed."""
        (isolated_home / ".tool-versions").write_text("c v1\nd v1\n")
        versions_file = project_dir / ".tool-versions"
        versions_file.write_text("a v1\nb v2\n")

        operations = builder.build(project_dir, versions_file)

        assert statuses(operations) == [
            "using d v1",
            "using c v1",
            "using b v2",
            "using a v1",
        ]

    def test_fallback_versions(self, builder, project_dir, data_dir):
        """Test v2 is prepended before v1 so v1 wins."""
        versions_file = project_dir / ".tool-versions"
        versions_file.write_text("a v1 v2\n")

        operations = builder.build(project_dir, versions_file)

        prepends = [op.path for op in operations if isinstance(op, PathPrepend)]
        assert prepends == [
            str(data_dir / "installs" / "a" / "v2" / "bin"),
            str(data_dir / "installs" / "a" / "v1" / "bin"),
        ]

    def test_fallback_versions_watch_once(self, builder, project_dir):
        """Test the declaring file is watched once, after the last version."""
        versions_file = project_dir / ".tool-versions"
        versions_file.write_text("a v1 v2\n")

        operations = builder.build(project_dir, versions_file)

        watches = [op for op in operations if isinstance(op, WatchFile)]
        assert watches == [WatchFile(str(versions_file))]
        assert operations[-1] == WatchFile(str(versions_file))
        assert statuses(operations) == ["using a v2", "using a v1"]

    def test_global_without_version_skipped(self, builder, project_dir):
        """Test installed plugins nobody selects produce nothing."""
        versions_file = project_dir / ".tool-versions"
        versions_file.write_text("a v1\n")

        operations = builder.build(project_dir, versions_file)

        assert statuses(operations) == ["using a v1"]

    def test_no_versions_file(self, builder, project_dir):
        """Test nothing is emitted when nothing is selected anywhere."""
        assert builder.build(project_dir, None) == []

    def test_local_not_installed_fails(self, builder, project_dir):
        """Test a missing local version aborts the whole build."""
        versions_file = project_dir / ".tool-versions"
        versions_file.write_text("a v1\nb v9\n")

        with pytest.raises(PluginNotInstalledError, match="b v9 not installed"):
            builder.build(project_dir, versions_file)

    def test_local_plugin_missing_fails(self, builder, project_dir):
        """Test a declared plugin without a plugin directory aborts."""
        versions_file = project_dir / ".tool-versions"
        versions_file.write_text("zig 0.12.0\n")

        with pytest.raises(PluginNotFoundError, match="zig"):
            builder.build(project_dir, versions_file)

    def test_global_not_installed_fails(self, builder, project_dir, isolated_home):
        """Test a missing global version still aborts."""
        (isolated_home / ".tool-versions").write_text("c v9\n")
        versions_file = project_dir / ".tool-versions"
        versions_file.write_text("a v1\n")

        with pytest.raises(PluginNotInstalledError):
            builder.build(project_dir, versions_file)

    def test_global_lookup_failure_skipped(self, builder, project_dir, caplog):
        """Test version lookup errors for global plugins only skip them."""
        versions_file = project_dir / ".tool-versions"
        versions_file.write_text("a v1\n")
        real_lookup = builder.version_manager.current_versions_for_dir

        def lookup(plugin, directory):
            if plugin == "c":
                raise VersionManagerError("c lookup failed")
            return real_lookup(plugin, directory)

        with patch.object(builder.version_manager, "current_versions_for_dir", side_effect=lookup):
            with caplog.at_level(logging.WARNING):
                operations = builder.build(project_dir, versions_file)

        assert statuses(operations) == ["using a v1"]
        assert "Skipping global plugin c" in caplog.text

    def test_local_lookup_failure_raises(self, builder, project_dir):
        """Test version lookup errors for local plugins propagate."""
        versions_file = project_dir / ".tool-versions"
        versions_file.write_text("a v1\n")

        with patch.object(
            builder.version_manager,
            "current_versions_for_dir",
            side_effect=VersionManagerError("a lookup failed"),
        ):
            with pytest.raises(VersionManagerError, match="a lookup failed"):
                builder.build(project_dir, versions_file)
