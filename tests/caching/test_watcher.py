"""
Tests for the direnv watcher collaborator.
"""

from pathlib import Path
from unittest.mock import Mock, patch

import pytest

from toolenv.caching.watcher import DirenvWatcher, find_direnv_executable
from toolenv.core.config import Settings
from toolenv.core.exceptions import ConfigurationError, WatcherError


class TestDirenvWatcher:
    """Tests for DirenvWatcher.status."""

    def test_status_output(self):
        """Test stdout of direnv status is returned."""
        with patch(
            "toolenv.caching.watcher.subprocess.run",
            return_value=Mock(returncode=0, stdout="Found RC path /p/.envrc\n", stderr=""),
        ) as run:
            status = DirenvWatcher(Path("/usr/bin/direnv")).status()

        assert status == "Found RC path /p/.envrc\n"
        assert run.call_args.args[0] == ["/usr/bin/direnv", "status"]

    def test_status_failure(self):
        """Test a failing status command raises WatcherError."""
        with patch(
            "toolenv.caching.watcher.subprocess.run",
            return_value=Mock(returncode=2, stdout="", stderr="boom"),
        ):
            with pytest.raises(WatcherError, match="boom"):
                DirenvWatcher(Path("/usr/bin/direnv")).status()

    def test_status_oserror(self):
        """Test a missing executable raises WatcherError."""
        with patch(
            "toolenv.caching.watcher.subprocess.run",
            side_effect=FileNotFoundError("missing"),
        ):
            with pytest.raises(WatcherError, match="Failed to run"):
                DirenvWatcher(Path("/nope/direnv")).status()


class TestFindDirenvExecutable:
    """Tests for find_direnv_executable function."""

    def test_override(self, tmp_path):
        """Test TOOLENV_DIRENV_BIN setting wins."""
        settings = Settings(home=tmp_path, direnv_bin=Path("/opt/direnv"))
        with patch("toolenv.caching.watcher.shutil.which") as which:
            assert find_direnv_executable(settings) == Path("/opt/direnv")
        which.assert_not_called()

    def test_path_lookup(self, tmp_path):
        """Test PATH lookup."""
        with patch("toolenv.caching.watcher.shutil.which", return_value="/usr/bin/direnv"):
            assert find_direnv_executable(Settings(home=tmp_path)) == Path("/usr/bin/direnv")

    def test_asdf_which(self, tmp_path):
        """Test asdf which direnv as the last resort."""
        with patch("toolenv.caching.watcher.shutil.which", return_value=None), patch(
            "toolenv.caching.watcher.subprocess.run",
            return_value=Mock(returncode=0, stdout="/asdf/installs/direnv/2.34.0/bin/direnv\n"),
        ) as run:
            found = find_direnv_executable(Settings(home=tmp_path), Path("/bin/asdf"))

        assert found == Path("/asdf/installs/direnv/2.34.0/bin/direnv")
        assert run.call_args.args[0] == ["/bin/asdf", "which", "direnv"]

    def test_not_found(self, tmp_path):
        """Test remediation text when nothing is found."""
        with patch("toolenv.caching.watcher.shutil.which", return_value=None), patch(
            "toolenv.caching.watcher.subprocess.run",
            return_value=Mock(returncode=1, stdout=""),
        ):
            with pytest.raises(ConfigurationError, match="TOOLENV_DIRENV_BIN"):
                find_direnv_executable(Settings(home=tmp_path), Path("/bin/asdf"))

    def test_not_found_without_asdf(self, tmp_path):
        """Test no asdf fallback without an asdf executable."""
        with patch("toolenv.caching.watcher.shutil.which", return_value=None):
            with pytest.raises(ConfigurationError, match="No direnv executable found"):
                find_direnv_executable(Settings(home=tmp_path))
