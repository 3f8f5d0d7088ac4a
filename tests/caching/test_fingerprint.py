"""
Tests for cache key computation.
"""

import os

from tests.fixtures.asdf import StaticWatcher
from toolenv.caching.fingerprint import Fingerprinter, context_prefix, file_metadata


def make_versions_file(directory, content="ruby 3.1.2\n"):
    path = directory / ".tool-versions"
    path.write_text(content)
    return path


class TestFingerprint:
    """Tests for Fingerprinter.fingerprint."""

    def test_deterministic(self, tmp_path):
        """Test identical inputs give identical keys."""
        versions_file = make_versions_file(tmp_path)
        fingerprinter = Fingerprinter(StaticWatcher())

        first = fingerprinter.fingerprint(tmp_path, versions_file, False, ["a"])
        second = fingerprinter.fingerprint(tmp_path, versions_file, False, ["a"])

        assert first == second

    def test_four_segments(self, tmp_path):
        """Test the key shape."""
        key = Fingerprinter(StaticWatcher()).fingerprint(tmp_path, None)
        assert len(key.split("-")) == 4

    def test_cwd_changes_key_and_prefix(self, tmp_path):
        """Test a different directory never reuses an entry."""
        one = tmp_path / "one"
        two = tmp_path / "two"
        one.mkdir()
        two.mkdir()
        fingerprinter = Fingerprinter(StaticWatcher())

        key_one = fingerprinter.fingerprint(one, make_versions_file(one, "ruby 3.1.2\n"))
        key_two = fingerprinter.fingerprint(two, make_versions_file(two, "ruby 3.2.0\n"))

        assert key_one != key_two
        assert context_prefix(key_one) != context_prefix(key_two)

    def test_debug_changes_key(self, tmp_path):
        fingerprinter = Fingerprinter(StaticWatcher())
        assert fingerprinter.fingerprint(tmp_path, None, False) != fingerprinter.fingerprint(
            tmp_path, None, True
        )

    def test_extra_args_change_key(self, tmp_path):
        fingerprinter = Fingerprinter(StaticWatcher())
        assert fingerprinter.fingerprint(tmp_path, None, False, ["a"]) != (
            fingerprinter.fingerprint(tmp_path, None, False, ["b"])
        )

    def test_extra_args_not_ambiguous(self, tmp_path):
        """Test argument boundaries are part of the key."""
        fingerprinter = Fingerprinter(StaticWatcher())
        assert fingerprinter.fingerprint(tmp_path, None, False, ["a b"]) != (
            fingerprinter.fingerprint(tmp_path, None, False, ["a", "b"])
        )

    def test_watcher_status_changes_key_not_prefix(self, tmp_path):
        """Test watcher changes keep the context prefix."""
        watcher = StaticWatcher("status one")
        fingerprinter = Fingerprinter(watcher)
        before = fingerprinter.fingerprint(tmp_path, None)

        watcher.value = "status two"
        after = fingerprinter.fingerprint(tmp_path, None)

        assert before != after
        assert context_prefix(before) == context_prefix(after)

    def test_versions_file_mtime_changes_key(self, tmp_path):
        """Test touching the declaration file invalidates the key."""
        versions_file = make_versions_file(tmp_path)
        fingerprinter = Fingerprinter(StaticWatcher())
        before = fingerprinter.fingerprint(tmp_path, versions_file)

        stat = versions_file.stat()
        os.utime(versions_file, ns=(stat.st_atime_ns, stat.st_mtime_ns + 5_000_000_000))
        after = fingerprinter.fingerprint(tmp_path, versions_file)

        assert before != after
        assert context_prefix(before) == context_prefix(after)

    def test_versions_file_content_changes_key(self, tmp_path):
        """Test editing the declaration file invalidates the key."""
        versions_file = make_versions_file(tmp_path, "ruby 3.1.2\n")
        fingerprinter = Fingerprinter(StaticWatcher())
        before = fingerprinter.fingerprint(tmp_path, versions_file)

        versions_file.write_text("ruby 3.1.2\npython 3.11.4\n")
        after = fingerprinter.fingerprint(tmp_path, versions_file)

        assert before != after


class TestHelpers:
    """Tests for fingerprint helpers."""

    def test_context_prefix(self):
        assert context_prefix("aaaa-bbbb-cccc-dddd") == "aaaa-bbbb"

    def test_file_metadata_missing(self, tmp_path):
        assert file_metadata(tmp_path / "missing") == ""
        assert file_metadata(None) == ""

    def test_file_metadata_present(self, tmp_path):
        path = make_versions_file(tmp_path)
        assert file_metadata(path).startswith(f"{path}:")
