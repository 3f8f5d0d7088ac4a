"""
Cache keys for generated environments.

A fingerprint is four dash-separated digests:

    <cwd>-<debug+args>-<watcher status>-<declaration file metadata>

The first two segments identify the logical context (directory and
arguments). Entries sharing that prefix are stale versions of each other.
"""

import hashlib
import json
import logging
from pathlib import Path
from typing import Optional, Sequence

from toolenv.caching.watcher import Watcher

logger = logging.getLogger(__name__)

SEGMENT_LENGTH = 16
CONTEXT_SEGMENTS = 2


def _digest(data: str) -> str:
    return hashlib.sha256(data.encode("utf-8")).hexdigest()[:SEGMENT_LENGTH]


def file_metadata(path: Optional[Path]) -> str:
    """Path, size and modification time of a file ("" if absent)."""
    if path is None:
        return ""
    try:
        stat = Path(path).stat()
    except FileNotFoundError:
        return ""
    return f"{path}:{stat.st_mode}:{stat.st_size}:{stat.st_mtime_ns}"


def context_prefix(fingerprint: str) -> str:
    """
    Directory+arguments part of a fingerprint.

    Example:
        >>> context_prefix("aaaa-bbbb-cccc-dddd")
        'aaaa-bbbb'
    """
    return "-".join(fingerprint.split("-")[:CONTEXT_SEGMENTS])


class Fingerprinter:
    """Computes cache keys; only reads file metadata and watcher status."""

    def __init__(self, watcher: Watcher):
        self.watcher = watcher

    def fingerprint(
        self,
        cwd: Path,
        versions_file: Optional[Path],
        debug: bool = False,
        extra_args: Sequence[str] = (),
    ) -> str:
        """
        Cache key for a directory.

        Args:
            cwd: Working directory
            versions_file: Declaration file that applies, if any
            debug: Debug mode flag
            extra_args: Extra disambiguating arguments

        Returns:
            Fingerprint string
        """
        segments = [
            str(Path(cwd).absolute()),
            json.dumps([bool(debug), *extra_args]),
            self.watcher.status(),
            file_metadata(versions_file),
        ]
        fingerprint = "-".join(_digest(segment) for segment in segments)
        logger.debug(f"Fingerprint for {cwd}: {fingerprint}")
        return fingerprint
