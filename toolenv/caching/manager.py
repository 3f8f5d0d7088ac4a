"""
Generated environment cache.

Layout under the cache root:

    env/<fingerprint>                    : finished entries
    env-generating/<fingerprint>.<rand>  : staging files during generation

Per invocation:

    fingerprint -> entry exists (and not debug)? -> return it
                -> otherwise generate -> staged write -> prune -> return it

Concurrent processes are tolerated, not coordinated. Each writes its own
staging file and renames it into place in one step, so readers only ever
see complete entries; two processes racing on one fingerprint both do the
work and the last rename wins with identical content. No lock is taken.

Example:
    >>> manager = CacheManager(settings, builder, fingerprinter)
    >>> manager.get_or_create(Path.cwd())
    PosixPath('/home/user/.cache/toolenv/env/3f2a...-9b1c...-...-...')
"""

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence

from toolenv.caching.fingerprint import Fingerprinter, context_prefix
from toolenv.core.config import Settings
from toolenv.core.directory import (
    clear_cache,
    ensure_cache_structure,
    get_entries_dir,
    get_staging_dir,
)
from toolenv.core.exceptions import CacheError
from toolenv.core.filesystem import staged_write
from toolenv.core.ordering import stable_dedupe
from toolenv.environment.builder import EnvironmentBuilder
from toolenv.environment.operations import EnvOperation, parse_operation
from toolenv.resolution.versions_file import find_versions_file

logger = logging.getLogger(__name__)

# staging files older than this belong to a generation that died
STALE_STAGING_SECONDS = 3600


@dataclass
class CacheEntry:
    """A finished cache entry loaded from disk."""

    fingerprint: str
    path: Path
    operations: List[EnvOperation] = field(default_factory=list)


class CacheManager:
    """
    Owns the cache root; nothing else reads or writes below it.

    Attributes:
        settings: Effective settings (cache root, debug flag, file names)
        builder: Produces operations on a cache miss
        fingerprinter: Produces cache keys
    """

    def __init__(
        self,
        settings: Settings,
        builder: EnvironmentBuilder,
        fingerprinter: Fingerprinter,
    ):
        self.settings = settings
        self.builder = builder
        self.fingerprinter = fingerprinter

    @property
    def entries_dir(self) -> Path:
        return get_entries_dir(self.settings.cache_dir)

    def versions_file(self, cwd: Path) -> Optional[Path]:
        return find_versions_file(cwd, self.settings.versions_filename, self.settings.home)

    def get_or_create(self, cwd: Path, extra_args: Sequence[str] = ()) -> Path:
        """
        Path of the cache entry for ``cwd``, generating it on a miss.

        Debug mode always regenerates.

        Args:
            cwd: Working directory
            extra_args: Extra disambiguating arguments

        Returns:
            Path to the cache entry

        Raises:
            VersionManagerError: If resolution fails (nothing is written)
            CacheError: If the cache can't be written
        """
        cwd = Path(cwd).absolute()
        versions_file = self.versions_file(cwd)
        fingerprint = self.fingerprinter.fingerprint(
            cwd, versions_file, self.settings.debug, extra_args
        )
        entry_path = self.entries_dir / fingerprint

        if entry_path.is_file() and not self.settings.debug:
            logger.debug(f"Cache hit: {entry_path}")
            return entry_path

        dirs = ensure_cache_structure(self.settings.cache_dir)
        logger.info(f"Creating env file {entry_path}")

        lines = self.generate(cwd, versions_file)
        self.write_entry(entry_path, lines, dirs["staging"])
        self.prune(fingerprint)
        self.prune_staging(fingerprint)
        return entry_path

    def generate(self, cwd: Path, versions_file: Optional[Path]) -> List[str]:
        """Rendered, deduplicated operation lines for ``cwd``."""
        operations = self.builder.build(cwd, versions_file)
        return stable_dedupe(op.render() for op in operations)

    def write_entry(self, entry_path: Path, lines: List[str], staging_dir: Path) -> Path:
        """
        Write an entry through a staging file.

        Raises:
            CacheError: If the staging write or the rename fails
        """
        try:
            return staged_write(entry_path, lines, staging_dir)
        except OSError as e:
            raise CacheError(f"Failed to write cache entry {entry_path}: {e}") from e

    def prune(self, fingerprint: str) -> List[Path]:
        """
        Delete entries with the same context prefix but different content.

        Args:
            fingerprint: Fingerprint of the entry to keep

        Returns:
            Paths that were removed
        """
        prefix = context_prefix(fingerprint)
        removed = []
        for stale in self.entries_dir.glob(f"{prefix}-*"):
            if stale.name == fingerprint:
                continue
            stale.unlink(missing_ok=True)
            removed.append(stale)
            logger.debug(f"Pruned stale cache entry {stale}")
        return removed

    def prune_staging(self, fingerprint: str, max_age: float = STALE_STAGING_SECONDS) -> List[Path]:
        """
        Delete staging files left behind by generations that never finished.

        Only files sharing the context prefix and older than ``max_age``
        seconds are removed; younger ones may belong to a running process.

        Args:
            fingerprint: Fingerprint whose context is being refreshed
            max_age: Minimum age in seconds of a staging file to remove

        Returns:
            Paths that were removed
        """
        prefix = context_prefix(fingerprint)
        cutoff = time.time() - max_age
        removed = []
        for stale in get_staging_dir(self.settings.cache_dir).glob(f"{prefix}-*"):
            try:
                if stale.stat().st_mtime > cutoff:
                    continue
                stale.unlink()
            except FileNotFoundError:
                # renamed into place or removed by another process
                continue
            removed.append(stale)
            logger.debug(f"Removed abandoned staging file {stale}")
        return removed

    def read_entry(self, entry_path: Path) -> CacheEntry:
        """Load a finished entry back into operations."""
        entry_path = Path(entry_path)
        lines = entry_path.read_text(encoding="utf-8").splitlines()
        return CacheEntry(
            fingerprint=entry_path.name,
            path=entry_path,
            operations=[parse_operation(line) for line in lines if line.strip()],
        )

    def clear(self) -> None:
        """Remove the whole cache root."""
        clear_cache(self.settings.cache_dir)
