"""
Cache directory structure management for toolenv.

Directory Structure:
    Cache root ($TOOLENV_CACHE_DIR or $XDG_CACHE_HOME/toolenv):
        - env/             : Finished cache entries, one file per fingerprint
        - env-generating/  : Staging files written during generation

The cache root is owned by the cache manager; nothing else reads or writes
below it.
"""

import logging
from pathlib import Path
from typing import Dict

from toolenv.core.exceptions import CacheError
from toolenv.core.filesystem import FilesystemError, safe_rmtree

logger = logging.getLogger(__name__)

ENTRIES_DIRNAME = "env"
STAGING_DIRNAME = "env-generating"


def get_entries_dir(cache_root: Path) -> Path:
    """Directory holding finished cache entries."""
    return Path(cache_root) / ENTRIES_DIRNAME


def get_staging_dir(cache_root: Path) -> Path:
    """Directory holding in-progress staging files."""
    return Path(cache_root) / STAGING_DIRNAME


def ensure_cache_structure(cache_root: Path) -> Dict[str, Path]:
    """
    Create the cache directory structure if it doesn't exist.

    Args:
        cache_root: Cache root directory

    Returns:
        Dict with 'root', 'entries' and 'staging' paths

    Raises:
        CacheError: If directory creation fails

    Example:
        >>> dirs = ensure_cache_structure(Path('/home/user/.cache/toolenv'))
        >>> dirs['entries']
        PosixPath('/home/user/.cache/toolenv/env')
    """
    cache_root = Path(cache_root)
    dirs = {
        "root": cache_root,
        "entries": get_entries_dir(cache_root),
        "staging": get_staging_dir(cache_root),
    }

    for name in ("entries", "staging"):
        try:
            dirs[name].mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise CacheError(f"Failed to create cache directory {dirs[name]}: {e}") from e

    logger.debug(f"Cache structure ready at {cache_root}")
    return dirs


def clear_cache(cache_root: Path) -> None:
    """
    Remove the cache root and everything below it.

    Args:
        cache_root: Cache root directory

    Raises:
        CacheError: If deletion fails
    """
    cache_root = Path(cache_root)
    try:
        safe_rmtree(cache_root, require_prefix=cache_root)
    except FilesystemError as e:
        raise CacheError(str(e)) from e
    logger.info(f"Removed cache {cache_root}")
