"""
Environment cache for toolenv.

Modules:
    watcher: Change-detection collaborator (direnv)
    fingerprint: Cache keys
    manager: Cache lookup, staged generation and pruning
"""

from .fingerprint import Fingerprinter, context_prefix, file_metadata
from .manager import CacheEntry, CacheManager
from .watcher import DirenvWatcher, Watcher, find_direnv_executable

__all__ = [
    "Fingerprinter",
    "context_prefix",
    "file_metadata",
    "CacheEntry",
    "CacheManager",
    "DirenvWatcher",
    "Watcher",
    "find_direnv_executable",
]
