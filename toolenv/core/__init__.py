"""
Core functionality for toolenv.

This package contains the foundational modules that other components depend on.
"""

from .config import (
    Settings,
    load_settings,
    load_config_file,
    default_config_file,
)

from .directory import (
    clear_cache,
    ensure_cache_structure,
    get_entries_dir,
    get_staging_dir,
)

from .filesystem import (
    find_up,
    staged_write,
    safe_rmtree,
    FilesystemError,
)

from .ordering import (
    stable_dedupe,
    reverse_for_precedence,
)

from .exceptions import (
    ToolEnvError,
    ConfigurationError,
    VersionManagerError,
    PluginNotFoundError,
    PluginNotInstalledError,
    WatcherError,
    CacheError,
)

__all__ = [
    "Settings",
    "load_settings",
    "load_config_file",
    "default_config_file",
    "clear_cache",
    "ensure_cache_structure",
    "get_entries_dir",
    "get_staging_dir",
    "find_up",
    "staged_write",
    "safe_rmtree",
    "FilesystemError",
    "stable_dedupe",
    "reverse_for_precedence",
    "ToolEnvError",
    "ConfigurationError",
    "VersionManagerError",
    "PluginNotFoundError",
    "PluginNotInstalledError",
    "WatcherError",
    "CacheError",
]
