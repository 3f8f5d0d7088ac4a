"""
Shared utilities for CLI commands.

Builds settings and the cache pipeline from parsed arguments so every command
wires its collaborators the same way.
"""

import logging

from toolenv.caching.fingerprint import Fingerprinter
from toolenv.caching.manager import CacheManager
from toolenv.caching.watcher import DirenvWatcher, find_direnv_executable
from toolenv.core.config import Settings, load_settings
from toolenv.environment.builder import EnvironmentBuilder
from toolenv.resolution.version_manager import AsdfVersionManager

logger = logging.getLogger(__name__)


def settings_from_args(args) -> Settings:
    """
    Load settings, applying CLI overrides.

    Debug mode from the environment also turns on debug logging.
    """
    settings = load_settings(
        config_file=getattr(args, "config", None),
        debug=getattr(args, "debug", None),
    )
    if settings.debug:
        logging.getLogger().setLevel(logging.DEBUG)
    return settings


def create_cache_manager(settings: Settings) -> CacheManager:
    """
    Wire the asdf version manager, direnv watcher and cache together.

    Both executables are resolved here, before any resolution work starts.

    Raises:
        ConfigurationError: If asdf or direnv can't be found
    """
    version_manager = AsdfVersionManager.from_settings(settings)
    watcher = DirenvWatcher(find_direnv_executable(settings, version_manager.executable))

    return CacheManager(
        settings=settings,
        builder=EnvironmentBuilder(version_manager),
        fingerprinter=Fingerprinter(watcher),
    )
