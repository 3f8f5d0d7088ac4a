"""
Centralized exception hierarchy for toolenv.

This module defines all custom exceptions raised while resolving and caching
tool environments so that callers can catch one base class and report a
single-line, actionable message.
"""


# ============================================================================
# Base Exceptions
# ============================================================================


class ToolEnvError(Exception):
    """Base exception for all toolenv errors."""

    pass


# ============================================================================
# Configuration Exceptions
# ============================================================================


class ConfigurationError(ToolEnvError):
    """Raised when a required executable or configuration file is unusable."""

    pass


# ============================================================================
# Version Manager Exceptions
# ============================================================================


class VersionManagerError(ToolEnvError):
    """Base exception for failures reported by the version manager."""

    pass


class PluginNotFoundError(VersionManagerError):
    """Raised when a plugin directory does not exist."""

    def __init__(self, plugin: str):
        self.plugin = plugin
        super().__init__(f"plugin not installed: {plugin}")


class PluginNotInstalledError(VersionManagerError):
    """Raised when a resolved plugin version has no install path."""

    def __init__(self, plugin: str, version: str, message: str = ""):
        self.plugin = plugin
        self.version = version
        super().__init__(message or f"{plugin} {version} not installed")


# ============================================================================
# Watcher and Cache Exceptions
# ============================================================================


class WatcherError(ToolEnvError):
    """Raised when the watcher status command fails."""

    pass


class CacheError(ToolEnvError):
    """Raised when the cache directory cannot be created or written."""

    pass
