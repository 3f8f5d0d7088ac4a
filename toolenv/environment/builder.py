"""
Ordered environment for a whole directory.

Plugins are loaded in two groups:

1. global plugins: installed but not declared in the directory's
   declaration file, in reverse lexicographic order;
2. local plugins: declared in the declaration file, in reverse
   declaration order.

PATH prepends are last-applied-wins, so local plugins beat global ones and an
earlier-declared plugin beats a later one.
"""

import logging
from pathlib import Path
from typing import List, Optional, Tuple

from toolenv.core.exceptions import VersionManagerError
from toolenv.core.ordering import reverse_for_precedence
from toolenv.environment.emitter import EnvironmentEmitter
from toolenv.environment.operations import EnvOperation
from toolenv.resolution.plugins import global_only_plugins
from toolenv.resolution.resolver import VersionResolver
from toolenv.resolution.version_manager import VersionManager
from toolenv.resolution.versions_file import declared_plugins, parse_declarations

logger = logging.getLogger(__name__)


class EnvironmentBuilder:
    """Builds the full operation list for a directory."""

    def __init__(self, version_manager: VersionManager):
        self.version_manager = version_manager
        self.resolver = VersionResolver(version_manager)
        self.emitter = EnvironmentEmitter(version_manager)

    def plugin_order(self, versions_file: Optional[Path]) -> Tuple[List[str], List[str]]:
        """
        Global and local plugin names, each in load order.

        Returns:
            (global plugins, local plugins)
        """
        local: List[str] = []
        if versions_file is not None and Path(versions_file).is_file():
            local = declared_plugins(parse_declarations(versions_file))

        installed = self.version_manager.list_plugins()
        global_plugins = global_only_plugins(installed, local)

        return reverse_for_precedence(global_plugins), reverse_for_precedence(local)

    def build(self, cwd: Path, versions_file: Optional[Path]) -> List[EnvOperation]:
        """
        Operations for every plugin that applies to ``cwd``.

        Any failure for a local plugin aborts the build. For global plugins a
        version manager failure while looking up versions only skips that
        plugin; emission failures still abort.

        Args:
            cwd: Working directory
            versions_file: Declaration file that applies, if any

        Returns:
            Operations in application order (not deduplicated)

        Raises:
            VersionManagerError: On any fatal resolution failure
        """
        global_plugins, local_plugins = self.plugin_order(versions_file)
        logger.debug(f"Global plugins: {global_plugins}; local plugins: {local_plugins}")

        operations: List[EnvOperation] = []
        for plugin in global_plugins:
            operations.extend(self._plugin_operations(plugin, cwd, strict=False))
        for plugin in local_plugins:
            operations.extend(self._plugin_operations(plugin, cwd, strict=True))
        return operations

    def _plugin_operations(self, plugin: str, cwd: Path, strict: bool) -> List[EnvOperation]:
        try:
            resolutions = self.resolver.resolve(plugin, cwd)
        except VersionManagerError as e:
            if strict:
                raise
            logger.warning(f"Skipping global plugin {plugin}: {e}")
            return []

        # one watch per plugin, after its last version
        operations: List[EnvOperation] = []
        for i, resolution in enumerate(resolutions):
            declaring_file = resolution.declaring_file if i == len(resolutions) - 1 else None
            operations.extend(
                self.emitter.emit(resolution.plugin, resolution.version, declaring_file)
            )
        return operations
