"""
Environment operations for one resolved plugin version.
"""

import logging
from pathlib import Path
from typing import List, Optional

from toolenv.core.exceptions import PluginNotInstalledError
from toolenv.core.ordering import reverse_for_precedence
from toolenv.environment.operations import (
    EnvOperation,
    PathPrepend,
    SourceEnvScript,
    StatusMessage,
    WatchFile,
)
from toolenv.resolution.resolver import SYSTEM_VERSION
from toolenv.resolution.version_manager import INSTALL_TYPE_VERSION, VersionManager

logger = logging.getLogger(__name__)


class EnvironmentEmitter:
    """
    Emits the operations that activate a plugin version.

    Only the "version" install type is supported.
    """

    install_type = INSTALL_TYPE_VERSION

    def __init__(self, version_manager: VersionManager):
        self.version_manager = version_manager

    def emit(
        self, plugin: str, version: str, declaring_file: Optional[str] = None
    ) -> List[EnvOperation]:
        """
        Operations for ``plugin`` at ``version``, in application order.

        Order: status line, plugin shims, bin directories (reversed so the
        first one reported ends up first on PATH), exec-env hook, watch on
        the declaring file.

        Args:
            plugin: Plugin name
            version: Concrete version or "system"
            declaring_file: Source that selected the version

        Returns:
            List of operations

        Raises:
            PluginNotFoundError: If the plugin directory is missing
            PluginNotInstalledError: If the version has no install path
        """
        vm = self.version_manager
        vm.require_plugin(plugin)

        install_path = None
        if version != SYSTEM_VERSION:
            install_path = vm.install_path(plugin, self.install_type, version)
            if not install_path.is_dir():
                raise PluginNotInstalledError(
                    plugin, version, vm.not_installed_message(plugin, version)
                )

        operations: List[EnvOperation] = [StatusMessage(f"using {plugin} {version}")]

        shims = vm.shims_dir(plugin)
        if shims.is_dir():
            operations.append(PathPrepend(str(shims)))

        # "system" has no install path; adding its bin dirs would put /bin on PATH
        if install_path is not None:
            sub_paths = vm.bin_sub_paths(plugin, version, self.install_type)
            for sub_path in reverse_for_precedence(sub_paths):
                operations.append(PathPrepend(str(install_path / sub_path)))

        exec_env = vm.exec_env_script(plugin)
        if exec_env.is_file():
            operations.append(
                SourceEnvScript(
                    script=str(exec_env),
                    install_type=self.install_type,
                    version=version,
                    install_path=str(install_path) if install_path else "",
                )
            )

        if declaring_file and Path(declaring_file).is_file():
            operations.append(WatchFile(str(declaring_file)))

        logger.debug(f"{plugin} {version}: {len(operations)} operations")
        return operations
