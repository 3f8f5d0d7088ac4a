"""
Version manager interface and the asdf implementation.

The core never talks to a version manager directly. It depends on the
``VersionManager`` capability interface below; ``AsdfVersionManager``
implements it against an asdf data directory:

    $ASDF_DATA_DIR/
        plugins/<plugin>/               : plugin root
            bin/list-bin-paths          : optional, prints relative bin dirs
            bin/exec-env                : optional, custom environment hook
            shims/                      : optional, custom command shims
        installs/<plugin>/<version>/    : install path of a version

Example:
    >>> manager = AsdfVersionManager.from_settings(load_settings())
    >>> manager.current_versions_for_dir("python", Path.cwd())
    (['3.11.4'], '/home/user/project/.tool-versions')
"""

import logging
import os
import shutil
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Mapping, Optional, Tuple, Union

from toolenv.core.config import Settings
from toolenv.core.exceptions import (
    ConfigurationError,
    PluginNotFoundError,
    VersionManagerError,
)
from toolenv.resolution.plugins import list_installed_plugins
from toolenv.resolution.versions_file import parse_declarations

logger = logging.getLogger(__name__)

INSTALL_TYPE_VERSION = "version"
INSTALL_TYPE_REF = "ref"


class VersionManager(ABC):
    """
    Capability interface of the external version manager.

    Plugins are plain data (a name plus a version); the interface never hands
    out plugin objects.
    """

    @abstractmethod
    def list_plugins(self) -> List[str]:
        """Names of all installed plugins."""
        pass

    @abstractmethod
    def plugin_root(self, plugin: str) -> Path:
        """Directory of an installed plugin (may not exist)."""
        pass

    @abstractmethod
    def current_versions_for_dir(
        self, plugin: str, directory: Path
    ) -> Optional[Tuple[List[str], str]]:
        """
        Versions selected for a plugin in a directory.

        Returns:
            (version specs in priority order, declaring source), or None if
            no version is selected
        """
        pass

    @abstractmethod
    def install_path(self, plugin: str, install_type: str, version: str) -> Path:
        """Install location of a plugin version (may not exist)."""
        pass

    @abstractmethod
    def bin_sub_paths(self, plugin: str, version: str, install_type: str) -> List[str]:
        """Binary directories of an installed version, relative to its install path."""
        pass

    @abstractmethod
    def resolve_latest(self, plugin: str, constraint: str) -> str:
        """Newest available version matching ``constraint``."""
        pass

    def not_installed_message(self, plugin: str, version: str) -> str:
        """Remediation shown when a version is missing."""
        return f"{plugin} {version} not installed. Run 'asdf install' and then 'direnv reload'."

    def shims_dir(self, plugin: str) -> Path:
        """Custom command shims shipped by a plugin."""
        return self.plugin_root(plugin) / "shims"

    def exec_env_script(self, plugin: str) -> Path:
        """Custom environment hook shipped by a plugin."""
        return self.plugin_root(plugin) / "bin" / "exec-env"

    def require_plugin(self, plugin: str) -> Path:
        """
        Plugin root, verified to exist.

        Raises:
            PluginNotFoundError: If the plugin directory is missing
        """
        root = self.plugin_root(plugin)
        if not root.is_dir():
            raise PluginNotFoundError(plugin)
        return root


def find_asdf_executable(settings: Settings) -> Path:
    """
    Locate the asdf executable.

    Lookup order: ``settings.asdf_bin`` (TOOLENV_ASDF_BIN), then PATH.

    Raises:
        ConfigurationError: If no executable can be found
    """
    if settings.asdf_bin is not None:
        if not Path(settings.asdf_bin).exists():
            raise ConfigurationError(
                f"TOOLENV_ASDF_BIN points to a missing file: {settings.asdf_bin}"
            )
        return Path(settings.asdf_bin)

    found = shutil.which("asdf")
    if found:
        return Path(found)

    raise ConfigurationError(
        "No asdf executable found. Install asdf or set "
        'TOOLENV_ASDF_BIN, e.g. export TOOLENV_ASDF_BIN="$(command -v asdf)"'
    )


class AsdfVersionManager(VersionManager):
    """
    ``VersionManager`` backed by an asdf data directory and executable.

    Attributes:
        data_dir: asdf data root
        executable: asdf executable, used for ``latest`` queries
        versions_filename: Declaration file name
        home: Home directory holding the user-global declaration file
    """

    def __init__(
        self,
        data_dir: Path,
        executable: Optional[Path] = None,
        versions_filename: str = ".tool-versions",
        home: Optional[Path] = None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        self.data_dir = Path(data_dir)
        self.executable = Path(executable) if executable else None
        self.versions_filename = versions_filename
        self.home = Path(home) if home else Path.home()
        self._environ = environ if environ is not None else os.environ

    @classmethod
    def from_settings(cls, settings: Settings) -> "AsdfVersionManager":
        """
        Create a manager from settings, resolving the executable eagerly.

        Raises:
            ConfigurationError: If the asdf executable can't be found
        """
        return cls(
            data_dir=settings.data_dir,
            executable=find_asdf_executable(settings),
            versions_filename=settings.versions_filename,
            home=settings.home,
        )

    @property
    def plugins_dir(self) -> Path:
        return self.data_dir / "plugins"

    def list_plugins(self) -> List[str]:
        return sorted(list_installed_plugins(self.plugins_dir))

    def plugin_root(self, plugin: str) -> Path:
        return self.plugins_dir / plugin

    def install_path(self, plugin: str, install_type: str, version: str) -> Path:
        installs = self.data_dir / "installs" / plugin
        if install_type == INSTALL_TYPE_VERSION:
            return installs / version
        if install_type == INSTALL_TYPE_REF:
            return installs / f"ref-{version}"
        return Path(version)

    def current_versions_for_dir(
        self, plugin: str, directory: Path
    ) -> Optional[Tuple[List[str], str]]:
        env_var = f"ASDF_{plugin.upper().replace('-', '_')}_VERSION"
        if self._environ.get(env_var):
            logger.debug(f"{plugin} version taken from {env_var}")
            return self._environ[env_var].split(), f"{env_var} environment variable"

        directory = Path(directory).absolute()
        candidates = [d / self.versions_filename for d in (directory, *directory.parents)]
        candidates.append(self.home / self.versions_filename)

        for candidate in candidates:
            if not candidate.is_file():
                continue
            for declaration in parse_declarations(candidate):
                if declaration.plugin == plugin and declaration.versions:
                    return list(declaration.versions), str(candidate)

        return None

    def bin_sub_paths(self, plugin: str, version: str, install_type: str) -> List[str]:
        script = self.plugin_root(plugin) / "bin" / "list-bin-paths"
        if not script.is_file():
            return ["bin"]

        env = dict(self._environ)
        env.update(
            {
                "ASDF_INSTALL_TYPE": install_type,
                "ASDF_INSTALL_VERSION": version,
                "ASDF_INSTALL_PATH": str(self.install_path(plugin, install_type, version)),
            }
        )
        output = self._run([str(script)], env=env)
        return output.split()

    def resolve_latest(self, plugin: str, constraint: str) -> str:
        if self.executable is None:
            raise VersionManagerError(
                f"Cannot resolve latest {plugin} version: no asdf executable configured"
            )

        cmd = [str(self.executable), "latest", plugin]
        if constraint:
            cmd.append(constraint)

        version = self._run(cmd).strip()
        if not version:
            raise VersionManagerError(
                f"No {plugin} version matches 'latest:{constraint}'"
            )
        return version

    def _run(self, cmd: List[Union[str, Path]], env: Optional[Mapping[str, str]] = None) -> str:
        logger.debug(f"Running: {' '.join(str(c) for c in cmd)}")
        try:
            result = subprocess.run(
                [str(c) for c in cmd],
                capture_output=True,
                text=True,
                env=env,
                check=False,
            )
        except OSError as e:
            raise VersionManagerError(f"Failed to run {cmd[0]}: {e}") from e

        if result.returncode != 0:
            detail = result.stderr.strip() or f"exit code {result.returncode}"
            raise VersionManagerError(f"{Path(str(cmd[0])).name} failed: {detail}")

        return result.stdout
