"""
Runtime settings for toolenv.

Settings are layered: built-in defaults, then an optional YAML file, then
environment variables. Later layers win.

Environment variables:
    TOOLENV_CONFIG      : Path to the YAML settings file
    TOOLENV_ASDF_BIN    : Version manager executable override
    TOOLENV_DIRENV_BIN  : Watcher executable override
    TOOLENV_CACHE_DIR   : Cache root override
    TOOLENV_DEBUG       : Any non-empty value enables debug mode
    ASDF_DATA_DIR       : Version manager data root (plugins/, installs/)
    ASDF_DEFAULT_TOOL_VERSIONS_FILENAME : Declaration file name

Example:
    >>> settings = load_settings()
    >>> settings.cache_dir
    PosixPath('/home/user/.cache/toolenv')
"""

import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from toolenv.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_VERSIONS_FILENAME = ".tool-versions"

_PATH_FIELDS = {"asdf_bin", "direnv_bin", "cache_dir", "data_dir", "home"}


@dataclass
class Settings:
    """
    Effective toolenv settings.

    Attributes:
        home: User home directory (holds the user-global declaration file)
        cache_dir: Cache root holding env/ and env-generating/
        data_dir: Version manager data root
        versions_filename: Name of the version-declaration file
        asdf_bin: Explicit version manager executable, if configured
        direnv_bin: Explicit watcher executable, if configured
        debug: Debug mode (verbose tracing, cache hits bypassed)
    """

    home: Path = field(default_factory=Path.home)
    cache_dir: Optional[Path] = None
    data_dir: Optional[Path] = None
    versions_filename: str = DEFAULT_VERSIONS_FILENAME
    asdf_bin: Optional[Path] = None
    direnv_bin: Optional[Path] = None
    debug: bool = False

    def __post_init__(self):
        self.home = Path(self.home)
        if self.cache_dir is None:
            self.cache_dir = self.home / ".cache" / "toolenv"
        if self.data_dir is None:
            self.data_dir = self.home / ".asdf"
        self.cache_dir = Path(self.cache_dir)
        self.data_dir = Path(self.data_dir)

    @property
    def global_versions_file(self) -> Path:
        """User-global declaration file."""
        return self.home / self.versions_filename


def default_config_file(environ: Mapping[str, str]) -> Path:
    """Location of the YAML settings file for the given environment."""
    if environ.get("TOOLENV_CONFIG"):
        return Path(environ["TOOLENV_CONFIG"])
    config_home = environ.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    return Path(config_home) / "toolenv" / "config.yaml"


def load_config_file(config_file: Path) -> Dict[str, Any]:
    """
    Load settings overrides from a YAML file.

    Args:
        config_file: Path to YAML settings file

    Returns:
        Settings overrides (empty dict if the file doesn't exist)

    Raises:
        ConfigurationError: If the file can't be parsed or isn't a mapping
    """
    if not config_file.exists():
        logger.debug(f"Config file not found (optional): {config_file}")
        return {}

    logger.debug(f"Loading configuration from {config_file}")

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {config_file}: {e}") from e

    data = data or {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Expected a mapping in {config_file}")

    known = {f.name for f in fields(Settings)}
    overrides = {}
    for key, value in data.items():
        if key not in known:
            logger.debug(f"Ignoring unknown config key '{key}' in {config_file}")
            continue
        overrides[key] = value

    if "debug" in overrides and not isinstance(overrides["debug"], bool):
        raise ConfigurationError(
            f"Expected true or false for 'debug' in {config_file}, "
            f"got {overrides['debug']!r}"
        )
    return overrides


def _environment_overrides(environ: Mapping[str, str]) -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    mapping = {
        "TOOLENV_ASDF_BIN": "asdf_bin",
        "TOOLENV_DIRENV_BIN": "direnv_bin",
        "TOOLENV_CACHE_DIR": "cache_dir",
        "ASDF_DATA_DIR": "data_dir",
        "ASDF_DEFAULT_TOOL_VERSIONS_FILENAME": "versions_filename",
    }
    for var, key in mapping.items():
        if environ.get(var):
            overrides[key] = environ[var]

    if environ.get("TOOLENV_DEBUG"):
        overrides["debug"] = True

    return overrides


def load_settings(
    environ: Optional[Mapping[str, str]] = None,
    config_file: Optional[Path] = None,
    **overrides: Any,
) -> Settings:
    """
    Build effective settings from defaults, YAML file and environment.

    Args:
        environ: Environment mapping (default: os.environ)
        config_file: YAML settings file (default: see default_config_file)
        **overrides: Final explicit overrides (e.g. from CLI flags)

    Returns:
        Settings instance

    Raises:
        ConfigurationError: If the YAML file is invalid
    """
    if environ is None:
        environ = os.environ
    if config_file is None:
        config_file = default_config_file(environ)

    values: Dict[str, Any] = {}
    if environ.get("HOME"):
        values["home"] = Path(environ["HOME"])
    if environ.get("XDG_CACHE_HOME"):
        values["cache_dir"] = Path(environ["XDG_CACHE_HOME"]) / "toolenv"
    values.update(load_config_file(config_file))
    values.update(_environment_overrides(environ))
    values.update({k: v for k, v in overrides.items() if v is not None})

    for key in _PATH_FIELDS:
        if values.get(key) is not None:
            values[key] = Path(values[key]).expanduser()

    settings = Settings(**values)
    logger.debug(f"Effective settings: {settings}")
    return settings
