"""
Per-plugin version resolution.

Turns the version specs a directory selects for a plugin into concrete
versions, in the order their environment operations must be emitted.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

from toolenv.core.ordering import reverse_for_precedence
from toolenv.resolution.version_manager import VersionManager

logger = logging.getLogger(__name__)

SYSTEM_VERSION = "system"
LATEST_PREFIX = "latest"


@dataclass(frozen=True)
class PluginResolution:
    """
    A plugin pinned to one concrete version.

    Attributes:
        plugin: Plugin name
        version: Concrete version, or "system" for whatever is already on PATH
        declaring_file: Source that selected the version
    """

    plugin: str
    version: str
    declaring_file: Optional[str]

    @property
    def is_system(self) -> bool:
        return self.version == SYSTEM_VERSION


def split_latest(spec: str) -> Optional[str]:
    """
    Constraint of a ``latest[:<constraint>]`` spec, None for other specs.

    Example:
        >>> split_latest("latest:3.10")
        '3.10'
        >>> split_latest("3.10.4") is None
        True
    """
    head, _, constraint = spec.partition(":")
    if head != LATEST_PREFIX:
        return None
    return constraint


class VersionResolver:
    """Resolves the versions a directory selects for each plugin."""

    def __init__(self, version_manager: VersionManager):
        self.version_manager = version_manager

    def resolve_versions(self, plugin: str, cwd: Path) -> Optional[Tuple[List[str], str]]:
        """
        Version specs for ``plugin`` in ``cwd``, in emission order.

        A declaration line can list several fallback versions; the first one
        must win on the final PATH, so it is emitted last.

        Returns:
            (version specs, declaring source), or None if nothing is selected
        """
        found = self.version_manager.current_versions_for_dir(plugin, cwd)
        if not found:
            return None

        specs, declaring_file = found
        if not specs:
            return None
        return reverse_for_precedence(specs), declaring_file

    def resolve_spec(self, plugin: str, spec: str) -> str:
        """
        Concrete version for one spec.

        ``latest:<constraint>`` is looked up through the version manager on
        every call; the answer is only kept in the cache entry it ends up in.
        """
        constraint = split_latest(spec)
        if constraint is None:
            return spec

        version = self.version_manager.resolve_latest(plugin, constraint)
        logger.debug(f"Resolved {plugin} {spec} to {version}")
        return version

    def resolve(self, plugin: str, cwd: Path) -> List[PluginResolution]:
        """
        Concrete versions for ``plugin`` in ``cwd``, in emission order.

        Returns:
            One PluginResolution per selected version (empty if none)
        """
        found = self.resolve_versions(plugin, cwd)
        if found is None:
            logger.debug(f"No version selected for {plugin} in {cwd}")
            return []

        specs, declaring_file = found
        return [
            PluginResolution(plugin, self.resolve_spec(plugin, spec), declaring_file)
            for spec in specs
        ]
