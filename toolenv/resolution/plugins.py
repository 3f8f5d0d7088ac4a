"""
Installed plugin enumeration.
"""

import logging
from pathlib import Path
from typing import Iterable, List, Set, Union

logger = logging.getLogger(__name__)


def list_installed_plugins(plugins_dir: Union[str, Path]) -> Set[str]:
    """
    Names of all plugin directories directly under ``plugins_dir``.

    Args:
        plugins_dir: Plugin installation root

    Returns:
        Set of plugin names (empty if the root doesn't exist)
    """
    plugins_dir = Path(plugins_dir)
    if not plugins_dir.is_dir():
        logger.debug(f"Plugin root does not exist: {plugins_dir}")
        return set()
    return {entry.name for entry in plugins_dir.iterdir() if entry.is_dir()}


def global_only_plugins(installed: Iterable[str], declared_local: Iterable[str]) -> List[str]:
    """
    Installed plugins not declared in the local declaration file.

    Args:
        installed: All installed plugin names
        declared_local: Plugin names declared locally

    Returns:
        The difference, sorted lexicographically

    Example:
        >>> global_only_plugins({"ruby", "nodejs", "python"}, ["python"])
        ['nodejs', 'ruby']
    """
    local = set(declared_local)
    return sorted(name for name in set(installed) if name not in local)
