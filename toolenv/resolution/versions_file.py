"""
Version-declaration file lookup and parsing.

A declaration file (``.tool-versions`` by default) maps plugin names to one
or more version specs:

    # runtimes
    ruby 3.1.2
    python 3.11.4 3.10.12   # fallback list, first one wins
    nodejs latest:20

Everything from ``#`` to the end of a line is ignored, as are blank lines.
When a plugin appears twice the first line wins.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from toolenv.core.exceptions import ConfigurationError
from toolenv.core.filesystem import find_up

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VersionDeclaration:
    """One plugin line of a declaration file."""

    plugin: str
    versions: Tuple[str, ...]


def find_versions_file(
    cwd: Union[str, Path], filename: str, home: Union[str, Path]
) -> Optional[Path]:
    """
    Locate the declaration file that applies to a directory.

    The nearest ``filename`` found walking up from ``cwd`` wins; otherwise
    the user-global file in ``home`` is used.

    Args:
        cwd: Working directory
        filename: Declaration file name (e.g. ".tool-versions")
        home: User home directory

    Returns:
        Path to the declaration file, or None if neither exists. None is a
        valid configuration: only globally installed plugins apply.
    """
    local = find_up(filename, cwd)
    if local is not None:
        return local

    global_file = Path(home) / filename
    if global_file.is_file():
        return global_file

    logger.debug(f"No {filename} found for {cwd}")
    return None


def parse_declaration_text(text: str) -> List[VersionDeclaration]:
    """
    Parse declaration file content.

    Args:
        text: File content

    Returns:
        Declarations in file order, one per plugin (first occurrence wins)

    Example:
        >>> parse_declaration_text("ruby 3.1.2\\n# comment\\npython latest:3.10\\n")
        [VersionDeclaration(plugin='ruby', versions=('3.1.2',)),
         VersionDeclaration(plugin='python', versions=('latest:3.10',))]
    """
    # first line per plugin wins and keeps its position
    first: Dict[str, VersionDeclaration] = {}
    for line in text.splitlines():
        fields = line.split("#", 1)[0].split()
        if not fields:
            continue
        first.setdefault(fields[0], VersionDeclaration(fields[0], tuple(fields[1:])))
    return list(first.values())


def parse_declarations(path: Union[str, Path]) -> List[VersionDeclaration]:
    """
    Parse a declaration file from disk.

    Raises:
        ConfigurationError: If the file can't be read or isn't UTF-8
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(f"Cannot read {path}: {e}") from e
    return parse_declaration_text(text)


def declared_plugins(declarations: List[VersionDeclaration]) -> List[str]:
    """Plugin names in declaration order."""
    return [d.plugin for d in declarations]
