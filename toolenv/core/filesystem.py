"""
File system utilities for toolenv.

This module provides the file operations the cache and resolvers rely on:
- Staged atomic writes (unique temp file + single rename)
- Upward search for a named file
- Safe removal of a cache tree
"""

import os
import shutil
import tempfile
from pathlib import Path
from typing import Iterable, Optional, Union


class FilesystemError(Exception):
    """Base exception for filesystem operations."""

    pass


# ============================================================================
# Path Utilities
# ============================================================================


def find_up(name: str, start: Union[str, Path]) -> Optional[Path]:
    """
    Find the nearest file called ``name`` in ``start`` or any ancestor.

    Args:
        name: File name to look for
        start: Directory to begin the search in

    Returns:
        Path to the nearest matching regular file, None if there is none

    Example:
        >>> find_up(".tool-versions", Path("/home/user/project/src"))
        PosixPath('/home/user/project/.tool-versions')
    """
    directory = Path(start).absolute()
    for candidate_dir in (directory, *directory.parents):
        candidate = candidate_dir / name
        if candidate.is_file():
            return candidate
    return None


# ============================================================================
# Safe File Operations
# ============================================================================


def staged_write(
    file_path: Union[str, Path],
    lines: Iterable[str],
    staging_dir: Union[str, Path],
    encoding: str = "utf-8",
) -> Path:
    """
    Write lines to ``file_path`` through a uniquely named staging file.

    The staging file is created in ``staging_dir`` with a random suffix so
    independent processes never share one, then renamed over ``file_path``
    in a single step. Readers see either the old file or the complete new
    one. Staging and destination must live on the same filesystem.

    Args:
        file_path: Final path
        lines: Lines to write (newline added to each)
        staging_dir: Directory for the staging file
        encoding: Text encoding

    Returns:
        The final path

    Example:
        >>> staged_write(env_dir / "abc-def", ["PATH_add /opt/bin"], staging)
    """
    file_path = Path(file_path)
    staging_dir = Path(staging_dir)
    staging_dir.mkdir(parents=True, exist_ok=True)

    temp_fd, temp_path_str = tempfile.mkstemp(
        dir=staging_dir, prefix=f"{file_path.name}."
    )
    temp_path = Path(temp_path_str)

    try:
        with open(temp_fd, "w", encoding=encoding) as f:
            for line in lines:
                f.write(f"{line}\n")
        os.replace(temp_path, file_path)
    except Exception:
        temp_path.unlink(missing_ok=True)
        raise

    return file_path


def safe_rmtree(path: Union[str, Path], require_prefix: Optional[Union[str, Path]] = None) -> None:
    """
    Remove a directory tree, refusing to touch anything outside a prefix.

    Args:
        path: Directory to remove
        require_prefix: If specified, path must be under this directory

    Raises:
        ValueError: If path is not under require_prefix
        FilesystemError: If deletion fails
    """
    path = Path(path).resolve()

    if require_prefix is not None:
        prefix = Path(require_prefix).resolve()
        if path != prefix and not path.is_relative_to(prefix):
            raise ValueError(f"Refusing to delete {path}: not under {prefix}")

    if not path.exists():
        return

    try:
        shutil.rmtree(path)
    except OSError as e:
        raise FilesystemError(f"Failed to delete {path}: {e}") from e
