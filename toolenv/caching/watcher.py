"""
Watcher collaborator.

The watcher (direnv) decides when to re-run toolenv and tracks the mtimes of
watched files. Its status output is part of the cache fingerprint, so a
change in any watched file yields a new cache entry.
"""

import logging
import shutil
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from toolenv.core.config import Settings
from toolenv.core.exceptions import ConfigurationError, WatcherError

logger = logging.getLogger(__name__)

DIRENV_NOT_FOUND_MESSAGE = """No direnv executable found. Please do one of the following:

With a system installed direnv

    export TOOLENV_DIRENV_BIN="$(command -v direnv)"

With an asdf installed direnv

    export TOOLENV_DIRENV_BIN="$(asdf which direnv)"
"""


class Watcher(ABC):
    """Opaque change-detection collaborator."""

    @abstractmethod
    def status(self) -> str:
        """Current watcher status; any change must invalidate the cache."""
        pass


class DirenvWatcher(Watcher):
    """Watcher backed by ``direnv status``."""

    def __init__(self, executable: Path):
        self.executable = Path(executable)

    def status(self) -> str:
        try:
            result = subprocess.run(
                [str(self.executable), "status"],
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as e:
            raise WatcherError(f"Failed to run {self.executable}: {e}") from e

        if result.returncode != 0:
            raise WatcherError(
                f"direnv status failed: {result.stderr.strip() or result.returncode}"
            )
        return result.stdout


def find_direnv_executable(settings: Settings, asdf_executable: Optional[Path] = None) -> Path:
    """
    Locate the direnv executable.

    Lookup order: ``settings.direnv_bin`` (TOOLENV_DIRENV_BIN), then PATH,
    then ``asdf which direnv``.

    Raises:
        ConfigurationError: If direnv can't be found
    """
    if settings.direnv_bin is not None:
        return Path(settings.direnv_bin)

    found = shutil.which("direnv")
    if found:
        return Path(found)

    if asdf_executable is not None:
        try:
            result = subprocess.run(
                [str(asdf_executable), "which", "direnv"],
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as e:
            logger.debug(f"asdf which direnv failed: {e}")
        else:
            if result.returncode == 0 and result.stdout.strip():
                return Path(result.stdout.strip())

    raise ConfigurationError(DIRENV_NOT_FOUND_MESSAGE)
