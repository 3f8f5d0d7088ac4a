"""
Clean command implementation.

Removes every cached environment.
"""

import logging

from toolenv.cli.utils import settings_from_args
from toolenv.core.directory import clear_cache

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the clean command.

    Clearing needs neither asdf nor direnv.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    settings = settings_from_args(args)
    clear_cache(settings.cache_dir)
    return 0
