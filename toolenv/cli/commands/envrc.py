"""
Envrc command implementation.

Prints the path of the cached environment file for a directory, generating
it on a cache miss. The shell integration sources that file.
"""

import logging

from toolenv.cli.utils import create_cache_manager, settings_from_args

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the envrc command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    logger.debug(f"Arguments: {args}")

    settings = settings_from_args(args)
    manager = create_cache_manager(settings)

    entry = manager.get_or_create(args.cwd, args.extra_args)
    print(entry)
    return 0
