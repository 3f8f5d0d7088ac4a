"""
Show command implementation.

Prints the operations of the cached environment for a directory.
"""

import logging

from toolenv.cli.utils import create_cache_manager, settings_from_args

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the show command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    settings = settings_from_args(args)
    manager = create_cache_manager(settings)

    entry = manager.read_entry(manager.get_or_create(args.cwd, args.extra_args))
    logger.info(f"# {entry.path}")
    for operation in entry.operations:
        print(operation.render())
    return 0
