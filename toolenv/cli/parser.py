"""
toolenv CLI argument parser.

This module implements the command-line interface for toolenv using argparse.
"""

import argparse
import importlib
import logging
import sys
from pathlib import Path
from typing import List, Optional

from toolenv import __version__
from toolenv.core.exceptions import ToolEnvError

logger = logging.getLogger(__name__)


class CLI:
    """toolenv command-line interface."""

    command_map = {
        "envrc": "toolenv.cli.commands.envrc",
        "show": "toolenv.cli.commands.show",
        "clean": "toolenv.cli.commands.clean",
    }

    def __init__(self):
        """Initialize CLI with argument parser."""
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """
        Create argument parser with all subcommands.

        Returns:
            Configured ArgumentParser instance
        """
        parser = argparse.ArgumentParser(
            prog="toolenv",
            description="toolenv - cached .tool-versions environments for direnv",
            epilog='Use "toolenv COMMAND --help" for command-specific help',
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        # Global options
        parser.add_argument(
            "--version", action="version", version=f"toolenv {__version__}"
        )
        parser.add_argument(
            "--verbose", "-v", action="store_true", help="Enable verbose output"
        )
        parser.add_argument(
            "--quiet",
            "-q",
            action="store_true",
            help="Enable minimal output (errors only)",
        )
        parser.add_argument(
            "--debug",
            action="store_true",
            default=None,
            help="Debug mode: trace resolution and always regenerate (same as TOOLENV_DEBUG=1)",
        )
        parser.add_argument(
            "--config",
            type=Path,
            metavar="PATH",
            help="Path to settings file (default: ~/.config/toolenv/config.yaml)",
        )
        parser.add_argument(
            "--cwd",
            type=Path,
            metavar="PATH",
            default=Path.cwd(),
            help="Directory to resolve the environment for (default: current directory)",
        )

        # Subcommands
        subparsers = parser.add_subparsers(
            dest="command", help="Available commands", metavar="COMMAND"
        )

        self._add_envrc_command(subparsers)
        self._add_show_command(subparsers)
        self._add_clean_command(subparsers)

        return parser

    def _add_envrc_command(self, subparsers):
        """Add 'envrc' subcommand."""
        parser = subparsers.add_parser(
            "envrc",
            help="Print the path of the cached environment for a directory",
            description="Get or create the cached environment file for a directory",
        )
        parser.add_argument(
            "extra_args",
            nargs="*",
            metavar="ARG",
            help="Extra arguments; different arguments get different cache entries",
        )

    def _add_show_command(self, subparsers):
        """Add 'show' subcommand."""
        parser = subparsers.add_parser(
            "show",
            help="Print the cached environment operations for a directory",
            description="Get or create the cached environment and print its operations",
        )
        parser.add_argument(
            "extra_args",
            nargs="*",
            metavar="ARG",
            help="Extra arguments; different arguments get different cache entries",
        )

    def _add_clean_command(self, subparsers):
        """Add 'clean' subcommand."""
        subparsers.add_parser(
            "clean",
            help="Remove all cached environments",
            description="Remove the toolenv cache directory",
        )

    def run(self, argv: Optional[List[str]] = None) -> int:
        """
        Parse arguments and run the selected command.

        Args:
            argv: Command-line arguments (default: sys.argv[1:])

        Returns:
            Exit code
        """
        args = self.parser.parse_args(argv)

        self._configure_logging(args)

        if not args.command:
            self.parser.print_help()
            return 1

        return self._dispatch_command(args)

    def _configure_logging(self, args):
        """
        Configure logging based on verbose/quiet/debug flags.

        Args:
            args: Parsed arguments with verbose/quiet flags
        """
        if args.verbose or args.debug:
            level = logging.DEBUG
            format_str = "%(levelname)s [%(name)s] %(message)s"
        elif args.quiet:
            level = logging.ERROR
            format_str = "%(levelname)s: %(message)s"
        else:
            level = logging.INFO
            format_str = "%(message)s"

        logging.basicConfig(
            level=level,
            format=format_str,
            stream=sys.stderr,
            force=True,  # Reconfigure if already configured
        )

    def _dispatch_command(self, args) -> int:
        """
        Dispatch to appropriate command handler.

        Args:
            args: Parsed arguments with command field

        Returns:
            Exit code from command handler
        """
        module_name = self.command_map.get(args.command)
        if not module_name:
            logger.error(f"Unknown command: {args.command}")
            return 1

        module = importlib.import_module(module_name)

        try:
            return module.run(args)
        except ToolEnvError as e:
            logger.error(str(e))
            return 1


def main():
    """Main entry point for CLI."""
    cli = CLI()
    sys.exit(cli.run())


if __name__ == "__main__":
    main()
