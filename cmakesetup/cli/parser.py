"""
cmake-setup CLI argument parser.

This module implements the command-line interface for cmake-setup using argparse.
"""

import argparse
import importlib
import logging
import sys
from pathlib import Path
from typing import List, Optional

from cmakesetup import __version__

logger = logging.getLogger(__name__)


class CLI:
    """cmake-setup command-line interface."""

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
            prog="cmake-setup",
            description="cmake-setup - Install CMake release binaries on CI runners",
            epilog='Use "cmake-setup COMMAND --help" for command-specific help',
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        # Global options
        parser.add_argument(
            "--version", action="version", version=f"cmake-setup {__version__}"
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
            "--config",
            type=Path,
            metavar="PATH",
            help="Path to configuration file (default: ./cmake-setup.yaml)",
        )

        subparsers = parser.add_subparsers(
            dest="command", help="Available commands", metavar="COMMAND"
        )

        self._add_install_command(subparsers)
        self._add_resolve_command(subparsers)
        self._add_versions_command(subparsers)

        return parser

    def _add_selection_arguments(self, parser):
        """Add options shared by commands that pick a release asset."""
        parser.add_argument(
            "--cmake-version",
            metavar="VERSION",
            help="Version to install: latest, 3.28.x, 3.28.1, '>=3.20,<4' (default: latest)",
        )
        parser.add_argument(
            "--use-32bit",
            action="store_true",
            default=None,
            help="Only accept 32-bit x86 builds",
        )
        parser.add_argument(
            "--arch",
            action="append",
            metavar="ARCH",
            help="Acceptable architecture, most preferred first "
            "(can be used multiple times; x86_64, x86, arm64)",
        )
        parser.add_argument(
            "--github-api-token",
            metavar="TOKEN",
            help="GitHub API token used to list releases (default: $GITHUB_TOKEN)",
        )

    def _add_install_command(self, subparsers):
        """Add 'install' subcommand."""
        parser = subparsers.add_parser(
            "install",
            help="Install CMake and add it to PATH",
            description="Download CMake if not cached and add its bin directory to PATH",
        )
        self._add_selection_arguments(parser)
        parser.add_argument(
            "--tool-cache-dir",
            type=Path,
            metavar="DIR",
            help="Tool cache root (default: $RUNNER_TOOL_CACHE or ~/.cmakesetup/tool-cache)",
        )

    def _add_resolve_command(self, subparsers):
        """Add 'resolve' subcommand."""
        parser = subparsers.add_parser(
            "resolve",
            help="Print the download URL that would be installed",
            description="Resolve the version request and print the selected asset URL",
        )
        self._add_selection_arguments(parser)

    def _add_versions_command(self, subparsers):
        """Add 'versions' subcommand."""
        parser = subparsers.add_parser(
            "versions",
            help="List available CMake versions",
            description="List released versions matching a request, newest first",
        )
        parser.add_argument(
            "--cmake-version",
            metavar="VERSION",
            help="Only list versions matching this request (default: latest, i.e. all stable)",
        )
        parser.add_argument(
            "--limit",
            type=int,
            default=20,
            metavar="N",
            help="Maximum number of versions to list (default: 20, 0 for all)",
        )
        parser.add_argument(
            "--github-api-token",
            metavar="TOKEN",
            help="GitHub API token used to list releases (default: $GITHUB_TOKEN)",
        )

    def parse_args(self, args: Optional[List[str]] = None):
        """
        Parse command-line arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Parsed arguments namespace
        """
        return self.parser.parse_args(args)

    def run(self, args: Optional[List[str]] = None) -> int:
        """
        Run CLI with given arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Exit code (0 for success, non-zero for error)
        """
        parsed_args = self.parse_args(args)

        self._configure_logging(parsed_args)

        if not parsed_args.command:
            self.parser.print_help()
            return 1

        try:
            return self._dispatch_command(parsed_args)
        except KeyboardInterrupt:
            logger.info("Operation cancelled by user")
            return 130  # Standard exit code for SIGINT
        except Exception as e:
            logger.error(f"Error: {e}")
            if parsed_args.verbose:
                import traceback

                traceback.print_exc()
            return 1

    def _configure_logging(self, args):
        """
        Configure logging based on verbose/quiet flags.

        Args:
            args: Parsed arguments with verbose/quiet flags
        """
        if args.verbose:
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
        command_map = {
            "install": "cmakesetup.cli.commands.install",
            "resolve": "cmakesetup.cli.commands.resolve",
            "versions": "cmakesetup.cli.commands.versions",
        }

        module_name = command_map.get(args.command)
        if not module_name:
            logger.error(f"Unknown command: {args.command}")
            return 1

        module = importlib.import_module(module_name)
        return module.run(args)


def main():
    """Main entry point for CLI."""
    cli = CLI()
    sys.exit(cli.run())


if __name__ == "__main__":
    main()
