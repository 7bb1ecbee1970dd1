"""
goupgrade CLI argument parser.

This module implements the command-line interface for goupgrade using argparse.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

# Get version from package
try:
    from importlib.metadata import version

    __version__ = version("goupgrade")
except Exception:
    __version__ = "0.1.0"

logger = logging.getLogger(__name__)


class CLI:
    """goupgrade command-line interface."""

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
            prog="goupgrade",
            description="goupgrade - upgrade the installed Go toolchain",
            epilog='Use "goupgrade COMMAND --help" for command-specific help',
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        # Global options
        parser.add_argument(
            "--version", action="version", version=f"goupgrade {__version__}"
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
            help="Path to configuration file (default: ~/.goupgrade.yaml)",
        )
        parser.add_argument(
            "--goroot",
            type=Path,
            metavar="PATH",
            help="Toolchain installation directory (default: $GOROOT)",
        )

        # Subcommands
        subparsers = parser.add_subparsers(
            dest="command", help="Available commands", metavar="COMMAND"
        )

        self._add_check_command(subparsers)
        self._add_releases_command(subparsers)
        self._add_upgrade_command(subparsers)

        return parser

    def _add_check_command(self, subparsers):
        """Add 'check' subcommand."""
        parser = subparsers.add_parser(
            "check",
            help="Check for a newer toolchain",
            description="Report whether a newer release exists for this platform",
        )
        parser.add_argument(
            "--unstable", action="store_true", help="Consider unstable releases"
        )

    def _add_releases_command(self, subparsers):
        """Add 'releases' subcommand."""
        parser = subparsers.add_parser(
            "releases",
            help="List available releases",
            description="List published releases, newest first",
        )
        parser.add_argument(
            "--unstable", action="store_true", help="Include unstable releases"
        )
        parser.add_argument(
            "--limit",
            type=int,
            default=10,
            metavar="N",
            help="Number of releases to show (default: 10, 0 for all)",
        )

    def _add_upgrade_command(self, subparsers):
        """Add 'upgrade' subcommand."""
        parser = subparsers.add_parser(
            "upgrade",
            help="Upgrade the toolchain",
            description=(
                "Download and extract the newest release. Without --install "
                "this is a dry run and GOROOT is left untouched."
            ),
        )
        parser.add_argument(
            "--unstable", action="store_true", help="Consider unstable releases"
        )
        parser.add_argument(
            "--install",
            action="store_true",
            help="Replace GOROOT with the new toolchain (disables dry run)",
        )
        parser.add_argument(
            "--work-dir",
            type=Path,
            metavar="PATH",
            help="Directory for downloads and extraction (default: system temp)",
        )
        parser.add_argument(
            "--yes", "-y", action="store_true", help="Do not ask for confirmation"
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

        # Configure logging
        self._configure_logging(parsed_args)

        # Check if command specified
        if not parsed_args.command:
            self.parser.print_help()
            return 1

        # Dispatch to command handler
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
            "check": "goupgrade.cli.commands.check",
            "releases": "goupgrade.cli.commands.releases",
            "upgrade": "goupgrade.cli.commands.upgrade",
        }

        module_name = command_map.get(args.command)
        if not module_name:
            logger.error(f"Unknown command: {args.command}")
            return 1

        import importlib

        module = importlib.import_module(module_name)
        return module.run(args)


def main():
    """Main entry point for CLI."""
    cli = CLI()
    sys.exit(cli.run())


if __name__ == "__main__":
    main()
