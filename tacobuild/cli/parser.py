"""
tacobuild CLI argument parser.

This module implements the command-line interface using argparse.
"""

import argparse
import importlib
import logging
import sys
from pathlib import Path
from typing import List, Optional

from tacobuild import __version__
from tacobuild.core.exceptions import TacoBuildError

logger = logging.getLogger(__name__)

COMMAND_MODULES = {
    "setup": "tacobuild.cli.commands.setup",
    "build": "tacobuild.cli.commands.build",
    "package": "tacobuild.cli.commands.package",
    "cache": "tacobuild.cli.commands.cache",
}


class CLI:
    """tacobuild command-line interface."""

    def __init__(self):
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(
            prog="taco-team-build",
            description="Build Cordova projects with a cached, version-pinned Cordova",
            epilog='Use "taco-team-build COMMAND --help" for command-specific help',
        )

        # Global options
        parser.add_argument(
            "--version", action="version", version=f"taco-team-build {__version__}"
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
            help="Path to settings file (default: <project>/tacobuild.yaml)",
        )
        parser.add_argument(
            "--project-root",
            type=Path,
            metavar="PATH",
            help="Cordova project directory (default: current directory)",
        )
        parser.add_argument(
            "--cache-dir",
            type=Path,
            metavar="PATH",
            help="Toolchain cache directory (default: $CORDOVA_CACHE or ~/.cordova-cache)",
        )
        parser.add_argument(
            "--cordova-version",
            metavar="VERSION",
            help="Cordova version to use (default: taco.json, then $CORDOVA_DEFAULT_VERSION)",
        )

        subparsers = parser.add_subparsers(
            dest="command", help="Available commands", metavar="COMMAND"
        )

        subparsers.add_parser(
            "setup",
            help="Install and load the project's Cordova version",
            description="Resolve the Cordova version, install it into the cache "
            "if needed and add the support plugin to the project",
        )

        build_parser = subparsers.add_parser(
            "build",
            help="Build for one or more platforms",
            description="Add missing platforms, then build each platform in order",
        )
        self._add_platform_arguments(build_parser)

        package_parser = subparsers.add_parser(
            "package",
            help="Package built platforms (iOS .ipa)",
            description="Run post-build packaging for each platform in order",
        )
        self._add_platform_arguments(package_parser)

        subparsers.add_parser(
            "cache",
            help="List Cordova versions installed in the cache",
        )

        return parser

    def _add_platform_arguments(self, parser: argparse.ArgumentParser):
        parser.add_argument(
            "platforms", nargs="+", metavar="PLATFORM", help="Target platform(s)"
        )
        parser.add_argument(
            "--option",
            "-o",
            dest="options",
            action="append",
            default=[],
            metavar="PLATFORM=OPTION",
            help="Option passed for one platform (repeatable), e.g. android=--release",
        )

    def parse_args(self, args: Optional[List[str]] = None):
        """Parse command-line arguments (sys.argv if None)."""
        return self.parser.parse_args(args)

    def run(self, args: Optional[List[str]] = None) -> int:
        """
        Parse arguments and run the selected command.

        Returns:
            Exit code (0 for success)
        """
        parsed_args = self.parse_args(args)
        self._configure_logging(parsed_args)

        if not parsed_args.command:
            self.parser.print_help()
            return 1

        try:
            module = importlib.import_module(COMMAND_MODULES[parsed_args.command])
            return module.run(parsed_args)
        except KeyboardInterrupt:
            logger.info("Operation cancelled by user")
            return 130
        except TacoBuildError as e:
            logger.error(f"Error: {e}")
            if parsed_args.verbose:
                import traceback

                traceback.print_exc()
            return 1

    def _configure_logging(self, args):
        """Configure logging based on verbose/quiet flags."""
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


def main():
    """Main entry point for CLI."""
    cli = CLI()
    sys.exit(cli.run())


if __name__ == "__main__":
    main()
