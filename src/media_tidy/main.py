"""Main entry point for media-tidy."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from . import __version__
from .config import TidyConfig
from .runner import TidyRunner


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Args:
        argv: Argument list. Uses sys.argv if None.

    Returns:
        Parsed arguments.

    """
    parser = argparse.ArgumentParser(
        prog="media-tidy",
        description="Quarantine duplicate downloads or trim promotional text out of file names",
    )

    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--path",
        "-p",
        type=Path,
        required=True,
        help="Root directory to operate on",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        help="Path to configuration file",
    )
    parser.add_argument(
        "--workers",
        "-w",
        type=_positive_int,
        default=None,
        help="Number of worker threads (default: CPU count)",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Logging verbosity (default: from config, INFO)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True, help="Available commands")

    subparsers.add_parser("del", help="Move duplicated downloads into <path>/trash")

    trim_parser = subparsers.add_parser("trim", help="Remove promotional text from file names")
    trim_parser.add_argument(
        "vchar",
        nargs="?",
        default=None,
        help="Extra pattern to remove, tried before the built-in ones",
    )

    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> TidyConfig:
    """Load the config file and apply command line overrides."""
    config = TidyConfig.load(args.config)

    if args.workers is not None:
        config.workers = args.workers
    if args.log_level is not None:
        config.log_level = args.log_level
    if args.command == "trim":
        config.trim_override = args.vchar

    return config


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point.

    Returns:
        Exit code.

    """
    args = parse_args(argv)
    console = Console()

    root: Path = args.path.expanduser().absolute()
    if not root.is_dir():
        console.print(f"[red]Not a directory: {escape(str(root))}[/red]", soft_wrap=True)
        return 1

    config = build_config(args)
    runner = TidyRunner(config, root, console=console)

    try:
        runner.run(args.command)
    except KeyboardInterrupt:
        runner.logger.warning("Interrupted")
        return 130
    except OSError as e:
        runner.logger.error("Run aborted: %s", e)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
