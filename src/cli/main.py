"""Gallery sync CLI entry points.

This module maps argparse commands onto the site reconciliation run and
turns any unrecovered failure into an operator-visible non-zero exit.
"""

from __future__ import annotations

import argparse
import sys
from typing import Any, Sequence

from cli.run_command import add_run_command, run_run_command
from core.config import GallerySyncConfig
from core.errors import GallerySyncError
from core.logging_config import get_logger
from core.settings_file import load_settings_file

_LOGGER = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="gallery-sync",
        description="Set each channel's default resource gallery from its editor groups",
    )
    parser.add_argument("--config", help="Optional YAML settings file overriding the environment")
    subparsers = parser.add_subparsers(dest="command", required=True)
    add_run_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the gallery sync CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = _build_config(args)
        if args.command == "run":
            return run_run_command(config, args)
    except GallerySyncError as error:
        _report_failure(args, error)
        return 1
    except Exception as error:
        _report_failure(args, error)
        raise
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_config(args: argparse.Namespace) -> GallerySyncConfig:
    """Layer settings file values over the environment config.

    Args:
        args: Parsed CLI args.

    Returns:
        Validated config.
    """
    config = GallerySyncConfig.from_env()
    if args.config:
        config = load_settings_file(args.config).apply(config)
    return config


def _report_failure(args: Any, error: Exception) -> None:
    _LOGGER.error(
        "gallery_sync_failed",
        command=args.command,
        error_type=type(error).__name__,
        error=str(error),
    )
    print(f"gallery-sync {args.command} failed: {error}", file=sys.stderr)
