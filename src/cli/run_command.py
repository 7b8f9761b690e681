"""Run command wiring for gallery sync CLI."""

from __future__ import annotations

import argparse
from typing import Any

from core.config import GallerySyncConfig
from core.types import SiteSyncSummary
from reconcile.site_sync import run_gallery_sync


def add_run_command(subparsers: Any) -> None:
    """Register run subcommand."""
    parser = subparsers.add_parser(
        "run",
        help="Reconcile default resource galleries for every channel",
    )
    parser.add_argument("--site", help="Site document path or s3://bucket/key")
    parser.add_argument("--gallery-prefix", help="Gallery namespace, e.g. '/Resources/Web authors'")
    parser.add_argument(
        "--include-hidden",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Visit hidden channels and their subtrees (default from config)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Report gallery changes without writing them",
    )


def run_run_command(config: GallerySyncConfig, args: argparse.Namespace) -> int:
    """Execute one reconciliation run and print its summary."""
    run_config = config.with_overrides(
        site_uri=args.site,
        gallery_prefix=args.gallery_prefix,
        include_hidden=args.include_hidden,
    )
    summary = run_gallery_sync(run_config, dry_run=args.dry_run)
    for line in render_summary(summary):
        print(line)
    return 0


def render_summary(summary: SiteSyncSummary) -> list[str]:
    """Render run counters as ``key=value`` lines."""
    return [
        f"channels_visited={summary.channels_visited}",
        f"galleries_updated={summary.galleries_updated}",
        f"galleries_unchanged={summary.galleries_unchanged}",
        f"channels_unresolved={summary.channels_unresolved}",
        f"lookups_performed={summary.lookups_performed}",
        f"groups_without_gallery={','.join(summary.groups_without_gallery) or '-'}",
        f"dry_run={str(summary.dry_run).lower()}",
    ]
