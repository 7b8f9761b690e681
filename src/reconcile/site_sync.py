"""Whole-site reconciliation driver.

This module walks every channel once, reads its editor groups, and hands
each channel to the reconciler. Platform failures are not caught here so
that one failure aborts the whole run.
"""

from __future__ import annotations

from cms.permissions import read_editor_groups
from cms.protocols import SitePlatform
from cms.site_store import open_site
from core.config import GallerySyncConfig
from core.constants import PUBLISHING_MODE_PUBLISHED, PUBLISHING_MODE_UPDATE
from core.logging_config import get_logger
from core.types import ReconcileOutcome, SiteSyncSummary
from reconcile.negative_cache import NegativeCache
from reconcile.reconciler import GalleryReconciler

_LOGGER = get_logger(__name__)


def reconcile_site(
    site: SitePlatform,
    reconciler: GalleryReconciler,
    include_hidden: bool = True,
) -> SiteSyncSummary:
    """Reconcile every channel of a site in traversal order.

    Args:
        site: Traversal and permission source.
        reconciler: Reconciler holding the run's negative cache.
        include_hidden: Whether hidden channels are visited.

    Returns:
        Run counters.

    Raises:
        GallerySyncPlatformError: On the first traversal, permission, lookup, or write failure.
    """
    outcomes: list[ReconcileOutcome] = []
    for channel in site.traverse_channels(include_hidden=include_hidden):
        _LOGGER.info("channel_visited", channel=channel.path)
        editor_groups = read_editor_groups(site, channel)
        outcomes.append(reconciler.reconcile(channel, editor_groups))
    summary = _summarize(outcomes, reconciler)
    _LOGGER.info(
        "gallery_sync_completed",
        channels_visited=summary.channels_visited,
        galleries_updated=summary.galleries_updated,
        channels_unresolved=summary.channels_unresolved,
        lookups_performed=summary.lookups_performed,
        dry_run=summary.dry_run,
    )
    return summary


def run_gallery_sync(config: GallerySyncConfig, dry_run: bool = False) -> SiteSyncSummary:
    """Open the configured site and run one reconciliation pass.

    Dry runs open the site read-only. Each call starts with an empty
    negative cache.

    Args:
        config: Runtime configuration.
        dry_run: Report changes without writing them.

    Returns:
        Run counters.
    """
    mode = PUBLISHING_MODE_PUBLISHED if dry_run else PUBLISHING_MODE_UPDATE
    site = open_site(config, mode=mode)
    reconciler = GalleryReconciler(
        lookup=site,
        writer=site,
        gallery_prefix=config.gallery_prefix,
        negative_cache=NegativeCache(),
        dry_run=dry_run,
    )
    return reconcile_site(site, reconciler, include_hidden=config.include_hidden)


def _summarize(
    outcomes: list[ReconcileOutcome],
    reconciler: GalleryReconciler,
) -> SiteSyncSummary:
    return SiteSyncSummary(
        channels_visited=len(outcomes),
        galleries_updated=sum(1 for outcome in outcomes if outcome.status == "updated"),
        galleries_unchanged=sum(1 for outcome in outcomes if outcome.status == "unchanged"),
        channels_unresolved=sum(1 for outcome in outcomes if outcome.status == "unresolved"),
        lookups_performed=sum(outcome.lookups for outcome in outcomes),
        groups_without_gallery=tuple(reconciler.negative_cache),
        dry_run=reconciler.dry_run,
    )
