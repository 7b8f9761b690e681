"""Unit tests for the public SDK import surface."""

from __future__ import annotations

from pathlib import Path

import gallery_sync


def test_sdk_runs_reconciliation(council_site_path: Path) -> None:
    """The SDK module should expose a working end-to-end run."""
    config = gallery_sync.GallerySyncConfig.from_env().with_overrides(
        site_uri=str(council_site_path)
    )

    summary = gallery_sync.run_gallery_sync(config)

    assert isinstance(summary, gallery_sync.SiteSyncSummary) and summary.galleries_updated == 3


def test_sdk_reconciler_with_opened_site(council_site_path: Path) -> None:
    """Opened sites plug directly into the reconciler as lookup and writer."""
    config = gallery_sync.GallerySyncConfig.from_env().with_overrides(
        site_uri=str(council_site_path)
    )
    site = gallery_sync.open_site(config, mode="update")
    reconciler = gallery_sync.GalleryReconciler(
        lookup=site,
        writer=site,
        negative_cache=gallery_sync.NegativeCache(),
    )

    outcome = reconciler.reconcile(site.root, ["Libraries"])

    assert outcome.status == "updated" and site.root.default_gallery is not None
    assert site.commit_count == 1
