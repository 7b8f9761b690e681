"""Public SDK surface for gallery sync.

This module provides a stable import path for scripted runs.
It re-exports the reconciler, site store, and typed models.
"""

from __future__ import annotations

from cms.site_store import SiteStore, open_site
from core.config import GallerySyncConfig
from core.errors import GallerySyncError, GallerySyncPlatformError
from core.types import Channel, ReconcileOutcome, ResourceGallery, SiteSyncSummary
from reconcile.negative_cache import NegativeCache
from reconcile.reconciler import GalleryReconciler
from reconcile.site_sync import reconcile_site, run_gallery_sync

__all__ = [
    "Channel",
    "GalleryReconciler",
    "GallerySyncConfig",
    "GallerySyncError",
    "GallerySyncPlatformError",
    "NegativeCache",
    "ReconcileOutcome",
    "ResourceGallery",
    "SiteStore",
    "SiteSyncSummary",
    "open_site",
    "reconcile_site",
    "run_gallery_sync",
]
