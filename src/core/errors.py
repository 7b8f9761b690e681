"""Gallery sync exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Platform failures share one base type so a run can abort on any of them.
"""

from __future__ import annotations


class GallerySyncError(Exception):
    """Base exception for all gallery sync failures."""


class GallerySyncConfigError(GallerySyncError):
    """Raised for invalid runtime configuration."""


class GallerySyncSettingsError(GallerySyncConfigError):
    """Raised for invalid or unreadable YAML settings files."""


class GallerySyncPlatformError(GallerySyncError):
    """Raised for content platform failures during traversal, lookup, or write."""


class GallerySyncSiteDocumentError(GallerySyncPlatformError):
    """Raised when a site document is corrupt or fails schema checks."""


class GallerySyncSiteStoreError(GallerySyncPlatformError):
    """Raised when the site store cannot be read, written, or committed."""


class GallerySyncDependencyError(GallerySyncError):
    """Raised when an optional runtime dependency is missing."""
