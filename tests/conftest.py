"""Shared pytest fixtures for gallery sync tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from core.config import GallerySyncConfig
from tests.fixture_paths import writable_fixture

_CONFIG_ENV_VARS = (
    "GALLERY_SYNC_SITE_URI",
    "GALLERY_SYNC_GALLERY_PREFIX",
    "GALLERY_SYNC_INCLUDE_HIDDEN",
    "GALLERY_SYNC_S3_REGION",
    "GALLERY_SYNC_S3_PROFILE",
)


@pytest.fixture(autouse=True)
def _clean_gallery_sync_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep host environment settings out of config-dependent tests."""
    for name in _CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def council_site_path(tmp_path: Path) -> Path:
    """Writable copy of the council site document."""
    return writable_fixture("site/council_site.json", tmp_path)


@pytest.fixture
def council_config(council_site_path: Path) -> GallerySyncConfig:
    """Config pointing at the writable council site document."""
    return GallerySyncConfig.from_env().with_overrides(site_uri=str(council_site_path))
