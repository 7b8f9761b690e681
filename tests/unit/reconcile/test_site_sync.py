"""Unit tests for whole-site reconciliation runs."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Iterator, Mapping

import pytest

from cms.site_store import open_site
from core.config import GallerySyncConfig
from core.errors import GallerySyncPlatformError
from core.types import Channel, ResourceGallery
from reconcile.reconciler import GalleryReconciler
from reconcile.site_sync import reconcile_site, run_gallery_sync


def _defaults_by_guid(site_path: Path) -> dict[str, str | None]:
    payload = json.loads(site_path.read_text(encoding="utf-8"))
    defaults: dict[str, str | None] = {}
    pending = [payload["root"]]
    while pending:
        channel = pending.pop()
        defaults[channel["guid"]] = channel.get("default_resource_gallery")
        pending.extend(channel.get("children", []))
    return defaults


def test_run_gallery_sync_updates_and_persists(
    council_config: GallerySyncConfig,
    council_site_path: Path,
) -> None:
    """A full run assigns first-match galleries and commits them to disk."""
    summary = run_gallery_sync(council_config)
    defaults = _defaults_by_guid(council_site_path)

    assert (
        summary.channels_visited == 6
        and summary.galleries_updated == 3
        and summary.galleries_unchanged == 1
        and summary.channels_unresolved == 2
        and summary.lookups_performed == 6
        and summary.groups_without_gallery == ("Digital Services", "Parks")
    )
    assert defaults == {
        "c-root": None,
        "c-parks": "42",
        "c-playgrounds": "42",
        "c-libraries": "g-libraries",
        "c-archive": "g-libraries",
        "c-news": None,
    }


def test_second_run_makes_no_changes(council_config: GallerySyncConfig) -> None:
    """Re-running against an already reconciled site writes nothing."""
    run_gallery_sync(council_config)

    summary = run_gallery_sync(council_config)

    assert summary.galleries_updated == 0 and summary.galleries_unchanged == 4


def test_each_run_starts_with_empty_negative_cache(council_config: GallerySyncConfig) -> None:
    """Cached misses from one run do not suppress lookups in the next."""
    first = run_gallery_sync(council_config)

    second = run_gallery_sync(council_config)

    assert first.groups_without_gallery == second.groups_without_gallery
    assert second.lookups_performed == first.lookups_performed


def test_skip_hidden_excludes_hidden_channels(council_config: GallerySyncConfig) -> None:
    """Hidden channels are not visited when include_hidden is off."""
    config = council_config.with_overrides(include_hidden=False)

    summary = run_gallery_sync(config)

    assert summary.channels_visited == 5 and summary.galleries_updated == 2


def test_dry_run_leaves_document_untouched(
    council_config: GallerySyncConfig,
    council_site_path: Path,
) -> None:
    """Dry runs count would-be updates but never commit."""
    before = council_site_path.read_text(encoding="utf-8")

    summary = run_gallery_sync(council_config, dry_run=True)

    assert summary.dry_run and summary.galleries_updated == 3
    assert council_site_path.read_text(encoding="utf-8") == before


def test_unknown_prefix_resolves_nothing(council_config: GallerySyncConfig) -> None:
    """With a prefix no gallery lives under, every channel is unresolved."""
    config = council_config.with_overrides(gallery_prefix="/Resources/Team galleries")

    summary = run_gallery_sync(config)

    assert summary.channels_unresolved == 6 and summary.galleries_updated == 0


class _FailingPermissionsSite:
    """Delegates to a real store but fails reading rights for one channel."""

    def __init__(self, inner, failing_path: str) -> None:
        self._inner = inner
        self._failing_path = failing_path
        self.visited: list[str] = []

    def traverse_channels(self, include_hidden: bool = True) -> Iterator[Channel]:
        for channel in self._inner.traverse_channels(include_hidden=include_hidden):
            self.visited.append(channel.path)
            yield channel

    def read_groups_for_channel(self, channel: Channel) -> Mapping[str, tuple[str, ...]]:
        if channel.path == self._failing_path:
            raise GallerySyncPlatformError(f"permission read denied for {channel.path}")
        return self._inner.read_groups_for_channel(channel)


def test_platform_failure_aborts_run(council_config: GallerySyncConfig) -> None:
    """The first platform failure stops traversal with no further channels processed."""
    store = open_site(council_config, mode="update")
    site = _FailingPermissionsSite(store, "/Channels/parks")
    reconciler = GalleryReconciler(lookup=store, writer=store)

    with pytest.raises(GallerySyncPlatformError):
        reconcile_site(site, reconciler)

    assert site.visited == ["/Channels", "/Channels/parks"] and store.commit_count == 0


class _CountingLookup:
    def __init__(self, inner) -> None:
        self._inner = inner
        self.calls: list[str] = []

    def get_gallery_by_path(self, path: str) -> ResourceGallery | None:
        self.calls.append(path)
        return self._inner.get_gallery_by_path(path)


def test_sitewide_group_looked_up_once_per_run(council_config: GallerySyncConfig) -> None:
    """Digital Services appears on several channels but is looked up once."""
    store = open_site(council_config, mode="update")
    lookup = _CountingLookup(store)
    reconciler = GalleryReconciler(lookup=lookup, writer=store)

    reconcile_site(store, reconciler)

    assert lookup.calls.count("/Resources/Web authors/Digital Services") == 1
