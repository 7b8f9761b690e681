"""Default resource gallery reconciliation for a single channel.

For each channel the editor groups are tried in platform precedence order.
Each group name maps to a gallery path under a fixed namespace, and the
first group whose gallery exists wins. The channel is written only when
that gallery differs from its current default. Groups whose lookup fails
are remembered in a run-scoped negative cache, because the same sitewide
groups recur on thousands of channels.
"""

from __future__ import annotations

from typing import Sequence

from cms.protocols import AssignmentWriter, GalleryLookup
from core.constants import DEFAULT_GALLERY_PREFIX
from core.logging_config import get_logger
from core.types import Channel, ReconcileOutcome, ResourceGallery
from reconcile.negative_cache import NegativeCache

_LOGGER = get_logger(__name__)


class GalleryReconciler:
    """Assigns each channel the gallery of its first resolvable editor group."""

    def __init__(
        self,
        lookup: GalleryLookup,
        writer: AssignmentWriter,
        gallery_prefix: str = DEFAULT_GALLERY_PREFIX,
        negative_cache: NegativeCache | None = None,
        dry_run: bool = False,
    ) -> None:
        """Create a reconciler for one traversal run.

        Args:
            lookup: Gallery lookup collaborator.
            writer: Assignment writer collaborator.
            gallery_prefix: Namespace that group names are appended to.
            negative_cache: Run-scoped cache; a fresh one is created when omitted.
            dry_run: Decide and report changes without writing them.
        """
        self._lookup = lookup
        self._writer = writer
        self._gallery_prefix = gallery_prefix.rstrip("/")
        self.negative_cache = negative_cache if negative_cache is not None else NegativeCache()
        self.dry_run = dry_run

    def gallery_path(self, group_name: str) -> str:
        """Return the lookup path for a group's gallery."""
        return f"{self._gallery_prefix}/{group_name}"

    def reconcile(self, channel: Channel, editor_groups: Sequence[str]) -> ReconcileOutcome:
        """Reconcile one channel's default gallery with its editor groups.

        Args:
            channel: Channel to reconcile.
            editor_groups: Editor group names in platform precedence order.

        Returns:
            What happened to the channel.

        Raises:
            GallerySyncPlatformError: Propagated unchanged from lookup or write.
        """
        lookups = 0
        for group_name in editor_groups:
            if group_name in self.negative_cache:
                continue
            gallery = self._lookup.get_gallery_by_path(self.gallery_path(group_name))
            lookups += 1
            if gallery is None:
                self.negative_cache.add(group_name)
                continue
            if _is_current_default(channel, gallery):
                return ReconcileOutcome(
                    channel_path=channel.path,
                    status="unchanged",
                    matched_group=group_name,
                    gallery=gallery,
                    lookups=lookups,
                )
            self._assign(channel, gallery, group_name)
            return ReconcileOutcome(
                channel_path=channel.path,
                status="updated",
                matched_group=group_name,
                gallery=gallery,
                lookups=lookups,
            )
        return ReconcileOutcome(channel_path=channel.path, status="unresolved", lookups=lookups)

    def _assign(self, channel: Channel, gallery: ResourceGallery, group_name: str) -> None:
        _LOGGER.info(
            "default_gallery_set",
            channel=channel.path,
            gallery=gallery.name,
            gallery_guid=gallery.guid,
            editor_group=group_name,
            dry_run=self.dry_run,
        )
        if not self.dry_run:
            self._writer.set_default_gallery(channel, gallery)


def _is_current_default(channel: Channel, gallery: ResourceGallery) -> bool:
    # Identity is the guid; display names may drift.
    current = channel.default_gallery
    return current is not None and current.guid == gallery.guid
