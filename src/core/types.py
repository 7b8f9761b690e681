"""Shared typed models.

This module defines the channel, gallery, and run summary models used by
the site store, reconciler, and CLI layers to keep interfaces explicit.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Mapping

ReconcileStatus = Literal["updated", "unchanged", "unresolved"]


@dataclass(frozen=True)
class ResourceGallery:
    """Named storage area where uploaded resources are saved.

    Attributes:
        guid: Stable unique identifier.
        name: Human-readable gallery name.
        path: Full lookup path of the gallery.
    """

    guid: str
    name: str
    path: str


@dataclass(eq=False)
class Channel:
    """One element of the content hierarchy.

    Channels are owned and mutated by the site store. The reconciler only
    reads ``default_gallery`` and asks the store to replace it.

    Attributes:
        guid: Stable unique identifier.
        name: Channel name, the last segment of its path.
        path: Identifying path from the site root.
        hidden: Whether the channel is hidden from navigation.
        default_gallery: Currently assigned default resource gallery.
        rights: Explicit role -> ordered group names, or None to inherit.
        children: Child channels in document order.
    """

    guid: str
    name: str
    path: str
    hidden: bool = False
    default_gallery: ResourceGallery | None = None
    rights: Mapping[str, tuple[str, ...]] | None = None
    children: list["Channel"] = field(default_factory=list)


@dataclass(frozen=True)
class ReconcileOutcome:
    """Result of reconciling one channel.

    Attributes:
        channel_path: Path of the reconciled channel.
        status: ``updated``, ``unchanged``, or ``unresolved``.
        matched_group: First editor group that resolved to a gallery.
        gallery: Gallery resolved for the matched group.
        lookups: Number of gallery lookups performed for this channel.
    """

    channel_path: str
    status: ReconcileStatus
    matched_group: str | None = None
    gallery: ResourceGallery | None = None
    lookups: int = 0


@dataclass(frozen=True)
class SiteSyncSummary:
    """Counters describing one completed traversal run."""

    channels_visited: int
    galleries_updated: int
    galleries_unchanged: int
    channels_unresolved: int
    lookups_performed: int
    groups_without_gallery: tuple[str, ...]
    dry_run: bool = False
