"""Collaborator contracts consumed by the reconciler and site driver."""

from __future__ import annotations

from typing import Iterator, Mapping, Protocol

from core.types import Channel, ResourceGallery


class ChannelTraverser(Protocol):
    """Enumerates every channel of the site exactly once."""

    def traverse_channels(self, include_hidden: bool = True) -> Iterator[Channel]: ...


class PermissionReader(Protocol):
    """Reads ranked permission groups for a channel."""

    def read_groups_for_channel(self, channel: Channel) -> Mapping[str, tuple[str, ...]]: ...


class GalleryLookup(Protocol):
    """Finds a resource gallery by path; returns None when nothing matches."""

    def get_gallery_by_path(self, path: str) -> ResourceGallery | None: ...


class AssignmentWriter(Protocol):
    """Sets and durably commits a channel's default resource gallery."""

    def set_default_gallery(self, channel: Channel, gallery: ResourceGallery) -> None: ...


class SitePlatform(ChannelTraverser, PermissionReader, Protocol):
    """Platform surface required to drive one site reconciliation pass."""
