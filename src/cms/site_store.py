"""Site store backed by a site document.

This module implements channel traversal, permission reads, gallery
lookups, and default gallery writes over one loaded site document.
Every write is committed to the backing document before returning.
"""

from __future__ import annotations

from typing import Any, Iterator, Mapping

from cms.site_document import SiteDocument, iter_channels, parse_site_document, render_site_document
from cms.site_io import SiteDocumentIO
from core.config import GallerySyncConfig
from core.constants import (
    PUBLISHING_MODE_PUBLISHED,
    PUBLISHING_MODE_UPDATE,
    SUPPORTED_PUBLISHING_MODES,
)
from core.errors import GallerySyncConfigError, GallerySyncSiteStoreError
from core.logging_config import get_logger
from core.types import Channel, ResourceGallery

_LOGGER = get_logger(__name__)


class SiteStore:
    """In-memory view of a site document with durable writes."""

    def __init__(self, document: SiteDocument, io: SiteDocumentIO, mode: str) -> None:
        if mode not in SUPPORTED_PUBLISHING_MODES:
            raise GallerySyncConfigError(
                f"Unsupported publishing mode '{mode}'. "
                f"Supported modes: {SUPPORTED_PUBLISHING_MODES}."
            )
        self._document = document
        self._io = io
        self.mode = mode
        self._galleries_by_path = {gallery.path: gallery for gallery in document.galleries}
        self._rights_by_path = _resolve_inherited_rights(document.root)
        self.commit_count = 0

    @property
    def root(self) -> Channel:
        """Root channel of the site."""
        return self._document.root

    def traverse_channels(self, include_hidden: bool = True) -> Iterator[Channel]:
        """Yield channels depth-first in pre-order.

        Args:
            include_hidden: When False, hidden channels and their subtrees are skipped.
        """
        yield from _walk(self._document.root, include_hidden)

    def read_groups_for_channel(self, channel: Channel) -> Mapping[str, tuple[str, ...]]:
        """Return the channel's effective rights, inherited from ancestors when unset.

        Raises:
            GallerySyncSiteStoreError: If the channel does not belong to this site.
        """
        rights = self._rights_by_path.get(channel.path)
        if rights is None:
            raise GallerySyncSiteStoreError(
                f"Channel {channel.path} is not part of site {self._io.site_uri}."
            )
        return rights

    def get_gallery_by_path(self, path: str) -> ResourceGallery | None:
        """Return the gallery stored at an exact path, or None."""
        return self._galleries_by_path.get(path)

    def set_default_gallery(self, channel: Channel, gallery: ResourceGallery) -> None:
        """Assign a channel's default gallery and commit the site document.

        Raises:
            GallerySyncSiteStoreError: If the store is read-only or the commit fails.
        """
        if self.mode != PUBLISHING_MODE_UPDATE:
            raise GallerySyncSiteStoreError(
                f"Cannot set default gallery on {channel.path}: site opened in "
                f"'{self.mode}' mode. Open the site in '{PUBLISHING_MODE_UPDATE}' mode."
            )
        if self._galleries_by_path.get(gallery.path) != gallery:
            raise GallerySyncSiteStoreError(
                f"Gallery {gallery.path} ({gallery.guid}) is not part of site {self._io.site_uri}."
            )
        previous = channel.default_gallery
        channel.default_gallery = gallery
        try:
            self.commit_all()
        except Exception:
            channel.default_gallery = previous
            raise

    def commit_all(self) -> None:
        """Persist the current document state."""
        self._io.write_text(render_site_document(self._document))
        self.commit_count += 1
        _LOGGER.debug("site_document_committed", site_uri=self._io.site_uri)


def open_site(
    config: GallerySyncConfig,
    mode: str = PUBLISHING_MODE_PUBLISHED,
    s3_client: Any = None,
) -> SiteStore:
    """Load the configured site document into a store.

    Args:
        config: Runtime configuration naming the site URI.
        mode: ``published`` for read-only access or ``update`` for writes.
        s3_client: Optional pre-built S3 client.

    Returns:
        Loaded site store.

    Raises:
        GallerySyncConfigError: If no site URI is configured.
        GallerySyncPlatformError: If the document cannot be read or parsed.
    """
    site_uri = config.require_site_uri()
    io = SiteDocumentIO(site_uri, config, s3_client=s3_client)
    document = parse_site_document(io.read_text(), site_uri)
    _LOGGER.info(
        "site_opened",
        site_uri=site_uri,
        mode=mode,
        channels=sum(1 for _ in iter_channels(document.root)),
        galleries=len(document.galleries),
    )
    return SiteStore(document, io, mode)


def _walk(channel: Channel, include_hidden: bool) -> Iterator[Channel]:
    if channel.hidden and not include_hidden:
        return
    yield channel
    for child in channel.children:
        yield from _walk(child, include_hidden)


def _resolve_inherited_rights(root: Channel) -> dict[str, Mapping[str, tuple[str, ...]]]:
    resolved: dict[str, Mapping[str, tuple[str, ...]]] = {}

    def resolve(channel: Channel, inherited: Mapping[str, tuple[str, ...]]) -> None:
        effective = channel.rights if channel.rights is not None else inherited
        resolved[channel.path] = effective
        for child in channel.children:
            resolve(child, effective)

    resolve(root, {})
    return resolved

