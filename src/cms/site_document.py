"""Site document schema parsing and serialization.

A site document is a versioned JSON payload holding the channel tree and
the flat list of resource galleries. This module validates the payload into
typed models and renders models back into the same schema.
"""

from __future__ import annotations

from dataclasses import dataclass
import json
from typing import Iterator, Mapping, Sequence

from core.constants import SITE_DOCUMENT_ENCODING, SITE_DOCUMENT_VERSION, SUPPORTED_ROLES
from core.errors import GallerySyncSiteDocumentError
from core.types import Channel, ResourceGallery

_ROOT_KEYS = ("version", "root", "resource_galleries")
_CHANNEL_KEYS = ("guid", "name", "hidden", "default_resource_gallery", "rights", "children")
_GALLERY_KEYS = ("guid", "name", "path")


@dataclass(frozen=True)
class SiteDocument:
    """Parsed site content: channel tree plus resource galleries."""

    root: Channel
    galleries: tuple[ResourceGallery, ...]


def parse_site_document(raw_text: str, source: str) -> SiteDocument:
    """Parse and validate site document JSON text.

    Args:
        raw_text: JSON text.
        source: Location label used in error messages.

    Returns:
        Validated site document.

    Raises:
        GallerySyncSiteDocumentError: If JSON is malformed or schema checks fail.
    """
    try:
        payload = json.loads(raw_text)
    except json.JSONDecodeError as error:
        raise GallerySyncSiteDocumentError(
            f"Failed to parse site document at {source}: {error}. Fix JSON syntax and retry."
        ) from error
    _check_encodable(payload, source)
    root_mapping = _expect_mapping(payload, "site document root", _ROOT_KEYS)
    _parse_version(root_mapping)
    galleries = _parse_galleries(root_mapping.get("resource_galleries", []))
    galleries_by_guid = {gallery.guid: gallery for gallery in galleries}
    root = _parse_channel(
        _expect_mapping(root_mapping.get("root"), "root channel", _CHANNEL_KEYS),
        parent_path="",
        galleries_by_guid=galleries_by_guid,
    )
    _check_unique_channel_paths(root)
    return SiteDocument(root=root, galleries=galleries)


def render_site_document(document: SiteDocument) -> str:
    """Render a site document back to stable, indented JSON text."""
    payload = {
        "version": SITE_DOCUMENT_VERSION,
        "root": _channel_payload(document.root),
        "resource_galleries": [
            {"guid": gallery.guid, "name": gallery.name, "path": gallery.path}
            for gallery in document.galleries
        ],
    }
    return json.dumps(payload, indent=2, ensure_ascii=False) + "\n"


def iter_channels(root: Channel) -> Iterator[Channel]:
    """Yield channels depth-first in pre-order, children in document order."""
    yield root
    for child in root.children:
        yield from iter_channels(child)


def _check_encodable(payload: object, source: str) -> None:
    # JSON escapes can decode to lone surrogates that cannot be written back.
    try:
        json.dumps(payload, ensure_ascii=False).encode(SITE_DOCUMENT_ENCODING)
    except UnicodeEncodeError as error:
        raise GallerySyncSiteDocumentError(
            f"Site document at {source} contains text that cannot be encoded as "
            f"{SITE_DOCUMENT_ENCODING}: {error}. Remove unpaired surrogate escapes."
        ) from error


def _parse_version(root_mapping: Mapping[str, object]) -> None:
    version = root_mapping.get("version")
    if version != SITE_DOCUMENT_VERSION:
        raise GallerySyncSiteDocumentError(
            f"Unsupported site document version {version!r}. "
            f"Expected version {SITE_DOCUMENT_VERSION}."
        )


def _parse_galleries(value: object) -> tuple[ResourceGallery, ...]:
    galleries: list[ResourceGallery] = []
    seen_guids: set[str] = set()
    seen_paths: set[str] = set()
    for index, item in enumerate(_expect_sequence(value, "resource_galleries")):
        context = f"resource_galleries[{index}]"
        mapping = _expect_mapping(item, context, _GALLERY_KEYS)
        gallery = ResourceGallery(
            guid=_required_string(mapping, "guid", context),
            name=_required_string(mapping, "name", context),
            path=_required_string(mapping, "path", context),
        )
        if gallery.guid in seen_guids:
            raise GallerySyncSiteDocumentError(f"Duplicate gallery guid '{gallery.guid}'.")
        if gallery.path in seen_paths:
            raise GallerySyncSiteDocumentError(f"Duplicate gallery path '{gallery.path}'.")
        seen_guids.add(gallery.guid)
        seen_paths.add(gallery.path)
        galleries.append(gallery)
    return tuple(galleries)


def _parse_channel(
    mapping: Mapping[str, object],
    parent_path: str,
    galleries_by_guid: Mapping[str, ResourceGallery],
) -> Channel:
    name = _required_string(mapping, "name", f"channel under '{parent_path or '/'}'")
    if "/" in name:
        raise GallerySyncSiteDocumentError(
            f"Invalid channel name '{name}' under '{parent_path or '/'}': names cannot contain '/'."
        )
    path = f"{parent_path}/{name}"
    hidden = mapping.get("hidden", False)
    if not isinstance(hidden, bool):
        raise GallerySyncSiteDocumentError(f"Invalid 'hidden' for channel {path}: expected bool.")
    channel = Channel(
        guid=_required_string(mapping, "guid", f"channel {path}"),
        name=name,
        path=path,
        hidden=hidden,
        default_gallery=_resolve_gallery_reference(
            mapping.get("default_resource_gallery"), path, galleries_by_guid
        ),
        rights=_parse_rights(mapping.get("rights"), path),
    )
    for index, child in enumerate(_expect_sequence(mapping.get("children", []), f"{path} children")):
        child_mapping = _expect_mapping(child, f"{path} children[{index}]", _CHANNEL_KEYS)
        channel.children.append(_parse_channel(child_mapping, path, galleries_by_guid))
    return channel


def _resolve_gallery_reference(
    value: object,
    channel_path: str,
    galleries_by_guid: Mapping[str, ResourceGallery],
) -> ResourceGallery | None:
    if value is None:
        return None
    if not isinstance(value, str) or value not in galleries_by_guid:
        raise GallerySyncSiteDocumentError(
            f"Channel {channel_path} references unknown default resource gallery {value!r}."
        )
    return galleries_by_guid[value]


def _parse_rights(value: object, channel_path: str) -> dict[str, tuple[str, ...]] | None:
    if value is None:
        return None
    rights_mapping = _expect_mapping(value, f"rights of {channel_path}", SUPPORTED_ROLES)
    rights: dict[str, tuple[str, ...]] = {}
    for role, groups in rights_mapping.items():
        group_names: list[str] = []
        for group in _expect_sequence(groups, f"{role} rights of {channel_path}"):
            if not isinstance(group, str) or not group:
                raise GallerySyncSiteDocumentError(
                    f"Invalid {role} group {group!r} on channel {channel_path}: "
                    "expected non-empty string."
                )
            group_names.append(group)
        rights[role] = tuple(group_names)
    return rights


def _check_unique_channel_paths(root: Channel) -> None:
    seen: set[str] = set()
    for channel in iter_channels(root):
        if channel.path in seen:
            raise GallerySyncSiteDocumentError(f"Duplicate channel path '{channel.path}'.")
        seen.add(channel.path)


def _channel_payload(channel: Channel) -> dict[str, object]:
    payload: dict[str, object] = {"guid": channel.guid, "name": channel.name}
    if channel.hidden:
        payload["hidden"] = True
    payload["default_resource_gallery"] = (
        channel.default_gallery.guid if channel.default_gallery else None
    )
    if channel.rights is not None:
        payload["rights"] = {role: list(groups) for role, groups in channel.rights.items()}
    payload["children"] = [_channel_payload(child) for child in channel.children]
    return payload


def _expect_mapping(
    value: object,
    context: str,
    allowed_keys: Sequence[str],
) -> Mapping[str, object]:
    if not isinstance(value, Mapping):
        raise GallerySyncSiteDocumentError(
            f"Invalid {context}: expected object mapping, got {type(value).__name__}."
        )
    unknown_keys = sorted(str(key) for key in value if key not in allowed_keys)
    if unknown_keys:
        raise GallerySyncSiteDocumentError(
            f"Invalid {context}: unsupported keys {unknown_keys}. Allowed: {list(allowed_keys)}."
        )
    return value


def _expect_sequence(value: object, context: str) -> Sequence[object]:
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return value
    raise GallerySyncSiteDocumentError(
        f"Invalid {context}: expected list, got {type(value).__name__}."
    )


def _required_string(mapping: Mapping[str, object], key: str, context: str) -> str:
    value = mapping.get(key)
    if not isinstance(value, str) or not value:
        raise GallerySyncSiteDocumentError(
            f"Invalid {context}: '{key}' must be a non-empty string."
        )
    return value
