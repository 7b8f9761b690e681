"""Core constants used across gallery sync modules.

This module centralizes platform names and defaults.
Keeping values here avoids magic literals in reconciliation logic.
"""

from __future__ import annotations

DEFAULT_GALLERY_PREFIX = "/Resources/Web authors"
EDITOR_ROLE = "editor"
SUPPORTED_ROLES = (
    "subscriber",
    "author",
    "editor",
    "moderator",
    "channel_manager",
    "resource_manager",
)
SITE_DOCUMENT_VERSION = 1
PUBLISHING_MODE_PUBLISHED = "published"
PUBLISHING_MODE_UPDATE = "update"
SUPPORTED_PUBLISHING_MODES = (PUBLISHING_MODE_PUBLISHED, PUBLISHING_MODE_UPDATE)
SITE_DOCUMENT_ENCODING = "utf-8"
TRUE_VALUES = ("1", "true", "yes", "on")
FALSE_VALUES = ("0", "false", "no", "off")
