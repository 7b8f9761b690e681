"""Runtime configuration model for gallery sync.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
import os

from core.constants import DEFAULT_GALLERY_PREFIX, FALSE_VALUES, TRUE_VALUES
from core.errors import GallerySyncConfigError


@dataclass(frozen=True)
class GallerySyncConfig:
    """Validated runtime configuration.

    Attributes:
        site_uri: Site document path or ``s3://bucket/key`` URI.
        gallery_prefix: Namespace prepended to group names for lookups.
        include_hidden: Whether hidden channels are traversed.
        s3_region: Optional default AWS region for S3 operations.
        s3_profile: Optional AWS profile for boto3 session initialization.
    """

    site_uri: str | None
    gallery_prefix: str
    include_hidden: bool
    s3_region: str | None
    s3_profile: str | None

    @classmethod
    def from_env(cls) -> "GallerySyncConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            GallerySyncConfigError: If environment values are invalid.
        """
        gallery_prefix = os.getenv("GALLERY_SYNC_GALLERY_PREFIX", DEFAULT_GALLERY_PREFIX)
        include_hidden_value = os.getenv("GALLERY_SYNC_INCLUDE_HIDDEN", "true")
        return cls(
            site_uri=os.getenv("GALLERY_SYNC_SITE_URI") or None,
            gallery_prefix=validate_gallery_prefix(gallery_prefix),
            include_hidden=parse_bool_value(include_hidden_value, "GALLERY_SYNC_INCLUDE_HIDDEN"),
            s3_region=os.getenv("GALLERY_SYNC_S3_REGION") or None,
            s3_profile=os.getenv("GALLERY_SYNC_S3_PROFILE") or None,
        )

    def with_overrides(self, **overrides: object) -> "GallerySyncConfig":
        """Return a copy with non-None override values applied and validated."""
        applied = {key: value for key, value in overrides.items() if value is not None}
        updated = replace(self, **applied)
        validate_gallery_prefix(updated.gallery_prefix)
        return updated

    def require_site_uri(self) -> str:
        """Return the configured site URI.

        Raises:
            GallerySyncConfigError: If no site URI is configured.
        """
        if not self.site_uri:
            raise GallerySyncConfigError(
                "No site document configured. "
                "Set GALLERY_SYNC_SITE_URI, add site_uri to the settings file, or pass --site."
            )
        return self.site_uri


def validate_gallery_prefix(prefix: str) -> str:
    """Validate the gallery lookup namespace.

    Args:
        prefix: Raw prefix value.

    Returns:
        The unchanged prefix.

    Raises:
        GallerySyncConfigError: If the prefix is not an absolute path.
    """
    if not prefix.startswith("/") or not prefix.strip("/"):
        raise GallerySyncConfigError(
            f"Invalid gallery prefix '{prefix}': expected an absolute path such as "
            f"'{DEFAULT_GALLERY_PREFIX}'."
        )
    return prefix


def parse_bool_value(raw_value: str, source_name: str) -> bool:
    """Parse a boolean flag from environment text.

    Args:
        raw_value: Raw string value.
        source_name: Variable name used in error messages.

    Returns:
        Parsed boolean.

    Raises:
        GallerySyncConfigError: If the value is not a recognized boolean.
    """
    normalized = raw_value.strip().lower()
    if normalized in TRUE_VALUES:
        return True
    if normalized in FALSE_VALUES:
        return False
    raise GallerySyncConfigError(
        f"Invalid {source_name} value: expected one of "
        f"{TRUE_VALUES + FALSE_VALUES}, got '{raw_value}'."
    )
