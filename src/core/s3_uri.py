"""S3 URI parsing helpers.

This module centralizes parsing of ``s3://bucket/key`` site document URIs.
"""

from __future__ import annotations

from dataclasses import dataclass

from core.errors import GallerySyncConfigError


@dataclass(frozen=True)
class S3Location:
    """Parsed S3 object location."""

    bucket: str
    key: str


def is_s3_uri(uri: str) -> bool:
    """Return whether a site URI addresses an S3 object."""
    return uri.startswith("s3://")


def parse_s3_uri(uri: str) -> S3Location:
    """Parse and validate an S3 object URI.

    Args:
        uri: URI in format ``s3://bucket/key``.

    Returns:
        Parsed bucket and key pair.

    Raises:
        GallerySyncConfigError: If bucket or key is missing.
    """
    stripped_uri = uri.removeprefix("s3://")
    bucket, _, key = stripped_uri.partition("/")
    if not bucket or not key or key.endswith("/"):
        raise GallerySyncConfigError(
            f"Invalid S3 URI '{uri}': expected s3://bucket/key. "
            "Provide both bucket and object key."
        )
    return S3Location(bucket=bucket, key=key)
