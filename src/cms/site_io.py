"""Site document transport for local files and S3 objects.

This module encapsulates boto3 client creation and raw document
reads and writes. Local writes are atomic so a crash never leaves a
half-written site document behind.
"""

from __future__ import annotations

import os
from pathlib import Path
import tempfile
from typing import Any

from core.config import GallerySyncConfig
from core.constants import SITE_DOCUMENT_ENCODING
from core.errors import GallerySyncDependencyError, GallerySyncSiteStoreError
from core.s3_uri import is_s3_uri, parse_s3_uri


def create_s3_client(config: GallerySyncConfig) -> Any:
    """Create boto3 S3 client for site documents.

    Args:
        config: Runtime config with optional session settings.

    Returns:
        Boto3 S3 client.

    Raises:
        GallerySyncDependencyError: If boto3 is missing.
    """
    try:
        import boto3
    except ImportError as error:
        raise GallerySyncDependencyError(
            "S3 site documents require boto3, but it is not installed. "
            "Install boto3 to read and write s3:// site documents."
        ) from error
    session_kwargs: dict[str, str] = {}
    if config.s3_profile:
        session_kwargs["profile_name"] = config.s3_profile
    if config.s3_region:
        session_kwargs["region_name"] = config.s3_region
    session = boto3.session.Session(**session_kwargs)
    return session.client("s3")


class SiteDocumentIO:
    """Reads and writes the raw text of one site document."""

    def __init__(self, site_uri: str, config: GallerySyncConfig, s3_client: Any = None) -> None:
        self.site_uri = site_uri
        self._config = config
        self._s3_client = s3_client

    def read_text(self) -> str:
        """Read the full site document text.

        Raises:
            GallerySyncSiteStoreError: If the document cannot be read.
        """
        if is_s3_uri(self.site_uri):
            return self._read_s3()
        return self._read_local(Path(self.site_uri).expanduser())

    def write_text(self, text: str) -> None:
        """Persist the full site document text before returning.

        Raises:
            GallerySyncSiteStoreError: If the document cannot be written.
        """
        if is_s3_uri(self.site_uri):
            self._write_s3(text)
            return
        self._write_local(Path(self.site_uri).expanduser(), text)

    def _client(self) -> Any:
        if self._s3_client is None:
            self._s3_client = create_s3_client(self._config)
        return self._s3_client

    def _read_local(self, site_path: Path) -> str:
        if not site_path.is_file():
            raise GallerySyncSiteStoreError(
                f"Site document does not exist at {site_path}. Provide an existing JSON file."
            )
        try:
            return site_path.read_text(encoding=SITE_DOCUMENT_ENCODING)
        except (OSError, UnicodeDecodeError) as error:
            raise GallerySyncSiteStoreError(
                f"Failed to read site document at {site_path}: {error}."
            ) from error

    def _write_local(self, site_path: Path, text: str) -> None:
        temp_name: str | None = None
        try:
            with tempfile.NamedTemporaryFile(
                "w",
                encoding=SITE_DOCUMENT_ENCODING,
                dir=site_path.parent,
                prefix=f".{site_path.name}.",
                suffix=".tmp",
                delete=False,
            ) as handle:
                temp_name = handle.name
                handle.write(text)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(temp_name, site_path)
            temp_name = None
        except (OSError, UnicodeError) as error:
            raise GallerySyncSiteStoreError(
                f"Failed to commit site document at {site_path}: {error}. "
                "Check file permissions, disk space, and document text."
            ) from error
        finally:
            if temp_name and os.path.exists(temp_name):
                os.unlink(temp_name)

    def _read_s3(self) -> str:
        location = parse_s3_uri(self.site_uri)
        try:
            response = self._client().get_object(Bucket=location.bucket, Key=location.key)
            return response["Body"].read().decode(SITE_DOCUMENT_ENCODING)
        except GallerySyncDependencyError:
            raise
        except Exception as error:
            raise GallerySyncSiteStoreError(
                f"Failed to read site document from {self.site_uri}: {error}. "
                "Check AWS credentials and the object key."
            ) from error

    def _write_s3(self, text: str) -> None:
        location = parse_s3_uri(self.site_uri)
        try:
            self._client().put_object(
                Bucket=location.bucket,
                Key=location.key,
                Body=text.encode(SITE_DOCUMENT_ENCODING),
                ContentType="application/json",
            )
        except GallerySyncDependencyError:
            raise
        except Exception as error:
            raise GallerySyncSiteStoreError(
                f"Failed to commit site document to {self.site_uri}: {error}. "
                "Check AWS credentials and bucket permissions."
            ) from error
