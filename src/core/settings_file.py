"""Typed YAML settings file parsing.

This module loads optional operator settings that override environment
configuration. One strict schema keeps scheduled runs reproducible.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, cast

import yaml

from core.config import GallerySyncConfig
from core.errors import GallerySyncSettingsError

_STRING_KEYS = ("site_uri", "gallery_prefix", "s3_region", "s3_profile")
_BOOL_KEYS = ("include_hidden",)
SUPPORTED_SETTINGS_KEYS = _STRING_KEYS + _BOOL_KEYS


@dataclass(frozen=True)
class SettingsOverrides:
    """Values read from a settings file; None means not set."""

    site_uri: str | None = None
    gallery_prefix: str | None = None
    include_hidden: bool | None = None
    s3_region: str | None = None
    s3_profile: str | None = None

    def apply(self, config: GallerySyncConfig) -> GallerySyncConfig:
        """Return config with settings values layered on top."""
        return config.with_overrides(
            site_uri=self.site_uri,
            gallery_prefix=self.gallery_prefix,
            include_hidden=self.include_hidden,
            s3_region=self.s3_region,
            s3_profile=self.s3_profile,
        )


def load_settings_file(settings_path: str) -> SettingsOverrides:
    """Load and validate a YAML settings file from disk.

    Args:
        settings_path: File path to YAML settings.

    Returns:
        Validated overrides.

    Raises:
        GallerySyncSettingsError: If the file is missing, invalid, or has unknown keys.
    """
    payload = _load_yaml_payload(settings_path)
    mapping = _expect_mapping(payload)
    unknown_keys = sorted(set(mapping) - set(SUPPORTED_SETTINGS_KEYS))
    if unknown_keys:
        raise GallerySyncSettingsError(
            f"Unsupported settings keys {unknown_keys}. "
            f"Supported keys: {list(SUPPORTED_SETTINGS_KEYS)}."
        )
    return SettingsOverrides(
        site_uri=_optional_string(mapping, "site_uri"),
        gallery_prefix=_optional_string(mapping, "gallery_prefix"),
        include_hidden=_optional_bool(mapping, "include_hidden"),
        s3_region=_optional_string(mapping, "s3_region"),
        s3_profile=_optional_string(mapping, "s3_profile"),
    )


def _load_yaml_payload(settings_path: str) -> object:
    settings_file = Path(settings_path).expanduser().resolve()
    if not settings_file.exists():
        raise GallerySyncSettingsError(
            f"Settings file does not exist at {settings_file}. Provide a valid YAML file path."
        )
    try:
        payload = cast(object, yaml.safe_load(settings_file.read_text(encoding="utf-8")))
    except OSError as error:
        raise GallerySyncSettingsError(
            f"Failed to read settings at {settings_file}: {error}. Check file permissions."
        ) from error
    except yaml.YAMLError as error:
        raise GallerySyncSettingsError(
            f"Failed to parse YAML settings at {settings_file}: {error}. Fix YAML syntax and retry."
        ) from error
    if payload is None:
        return {}
    return payload


def _expect_mapping(value: object) -> Mapping[str, object]:
    if not isinstance(value, Mapping):
        raise GallerySyncSettingsError(
            f"Invalid settings root: expected object mapping, got {type(value).__name__}."
        )
    for key in value:
        if not isinstance(key, str):
            raise GallerySyncSettingsError(
                f"Invalid settings root: expected string keys, got {type(key).__name__}."
            )
    return cast(Mapping[str, object], value)


def _optional_string(mapping: Mapping[str, object], key: str) -> str | None:
    value = mapping.get(key)
    if value is None:
        return None
    if not isinstance(value, str) or not value:
        raise GallerySyncSettingsError(
            f"Invalid settings value for '{key}': expected non-empty string."
        )
    return value


def _optional_bool(mapping: Mapping[str, object], key: str) -> bool | None:
    value = mapping.get(key)
    if value is None:
        return None
    if not isinstance(value, bool):
        raise GallerySyncSettingsError(
            f"Invalid settings value for '{key}': expected true or false."
        )
    return value
