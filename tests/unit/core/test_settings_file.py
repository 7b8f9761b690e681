"""Unit tests for YAML settings parsing."""

from __future__ import annotations

from pathlib import Path

import pytest

from core.config import GallerySyncConfig
from core.errors import GallerySyncSettingsError
from core.settings_file import load_settings_file
from tests.fixture_paths import fixture_path


def test_load_settings_file_applies_over_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Settings values should override environment values they name."""
    monkeypatch.setenv("GALLERY_SYNC_S3_PROFILE", "cms-admin")
    overrides = load_settings_file(str(fixture_path("settings/valid.yaml")))

    config = overrides.apply(GallerySyncConfig.from_env())

    assert (
        config.site_uri == "tests/fixtures/site/council_site.json"
        and config.gallery_prefix == "/Resources/Team galleries"
        and config.include_hidden is False
        and config.s3_profile == "cms-admin"
    )


@pytest.mark.parametrize("fixture_name", ["unknown_key.yaml", "bad_include_hidden.yaml"])
def test_load_settings_file_rejects_invalid_settings(fixture_name: str) -> None:
    """Unknown keys and wrong value types are rejected."""
    with pytest.raises(GallerySyncSettingsError):
        load_settings_file(str(fixture_path(f"settings/{fixture_name}")))
    assert True


def test_load_settings_file_missing_path(tmp_path: Path) -> None:
    """A missing settings file is a settings error."""
    with pytest.raises(GallerySyncSettingsError):
        load_settings_file(str(tmp_path / "absent.yaml"))
    assert True


def test_load_settings_file_empty_file_has_no_overrides(tmp_path: Path) -> None:
    """An empty file changes nothing."""
    settings_path = tmp_path / "empty.yaml"
    settings_path.write_text("", encoding="utf-8")
    base = GallerySyncConfig.from_env()

    config = load_settings_file(str(settings_path)).apply(base)

    assert config == base


def test_load_settings_file_rejects_list_root(tmp_path: Path) -> None:
    """The settings root must be a mapping."""
    settings_path = tmp_path / "list.yaml"
    settings_path.write_text("- site_uri\n", encoding="utf-8")

    with pytest.raises(GallerySyncSettingsError):
        load_settings_file(str(settings_path))
    assert True
