"""Unit tests for settings and root key resolution."""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from ordinal_tree.config import Settings
from ordinal_tree.config import get_settings
from ordinal_tree.config import reset_settings
from ordinal_tree.config import resolve_root
from ordinal_tree.exceptions import RootNotConfiguredError


class TestSettings:
    """Tests for the Settings model."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        monkeypatch.delenv("PUBLIC_FOLDERS", raising=False)

        settings = Settings(_env_file=None)

        assert settings.public_folders == {}
        assert settings.document_root_dir == ".documents_storage"
        assert settings.log_level == "INFO"
        assert settings.structured_logging is True
        assert settings.log_file is None

    def test_environment_overrides(self, monkeypatch, tmp_path):
        """Test that environment variables are read case-insensitively."""
        monkeypatch.setenv("PUBLIC_FOLDERS", json.dumps({"public": str(tmp_path)}))
        monkeypatch.setenv("log_level", "debug")

        settings = Settings(_env_file=None)

        assert settings.public_folders == {"public": str(tmp_path)}
        assert settings.log_level == "DEBUG"

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, log_level="CHATTY")

    def test_singleton(self):
        """Test that get_settings caches until reset."""
        first = get_settings()

        assert get_settings() is first
        reset_settings()
        assert get_settings() is not first


class TestResolveRoot:
    """Tests for resolve_root."""

    def test_public_folder_key(self, tree_root):
        settings = Settings(_env_file=None, public_folders={"public": str(tree_root)})

        assert resolve_root("public", settings) == tree_root.resolve()

    def test_default_key_uses_document_root(self, tree_root):
        settings = Settings(_env_file=None, document_root_dir=str(tree_root))

        assert resolve_root("default", settings) == tree_root.resolve()

    def test_unknown_key(self):
        with pytest.raises(RootNotConfiguredError) as exc_info:
            resolve_root("nope", Settings(_env_file=None))

        assert exc_info.value.details["root_key"] == "nope"

    def test_missing_directory(self, tmp_path):
        settings = Settings(_env_file=None, public_folders={"public": str(tmp_path / "missing")})

        with pytest.raises(RootNotConfiguredError) as exc_info:
            resolve_root("public", settings)

        assert "path" in exc_info.value.details
