"""Tests for config module."""

from pathlib import Path

import pytest

from notes_mcp.config import Config


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("NOTES_ROOT", "NOTES_PORT", "NOTES_SYNC_INTERVAL", "NOTES_SEARCH_LIMIT"):
        monkeypatch.delenv(name, raising=False)


def test_config_defaults():
    """Test config loads with defaults when no env vars set."""
    config = Config.from_env()
    assert config.notes_root == Path.home() / "notes"
    assert config.notes_port == 8080
    assert config.sync_interval == 30
    assert config.search_limit == 20


def test_config_from_env(monkeypatch):
    """Test config loads from environment variables."""
    monkeypatch.setenv("NOTES_ROOT", "/custom/notes")
    monkeypatch.setenv("NOTES_PORT", "9000")
    monkeypatch.setenv("NOTES_SYNC_INTERVAL", "60")
    monkeypatch.setenv("NOTES_SEARCH_LIMIT", "5")

    config = Config.from_env()
    assert config.notes_root == Path("/custom/notes")
    assert config.notes_port == 9000
    assert config.sync_interval == 60
    assert config.search_limit == 5


def test_config_from_env_creates_new_instances():
    """Test Config.from_env() creates new instances each time."""
    assert Config.from_env() is not Config.from_env()


def test_config_tilde_expansion(monkeypatch):
    """Test config expands tilde in paths."""
    monkeypatch.setenv("NOTES_ROOT", "~/custom/notes")
    config = Config.from_env()
    assert "~" not in str(config.notes_root)
    assert config.notes_root.is_absolute()


def test_config_invalid_port_non_numeric(monkeypatch):
    """Test config raises error for non-numeric port."""
    monkeypatch.setenv("NOTES_PORT", "not_a_number")
    with pytest.raises(ValueError, match="Invalid NOTES_PORT"):
        Config.from_env()


@pytest.mark.parametrize("port", ["0", "70000", "-1"])
def test_config_invalid_port_out_of_range(monkeypatch, port):
    """Test config raises error for port out of valid range."""
    monkeypatch.setenv("NOTES_PORT", port)
    with pytest.raises(ValueError, match="Port must be between 1 and 65535"):
        Config.from_env()


def test_config_sync_interval_disabled(monkeypatch):
    """Test sync_interval can be set to 0 to disable."""
    monkeypatch.setenv("NOTES_SYNC_INTERVAL", "0")
    assert Config.from_env().sync_interval == 0


def test_config_sync_interval_invalid_non_numeric(monkeypatch):
    """Test config raises error for non-numeric sync interval."""
    monkeypatch.setenv("NOTES_SYNC_INTERVAL", "often")
    with pytest.raises(ValueError, match="Invalid NOTES_SYNC_INTERVAL"):
        Config.from_env()


def test_config_sync_interval_negative(monkeypatch):
    """Test config raises error for negative sync interval."""
    monkeypatch.setenv("NOTES_SYNC_INTERVAL", "-5")
    with pytest.raises(ValueError, match="Sync interval must be >= 0"):
        Config.from_env()


def test_config_search_limit_unlimited(monkeypatch):
    """Test search_limit can be set to 0 for unlimited results."""
    monkeypatch.setenv("NOTES_SEARCH_LIMIT", "0")
    assert Config.from_env().search_limit == 0


def test_config_search_limit_invalid(monkeypatch):
    """Test config rejects bad search limits."""
    monkeypatch.setenv("NOTES_SEARCH_LIMIT", "many")
    with pytest.raises(ValueError, match="Invalid NOTES_SEARCH_LIMIT"):
        Config.from_env()

    monkeypatch.setenv("NOTES_SEARCH_LIMIT", "-1")
    with pytest.raises(ValueError, match="Search limit must be >= 0"):
        Config.from_env()
