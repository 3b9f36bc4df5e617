"""Tests for configuration management."""

from pathlib import Path

import pytest

from smartshop.config import DEFAULT_MODEL, ConfigManager


@pytest.fixture
def config_file(tmp_path):
    """Create a temporary config file."""
    config_path = tmp_path / "custom.toml"
    config_path.write_text("""
[data]
storage_dir = "/custom/data"
backend = "sqlite"
slot = "weekly_list"

[classifier]
model = "gpt-4.1-mini"
api_key = "sk-from-file"
base_url = "http://localhost:11434/v1"
timeout = 30

[defaults]
view = "pending"
""")
    return config_path


class TestConfigManager:
    """Tests for ConfigManager."""

    def test_load_data_config(self, config_file):
        manager = ConfigManager(config_path=config_file)
        assert manager.data.storage_dir == Path("/custom/data")
        assert manager.data.backend == "sqlite"
        assert manager.data.slot == "weekly_list"

    def test_load_classifier_config(self, config_file):
        manager = ConfigManager(config_path=config_file)
        assert manager.classifier.model == "gpt-4.1-mini"
        assert manager.classifier.api_key == "sk-from-file"
        assert manager.classifier.base_url == "http://localhost:11434/v1"
        assert manager.classifier.timeout == 30.0

    def test_load_defaults(self, config_file):
        manager = ConfigManager(config_path=config_file)
        assert manager.defaults.view == "pending"

    def test_missing_file_uses_defaults(self, tmp_path):
        manager = ConfigManager(config_path=tmp_path / "missing.toml")
        assert manager.data.backend == "json"
        assert manager.data.slot == "smartshop_items_v1"
        assert manager.classifier.model == DEFAULT_MODEL
        assert manager.classifier.api_key is None
        assert manager.defaults.view == "all"

    def test_api_key_from_environment(self, tmp_path, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-from-env")
        manager = ConfigManager(config_path=tmp_path / "missing.toml")
        assert manager.classifier.api_key == "sk-from-env"

    def test_file_key_wins_over_environment(self, config_file, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-from-env")
        manager = ConfigManager(config_path=config_file)
        assert manager.classifier.api_key == "sk-from-file"

    def test_partial_file(self, tmp_path):
        config_path = tmp_path / "partial.toml"
        config_path.write_text('[classifier]\nmodel = "local-model"\n')
        manager = ConfigManager(config_path=config_path)
        assert manager.classifier.model == "local-model"
        assert manager.classifier.timeout is None
        assert manager.data.backend == "json"

    def test_storage_dir_expands_user(self, tmp_path):
        config_path = tmp_path / "home.toml"
        config_path.write_text('[data]\nstorage_dir = "~/lists"\n')
        manager = ConfigManager(config_path=config_path)
        assert manager.data.storage_dir == Path.home() / "lists"

    def test_get_dot_path(self, config_file):
        manager = ConfigManager(config_path=config_file)
        assert manager.get("classifier.model") == "gpt-4.1-mini"
        assert manager.get("data.backend") == "sqlite"
        assert manager.get("data.missing", "fallback") == "fallback"
        assert manager.get("nope.nothing", 42) == 42


class TestFindConfig:
    """Tests for config file discovery."""

    def test_finds_cwd_config(self, tmp_path):
        (tmp_path / "config.toml").write_text('[defaults]\nview = "pending"\n')
        manager = ConfigManager()
        assert manager.config_path == tmp_path / "config.toml"
        assert manager.defaults.view == "pending"

    def test_finds_home_config(self):
        config_dir = Path.home() / ".config" / "smartshop"
        config_dir.mkdir(parents=True)
        (config_dir / "config.toml").write_text('[data]\nbackend = "sqlite"\n')
        assert ConfigManager().data.backend == "sqlite"

    def test_default_location_when_none(self):
        manager = ConfigManager()
        assert manager.config_path == Path.home() / ".config" / "smartshop" / "config.toml"
