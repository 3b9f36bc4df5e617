"""Configuration management for SmartShop."""

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

API_KEY_ENV_VAR = "OPENAI_API_KEY"
DEFAULT_MODEL = "gpt-4o-mini"


@dataclass
class DataConfig:
    """Data storage configuration."""

    storage_dir: Path
    backend: str = "json"
    slot: str = "smartshop_items_v1"


@dataclass
class ClassifierConfig:
    """Remote text classifier configuration."""

    model: str = DEFAULT_MODEL
    api_key: str | None = None
    base_url: str | None = None
    timeout: float | None = None


@dataclass
class DefaultsConfig:
    """Default values configuration."""

    view: str = "all"


@dataclass
class Config:
    """Complete application configuration."""

    data: DataConfig
    classifier: ClassifierConfig
    defaults: DefaultsConfig


class ConfigManager:
    """Manages application configuration from TOML files."""

    def __init__(self, config_path: Path | None = None):
        """Initialize configuration manager.

        Args:
            config_path: Optional explicit path to config file.
                        If not provided, searches standard locations.
        """
        self.config_path = config_path or self._find_config()
        self._config = self._load_config()

    @property
    def data(self) -> DataConfig:
        """Get data configuration."""
        return self._config.data

    @property
    def classifier(self) -> ClassifierConfig:
        """Get classifier configuration."""
        return self._config.classifier

    @property
    def defaults(self) -> DefaultsConfig:
        """Get defaults configuration."""
        return self._config.defaults

    def _find_config(self) -> Path:
        """Find config file in standard locations."""
        locations = [
            Path.cwd() / "config.toml",
            Path.home() / ".config" / "smartshop" / "config.toml",
            Path.home() / ".smartshop" / "config.toml",
        ]

        for loc in locations:
            if loc.exists():
                return loc

        # Return default location if none found
        return Path.home() / ".config" / "smartshop" / "config.toml"

    def _load_config(self) -> Config:
        """Load configuration from TOML file."""
        if not self.config_path.exists():
            return self._default_config()

        with open(self.config_path, "rb") as f:
            data = tomllib.load(f)

        data_section = data.get("data", {})
        classifier_section = data.get("classifier", {})
        timeout = classifier_section.get("timeout")

        return Config(
            data=DataConfig(
                storage_dir=Path(
                    data_section.get("storage_dir", "~/smartshop/data")
                ).expanduser(),
                backend=data_section.get("backend", "json"),
                slot=data_section.get("slot", "smartshop_items_v1"),
            ),
            classifier=ClassifierConfig(
                model=classifier_section.get("model", DEFAULT_MODEL),
                api_key=classifier_section.get("api_key") or os.getenv(API_KEY_ENV_VAR),
                base_url=classifier_section.get("base_url"),
                timeout=float(timeout) if timeout is not None else None,
            ),
            defaults=DefaultsConfig(
                view=data.get("defaults", {}).get("view", "all"),
            ),
        )

    def _default_config(self) -> Config:
        """Return default configuration."""
        return Config(
            data=DataConfig(storage_dir=Path.home() / "smartshop" / "data"),
            classifier=ClassifierConfig(api_key=os.getenv(API_KEY_ENV_VAR)),
            defaults=DefaultsConfig(),
        )

    def get(self, key_path: str, default: Any = None) -> Any:
        """Get config value by dot-notation path.

        Args:
            key_path: Dot-separated path like 'data.storage_dir'
            default: Default value if path not found

        Returns:
            Configuration value or default
        """
        keys = key_path.split(".")
        value: Any = self._config

        for key in keys:
            if hasattr(value, key):
                value = getattr(value, key)
            elif isinstance(value, dict):
                value = value.get(key)
                if value is None:
                    return default
            else:
                return default

        return value if value is not None else default
