"""Configuration management for habit-tracker using YAML files."""

from pathlib import Path
from typing import Any

import structlog
import yaml

from habit_tracker.errors import ValidationError

logger = structlog.get_logger()

CONFIG_DIR_NAME = ".habit-tracker"
DEFAULT_BACKEND = "json"
DEFAULT_DATA_DIR = str(Path("~") / CONFIG_DIR_NAME / "data")
BACKENDS = ("json", "memory")

DEFAULTS = {
    "backend": DEFAULT_BACKEND,
    "json.data_dir": DEFAULT_DATA_DIR,
}


def validate_setting(key: str, value: str) -> None:
    """Reject unknown setting names and unsupported backends."""
    if key not in DEFAULTS:
        raise ValidationError(f"Unknown setting: {key} (expected one of: {', '.join(DEFAULTS)})")
    if key == "backend" and value not in BACKENDS:
        raise ValidationError(f"Unknown backend: {value} (expected one of: {', '.join(BACKENDS)})")


class Config:
    """Configuration manager using YAML file storage.

    Local config lives in .habit-tracker/config.yaml in the current directory,
    global config in ~/.habit-tracker/config.yaml. Reads look in local config
    first, then fall back to global config.
    """

    def __init__(self, use_global: bool = False, config_dir: Path | None = None) -> None:
        """Initialize configuration manager.

        Args:
            use_global: If True, use global config only. If False, use local config with global fallback.
            config_dir: Custom directory to store config file (overrides the default location)
        """
        if config_dir is not None:
            self.config_dir = Path(config_dir)
        elif use_global:
            self.config_dir = Path.home() / CONFIG_DIR_NAME
        else:
            self.config_dir = Path.cwd() / CONFIG_DIR_NAME
        self.is_global = use_global

        self.config_file = self.config_dir / "config.yaml"
        self._config: dict[str, Any] = self._load()

        self._global_config: dict[str, Any] = {}
        if not self.is_global:
            global_config_file = Path.home() / CONFIG_DIR_NAME / "config.yaml"
            if global_config_file.exists() and global_config_file != self.config_file:
                try:
                    with open(global_config_file, "r") as f:
                        self._global_config = yaml.safe_load(f) or {}
                except (OSError, yaml.YAMLError) as e:
                    logger.warning("Failed to load global config", error=str(e))

        logger.debug("Config initialized", config_file=str(self.config_file), is_global=self.is_global)

    def _load(self) -> dict[str, Any]:
        if not self.config_file.exists():
            logger.debug("Config file does not exist, initializing empty config")
            return {}

        try:
            with open(self.config_file, "r") as f:
                config = yaml.safe_load(f) or {}
                logger.debug("Config loaded successfully", keys=list(config.keys()))
                return config
        except (OSError, yaml.YAMLError) as e:
            logger.error("Failed to load config", error=str(e))
            raise ValueError(f"Failed to load config from {self.config_file}: {e}") from e

    def _save(self) -> None:
        try:
            self.config_dir.mkdir(parents=True, exist_ok=True)
            with open(self.config_file, "w") as f:
                yaml.safe_dump(self._config, f, default_flow_style=False, sort_keys=False)
            logger.debug("Config saved successfully")
        except (OSError, yaml.YAMLError) as e:
            logger.error("Failed to save config", error=str(e))
            raise ValueError(f"Failed to save config to {self.config_file}: {e}") from e

    def get(self, key: str, default: str | None = None) -> str | None:
        """Get a configuration value, falling back to global config for local lookups."""
        if key in self._config:
            logger.debug("Getting config value from local", key=key)
            return self._config[key]

        if not self.is_global and key in self._global_config:
            logger.debug("Getting config value from global", key=key)
            return self._global_config[key]

        logger.debug("Config value not found", key=key)
        return default

    def set(self, key: str, value: str) -> None:
        logger.debug("Setting config value", key=key)
        self._config[key] = value
        self._save()

    def unset(self, key: str) -> None:
        logger.debug("Unsetting config value", key=key)
        if key in self._config:
            del self._config[key]
            self._save()

    def list(self) -> dict[str, str]:
        """List all configuration settings.

        For local config, global settings are merged underneath local ones.
        """
        if self.is_global:
            return self._config.copy()
        merged = self._global_config.copy()
        merged.update(self._config)
        logger.debug("Listing merged config values", count=len(merged))
        return merged

    @property
    def backend(self) -> str:
        return self.get("backend", DEFAULT_BACKEND) or DEFAULT_BACKEND

    @property
    def data_dir(self) -> Path:
        return Path(self.get("json.data_dir", DEFAULT_DATA_DIR) or DEFAULT_DATA_DIR).expanduser()


def get_config(use_global: bool = False) -> Config:
    """Get a configuration instance.

    Args:
        use_global: If True, return global config. If False, return local config with global fallback.
    """
    return Config(use_global=use_global)
