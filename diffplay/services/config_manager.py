"""
Configuration Manager - Handle backend settings persistence

Holds the default presentation options used when a diff request does not
carry its own, plus service limits and server settings.
"""

from __future__ import annotations

import copy
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from diffplay.models.config import PresentationConfig

logger = logging.getLogger(__name__)

DEFAULT_MAX_INPUT_CHARS = 2_000_000


class ConfigManager:
    """Manage configuration persistence"""

    _instance = None
    _config_file = None

    def __init__(self):
        try:
            # 1. Environment variable
            config_dir = os.environ.get("DIFFPLAY_CONFIG_DIR")

            # 2. Home directory ~/.diffplay
            if not config_dir:
                config_dir = os.path.expanduser("~/.diffplay")

            config_path = Path(config_dir)
            try:
                config_path.mkdir(parents=True, exist_ok=True)
                self._config_file = config_path / "config.json"
            except OSError as e:
                logger.warning("Cannot write to %s: %s", config_dir, e)
                self._config_file = None

            # 3. Fallback: temp dir when the preferred location is unusable
            if not self._config_file:
                tmp_dir = Path(tempfile.gettempdir()) / "diffplay"
                tmp_dir.mkdir(parents=True, exist_ok=True)
                self._config_file = tmp_dir / "config.json"
                logger.info("Using temporary config path: %s", self._config_file)

        except OSError as e:
            logger.error("Cannot prepare config directory: %s", e)
            self._config_file = Path(tempfile.gettempdir()) / "diffplay_config_fallback.json"

        self._config = self._load_config()

    @classmethod
    def get_instance(cls) -> "ConfigManager":
        """Get singleton instance"""
        if cls._instance is None:
            cls._instance = ConfigManager()
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Drop the singleton so the next lookup re-reads the environment"""
        cls._instance = None

    @property
    def config_file(self) -> Path:
        return self._config_file

    def _load_config(self) -> dict[str, Any]:
        """Load configuration from file, layered over the defaults"""
        config = self._default_config()
        if not self._config_file.exists():
            return config

        try:
            with open(self._config_file) as f:
                stored = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Error loading config %s: %s", self._config_file, e)
            return config

        if not isinstance(stored, dict):
            logger.warning("Ignoring config %s: expected an object", self._config_file)
            return config

        for key, value in stored.items():
            if isinstance(value, dict) and isinstance(config.get(key), dict):
                config[key] = {**config[key], **value}
            else:
                config[key] = value
        return config

    def _default_config(self) -> dict[str, Any]:
        """Get default configuration"""
        return {
            "presentation": PresentationConfig().model_dump(by_alias=True),
            "limits": {"maxInputChars": DEFAULT_MAX_INPUT_CHARS},
            "server": {"host": "127.0.0.1", "port": 8000},
        }

    def get_config(self) -> dict[str, Any]:
        """Get current configuration"""
        # Reload config from file to ensure we have the latest
        self._config = self._load_config()
        return copy.deepcopy(self._config)

    def save_config(self, config: dict[str, Any]):
        """Save configuration to file"""
        # Merge with existing config
        self._config.update(config)

        # Ensure config directory exists
        self._config_file.parent.mkdir(parents=True, exist_ok=True)

        # Write to file
        try:
            with open(self._config_file, "w") as f:
                json.dump(self._config, f, indent=2)
        except OSError as e:
            raise RuntimeError(f"Failed to save config: {e}")

    def get(self, key: str, default=None):
        """Get specific config value"""
        return self.get_config().get(key, default)

    def set(self, key: str, value: Any):
        """Set specific config value"""
        config = self.get_config()
        config[key] = value
        self.save_config(config)

    def get_presentation(self) -> PresentationConfig:
        """Default presentation options, validated"""
        return PresentationConfig.from_options(self.get("presentation"))

    def get_max_input_chars(self) -> int:
        limits = self.get("limits", {})
        limit = limits.get("maxInputChars", DEFAULT_MAX_INPUT_CHARS) if isinstance(limits, dict) else None
        if not isinstance(limit, int) or isinstance(limit, bool) or limit <= 0:
            logger.warning("Invalid maxInputChars %r, using %d", limit, DEFAULT_MAX_INPUT_CHARS)
            return DEFAULT_MAX_INPUT_CHARS
        return limit
