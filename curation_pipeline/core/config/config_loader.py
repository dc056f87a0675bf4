"""
Configuration Loader
Loads and validates YAML configuration files
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml

from .app_config import AppConfig

API_KEY_ENV = "YOUTUBE_API_KEY"

SINK_MODES = ("http", "csv")
MIN_RESULTS = 25
MAX_RESULTS = 50


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""
    pass


class ConfigLoader:
    """
    Loads and validates configuration from YAML files.

    Responsibilities:
    - Read YAML configuration file
    - Validate all fields, falling back to defaults for optional ones
    - Validate types and value ranges
    - Return validated AppConfig instance
    """

    def __init__(self, config_path: Path):
        """
        Initialize ConfigLoader with path to config file.

        Args:
            config_path: Path to YAML configuration file
        """
        self._config_path = config_path

    def load(self) -> AppConfig:
        """
        Load and validate configuration from YAML file.

        Returns:
            AppConfig: Validated configuration object

        Raises:
            ConfigValidationError: If configuration is invalid
            FileNotFoundError: If config file doesn't exist
        """
        config_data = self._load_yaml()
        return self.from_dict(config_data)

    def from_dict(self, config_data: Dict[str, Any]) -> AppConfig:
        """Validate an already parsed mapping."""
        api_key = self._validate_api_key(config_data)
        max_changes = self._validate_max_channel_changes(config_data)
        catalog = self._validate_catalog_config(config_data)
        sink = self._validate_sink_config(config_data)
        storage_root = self._validate_storage_root(config_data)
        log_level = self._validate_log_level(config_data)

        return AppConfig(
            api_key=api_key,
            max_channel_changes=max_changes,
            max_results=catalog["max_results"],
            timezone=catalog["timezone"],
            sink_mode=sink["mode"],
            sink_url=sink["url"],
            sink_timeout=sink["timeout"],
            storage_root=storage_root,
            log_level=log_level
        )

    def _load_yaml(self) -> Dict[str, Any]:
        """Load YAML file and return parsed data."""
        if not self._config_path.exists():
            raise FileNotFoundError(
                f"Configuration file not found: {self._config_path}"
            )

        try:
            with open(self._config_path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)

            if data is None:
                raise ConfigValidationError("Configuration file is empty")

            if not isinstance(data, dict):
                raise ConfigValidationError(
                    "Configuration must be a YAML mapping/dictionary"
                )

            return data

        except yaml.YAMLError as e:
            raise ConfigValidationError(f"Invalid YAML syntax: {e}")

    def _validate_api_key(self, config: Dict[str, Any]) -> str:
        """Validate api_key field (optional, falls back to the environment)."""
        api_key = config.get("api_key")

        if api_key is None:
            return os.environ.get(API_KEY_ENV, "").strip()

        if not isinstance(api_key, str):
            raise ConfigValidationError(
                f"Field 'api_key' must be a string, got {type(api_key).__name__}"
            )

        return api_key.strip()

    def _validate_max_channel_changes(self, config: Dict[str, Any]) -> int:
        """Validate max_channel_changes field."""
        max_changes = config.get("max_channel_changes", 2)

        # bool is an int subclass
        if isinstance(max_changes, bool) or not isinstance(max_changes, int):
            raise ConfigValidationError(
                f"Field 'max_channel_changes' must be an integer, got {type(max_changes).__name__}"
            )

        if max_changes <= 0:
            raise ConfigValidationError(
                f"Field 'max_channel_changes' must be greater than 0, got {max_changes}"
            )

        return max_changes

    def _validate_catalog_config(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """Validate catalog section."""
        defaults = {
            "max_results": MIN_RESULTS,
            "timezone": None
        }

        catalog = config.get("catalog")
        if catalog is None:
            return defaults
        if not isinstance(catalog, dict):
            raise ConfigValidationError("Section 'catalog' must be a mapping")

        max_results = catalog.get("max_results", defaults["max_results"])
        timezone = catalog.get("timezone", defaults["timezone"])

        if isinstance(max_results, bool) or not isinstance(max_results, int):
            raise ConfigValidationError(
                f"catalog.max_results must be an integer, got {type(max_results).__name__}"
            )
        if not (MIN_RESULTS <= max_results <= MAX_RESULTS):
            raise ConfigValidationError(
                f"catalog.max_results must be between {MIN_RESULTS} and {MAX_RESULTS}, got {max_results}"
            )

        if timezone is not None:
            if not isinstance(timezone, str) or not timezone.strip():
                raise ConfigValidationError("catalog.timezone must be a non-empty string or null")
            timezone = timezone.strip()
            try:
                ZoneInfo(timezone)
            except (ZoneInfoNotFoundError, ValueError):
                raise ConfigValidationError(f"catalog.timezone is not a known zone: {timezone}")

        return {
            "max_results": max_results,
            "timezone": timezone
        }

    def _validate_sink_config(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """Validate sink section."""
        sink = config.get("sink", {})
        if not isinstance(sink, dict):
            raise ConfigValidationError("Section 'sink' must be a mapping")

        mode = sink.get("mode", "http")
        url = sink.get("url", "")
        timeout = sink.get("timeout", 30)

        if not isinstance(mode, str) or mode.strip().lower() not in SINK_MODES:
            raise ConfigValidationError(
                f"sink.mode must be one of {', '.join(SINK_MODES)}, got {mode!r}"
            )
        mode = mode.strip().lower()

        if not isinstance(url, str):
            raise ConfigValidationError(f"sink.url must be string, got {type(url).__name__}")
        if mode == "http" and not url.strip():
            raise ConfigValidationError("sink.url is required when sink.mode is 'http'")

        if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
            raise ConfigValidationError("sink.timeout must be a positive number")

        return {
            "mode": mode,
            "url": url.strip(),
            "timeout": float(timeout)
        }

    def _validate_storage_root(self, config: Dict[str, Any]) -> str:
        """Validate storage_root field."""
        root = config.get("storage_root", "./storage")

        if not isinstance(root, str) or not root.strip():
            raise ConfigValidationError("Field 'storage_root' must be a non-empty string")

        return root.strip()

    def _validate_log_level(self, config: Dict[str, Any]) -> str:
        """Validate log_level field."""
        level = config.get("log_level", "INFO")

        if not isinstance(level, str) or not isinstance(logging.getLevelName(level.upper()), int):
            raise ConfigValidationError(f"Field 'log_level' is not a valid logging level: {level!r}")

        return level.upper()
