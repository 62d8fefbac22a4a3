"""
Unified configuration management for session recall.

Provides centralized configuration with:
- JSON file loading with defaults
- Environment variable overrides
- Dot-notation access
- Feature enable/disable flags
"""

import json
import os
import sys
from pathlib import Path
from typing import Any, Optional


class RecallConfig:
    """
    Singleton configuration manager for session recall.

    Usage:
        from recall_config import config

        if config.is_enabled('summarization'):
            # ... summarization code

        min_score = config.get('selection.min_score')
    """

    _instance = None
    _config = None
    _config_loaded = False

    def __new__(cls):
        """Singleton pattern."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def load(self, config_path: Optional[Path] = None):
        """
        Load configuration from file.

        Args:
            config_path: Path to recall_config.json (optional)
        """
        if self._config_loaded:
            return  # Already loaded

        if config_path is None:
            # Default path
            config_path = Path(__file__).parent.parent.parent / "config" / "recall_config.json"

        defaults = self._get_defaults()

        if not config_path.exists():
            self._config = defaults
        else:
            try:
                with open(config_path) as f:
                    self._config = self._merge(defaults, json.load(f))
            except Exception as e:
                print(f"Warning: Failed to load config from {config_path}: {e}", file=sys.stderr)
                self._config = defaults

        self._apply_env_overrides()

        self._config_loaded = True

    def _get_defaults(self) -> dict:
        """
        Get default configuration.

        Returns:
            Dictionary with default settings
        """
        return {
            "version": "1.0.0",
            "selection": {
                "min_score": 0.1,
                "max_sessions": 5,
                "fallback_count": 3
            },
            "search": {
                "limit": 10,
                "bm25_weight": 0.7,
                "temporal_weight": 0.3
            },
            "timeline": {
                "default_count": 10,
                "max_count": 20
            },
            "keywords": {
                "limit": 50
            },
            "summarization": {
                "enabled": True,
                "mode": "auto",
                "api_key_env": "ANTHROPIC_API_KEY",
                "model": "claude-3-5-haiku-20241022",
                "max_tokens": 300,
                "max_chars": 250,
                "language": "English",
                "timeout_sec": 30
            }
        }

    def _merge(self, base: dict, override: dict) -> dict:
        """Merge a loaded config over the defaults, section by section."""
        merged = dict(base)
        for key, value in override.items():
            if isinstance(value, dict) and isinstance(merged.get(key), dict):
                merged[key] = self._merge(merged[key], value)
            else:
                merged[key] = value
        return merged

    def _apply_env_overrides(self):
        """Apply environment variable overrides to configuration."""
        summarization = self._config.setdefault("summarization", {})
        selection = self._config.setdefault("selection", {})

        # Check for API key
        api_key_env = summarization.get("api_key_env", "ANTHROPIC_API_KEY")
        if os.environ.get(api_key_env):
            summarization["api_key"] = os.environ[api_key_env]

        # RECALL_SUMMARIZATION_MODE=local
        if "RECALL_SUMMARIZATION_MODE" in os.environ:
            mode = os.environ["RECALL_SUMMARIZATION_MODE"].lower()
            if mode in ("auto", "llm", "local"):
                summarization["mode"] = mode
            else:
                print(f"Warning: Ignoring unknown RECALL_SUMMARIZATION_MODE '{mode}'", file=sys.stderr)

        if "RECALL_MIN_SCORE" in os.environ:
            try:
                selection["min_score"] = float(os.environ["RECALL_MIN_SCORE"])
            except ValueError:
                print("Warning: RECALL_MIN_SCORE is not a number, ignoring", file=sys.stderr)

        if "RECALL_MAX_SESSIONS" in os.environ:
            try:
                selection["max_sessions"] = int(os.environ["RECALL_MAX_SESSIONS"])
            except ValueError:
                print("Warning: RECALL_MAX_SESSIONS is not an integer, ignoring", file=sys.stderr)

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value with dot notation.

        Args:
            key: Configuration key (e.g., "selection.min_score")
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        if not self._config_loaded:
            self.load()

        keys = key.split('.')
        value = self._config

        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
            else:
                return default

        return value if value is not None else default

    def set(self, key: str, value: Any):
        """
        Set configuration value (runtime only, not persisted).

        Args:
            key: Configuration key (dot notation)
            value: Value to set
        """
        if not self._config_loaded:
            self.load()

        keys = key.split('.')
        config = self._config

        # Navigate to parent
        for k in keys[:-1]:
            if k not in config:
                config[k] = {}
            config = config[k]

        config[keys[-1]] = value

    def is_enabled(self, feature: str) -> bool:
        """
        Check if a feature is enabled.

        Args:
            feature: Feature name (e.g., "summarization")

        Returns:
            True if enabled, False otherwise
        """
        return self.get(f"{feature}.enabled", False)

    def reload(self, config_path: Optional[Path] = None):
        """Force reload configuration from file."""
        self._config_loaded = False
        self.load(config_path)

    def get_all(self) -> dict:
        """
        Get entire configuration dictionary.

        Returns:
            Full configuration
        """
        if not self._config_loaded:
            self.load()
        return self._config.copy()


# Singleton instance for import
config = RecallConfig()

# Auto-load on import
config.load()
