"""
================================================================================
Configuration Loader
================================================================================

Suite settings read from ``saucedemo_suites/config/config.yaml``, with any
key overridable from the environment.

Lookup order for ``get("browser.headless", True)``:
    1. Environment variable ``BROWSER_HEADLESS`` (converted to the default's type)
    2. ``browser: headless:`` in the YAML file
    3. The default passed by the caller

``SAUCEDEMO_CONFIG`` points the loader at another YAML file.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from loguru import logger


DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "config.yaml"
CONFIG_PATH_ENV = "SAUCEDEMO_CONFIG"

TRUE_VALUES = ("true", "1", "yes", "on")


class ConfigurationError(Exception):
    """The configuration file exists but cannot be parsed."""
    pass


def env_name(key: str) -> str:
    """``ui.base_url`` -> ``UI_BASE_URL``"""
    return key.upper().replace(".", "_")


def coerce(raw: str, like: Any) -> Any:
    """Convert an environment string to the type of ``like``."""
    if like is None or isinstance(like, str):
        return raw
    if isinstance(like, bool):
        return raw.strip().lower() in TRUE_VALUES
    if isinstance(like, (list, tuple)):
        return [item.strip() for item in raw.split(",") if item.strip()]
    for number_type in (int, float):
        if isinstance(like, number_type):
            try:
                return number_type(raw)
            except ValueError:
                logger.warning(f"Ignoring non-numeric override {raw!r}, expected {number_type.__name__}")
                return like
    return raw


class ConfigLoader:
    """
    Process-wide configuration (one instance until ``reset()``).

    Usage:
        >>> config = ConfigLoader()
        >>> config.get("ui.error_timeout", 3.0)
        3.0
        >>> config.get_section("clearing")["delayed_pass_ms"]
        120
    """

    _instance: Optional["ConfigLoader"] = None

    def __new__(cls, config_path: Optional[Path] = None) -> "ConfigLoader":
        if cls._instance is None:
            instance = super().__new__(cls)
            instance._ready = False
            cls._instance = instance
        return cls._instance

    def __init__(self, config_path: Optional[Path] = None) -> None:
        if self._ready:
            return
        self.path = self._choose_path(config_path)
        self._data: Dict[str, Any] = {}
        self._read()
        self._ready = True

    @staticmethod
    def _choose_path(config_path: Optional[Path]) -> Path:
        if config_path:
            return Path(config_path)
        override = os.environ.get(CONFIG_PATH_ENV)
        return Path(override) if override else DEFAULT_CONFIG_PATH

    def _read(self) -> None:
        if not self.path.is_file():
            logger.warning(f"No configuration at {self.path}; built-in defaults apply")
            self._data = {}
            return
        try:
            self._data = yaml.safe_load(self.path.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Cannot parse {self.path}: {e}") from e
        logger.debug(f"Configuration loaded: {self.path}")

    def get(self, key: str, default: Any = None) -> Any:
        """
        Value at dot path ``key``.

        Args:
            key: e.g. "clearing.confirm_timeout"
            default: Returned when the key is absent; also decides how an
                environment override is converted
        """
        raw = os.environ.get(env_name(key))
        if raw is not None:
            return coerce(raw, default)

        node: Any = self._data
        for part in key.split("."):
            if not isinstance(node, dict) or node.get(part) is None:
                return default
            node = node[part]
        return node

    def get_section(self, section: str) -> Dict[str, Any]:
        """A whole top-level section as stored in YAML (no env overrides)."""
        return dict(self._data.get(section) or {})

    def reload(self) -> None:
        self._read()
        logger.info(f"Configuration reloaded: {self.path}")

    @classmethod
    def reset(cls) -> None:
        """Drop the shared instance; the next ``ConfigLoader()`` reads again."""
        cls._instance = None


__all__ = [
    "ConfigLoader",
    "ConfigurationError",
    "DEFAULT_CONFIG_PATH",
    "CONFIG_PATH_ENV",
]
