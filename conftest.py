"""
Repository-level pytest configuration.

Why this exists:
  - Register the browser selection options (`--engine`, `--headed`)
  - Initialize loguru once per session from the suite configuration
  - Keep behavior explicit and discoverable

The target site (https://www.saucedemo.com/) publishes its demo credentials;
nothing secret is configured here.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from saucedemo_suites.ui_testing.framework.config_loader import ConfigLoader
from saucedemo_tools.common import init_logger


def pytest_addoption(parser):
    group = parser.getgroup("saucedemo", "SauceDemo UI suite")
    group.addoption(
        "--engine",
        action="append",
        default=None,
        choices=["firefox", "edge"],
        help="Browser engine to run UI tests on (repeatable; default: browser.engines)",
    )
    group.addoption(
        "--headed",
        action="store_true",
        default=False,
        help="Run browsers with a visible window",
    )


def pytest_configure(config):
    """Initialize logging from the `logging` configuration section."""
    settings = ConfigLoader()
    init_logger(
        level=settings.get("logging.level", "INFO"),
        log_file=settings.get("logging.file"),
        rotation=settings.get("logging.rotation", "1 day"),
        retention=settings.get("logging.retention", "7 days"),
    )


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return repo root path."""
    return Path(__file__).parent


@pytest.fixture(scope="session")
def ui_config() -> ConfigLoader:
    """Suite configuration (YAML + environment overrides)."""
    return ConfigLoader()
