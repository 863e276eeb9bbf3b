"""
================================================================================
Suite Pytest Configuration
================================================================================

Registers project-wide markers and tags collected items by location.

================================================================================
"""

from pathlib import Path

import pytest


MARKERS = {
    # Priority
    "P0": "Blocker - login must work on every engine",
    "P1": "High - full scenario runs",
    "P2": "Medium - edge cases of the interaction layer",
    "P3": "Low - extensive validation",
    # Scope
    "smoke": "Quick verification tests",
    "regression": "Full regression run",
    "e2e": "Drives the public SauceDemo site (needs network; deselected by default)",
    "browser": "Drives a real browser against local fixture pages",
    "ui": "Lives under ui_testing (added automatically)",
    "unit": "Browser-free framework tests (added automatically)",
    # Feature
    "auth": "Login and credential validation",
}

# Directory name -> marker added to every test collected below it
DIRECTORY_MARKERS = {
    "ui_testing": "ui",
    "unit": "unit",
}


def pytest_configure(config):
    for name, description in MARKERS.items():
        config.addinivalue_line("markers", f"{name}: {description}")


def pytest_collection_modifyitems(config, items):
    """Auto-tag tests by directory."""
    for item in items:
        parts = set(Path(str(item.fspath)).parts)
        for directory, marker in DIRECTORY_MARKERS.items():
            if directory in parts:
                item.add_marker(getattr(pytest.mark, marker))


def pytest_report_header(config):
    engines = config.getoption("engine") or ["from config"]
    return [
        "",
        "=" * 60,
        "SauceDemo Login UI Suite",
        f"Engines: {', '.join(engines)}",
        "=" * 60,
        "",
    ]
