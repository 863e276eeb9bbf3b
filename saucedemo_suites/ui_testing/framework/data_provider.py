"""
================================================================================
Test Data Provider
================================================================================

Login test data and browser matrix, read from the ``test_data`` and
``browser`` configuration sections with built-in fallbacks.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from .browser_manager import Engine
from .config_loader import ConfigLoader


DEFAULT_PASSWORD = "secret_sauce"

# locked_out_user is deliberately absent: the site rejects it
DEFAULT_VALID_USERS = [
    "standard_user",
    "problem_user",
    "performance_glitch_user",
]

DEFAULT_ENGINES = [Engine.FIREFOX.value, Engine.EDGE.value]

USERNAME_REQUIRED = "Username is required"
PASSWORD_REQUIRED = "Password is required"

INVENTORY_TITLE = "Products"
DOCUMENT_TITLE = "Swag Labs"


@dataclass(frozen=True)
class Credentials:
    username: str
    password: str

    def __repr__(self) -> str:
        return f"Credentials(username={self.username!r}, password='***')"


def get_valid_users(config: Optional[ConfigLoader] = None) -> List[str]:
    """Users expected to reach the inventory page."""
    config = config or ConfigLoader()
    return list(config.get("test_data.valid_users", DEFAULT_VALID_USERS))


def get_password(config: Optional[ConfigLoader] = None) -> str:
    config = config or ConfigLoader()
    return str(config.get("test_data.password", DEFAULT_PASSWORD))


def get_valid_credentials(config: Optional[ConfigLoader] = None) -> List[Credentials]:
    password = get_password(config)
    return [Credentials(user, password) for user in get_valid_users(config)]


def get_browsers(config: Optional[ConfigLoader] = None) -> List[Engine]:
    """Engines every UI test runs against, in configuration order."""
    config = config or ConfigLoader()
    names = config.get("browser.engines", DEFAULT_ENGINES)
    engines: List[Engine] = []
    for name in names:
        engine = Engine.from_name(name)
        if engine not in engines:
            engines.append(engine)
    return engines


__all__ = [
    "Credentials",
    "get_valid_users",
    "get_password",
    "get_valid_credentials",
    "get_browsers",
    "USERNAME_REQUIRED",
    "PASSWORD_REQUIRED",
    "INVENTORY_TITLE",
    "DOCUMENT_TITLE",
]
