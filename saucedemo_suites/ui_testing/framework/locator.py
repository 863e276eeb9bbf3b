"""
================================================================================
Locator
================================================================================

Immutable (strategy, value) pair identifying elements in the current document.

Locators hold no page state and are safe to share between page objects,
tests and threads. They are rendered to a Playwright selector string each
time the element is resolved.

Usage:
    >>> USERNAME = Locator.css("#user-name")
    >>> USERNAME.selector
    '#user-name'
    >>> Locator.test_id("error").selector
    '[data-test="error"]'

================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class LocatorStrategy(str, Enum):
    """Supported element location strategies."""

    CSS = "css"
    XPATH = "xpath"
    ID = "id"
    TEXT = "text"
    TEST_ID = "test_id"


# SauceDemo tags its elements with data-test rather than data-testid
TEST_ID_ATTRIBUTE = "data-test"


def _quote(value: str) -> str:
    return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'


@dataclass(frozen=True)
class Locator:
    """
    Element locator.

    Attributes:
        strategy: How ``value`` should be interpreted
        value: The selector / id / text to look for
    """

    strategy: LocatorStrategy
    value: str

    def __post_init__(self) -> None:
        if not self.value:
            raise ValueError("Locator value must be a non-empty string")
        if not isinstance(self.strategy, LocatorStrategy):
            object.__setattr__(self, "strategy", LocatorStrategy(self.strategy))

    @classmethod
    def css(cls, value: str) -> "Locator":
        return cls(LocatorStrategy.CSS, value)

    @classmethod
    def xpath(cls, value: str) -> "Locator":
        return cls(LocatorStrategy.XPATH, value)

    @classmethod
    def id(cls, value: str) -> "Locator":
        return cls(LocatorStrategy.ID, value)

    @classmethod
    def text(cls, value: str) -> "Locator":
        return cls(LocatorStrategy.TEXT, value)

    @classmethod
    def test_id(cls, value: str) -> "Locator":
        return cls(LocatorStrategy.TEST_ID, value)

    @property
    def selector(self) -> str:
        """Playwright selector string for this locator."""
        if self.strategy is LocatorStrategy.CSS:
            return self.value
        if self.strategy is LocatorStrategy.XPATH:
            return f"xpath={self.value}"
        if self.strategy is LocatorStrategy.ID:
            return f"[id={_quote(self.value)}]"
        if self.strategy is LocatorStrategy.TEXT:
            return f"text={self.value}"
        return f"[{TEST_ID_ATTRIBUTE}={_quote(self.value)}]"

    def __str__(self) -> str:
        return f"{self.strategy.value}={self.value}"


__all__ = [
    "Locator",
    "LocatorStrategy",
    "TEST_ID_ATTRIBUTE",
]
