"""
================================================================================
UI Framework Errors
================================================================================

Exception taxonomy shared by the waiting, clearing and provisioning layers.

    UiFrameworkError
        ├── WaitTimeoutError      - a wait predicate never held within budget
        ├── ProvisioningError     - a browser session could not be started
        └── ScriptExecutionError  - an in-page script raised

Expected-vs-actual mismatches are plain ``AssertionError``s raised by page
object ``verify_*`` helpers and tests.

================================================================================
"""

from __future__ import annotations

from typing import Any, Optional


class UiFrameworkError(Exception):
    """Base class for all UI framework errors."""
    pass


class WaitTimeoutError(UiFrameworkError):
    """
    Raised when a wait predicate did not become true before the deadline.

    Attributes:
        locator: Locator (or description) that was being waited on
        elapsed: Seconds spent polling
        condition: Human-readable description of the awaited condition
    """

    def __init__(
        self,
        message: str,
        locator: Optional[Any] = None,
        elapsed: float = 0.0,
        condition: str = "",
    ):
        super().__init__(message)
        self.locator = locator
        self.elapsed = elapsed
        self.condition = condition


class ProvisioningError(UiFrameworkError):
    """Raised when the requested browser engine cannot be started."""

    def __init__(self, message: str, engine: Optional[Any] = None):
        super().__init__(message)
        self.engine = engine


class ScriptExecutionError(UiFrameworkError):
    """Raised when a script evaluated in the page context throws."""
    pass


__all__ = [
    "UiFrameworkError",
    "WaitTimeoutError",
    "ProvisioningError",
    "ScriptExecutionError",
]
