"""
================================================================================
UI Testing Framework
================================================================================

Playwright-based UI automation framework for the SauceDemo login flow.

Components:
    - element_waits: Synchronized element location (poll, re-resolve, deadline)
    - field_clearing: Layered forced clear of text inputs
    - framework_sync: Reactive framework state synchronization strategies
    - browser_manager: Browser session provisioning
    - page_base: Base page object
    - config_loader: YAML + environment configuration

Author: Automation Team
License: MIT
================================================================================
"""

from .browser_manager import BrowserSession, Engine, create_session
from .element_waits import ElementWaiter
from .errors import (
    ProvisioningError,
    ScriptExecutionError,
    UiFrameworkError,
    WaitTimeoutError,
)
from .field_clearing import FieldClearer
from .framework_sync import FrameworkStateSync, ReactStateSync
from .locator import Locator, LocatorStrategy
from .page_base import BasePage

__all__ = [
    "BasePage",
    "BrowserSession",
    "ElementWaiter",
    "Engine",
    "FieldClearer",
    "FrameworkStateSync",
    "Locator",
    "LocatorStrategy",
    "ProvisioningError",
    "ReactStateSync",
    "ScriptExecutionError",
    "UiFrameworkError",
    "WaitTimeoutError",
    "create_session",
]
