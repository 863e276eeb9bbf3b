"""
================================================================================
Base Page Object
================================================================================

Foundation class for Page Object Model implementation.

Provides:
    - Navigation and page readiness waits
    - Synchronized element waits (visible / clickable / soft visibility)
    - Robust text entry (force clear, then type)
    - Screenshot and failure capture for Allure

Page objects only declare locators and domain actions; all waiting and
clearing goes through ElementWaiter and FieldClearer.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Optional

import allure
from loguru import logger
from playwright.sync_api import ElementHandle, Page

from saucedemo_tools.report_tools.allure_utils import (
    attach_screenshot,
    attach_text,
)

from .config_loader import ConfigLoader
from .element_waits import ElementWaiter, release_handle
from .field_clearing import FieldClearer
from .framework_sync import ReactStateSync
from .locator import Locator
from .page_scripts import READY_STATE_SCRIPT


SCREENSHOT_DIR = Path(__file__).parent.parent / "screenshots"


class BasePage:
    """
    Base class for all page objects.

    Usage:
        class LoginPage(BasePage):
            USERNAME = Locator.css("#user-name")

            def enter_username(self, username: str) -> None:
                self.enter_text(self.USERNAME, username)
    """

    # Override in subclasses
    URL_PATH: str = "/"

    def __init__(
        self,
        page: Page,
        base_url: str = "",
        timeout: Optional[float] = None,
        config: Optional[ConfigLoader] = None,
    ):
        """
        Initialize page object.

        Args:
            page: Playwright Page object
            base_url: Application base URL (defaults to ``ui.base_url``)
            timeout: Default element wait in seconds (defaults to ``ui.default_timeout``)
            config: Configuration source
        """
        config = config or ConfigLoader()
        self.page = page
        if not base_url:
            base_url = config.get("ui.base_url", "https://www.saucedemo.com/")
        self.base_url = base_url.rstrip("/")
        self.page_load_timeout = float(config.get("ui.page_load_timeout", 10.0))

        self.waits = ElementWaiter(
            page,
            timeout=float(timeout if timeout is not None else config.get("ui.default_timeout", 2.0)),
            poll_interval=float(config.get("ui.poll_interval", 0.25)),
        )
        self.clearer = FieldClearer(
            page,
            waiter=self.waits,
            framework_sync=ReactStateSync(),
            confirm_timeout=float(config.get("clearing.confirm_timeout", 3.0)),
            settle_delay=float(config.get("clearing.settle_delay", 0.18)),
            delayed_pass_ms=int(config.get("clearing.delayed_pass_ms", 120)),
            notify_framework=bool(config.get("clearing.notify_framework", True)),
        )

    @property
    def url(self) -> str:
        """Full page URL."""
        return f"{self.base_url}{self.URL_PATH}"

    # =========================================================================
    # Navigation
    # =========================================================================

    def open_url(self, url: Optional[str] = None) -> None:
        """Navigate to ``url`` (this page's URL by default) and wait for readiness."""
        target = url or self.url
        with allure.step(f"Navigate to {target}"):
            self.page.goto(target)
            self.wait_for_page_load()
            logger.debug(f"Navigated to: {target}")

    def refresh(self) -> None:
        with allure.step("Refresh page"):
            self.page.reload()
            self.wait_for_page_load()

    def wait_for_page_load(self, timeout: Optional[float] = None) -> None:
        """Wait for ``document.readyState`` to become ``complete``."""
        self.waits.wait_until(
            lambda: self.page.evaluate(READY_STATE_SCRIPT) == "complete",
            timeout=self.page_load_timeout if timeout is None else timeout,
            description="document ready state to be complete",
        )

    # =========================================================================
    # Synchronized element access
    # =========================================================================

    def wait_for_element_visible(
        self,
        locator: Locator,
        timeout: Optional[float] = None,
    ) -> ElementHandle:
        return self.waits.wait_for_visible(locator, timeout)

    def wait_for_element_clickable(
        self,
        locator: Locator,
        timeout: Optional[float] = None,
    ) -> ElementHandle:
        return self.waits.wait_for_clickable(locator, timeout)

    def wait_until_element_visible(
        self,
        locator: Locator,
        timeout: Optional[float] = None,
    ) -> None:
        """Block until ``locator`` is visible without keeping its handle."""
        release_handle(self.wait_for_element_visible(locator, timeout))

    def is_element_visible(
        self,
        locator: Locator,
        timeout: Optional[float] = None,
    ) -> bool:
        return self.waits.is_visible(locator, timeout)

    def click(self, locator: Locator, timeout: Optional[float] = None) -> None:
        element = self.wait_for_element_clickable(locator, timeout)
        try:
            element.click()
        finally:
            release_handle(element)

    def enter_text(
        self,
        locator: Locator,
        text: Optional[str],
        timeout: Optional[float] = None,
    ) -> None:
        """
        Clear the field with the robust protocol, then type ``text``.

        An empty or None ``text`` leaves the field cleared.
        """
        self.wait_until_element_visible(locator, timeout)
        self.clearer.force_clear(locator)
        if not text:
            return
        element = self.wait_for_element_visible(locator, timeout)
        try:
            element.fill(text)
        finally:
            release_handle(element)

    def press_key(self, locator: Locator, key: str, timeout: Optional[float] = None) -> None:
        element = self.wait_for_element_visible(locator, timeout)
        try:
            element.press(key)
        finally:
            release_handle(element)

    def get_text(self, locator: Locator, timeout: Optional[float] = None) -> str:
        """Visible text content of the element, stripped."""
        element = self.wait_for_element_visible(locator, timeout)
        try:
            return (element.text_content() or "").strip()
        finally:
            release_handle(element)

    def get_document_title(self) -> str:
        return self.page.title()

    # =========================================================================
    # Screenshot and Debug Utilities
    # =========================================================================

    def screenshot(
        self,
        name: str,
        full_page: bool = False,
        attach_to_allure: bool = True,
    ) -> Path:
        """
        Take screenshot and optionally attach to Allure.

        Args:
            name: Screenshot name (without extension)
            full_page: Capture full scrollable page
            attach_to_allure: Whether to attach to Allure report

        Returns:
            Path to saved screenshot
        """
        SCREENSHOT_DIR.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filepath = SCREENSHOT_DIR / f"{name}_{timestamp}.png"

        png = self.page.screenshot(path=str(filepath), full_page=full_page)
        if attach_to_allure:
            attach_screenshot(png, name=name)

        logger.debug(f"Screenshot saved: {filepath}")
        return filepath

    def capture_failure(self, test_name: str) -> None:
        """Attach screenshot, URL and document title for a failed test."""
        with allure.step("Capture failure details"):
            self.screenshot(f"failure_{test_name}", full_page=True)
            attach_text(self.page.url, name="Current URL")
            attach_text(self.get_document_title(), name="Document title")


__all__ = [
    "BasePage",
    "SCREENSHOT_DIR",
]
