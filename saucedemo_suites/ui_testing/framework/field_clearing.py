"""
================================================================================
Field Clearing
================================================================================

Robust clearing of text inputs under automation.

A single driver-level clear is unreliable when a password manager re-inserts
a value asynchronously, when a reactive framework keeps its own copy of the
value, or when the page only listens for keyboard-originated events. The
protocol below layers four stages so that callers never need to know which
one was necessary:

    1. Native clear         - Playwright fill("")
    2. Programmatic reset   - native value setter, defaultValue/attribute reset,
                              framework tracker reset, input/change/compositionend
                              events, blur + focus; re-run in-page after a delay
    3. Keyboard clear       - once the delayed pass has run (or was cancelled):
                              click, select all, delete (only if still non-empty)
    4. Confirmation wait    - poll until the value is empty

Every handle a stage resolves is disposed when the stage ends.

Stage failures are logged and absorbed. Only a field that cannot be found at
all is reported to the caller (as ``WaitTimeoutError``).

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import time
from contextlib import contextmanager
from typing import Iterator, Optional

from loguru import logger
from playwright.sync_api import ElementHandle, Error as PlaywrightError, Page

from .element_waits import ElementWaiter, has_empty_value, is_present, release_handle
from .errors import ScriptExecutionError, WaitTimeoutError
from .framework_sync import FrameworkStateSync, ReactStateSync
from .locator import Locator
from .page_scripts import (
    CANCEL_DELAYED_CLEAR_SCRIPT,
    CLEAR_PENDING_ATTRIBUTE,
    build_clear_value_script,
    run_script,
)


SELECT_ALL_KEY = "ControlOrMeta+A"


def delayed_pass_done(element: ElementHandle) -> bool:
    """The in-page delayed clear pass has run or was cancelled."""
    return element.get_attribute(CLEAR_PENDING_ATTRIBUTE) is None


class FieldClearer:
    """
    Forces text inputs to be empty in both the DOM and the bound framework.

    Attributes:
        page: Playwright page
        waiter: ElementWaiter used for locating and confirmation polling
        framework_sync: Strategy for framework-side state synchronization
        confirm_timeout: Budget of the confirmation wait, in seconds
        settle_delay: Pause letting the delayed in-page pass run, in seconds
        delayed_pass_ms: Delay of the second in-page clear pass
        notify_framework: Call the framework change handler after clearing
    """

    def __init__(
        self,
        page: Page,
        waiter: Optional[ElementWaiter] = None,
        framework_sync: Optional[FrameworkStateSync] = None,
        confirm_timeout: float = 3.0,
        settle_delay: float = 0.18,
        delayed_pass_ms: int = 120,
        notify_framework: bool = True,
    ):
        self.page = page
        self.waiter = waiter or ElementWaiter(page)
        self.framework_sync = framework_sync or ReactStateSync()
        self.confirm_timeout = confirm_timeout
        self.settle_delay = settle_delay
        self.delayed_pass_ms = delayed_pass_ms
        self.notify_framework = notify_framework

    def force_clear(self, locator: Locator) -> bool:
        """
        Clear the input found by ``locator``.

        Args:
            locator: Input element to clear

        Returns:
            True if the field was confirmed empty, False if confirmation
            timed out (a warning is logged in that case)

        Raises:
            WaitTimeoutError: When the field is not present at all
        """
        release_handle(self.waiter.wait_for(locator, is_present))
        logger.debug(f"Force clearing {locator}")

        self._native_clear(locator)
        self._programmatic_reset(locator)

        if self.settle_delay > 0:
            time.sleep(self.settle_delay)
        self._await_delayed_pass(locator)

        if self._current_value(locator) != "":
            self._keyboard_clear(locator)

        confirmed = self._confirm_empty(locator)

        if self.notify_framework:
            self.notify_framework_about_clear(locator)

        return confirmed

    def notify_framework_about_clear(self, locator: Locator) -> bool:
        """
        Invoke the framework change handler bound to the field.

        Best-effort: failures are logged and reported as False.
        """
        with self._resolved(locator, "framework notification") as element:
            if element is None:
                return False
            try:
                notified = self.framework_sync.notify_change(self.page, element)
            except (PlaywrightError, ScriptExecutionError) as e:
                logger.debug(f"Framework notification failed for {locator}: {e}")
                return False
        logger.debug(
            f"Framework notification ({self.framework_sync.name}) for {locator}: {notified}"
        )
        return notified

    # =========================================================================
    # Stages
    # =========================================================================

    def _native_clear(self, locator: Locator) -> None:
        with self._resolved(locator, "native clear") as element:
            if element is None:
                return
            try:
                element.fill("")
                logger.debug(f"Native clear executed for {locator}")
            except PlaywrightError as e:
                logger.debug(f"Native clear failed for {locator}: {e}")

    def _programmatic_reset(self, locator: Locator) -> None:
        script = build_clear_value_script(
            tracker_reset=self.framework_sync.tracker_reset_script,
            delay_ms=self.delayed_pass_ms,
        )
        with self._resolved(locator, "programmatic reset") as element:
            if element is None:
                return
            try:
                result = run_script(self.page, script, element)
                logger.debug(f"Programmatic reset executed for {locator}, empty={result}")
            except ScriptExecutionError as e:
                logger.debug(f"Programmatic reset failed for {locator}: {e}")

    def _await_delayed_pass(self, locator: Locator) -> None:
        """
        Block until the in-page delayed pass has run, so it cannot wipe text
        typed after ``force_clear`` returns. A pass still pending when the
        confirmation budget runs out is cancelled.
        """
        try:
            release_handle(
                self.waiter.wait_for(locator, delayed_pass_done, timeout=self.confirm_timeout)
            )
            return
        except (WaitTimeoutError, PlaywrightError) as e:
            logger.warning(f"Delayed clear pass for {locator} did not finish, cancelling: {e}")

        with self._resolved(locator, "delayed pass cancel") as element:
            if element is None:
                return
            try:
                run_script(self.page, CANCEL_DELAYED_CLEAR_SCRIPT, element)
            except ScriptExecutionError as e:
                logger.debug(f"Could not cancel delayed clear pass for {locator}: {e}")

    def _keyboard_clear(self, locator: Locator) -> None:
        with self._resolved(locator, "keyboard clear") as element:
            if element is None:
                return
            try:
                element.click()
                self.page.keyboard.press(SELECT_ALL_KEY)
                self.page.keyboard.press("Delete")
                logger.debug(f"Keyboard clear attempted for {locator}")
            except PlaywrightError as e:
                logger.debug(f"Keyboard clear failed for {locator}: {e}")

    def _confirm_empty(self, locator: Locator) -> bool:
        try:
            element = self.waiter.wait_for(locator, has_empty_value, timeout=self.confirm_timeout)
        except WaitTimeoutError as e:
            logger.warning(f"Field {locator} did not become empty: {e}")
            return False
        except PlaywrightError as e:
            logger.warning(f"Could not confirm {locator} is empty: {e}")
            return False
        release_handle(element)
        logger.debug(f"Field {locator} is empty")
        return True

    # =========================================================================
    # Helpers
    # =========================================================================

    @contextmanager
    def _resolved(self, locator: Locator, stage: str) -> Iterator[Optional[ElementHandle]]:
        """Resolve ``locator`` once for ``stage``; the handle is disposed on exit."""
        try:
            element = self.waiter.resolve(locator)
        except PlaywrightError as e:
            logger.debug(f"{stage}: could not resolve {locator}: {e}")
            element = None
        else:
            if element is None:
                logger.debug(f"{stage}: {locator} not present")
        try:
            yield element
        finally:
            if element is not None:
                release_handle(element)

    def _current_value(self, locator: Locator) -> Optional[str]:
        """Current input value, or None when it cannot be read."""
        with self._resolved(locator, "value check") as element:
            if element is None:
                return None
            try:
                return element.input_value()
            except PlaywrightError as e:
                logger.debug(f"Could not read value of {locator}: {e}")
                return None


__all__ = [
    "FieldClearer",
    "SELECT_ALL_KEY",
    "delayed_pass_done",
]
