"""
================================================================================
Element Waits
================================================================================

Synchronized element location for UI automation.

Every wait re-resolves its locator against the live document on each poll, so
a handle obtained before a re-render is never acted on. Element absence and
stale-reference errors are expected while a page transitions and only mean
"not yet"; the wait fails solely when its deadline passes.

Features:
    - Fixed-interval polling with a hard deadline
    - Pluggable predicates (present, displayed, clickable, empty value)
    - Soft visibility check for non-fatal assertions
    - Generic ``wait_until`` for page-level conditions

Usage:
    waiter = ElementWaiter(page)
    button = waiter.wait_for_clickable(Locator.css("#login-button"))
    button.click()

    if waiter.is_visible(Locator.css(".error-message-container"), timeout=3):
        ...

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import time
from typing import Callable, Optional, TypeVar

from loguru import logger
from playwright.sync_api import ElementHandle, Error as PlaywrightError, Page

from .errors import WaitTimeoutError
from .locator import Locator


T = TypeVar("T")

Predicate = Callable[[ElementHandle], bool]

DEFAULT_TIMEOUT = 2.0
DEFAULT_POLL_INTERVAL = 0.25

# Driver messages that describe a handle or document going away mid-poll
TRANSIENT_ERROR_MARKERS = (
    "not attached to the dom",
    "element is detached",
    "execution context was destroyed",
    "cannot find context with specified id",
    "jshandle is disposed",
    "elementhandle is disposed",
    "frame was detached",
)


def is_transient_error(error: Exception) -> bool:
    """Return True if a driver error only signals a stale or re-rendering node."""
    message = str(error).lower()
    return any(marker in message for marker in TRANSIENT_ERROR_MARKERS)


# =============================================================================
# Predicates
# =============================================================================

def is_present(element: ElementHandle) -> bool:
    """Element is attached to the document."""
    return True


def is_displayed(element: ElementHandle) -> bool:
    """Element is visible."""
    return element.is_visible()


def is_clickable(element: ElementHandle) -> bool:
    """Element is visible and enabled."""
    return element.is_visible() and element.is_enabled()


def has_empty_value(element: ElementHandle) -> bool:
    """Input element currently holds an empty value."""
    return not element.input_value()


def describe_predicate(predicate: Callable) -> str:
    name = getattr(predicate, "__name__", "") or "ready"
    if name == "<lambda>":
        return "ready"
    return name.replace("_", " ")


def release_handle(element: ElementHandle) -> None:
    """Dispose a handle; a page that is already gone has nothing to free."""
    try:
        element.dispose()
    except PlaywrightError:
        pass


# =============================================================================
# Polling engine
# =============================================================================

def poll_until(
    probe: Callable[[], Optional[T]],
    timeout: float,
    poll_interval: float = DEFAULT_POLL_INTERVAL,
    description: str = "condition",
    locator: Optional[Locator] = None,
) -> T:
    """
    Call ``probe`` until it returns a truthy value or ``timeout`` elapses.

    Transient driver errors raised by the probe count as "not yet"; any other
    error propagates immediately. The last sleep is clipped to the deadline,
    so a success is observed at most one poll interval after it happens.

    Args:
        probe: Zero-argument callable; a truthy result ends the wait
        timeout: Total budget in seconds
        poll_interval: Pause between probes in seconds
        description: Text used in logs and the timeout message
        locator: Locator being waited on, attached to the timeout error

    Returns:
        The first truthy probe result

    Raises:
        WaitTimeoutError: When the deadline passes without success
    """
    started = time.monotonic()
    deadline = started + timeout
    attempts = 0

    while True:
        attempts += 1
        try:
            result = probe()
        except PlaywrightError as e:
            if not is_transient_error(e):
                raise
            logger.trace(f"Transient error while waiting for {description}: {e}")
            result = None

        if result:
            return result

        remaining = deadline - time.monotonic()
        if remaining <= 0:
            elapsed = time.monotonic() - started
            raise WaitTimeoutError(
                f"Timed out after {elapsed:.2f}s ({attempts} attempts) "
                f"waiting for {description}",
                locator=locator,
                elapsed=elapsed,
                condition=description,
            )
        time.sleep(min(poll_interval, remaining))


class ElementWaiter:
    """
    Blocks until an element located by a ``Locator`` satisfies a predicate.

    Attributes:
        page: Playwright page the locators are resolved against
        timeout: Default wait budget in seconds
        poll_interval: Pause between polls in seconds
    """

    def __init__(
        self,
        page: Page,
        timeout: float = DEFAULT_TIMEOUT,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
    ):
        self.page = page
        self.timeout = timeout
        self.poll_interval = poll_interval

    def resolve(self, locator: Locator) -> Optional[ElementHandle]:
        """Resolve ``locator`` once against the live document (no waiting)."""
        return self.page.query_selector(locator.selector)

    def wait_for(
        self,
        locator: Locator,
        predicate: Predicate = is_displayed,
        timeout: Optional[float] = None,
    ) -> ElementHandle:
        """
        Wait until the element found by ``locator`` satisfies ``predicate``.

        Args:
            locator: Element to wait for
            predicate: Condition evaluated on a freshly resolved handle
            timeout: Budget in seconds (defaults to ``self.timeout``)

        Returns:
            A handle that satisfied the predicate when it was observed

        Raises:
            WaitTimeoutError: When the predicate never held in time
        """
        budget = self.timeout if timeout is None else timeout
        condition = describe_predicate(predicate)

        def probe() -> Optional[ElementHandle]:
            element = self.resolve(locator)
            if element is None:
                return None
            try:
                matched = predicate(element)
            except PlaywrightError:
                release_handle(element)
                raise
            if matched:
                return element
            release_handle(element)
            return None

        element = poll_until(
            probe,
            timeout=budget,
            poll_interval=self.poll_interval,
            description=f"{locator} ({condition})",
            locator=locator,
        )
        logger.debug(f"Element {locator}: {condition}")
        return element

    def wait_for_visible(
        self,
        locator: Locator,
        timeout: Optional[float] = None,
    ) -> ElementHandle:
        return self.wait_for(locator, is_displayed, timeout)

    def wait_for_clickable(
        self,
        locator: Locator,
        timeout: Optional[float] = None,
    ) -> ElementHandle:
        return self.wait_for(locator, is_clickable, timeout)

    def is_visible(
        self,
        locator: Locator,
        timeout: Optional[float] = None,
    ) -> bool:
        """
        Soft visibility check.

        Only running out of time yields False. Transient errors are retried
        like in ``wait_for``; any other driver error (a closed page or
        browser) propagates.
        """
        try:
            element = self.wait_for(locator, is_displayed, timeout)
        except WaitTimeoutError:
            return False
        except PlaywrightError as e:
            logger.error(f"Visibility check for {locator} failed: {e}")
            raise
        release_handle(element)
        return True

    def wait_until(
        self,
        condition: Callable[[], T],
        timeout: Optional[float] = None,
        description: str = "condition",
    ) -> T:
        """Poll an arbitrary page-level condition with this waiter's cadence."""
        budget = self.timeout if timeout is None else timeout
        return poll_until(
            condition,
            timeout=budget,
            poll_interval=self.poll_interval,
            description=description,
        )


__all__ = [
    "ElementWaiter",
    "Predicate",
    "poll_until",
    "is_transient_error",
    "release_handle",
    "is_present",
    "is_displayed",
    "is_clickable",
    "has_empty_value",
    "DEFAULT_TIMEOUT",
    "DEFAULT_POLL_INTERVAL",
]
