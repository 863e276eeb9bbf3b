"""
================================================================================
Browser Manager
================================================================================

Browser session provisioning for UI automation.

``create_session`` is a stateless factory: every call starts its own
Playwright driver and browser and returns a ``BrowserSession`` owned by the
caller. Sessions are never shared between test cases.

Features:
    - Firefox and Microsoft Edge engines
    - Anti-automation-detection launch flags, password manager disabled
    - Ephemeral (incognito-like) or persistent profiles
    - Optional capabilities negotiated at startup (unsupported ones skipped)
    - Idempotent, exception-safe teardown usable as a context manager

Usage:
    with create_session(Engine.FIREFOX) as session:
        session.page.goto("https://www.saucedemo.com/")

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from loguru import logger
from playwright.sync_api import (
    Browser,
    BrowserContext,
    Error as PlaywrightError,
    Page,
    Playwright,
    sync_playwright,
)

from .config_loader import ConfigLoader
from .errors import ProvisioningError


class Engine(str, Enum):
    """Browser engines the suite runs against."""

    FIREFOX = "firefox"
    EDGE = "edge"

    @classmethod
    def from_name(cls, name: str) -> "Engine":
        """Parse an engine name case-insensitively."""
        if isinstance(name, cls):
            return name
        try:
            return cls(str(name).strip().lower())
        except ValueError:
            supported = ", ".join(e.value for e in cls)
            raise ValueError(f"Unsupported browser: {name} (supported: {supported})") from None


# Stable Edge configuration carried over from the desktop runs
EDGE_ARGS: List[str] = [
    "--disable-extensions",
    "--disable-notifications",
    "--disable-popup-blocking",
    "--no-first-run",
    "--no-default-browser-check",
    "--disable-blink-features=AutomationControlled",
    "--password-store=basic",
]

EDGE_IGNORED_DEFAULT_ARGS: List[str] = ["--enable-automation"]

FIREFOX_USER_PREFS: Dict[str, Any] = {
    "dom.webdriver.enabled": False,
    "signon.rememberSignons": False,
    "signon.autofillForms": False,
    "browser.formfill.enable": False,
}

HIDE_WEBDRIVER_SCRIPT = (
    "Object.defineProperty(navigator, 'webdriver', {get: () => undefined});"
)


@dataclass
class SessionOptions:
    """Resolved provisioning settings for one session."""

    engine: Engine
    headless: bool = True
    ephemeral_profile: bool = True
    edge_channel: str = "msedge"
    user_data_dir: Path = Path(".browser_profiles")
    action_timeout: float = 10.0
    navigation_timeout: float = 30.0
    viewport: Dict[str, int] = field(
        default_factory=lambda: {"width": 1920, "height": 1080}
    )

    @classmethod
    def from_config(
        cls,
        engine: Engine,
        headless: Optional[bool] = None,
        ephemeral_profile: Optional[bool] = None,
        config: Optional[ConfigLoader] = None,
    ) -> "SessionOptions":
        config = config or ConfigLoader()
        return cls(
            engine=engine,
            headless=(
                config.get("browser.headless", True) if headless is None else headless
            ),
            ephemeral_profile=(
                config.get("browser.ephemeral_profile", True)
                if ephemeral_profile is None
                else ephemeral_profile
            ),
            edge_channel=config.get("browser.edge_channel", "msedge") or "",
            user_data_dir=Path(config.get("browser.user_data_dir", ".browser_profiles")),
            action_timeout=float(config.get("browser.action_timeout", 10.0)),
            navigation_timeout=float(config.get("browser.navigation_timeout", 30.0)),
            viewport={
                "width": int(config.get("browser.viewport_width", 1920)),
                "height": int(config.get("browser.viewport_height", 1080)),
            },
        )


@dataclass(frozen=True)
class OptionalCapability:
    """A configuration step a browser engine may or may not support."""

    name: str
    apply: Callable[[BrowserContext], None]


OPTIONAL_CAPABILITIES: List[OptionalCapability] = [
    OptionalCapability(
        "hide-webdriver-flag",
        lambda context: context.add_init_script(script=HIDE_WEBDRIVER_SCRIPT),
    ),
    OptionalCapability(
        "clipboard-read",
        lambda context: context.grant_permissions(["clipboard-read"]),
    ),
]


class BrowserSession:
    """
    A running browser bound to one engine, owned by a single test case.

    Usage:
        session = create_session(Engine.EDGE)
        try:
            session.page.goto(url)
        finally:
            session.close()
    """

    def __init__(
        self,
        engine: Engine,
        playwright: Playwright,
        context: BrowserContext,
        page: Page,
        browser: Optional[Browser] = None,
        capabilities: Optional[List[str]] = None,
    ):
        self.engine = engine
        self.context = context
        self.page = page
        self.browser = browser
        self.capabilities = capabilities or []
        self._playwright = playwright
        self._closed = False

    def __enter__(self) -> "BrowserSession":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    @property
    def is_closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Close context, browser and driver. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True

        try:
            self.context.close()
        except PlaywrightError as e:
            logger.debug(f"Context close failed ({self.engine.value}): {e}")

        if self.browser is not None:
            try:
                self.browser.close()
            except PlaywrightError as e:
                logger.warning(f"Browser close failed ({self.engine.value}): {e}")

        try:
            self._playwright.stop()
        except PlaywrightError as e:
            logger.warning(f"Playwright stop failed ({self.engine.value}): {e}")

        logger.debug(f"Browser session closed: {self.engine.value}")

    def __repr__(self) -> str:
        state = "closed" if self._closed else "open"
        return f"<BrowserSession engine={self.engine.value} {state}>"


def _launch_options(options: SessionOptions) -> Dict[str, Any]:
    if options.engine is Engine.FIREFOX:
        return {
            "headless": options.headless,
            "firefox_user_prefs": dict(FIREFOX_USER_PREFS),
        }
    launch: Dict[str, Any] = {
        "headless": options.headless,
        "args": list(EDGE_ARGS),
        "ignore_default_args": list(EDGE_IGNORED_DEFAULT_ARGS),
    }
    if options.edge_channel:
        launch["channel"] = options.edge_channel
    return launch


def _context_options(options: SessionOptions) -> Dict[str, Any]:
    return {
        "viewport": dict(options.viewport),
        "ignore_https_errors": True,
    }


def _negotiate_capabilities(context: BrowserContext, engine: Engine) -> List[str]:
    enabled = []
    for capability in OPTIONAL_CAPABILITIES:
        try:
            capability.apply(context)
            enabled.append(capability.name)
        except PlaywrightError as e:
            logger.debug(
                f"Capability '{capability.name}' unsupported on {engine.value}: {e}"
            )
    return enabled


def create_session(
    engine: Engine,
    headless: Optional[bool] = None,
    ephemeral_profile: Optional[bool] = None,
    config: Optional[ConfigLoader] = None,
) -> BrowserSession:
    """
    Start a browser for ``engine`` and return the owning session.

    Args:
        engine: Browser engine to start
        headless: Run without a visible window (defaults to config)
        ephemeral_profile: Throw-away profile instead of a persistent one
            (defaults to config)
        config: Configuration source (defaults to the ConfigLoader singleton)

    Returns:
        A ready BrowserSession with one open page

    Raises:
        ProvisioningError: If the driver or browser cannot be started
    """
    options = SessionOptions.from_config(
        Engine.from_name(engine), headless, ephemeral_profile, config
    )
    launch_options = _launch_options(options)

    try:
        playwright = sync_playwright().start()
    except PlaywrightError as e:
        raise ProvisioningError(
            f"Could not start Playwright driver: {e}", engine=options.engine
        ) from e

    browser: Optional[Browser] = None
    try:
        launcher = (
            playwright.firefox if options.engine is Engine.FIREFOX else playwright.chromium
        )
        if options.ephemeral_profile:
            browser = launcher.launch(**launch_options)
            context = browser.new_context(**_context_options(options))
        else:
            profile_dir = options.user_data_dir / options.engine.value
            profile_dir.mkdir(parents=True, exist_ok=True)
            context = launcher.launch_persistent_context(
                str(profile_dir), **launch_options, **_context_options(options)
            )

        context.set_default_timeout(options.action_timeout * 1000)
        context.set_default_navigation_timeout(options.navigation_timeout * 1000)
        capabilities = _negotiate_capabilities(context, options.engine)
        page = context.pages[0] if context.pages else context.new_page()
    except (PlaywrightError, OSError) as e:
        if browser is not None:
            try:
                browser.close()
            except PlaywrightError:
                logger.debug("Browser close after failed provisioning also failed")
        try:
            playwright.stop()
        except PlaywrightError:
            logger.debug("Playwright stop after failed provisioning also failed")
        raise ProvisioningError(
            f"Failed to start {options.engine.value} browser: {e}. "
            f"Is the browser installed (`playwright install`)?",
            engine=options.engine,
        ) from e

    logger.info(
        f"Browser started: {options.engine.value} "
        f"(headless={options.headless}, ephemeral={options.ephemeral_profile}, "
        f"capabilities={capabilities})"
    )
    return BrowserSession(
        engine=options.engine,
        playwright=playwright,
        context=context,
        page=page,
        browser=browser,
        capabilities=capabilities,
    )


__all__ = [
    "Engine",
    "BrowserSession",
    "SessionOptions",
    "OptionalCapability",
    "OPTIONAL_CAPABILITIES",
    "create_session",
]
