"""
================================================================================
UI Testing Pytest Configuration
================================================================================

Fixtures for browser sessions and page objects.

Key Features:
- Every UI test is parametrized over the selected engines (`engine`)
- One exclusive browser session per test, always closed in teardown
- Engines that cannot be provisioned are skipped when
  `browser.skip_unavailable` is set
- Screenshot, URL and title attached to Allure on failure

================================================================================
"""

from typing import Callable, Generator, List

import pytest
from loguru import logger
from playwright.sync_api import Error as PlaywrightError, Page

from saucedemo_suites.ui_testing.framework.browser_manager import (
    BrowserSession,
    Engine,
    create_session,
)
from saucedemo_suites.ui_testing.framework.config_loader import ConfigLoader
from saucedemo_suites.ui_testing.framework.data_provider import get_browsers
from saucedemo_suites.ui_testing.framework.errors import ProvisioningError
from saucedemo_suites.ui_testing.framework.page_base import BasePage
from saucedemo_suites.ui_testing.pages.inventory_page import InventoryPage
from saucedemo_suites.ui_testing.pages.login_page import LoginPage
from saucedemo_tools.report_tools.allure_utils import attach_json


# ================================================================================
# Engine Parametrization
# ================================================================================

def selected_engines(config) -> List[Engine]:
    """Engines from `--engine`, falling back to `browser.engines`."""
    names = config.getoption("engine")
    if names:
        return [Engine.from_name(name) for name in dict.fromkeys(names)]
    return get_browsers()


def pytest_generate_tests(metafunc):
    if "engine" in metafunc.fixturenames:
        engines = selected_engines(metafunc.config)
        metafunc.parametrize("engine", engines, ids=[e.value for e in engines])


# ================================================================================
# Browser Fixtures
# ================================================================================

@pytest.fixture
def session_factory(request, ui_config: ConfigLoader) -> Callable[[Engine], BrowserSession]:
    """
    Returns a callable that provisions a session for an engine.

    The caller owns the returned session. Unavailable engines skip the test
    when `browser.skip_unavailable` is true.
    """
    headed = request.config.getoption("headed")

    def factory(engine: Engine) -> BrowserSession:
        try:
            return create_session(
                engine,
                headless=False if headed else None,
                config=ui_config,
            )
        except ProvisioningError as e:
            if ui_config.get("browser.skip_unavailable", True):
                pytest.skip(f"{Engine.from_name(engine).value} unavailable: {e}")
            raise

    return factory


@pytest.fixture
def browser_session(
    engine: Engine,
    session_factory: Callable[[Engine], BrowserSession],
) -> Generator[BrowserSession, None, None]:
    """
    Function-scoped browser session.

    Sessions are never shared between tests; teardown closes the browser
    whatever the test outcome.
    """
    session = session_factory(engine)
    logger.info(f"Initialized {engine.value} browser")
    try:
        yield session
    finally:
        session.close()
        logger.info(f"Test cleaned up ({engine.value})")


@pytest.fixture
def page(browser_session: BrowserSession) -> Page:
    return browser_session.page


# ================================================================================
# Page Object Fixtures
# ================================================================================

@pytest.fixture
def login_page(page: Page, ui_config: ConfigLoader) -> LoginPage:
    return LoginPage(page, error_timeout=float(ui_config.get("ui.error_timeout", 3.0)))


@pytest.fixture
def inventory_page(page: Page, ui_config: ConfigLoader) -> InventoryPage:
    return InventoryPage(page, load_timeout=float(ui_config.get("ui.inventory_timeout", 5.0)))


# ================================================================================
# Test Lifecycle Hooks
# ================================================================================

@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """
    Capture diagnostics when a UI test fails.

    Runs before fixture teardown, so the session is still open.
    """
    outcome = yield
    report = outcome.get_result()

    if report.when != "call" or not report.failed:
        return

    session = getattr(item, "funcargs", {}).get("browser_session")
    if session is None or session.is_closed:
        return

    try:
        BasePage(session.page).capture_failure(item.name)
        attach_json(
            {"engine": session.engine.value, "capabilities": session.capabilities},
            name="Browser session",
        )
    except PlaywrightError as e:
        logger.warning(f"Failed to capture diagnostics on failure: {e}")
