"""
================================================================================
Sequential Login Run
================================================================================

Runs UC-1..UC-3 back to back on one engine, each in its own freshly
provisioned session scoped by a `with` block.

================================================================================
"""

import allure
import pytest
from loguru import logger

from saucedemo_suites.ui_testing.framework.data_provider import (
    DOCUMENT_TITLE,
    INVENTORY_TITLE,
    PASSWORD_REQUIRED,
    USERNAME_REQUIRED,
    get_password,
)
from saucedemo_suites.ui_testing.pages.inventory_page import InventoryPage
from saucedemo_suites.ui_testing.pages.login_page import LoginPage


pytestmark = [pytest.mark.e2e, pytest.mark.auth, pytest.mark.regression]


@allure.epic("UI Testing")
@allure.feature("Authentication")
@allure.story("Sequential run")
@allure.title("UC-1..UC-3 in sequence, fresh browser per scenario")
@pytest.mark.P1
def test_all_login_scenarios_in_sequence(engine, session_factory):
    logger.info(f"Starting all login scenarios for {engine.value}")

    with allure.step("UC-1: empty credentials"):
        with session_factory(engine) as session:
            login_page = LoginPage(session.page)
            login_page.navigate_to_login_page()
            login_page.enter_username("test_user")
            login_page.enter_password("test_password")
            login_page.enter_username("")
            login_page.enter_password("")
            login_page.click_login()

            assert login_page.is_error_message_displayed(), "Error message should be displayed"
            login_page.verify_error_message(USERNAME_REQUIRED)

    with allure.step("UC-2: empty password"):
        with session_factory(engine) as session:
            login_page = LoginPage(session.page)
            login_page.navigate_to_login_page()
            login_page.enter_username("test_user")
            login_page.enter_password("test_password")
            login_page.enter_password("")
            login_page.click_login()

            assert login_page.is_error_message_displayed(), "Error message should be displayed"
            login_page.verify_error_message(PASSWORD_REQUIRED)

    with allure.step("UC-3: valid credentials"):
        with session_factory(engine) as session:
            login_page = LoginPage(session.page)
            inventory_page = InventoryPage(session.page)
            login_page.navigate_to_login_page()
            login_page.login("standard_user", get_password())

            assert inventory_page.is_inventory_page_loaded(), "Inventory page should be loaded"
            inventory_page.verify_page_title(INVENTORY_TITLE)
            assert inventory_page.get_document_title() == DOCUMENT_TITLE

    logger.info(f"All login scenarios completed for {engine.value}")
