"""
================================================================================
Login Page Object
================================================================================

SauceDemo login form: credentials entry, submit, validation error banner.

Text entry goes through BasePage.enter_text, so every field is cleared with
the robust protocol before typing. Entering an empty string clears the field
and types nothing, which is how the "required field" scenarios are driven.

================================================================================
"""

from __future__ import annotations

import allure
from loguru import logger

from saucedemo_suites.ui_testing.framework.locator import Locator
from saucedemo_suites.ui_testing.framework.page_base import BasePage


class LoginPage(BasePage):
    """Login page object."""

    URL_PATH = "/"

    USERNAME_FIELD = Locator.css("#user-name")
    PASSWORD_FIELD = Locator.css("#password")
    LOGIN_BUTTON = Locator.css("#login-button")
    ERROR_MESSAGE = Locator.css(".error-message-container")
    LOGIN_CONTAINER = Locator.css(".login_container")

    def __init__(self, page, error_timeout: float = 3.0, **kwargs):
        super().__init__(page, **kwargs)
        self.error_timeout = error_timeout

    @allure.step("Open login page")
    def navigate_to_login_page(self) -> "LoginPage":
        self.open_url()
        self.wait_until_element_visible(self.LOGIN_CONTAINER)
        return self

    @allure.step("Verify login form is displayed")
    def verify_form_displayed(self) -> bool:
        return all(
            self.is_element_visible(locator)
            for locator in (self.USERNAME_FIELD, self.PASSWORD_FIELD, self.LOGIN_BUTTON)
        )

    @allure.step("Enter username: {username}")
    def enter_username(self, username: str) -> None:
        self.enter_text(self.USERNAME_FIELD, username)

    @allure.step("Enter password")
    def enter_password(self, password: str) -> None:
        self.enter_text(self.PASSWORD_FIELD, password)

    @allure.step("Click login")
    def click_login(self) -> None:
        self.click(self.LOGIN_BUTTON)

    @allure.step("Login as {username}")
    def login(self, username: str, password: str) -> None:
        self.enter_username(username)
        self.enter_password(password)
        self.click_login()

    def get_error_message(self) -> str:
        return self.get_text(self.ERROR_MESSAGE, timeout=self.error_timeout)

    @allure.step("Verify error message contains '{expected_error}'")
    def verify_error_message(self, expected_error: str) -> None:
        actual_error = self.get_error_message()
        assert expected_error in actual_error, (
            f"Expected error containing '{expected_error}', got '{actual_error}'"
        )

    def is_error_message_displayed(self) -> bool:
        return self.is_element_visible(self.ERROR_MESSAGE, timeout=self.error_timeout)

    def send_tab_key(self) -> None:
        """Move focus out of the username field (first field on the form)."""
        self.press_key(self.USERNAME_FIELD, "Tab")

    @allure.step("Refresh login page for a clean state")
    def refresh_page_for_clean_state(self) -> None:
        self.refresh()
        self.wait_until_element_visible(self.LOGIN_CONTAINER)
        logger.info("Page refreshed for clean state")
