"""
================================================================================
Inventory Page Object
================================================================================

Product listing reached after a successful login.

================================================================================
"""

from __future__ import annotations

import allure

from saucedemo_suites.ui_testing.framework.locator import Locator
from saucedemo_suites.ui_testing.framework.page_base import BasePage


class InventoryPage(BasePage):
    """Inventory page object."""

    URL_PATH = "/inventory.html"

    PAGE_TITLE = Locator.css(".title")
    INVENTORY_CONTAINER = Locator.css("#inventory_container")
    BURGER_MENU = Locator.css("#react-burger-menu-btn")

    def __init__(self, page, load_timeout: float = 5.0, **kwargs):
        super().__init__(page, **kwargs)
        self.load_timeout = load_timeout

    @allure.step("Verify inventory page loaded")
    def verify_page_loaded(self) -> None:
        self.wait_until_element_visible(self.INVENTORY_CONTAINER, timeout=self.load_timeout)
        self.wait_until_element_visible(self.BURGER_MENU, timeout=self.load_timeout)

    def get_page_title(self) -> str:
        return self.get_text(self.PAGE_TITLE)

    @allure.step("Verify page title is '{expected_title}'")
    def verify_page_title(self, expected_title: str) -> None:
        actual_title = self.get_page_title()
        assert actual_title == expected_title, (
            f"Expected page title '{expected_title}', got '{actual_title}'"
        )

    def is_inventory_page_loaded(self) -> bool:
        return self.is_element_visible(
            self.INVENTORY_CONTAINER, timeout=self.load_timeout
        ) and self.is_element_visible(self.BURGER_MENU, timeout=self.load_timeout)
