"""
================================================================================
Page Objects
================================================================================

Page Object Model implementations for SauceDemo pages.

Each page class encapsulates:
    - Element locators
    - Page-specific actions
    - Verification methods

Author: Automation Team
License: MIT
================================================================================
"""

from .login_page import LoginPage
from .inventory_page import InventoryPage

__all__ = [
    "LoginPage",
    "InventoryPage",
]
