"""
================================================================================
SauceDemo Tools
================================================================================

Support utilities for the SauceDemo UI suite.

Modules:
    - common: Logging setup
    - report_tools: Allure attachment helpers

================================================================================
"""

__version__ = "1.0.0"

__all__ = [
    "common",
    "report_tools",
]
