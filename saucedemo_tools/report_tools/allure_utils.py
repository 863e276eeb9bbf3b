"""
================================================================================
Allure Report Utilities
================================================================================

Attachment helpers used by page objects and pytest hooks. Each helper maps
one payload kind onto the matching Allure attachment type.

================================================================================
"""

import json
from typing import Any

import allure


def attach_json(data: Any, name: str = "Data"):
    """Serialize ``data`` (non-JSON values via ``str``) and attach it."""
    allure.attach(
        json.dumps(data, indent=2, default=str, ensure_ascii=False),
        name=name,
        attachment_type=allure.attachment_type.JSON,
    )


def attach_text(text: str, name: str = "Text"):
    allure.attach(text or "", name=name, attachment_type=allure.attachment_type.TEXT)


def attach_screenshot(png: bytes, name: str = "Screenshot"):
    """Attach PNG bytes as returned by ``page.screenshot()``."""
    allure.attach(png, name=name, attachment_type=allure.attachment_type.PNG)


__all__ = [
    "attach_json",
    "attach_text",
    "attach_screenshot",
]
