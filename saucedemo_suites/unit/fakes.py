"""
Browser-free stand-ins for the Playwright objects the framework touches.

Every fake appends to a shared ``calls`` list so tests can assert the
order of operations across page, handle and keyboard.
"""

from typing import Any, Callable, Dict, List, Optional

from playwright.sync_api import Error as PlaywrightError


def driver_error(message: str) -> PlaywrightError:
    return PlaywrightError(message)


STALE = "Element is not attached to the DOM"


class FakeHandle:
    def __init__(
        self,
        value: str = "",
        visible: bool = True,
        enabled: bool = True,
        calls: Optional[List[str]] = None,
        errors: Optional[Dict[str, Exception]] = None,
        attributes: Optional[Dict[str, str]] = None,
    ):
        self.value = value
        self.attributes = attributes or {}
        self.visible = visible
        self.enabled = enabled
        self.calls = calls if calls is not None else []
        self.errors = errors or {}
        self.disposed = False

    def _record(self, name: str) -> None:
        self.calls.append(name)
        if name in self.errors:
            raise self.errors[name]

    def is_visible(self) -> bool:
        self._record("is_visible")
        return self.visible

    def is_enabled(self) -> bool:
        self._record("is_enabled")
        return self.enabled

    def input_value(self) -> str:
        self._record("input_value")
        return self.value

    def fill(self, text: str) -> None:
        self._record("fill")
        self.value = text

    def click(self) -> None:
        self._record("click")

    def press(self, key: str) -> None:
        self._record(f"press:{key}")

    def get_attribute(self, name: str) -> Optional[str]:
        self._record("get_attribute")
        return self.attributes.get(name)

    def text_content(self) -> str:
        self._record("text_content")
        return self.value

    def dispose(self) -> None:
        self.disposed = True


class FakeKeyboard:
    def __init__(self, calls: List[str], on_press: Optional[Callable[[str], None]] = None):
        self.calls = calls
        self.pressed: List[str] = []
        self.on_press = on_press

    def press(self, key: str) -> None:
        self.calls.append(f"press:{key}")
        self.pressed.append(key)
        if self.on_press:
            self.on_press(key)


class FakePage:
    """
    ``resolve`` decides what ``query_selector`` returns: a handle, None,
    or an exception to raise. Defaults to always returning ``handle``.
    """

    def __init__(
        self,
        handle: Optional[FakeHandle] = None,
        resolve: Optional[Callable[[str], Any]] = None,
        evaluate: Optional[Callable[[str, Any], Any]] = None,
    ):
        self.calls: List[str] = handle.calls if handle is not None else []
        self.handle = handle
        self._resolve = resolve or (lambda selector: self.handle)
        self._evaluate = evaluate
        self.keyboard = FakeKeyboard(self.calls)
        self.selectors: List[str] = []
        self.scripts: List[str] = []
        self.url = "about:blank"

    def query_selector(self, selector: str):
        self.selectors.append(selector)
        result = self._resolve(selector)
        if isinstance(result, Exception):
            raise result
        return result

    def evaluate(self, script: str, arg: Any = None) -> Any:
        self.calls.append("evaluate")
        self.scripts.append(script)
        if self._evaluate is None:
            return True
        return self._evaluate(script, arg)

    def title(self) -> str:
        return "Fake"


class DummyConfig:
    def __init__(self, data):
        self.data = data

    def get(self, key, default=None):
        return self.data.get(key, default)
