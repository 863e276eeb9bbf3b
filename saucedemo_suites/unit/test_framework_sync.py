import pytest

from saucedemo_suites.ui_testing.framework.errors import ScriptExecutionError
from saucedemo_suites.ui_testing.framework.framework_sync import (
    REACT_NOTIFY_CHANGE_SCRIPT,
    REACT_TRACKER_RESET_SCRIPT,
    FrameworkStateSync,
    ReactStateSync,
)
from saucedemo_suites.ui_testing.framework.page_scripts import (
    CLEAR_PENDING_ATTRIBUTE,
    NO_TRACKER_RESET,
    build_clear_value_script,
    run_script,
)
from saucedemo_suites.unit.fakes import FakeHandle, FakePage, driver_error


def test_plain_sync_is_a_no_op():
    page = FakePage(FakeHandle())
    sync = FrameworkStateSync()

    assert sync.name == "none"
    assert sync.tracker_reset_script == NO_TRACKER_RESET
    assert sync.notify_change(page, page.handle) is False
    assert page.scripts == []


def test_react_sync_invokes_notify_script_with_element():
    seen = []

    def evaluate(script, arg):
        seen.append(arg)
        return True

    handle = FakeHandle()
    page = FakePage(handle, evaluate=evaluate)

    assert ReactStateSync().notify_change(page, handle) is True
    assert page.scripts == [REACT_NOTIFY_CHANGE_SCRIPT]
    assert seen == [handle]


def test_react_sync_reports_missing_handler():
    page = FakePage(FakeHandle(), evaluate=lambda script, arg: False)

    assert ReactStateSync().notify_change(page, page.handle) is False


def test_react_sync_never_raises():
    def evaluate(script, arg):
        raise driver_error("Execution context was destroyed")

    page = FakePage(FakeHandle(), evaluate=evaluate)

    assert ReactStateSync().notify_change(page, page.handle) is False


def test_react_tracker_reset_keeps_a_non_empty_value():
    script = ReactStateSync().tracker_reset_script

    assert script == REACT_TRACKER_RESET_SCRIPT
    assert "previous ? previous : '\\u200b'" in script


def test_notify_script_lookup_order():
    script = REACT_NOTIFY_CHANGE_SCRIPT
    positions = [
        script.index("__reactProps$"),
        script.index("memoizedProps"),
        script.index("setState"),
        script.index("el.onchange"),
    ]

    assert positions == sorted(positions)


def test_clear_script_embeds_tracker_reset_and_delay():
    script = build_clear_value_script(REACT_TRACKER_RESET_SCRIPT, delay_ms=120)

    assert REACT_TRACKER_RESET_SCRIPT.strip() in script
    assert "}, 120);" in script
    assert f"const PENDING = '{CLEAR_PENDING_ATTRIBUTE}'" in script
    assert "%(" not in script


def test_run_script_wraps_driver_errors():
    def evaluate(script, arg):
        raise driver_error("SyntaxError: Unexpected token")

    with pytest.raises(ScriptExecutionError, match="Unexpected token"):
        run_script(FakePage(evaluate=evaluate), "() => {")
