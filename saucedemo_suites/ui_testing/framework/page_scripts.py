"""
================================================================================
Page Scripts
================================================================================

JavaScript snippets evaluated in the page context and the single entry point
used to run them.

Scripts are arrow functions taking the element as their only argument so they
can be passed straight to ``page.evaluate(script, element_handle)``.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Any

from playwright.sync_api import Error as PlaywrightError, Page

from .errors import ScriptExecutionError


READY_STATE_SCRIPT = "() => document.readyState"

CLEAR_PENDING_ATTRIBUTE = "data-clear-pending"

# Placeholders: %(tracker_reset)s is a JS function (el, previous) => bool
# supplied by the framework sync strategy, %(delay_ms)d the re-run delay.
# The element carries CLEAR_PENDING_ATTRIBUTE until the delayed pass has run;
# removing the attribute earlier cancels that pass.
CLEAR_VALUE_SCRIPT_TEMPLATE = r"""
(el) => {
  const PENDING = '%(pending_attr)s';
  const resetTracker = %(tracker_reset)s;
  const fire = (event) => { try { el.dispatchEvent(event); } catch (e) {} };

  const clearOnce = () => {
    const previous = el.value;
    try {
      const proto = (el instanceof HTMLTextAreaElement)
        ? HTMLTextAreaElement.prototype
        : HTMLInputElement.prototype;
      const descriptor = Object.getOwnPropertyDescriptor(proto, 'value');
      if (descriptor && descriptor.set) {
        descriptor.set.call(el, '');
      } else {
        el.value = '';
      }
    } catch (e) {
      el.value = '';
    }
    try { el.defaultValue = ''; } catch (e) {}
    try { el.removeAttribute('value'); } catch (e) {}
    try { el.setAttribute('autocomplete', 'off'); } catch (e) {}
    try { resetTracker(el, previous); } catch (e) {}

    if (typeof InputEvent === 'function') {
      fire(new InputEvent('input', {bubbles: true, cancelable: true, inputType: 'deleteContentBackward', data: null}));
    } else {
      fire(new Event('input', {bubbles: true, cancelable: true}));
    }
    fire(new Event('change', {bubbles: true, cancelable: true}));
    fire(new Event('compositionend', {bubbles: true, cancelable: true}));
    try { el.blur(); } catch (e) {}
    try { el.focus(); } catch (e) {}
  };

  clearOnce();
  el.setAttribute(PENDING, '1');
  setTimeout(() => {
    if (!el.hasAttribute(PENDING)) { return; }
    clearOnce();
    el.removeAttribute(PENDING);
  }, %(delay_ms)d);
  return el.value === '';
}
"""

NO_TRACKER_RESET = "(el, previous) => false"

CANCEL_DELAYED_CLEAR_SCRIPT = "(el) => el.removeAttribute('%s')" % CLEAR_PENDING_ATTRIBUTE


def build_clear_value_script(tracker_reset: str = NO_TRACKER_RESET, delay_ms: int = 120) -> str:
    """
    Render the programmatic clear script.

    Args:
        tracker_reset: JS function ``(el, previous) => bool`` resetting a
            framework value tracker
        delay_ms: Delay of the second in-page pass, in milliseconds
    """
    return CLEAR_VALUE_SCRIPT_TEMPLATE % {
        "tracker_reset": tracker_reset.strip(),
        "delay_ms": int(delay_ms),
        "pending_attr": CLEAR_PENDING_ATTRIBUTE,
    }


def run_script(page: Page, script: str, arg: Any = None) -> Any:
    """
    Evaluate ``script`` in the page context.

    Raises:
        ScriptExecutionError: When the script or the evaluation channel fails
    """
    try:
        return page.evaluate(script, arg)
    except PlaywrightError as e:
        raise ScriptExecutionError(f"In-page script failed: {e}") from e


__all__ = [
    "READY_STATE_SCRIPT",
    "NO_TRACKER_RESET",
    "CLEAR_PENDING_ATTRIBUTE",
    "CANCEL_DELAYED_CLEAR_SCRIPT",
    "build_clear_value_script",
    "run_script",
]
