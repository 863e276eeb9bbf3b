"""
================================================================================
Framework State Synchronization
================================================================================

Best-effort strategies that keep a client-side framework's view-model in step
with DOM values changed behind its back by automation.

Reactive frameworks cache input values outside the DOM node (React keeps a
``_valueTracker`` on the element and the component's ``onChange`` in fiber
props). A programmatic clear that bypasses them can leave the component
believing the field still holds its old value.

Strategies are swappable and never raise: an unknown or absent framework is
a no-op.

    FrameworkStateSync   - no-op base, for plain DOM pages
    ReactStateSync       - React value tracker reset + onChange invocation

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from playwright.sync_api import ElementHandle, Page
from loguru import logger

from .errors import ScriptExecutionError
from .page_scripts import NO_TRACKER_RESET, run_script


REACT_TRACKER_RESET_SCRIPT = r"""
(el, previous) => {
  const tracker = el._valueTracker;
  if (!tracker || typeof tracker.setValue !== 'function') {
    return false;
  }
  // The tracker must differ from the new (empty) value or React drops the input event
  tracker.setValue(previous ? previous : '\u200b');
  return true;
}
"""

REACT_NOTIFY_CHANGE_SCRIPT = r"""
(el) => {
  if (!el) {
    return false;
  }
  const event = {
    target: el,
    currentTarget: el,
    type: 'change',
    nativeEvent: {},
    isTrusted: true,
    preventDefault() {},
    stopPropagation() {},
    persist() {},
  };
  const keys = Object.keys(el);

  const propsKey = keys.find((k) => k.startsWith('__reactProps$') || k.startsWith('__reactEventHandlers$'));
  if (propsKey && el[propsKey] && typeof el[propsKey].onChange === 'function') {
    el[propsKey].onChange(event);
    return true;
  }

  const fiberKey = keys.find((k) => k.startsWith('__reactFiber$') || k.startsWith('__reactInternalInstance$'));
  const fiber = fiberKey ? el[fiberKey] : null;
  if (!fiber) {
    return false;
  }
  for (const node of [fiber, fiber.return]) {
    const props = node && node.memoizedProps;
    if (props && typeof props.onChange === 'function') {
      props.onChange(event);
      return true;
    }
  }

  let owner = fiber;
  while (owner && !(owner.stateNode && typeof owner.stateNode.setState === 'function')) {
    owner = owner.return;
  }
  if (owner) {
    owner.stateNode.setState((state) => state);
    return true;
  }

  if (typeof el.onchange === 'function') {
    el.onchange({target: el});
    return true;
  }
  return false;
}
"""


class FrameworkStateSync:
    """No-op strategy used for pages without a reactive framework."""

    name = "none"

    @property
    def tracker_reset_script(self) -> str:
        """JS function ``(el, previous) => bool`` embedded in the clear script."""
        return NO_TRACKER_RESET

    def notify_change(self, page: Page, element: ElementHandle) -> bool:
        """Invoke the framework change handler bound to ``element``."""
        return False


class ReactStateSync(FrameworkStateSync):
    """Synchronizes React controlled inputs."""

    name = "react"

    @property
    def tracker_reset_script(self) -> str:
        return REACT_TRACKER_RESET_SCRIPT

    def notify_change(self, page: Page, element: ElementHandle) -> bool:
        try:
            invoked = bool(run_script(page, REACT_NOTIFY_CHANGE_SCRIPT, element))
        except ScriptExecutionError as e:
            logger.debug(f"React change notification failed: {e}")
            return False
        logger.debug(f"React change notification invoked={invoked}")
        return invoked


__all__ = [
    "FrameworkStateSync",
    "ReactStateSync",
]
