"""
Hook Registry - Actions and Filters for the Admin Request Lifecycle
====================================================================

Components register callbacks against named lifecycle events; the admin
panel fires them while building a page.

- Actions:  do_action(name, *args) calls every callback, collecting results
- Filters:  apply_filters(name, value, *args) threads `value` through callbacks

Callbacks run by ascending priority, then in registration order.

USAGE:
    hooks = HookRegistry()
    hooks.add_action("admin_init", prompter.evaluate_review_eligibility)
    hooks.add_filter("admin_footer_text", prompter.decorate_footer_text, priority=1)
    hooks.do_action("admin_init", context)
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List

logger = logging.getLogger(__name__)

DEFAULT_PRIORITY = 10


@dataclass
class _Hook:
    callback: Callable[..., Any]
    priority: int
    order: int


class HookRegistry:

    def __init__(self):
        self._hooks: Dict[str, List[_Hook]] = {}
        self._counter = 0

    def _add(self, name: str, callback: Callable[..., Any], priority: int) -> None:
        self._counter += 1
        self._hooks.setdefault(name, []).append(_Hook(callback, priority, self._counter))

    def _sorted(self, name: str) -> List[_Hook]:
        return sorted(self._hooks.get(name, []), key=lambda h: (h.priority, h.order))

    def add_action(self, name: str, callback: Callable[..., Any], priority: int = DEFAULT_PRIORITY) -> None:
        self._add(name, callback, priority)

    def add_filter(self, name: str, callback: Callable[..., Any], priority: int = DEFAULT_PRIORITY) -> None:
        self._add(name, callback, priority)

    def do_action(self, name: str, *args: Any) -> List[Any]:
        """Run all callbacks for `name`; return their non-None results in order."""
        results = []
        for hook in self._sorted(name):
            result = hook.callback(*args)
            if result is not None:
                results.append(result)
        logger.debug(f"Action '{name}' ran {len(self._hooks.get(name, []))} callbacks")
        return results

    def apply_filters(self, name: str, value: Any, *args: Any) -> Any:
        for hook in self._sorted(name):
            value = hook.callback(value, *args)
        return value
