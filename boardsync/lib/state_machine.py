"""Dispatch table routing realtime events to the UI handler registered for them."""

from __future__ import annotations

import logging
from typing import Any, Callable

from boardsync.lib.events import EventHandler, EventName


class StateMachine:
    """One handler per event name, invoked synchronously on dispatch.

    Later registrations replace earlier ones. Dispatching an event nobody
    handles is a no-op; in debug mode it logs a warning with the payload so
    missing wiring is visible during development.
    """

    def __init__(self, debug: bool = False):
        self.debug = debug
        self._handlers: dict[EventName, EventHandler] = {}

    def define(self, event: EventName | str, handler: EventHandler) -> Callable[[], None]:
        """Register the handler for an event.

        Args:
            event: One of the known event names.
            handler: Called with the event payload.

        Returns:
            A callable that removes this registration again.

        Raises:
            ValueError: If ``event`` is not a known event name.
        """
        name = EventName(event)
        if name in self._handlers and self.debug:
            logging.warning(f'[StateMachine] Handler for "{name.value}" already defined.')
        self._handlers[name] = handler

        def remove() -> None:
            if self._handlers.get(name) is handler:
                del self._handlers[name]

        return remove

    def dispatch(self, event: str, payload: Any = None) -> None:
        """Invoke the handler registered for ``event`` with ``payload`` as-is."""
        name = EventName.parse(event)
        handler = self._handlers.get(name) if name is not None else None
        if handler is not None:
            handler(payload)
        elif self.debug:
            logging.warning(f"[StateMachine] No handler defined for: {event} {payload!r}")

    def has_handler(self, event: str) -> bool:
        name = EventName.parse(event)
        return name is not None and name in self._handlers

    def reset(self) -> None:
        """Drop every registered handler."""
        self._handlers.clear()
