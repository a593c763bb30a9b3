"""Client-side realtime wiring: transport, router and board subscription."""

from __future__ import annotations

import logging
from typing import Any

from boardsync.constants import (
    EVENT_NAME_MARKER,
    NOTIFICATION_CHANNEL_PREFIX,
    RESERVED_EVENT_PREFIXES,
)
from boardsync.lib.state_machine import StateMachine
from boardsync.lib.subscribe_board import BoardSubscription


class RealtimeClient:
    """Owns everything one UI session needs to receive board events.

    The router and the board subscription live on this object rather than at
    module level, so independent sessions (or tests) never share handlers.

    Args:
        router: Router to dispatch into. A new one is created if omitted.
        transport: Echo-style transport. May be attached later with
            ``attach_transport``; board subscriptions requested before that
            are deferred until it arrives.
        debug: Log dispatches nobody handles (development builds).
    """

    def __init__(
        self,
        router: StateMachine | None = None,
        transport: Any = None,
        debug: bool = False,
    ) -> None:
        self.router = router if router is not None else StateMachine(debug=debug)
        self.transport = transport
        self.board = BoardSubscription(self.router, lambda: self.transport)
        self.user_id: str | None = None
        self._notification_channel: Any = None

    def attach_transport(self, transport: Any) -> None:
        """Use ``transport`` and complete any subscriptions requested before it existed."""
        self.transport = transport
        if self.user_id is not None and self._notification_channel is None:
            self._bind_notification_channel()
        self.board.on_transport_ready()

    def start(self, user_id: str | int | None = None, board_id: str | int | None = None) -> None:
        """Wire the private notification channel and the initial board."""
        if user_id not in (None, ""):
            self.listen_for_notifications(user_id)
        self.board.subscribe_to_board(board_id)

    def listen_for_notifications(self, user_id: str | int) -> None:
        self.user_id = str(user_id)
        if self.transport is None:
            logging.debug(f"Transport not ready, deferring notifications of user {self.user_id}")
            return
        self._bind_notification_channel()

    def _bind_notification_channel(self) -> None:
        channel = self.transport.private(f"{NOTIFICATION_CHANNEL_PREFIX}{self.user_id}")
        channel.bind_global(self.handle_global_event)
        self._notification_channel = channel
        logging.info(f"Listening for notifications of user {self.user_id}")

    def handle_global_event(self, event_name: str, data: Any) -> None:
        """Forward a raw channel event to the router, skipping transport internals."""
        if event_name.startswith(RESERVED_EVENT_PREFIXES):
            return
        if event_name.startswith(EVENT_NAME_MARKER):
            event_name = event_name[len(EVENT_NAME_MARKER) :]
        self.router.dispatch(event_name, data)

    def switch_board(self, board_id: str | int | None) -> None:
        self.board.subscribe_to_board(board_id)

    def close(self) -> None:
        """Tear everything down, e.g. on reload or logout."""
        self.board.cleanup_board_subscription()
        channel = self._notification_channel
        if channel is not None:
            channel.unbind_global(self.handle_global_event)
            disconnect = getattr(channel, "disconnect", None)
            if callable(disconnect):
                disconnect()
            self._notification_channel = None
        self.router.reset()
        self.user_id = None
