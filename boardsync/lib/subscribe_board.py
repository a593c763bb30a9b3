"""Keeps the client subscribed to exactly one board channel at a time."""

from __future__ import annotations

import logging
from typing import Any, Callable

from boardsync.constants import BOARD_CHANNEL_PREFIX, CARD_MOVED_LISTEN_LABEL
from boardsync.lib.events import EventName
from boardsync.lib.state_machine import StateMachine


def board_channel_name(board_id: str) -> str:
    return f"{BOARD_CHANNEL_PREFIX}{board_id}"


class BoardSubscription:
    """Subscription manager for the public ``board.{id}`` channel.

    Switching boards leaves the previous channel before the next one is opened,
    so card events from a board the user navigated away from are never
    dispatched.

    The transport may not exist yet when the first board is requested (the
    connection is still being set up). In that case the board id is held as
    pending and subscribed by ``on_transport_ready()``.
    """

    def __init__(self, router: StateMachine, get_transport: Callable[[], Any | None]) -> None:
        self._router = router
        self._get_transport = get_transport
        self._current_board_id: str | None = None
        self._current_channel: Any = None
        self._pending_board_id: str | None = None

    @property
    def current_board_id(self) -> str | None:
        return self._current_board_id

    @property
    def pending_board_id(self) -> str | None:
        return self._pending_board_id

    @property
    def is_subscribed(self) -> bool:
        return self._current_board_id is not None

    def subscribe_to_board(self, board_id: str | int | None) -> None:
        """Move the board subscription to ``board_id``.

        Empty ids and the board already subscribed are ignored.
        """
        if board_id is None or board_id == "":
            return
        board_id = str(board_id)
        if board_id == self._current_board_id:
            return

        transport = self._get_transport()
        if transport is None:
            logging.debug(f"Transport not ready, deferring subscription to board {board_id}")
            self._pending_board_id = board_id
            return

        self._pending_board_id = None
        self._connect(transport, board_id)

    def on_transport_ready(self) -> None:
        """Complete a subscription requested before the transport existed."""
        board_id = self._pending_board_id
        if board_id is None:
            return
        self._pending_board_id = None
        self.subscribe_to_board(board_id)

    def cleanup_board_subscription(self) -> None:
        """Leave the current board channel and tear the connection down.

        The transport is shared with the private notification channel, so its
        ``disconnect`` also ends notification delivery. Meant for teardown
        (reload, logout); to move to another board call ``subscribe_to_board``.
        """
        self._pending_board_id = None
        if self._current_board_id is None:
            return

        transport = self._get_transport()
        if transport is not None:
            transport.leave(board_channel_name(self._current_board_id))
            disconnect = getattr(transport, "disconnect", None)
            if callable(disconnect):
                disconnect()
        logging.info(f"Board subscription cleaned up: {self._current_board_id}")
        self._current_board_id = None
        self._current_channel = None

    def _connect(self, transport: Any, board_id: str) -> None:
        if self._current_channel is not None and self._current_board_id is not None:
            transport.leave(board_channel_name(self._current_board_id))
            logging.debug(f"Left board channel: {board_channel_name(self._current_board_id)}")
        self._current_channel = None
        self._current_board_id = board_id

        channel = transport.channel(board_channel_name(board_id))
        self._current_channel = channel

        def on_card_moved(data: Any) -> None:
            # a late message on a channel already left must not leak into the new board
            if self._current_channel is not channel:
                return
            self._router.dispatch(EventName.CARD_MOVED.value, data)

        channel.listen(CARD_MOVED_LISTEN_LABEL, on_card_moved)
        logging.info(f"Subscribed to board channel: {board_channel_name(board_id)}")
