"""Server-side broadcasting of board events onto Echo channels."""

from __future__ import annotations

import logging
import time
from typing import Any, Iterable

from boardsync.constants import (
    BOARD_CHANNEL_PREFIX,
    NOTIFICATION_CHANNEL_PREFIX,
    PRIVATE_CHANNEL_PREFIX,
)
from boardsync.lib.events import (
    NOTIFICATION_EVENTS,
    EventName,
    NotificationType,
    build_card_moved_payload,
)
from boardsync.lib.utils import parse_id


def notification_channel(user_id: int | str) -> str:
    return f"{PRIVATE_CHANNEL_PREFIX}{NOTIFICATION_CHANNEL_PREFIX}{user_id}"


class Broadcaster:
    """Emits board events to the socket.io rooms named after their channels.

    Every emit carries ``(channel, data)`` so Echo clients can route it to the
    channel handle that subscribed.
    """

    def __init__(self, socketio) -> None:
        self.socketio = socketio

    def broadcast(
        self, event: EventName, channel: str, data: dict, skip_sid: str | None = None
    ) -> None:
        logging.debug(f"Broadcasting {event.value} on {channel}")
        self.socketio.emit(
            event.value, (channel, data), to=channel, namespace="/", skip_sid=skip_sid
        )

    def card_moved(
        self, post: dict[str, Any], new_column_id: Any, skip_sid: str | None = None
    ) -> dict:
        """Tell everyone watching the post's board that the card moved.

        Args:
            post: Post record; ``fid_board`` selects the board channel.
            new_column_id: Column the card now sits in.
            skip_sid: Socket id of the mover, who already has the change.

        Returns:
            The payload that was broadcast.
        """
        payload = build_card_moved_payload(post, new_column_id)
        channel = f"{BOARD_CHANNEL_PREFIX}{post['fid_board']}"
        logging.info(
            f"CardMoved post {payload['post_id']} to column {payload['new_column_id']} on {channel}"
        )
        self.broadcast(EventName.CARD_MOVED, channel, dict(payload), skip_sid=skip_sid)
        return dict(payload)

    def notify(self, notifications: Iterable[dict[str, Any]]) -> int:
        """Push notification records to their owners' private channels.

        Each record goes out as UserNotificationReceived, plus the event for its
        type when it is a comment, linked issue or branch notification. Records
        without an integer ``fid_user`` and ``fid_post`` are skipped.

        Returns:
            Number of notifications delivered.
        """
        delivered = 0
        for notification in notifications:
            user_id = parse_id(notification.get("fid_user"))
            post_id = parse_id(notification.get("fid_post"))
            if user_id is None or post_id is None:
                logging.debug(f"Skipping notification without integer user/post: {notification}")
                continue

            channel = notification_channel(user_id)
            data = {"notification": notification}
            self.broadcast(EventName.USER_NOTIFICATION_RECEIVED, channel, data)

            try:
                notification_type = NotificationType(notification.get("type"))
            except ValueError:
                notification_type = None
            typed_event = NOTIFICATION_EVENTS.get(notification_type)
            if typed_event is not None:
                self.broadcast(typed_event, channel, data)
            delivered += 1
        return delivered

    def test_broadcast(self, user_id: int | str, message: str = "Default test message") -> dict:
        payload = {"message": message, "serverTimestamp": time.time()}
        logging.info(f"TestBroadcast to user {user_id}: {message}")
        self.broadcast(EventName.TEST_BROADCAST, notification_channel(user_id), payload)
        return payload
