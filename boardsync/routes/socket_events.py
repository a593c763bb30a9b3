"""Socket.IO event handlers implementing the Echo channel protocol."""

import logging

from flask import request, session
from flask_socketio import join_room, leave_room

from boardsync.lib.channel_auth import authorize_channel, verify_channel_token
from boardsync.lib.current_app import get_secret_key, get_token_max_age


def _channel_from(data) -> str | None:
    if isinstance(data, dict) and isinstance(data.get("channel"), str):
        return data["channel"]
    return None


def setup_socket_events(socketio):
    """Register Socket.IO event handlers.

    Args:
        socketio: The SocketIO instance.
    """

    @socketio.on("connect")
    def handle_connect(auth=None) -> None:
        """Identify the connecting user from the signed token in ``auth``, if any."""
        token = auth.get("token") if isinstance(auth, dict) else None
        user_id = verify_channel_token(get_secret_key(), token, get_token_max_age())
        session["user_id"] = user_id
        if user_id is None:
            logging.info(f"Anonymous realtime client connected: {request.sid}")
        else:
            logging.info(f"Realtime client connected: {request.sid} (user {user_id})")

    @socketio.on("subscribe")
    def handle_subscribe(data) -> bool:
        """Join the room for a channel the user is allowed to see.

        Args:
            data: ``{"channel": name}`` as sent by Echo clients.

        Returns:
            Acknowledgement; False when the subscription was refused.
        """
        channel = _channel_from(data)
        if channel is None:
            logging.warning(f"Malformed subscribe request from {request.sid}: {data!r}")
            return False
        user_id = session.get("user_id")
        if not authorize_channel(channel, user_id):
            logging.warning(f"Refused subscription to {channel} for {request.sid} (user {user_id})")
            return False
        join_room(channel)
        logging.debug(f"{request.sid} subscribed to {channel}")
        return True

    @socketio.on("unsubscribe")
    def handle_unsubscribe(data) -> None:
        channel = _channel_from(data)
        if channel is None:
            return
        leave_room(channel)
        logging.debug(f"{request.sid} unsubscribed from {channel}")

    @socketio.on("disconnect")
    def handle_disconnect(*args) -> None:
        logging.info(f"Realtime client disconnected: {request.sid}")
