"""Echo-style channel client on top of the python-socketio client.

Speaks the socket.io convention used by Laravel Echo servers: the client emits
``subscribe``/``unsubscribe`` with ``{"channel": name}`` and the server emits
every broadcast as ``event_name, channel, data``.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

import socketio

from boardsync.constants import (
    EVENT_NAMESPACE,
    PRESENCE_CHANNEL_PREFIX,
    PRIVATE_CHANNEL_PREFIX,
)

GlobalHandler = Callable[[str, Any], None]


def format_event_name(event: str, namespace: str | None = EVENT_NAMESPACE) -> str:
    """Translate a listen label into the event name broadcast on the wire.

    Labels starting with ``.`` or ``\\`` are taken literally (minus the marker);
    anything else is a class name under ``namespace``.
    """
    if event[:1] in (".", "\\"):
        return event[1:]
    if namespace:
        event = f"{namespace}.{event}"
    return event.replace(".", "\\")


class Channel:
    """Handle on one subscribed channel."""

    def __init__(self, client: EchoClient, name: str) -> None:
        self.client = client
        self.name = name
        self._listeners: dict[str, list[Callable[[Any], None]]] = {}
        self.subscribe()

    def subscribe(self) -> None:
        self.client.emit("subscribe", {"channel": self.name})

    def unsubscribe(self) -> None:
        self._listeners.clear()
        self.client.emit("unsubscribe", {"channel": self.name})

    def listen(self, event: str, callback: Callable[[Any], None]) -> Channel:
        """Call ``callback(data)`` whenever ``event`` arrives on this channel."""
        self._listeners.setdefault(format_event_name(event), []).append(callback)
        return self

    def stop_listening(self, event: str, callback: Callable[[Any], None] | None = None) -> Channel:
        name = format_event_name(event)
        if callback is None:
            self._listeners.pop(name, None)
        elif callback in self._listeners.get(name, []):
            self._listeners[name].remove(callback)
        return self

    def bind_global(self, handler: GlobalHandler) -> None:
        """Receive every event on this channel as ``handler(event_name, data)``."""
        self.client.bind_global(self.name, handler)

    def unbind_global(self, handler: GlobalHandler | None = None) -> None:
        self.client.unbind_global(self.name, handler)

    def disconnect(self) -> None:
        self.client.disconnect()

    def deliver(self, event: str, data: Any) -> None:
        for callback in list(self._listeners.get(event, [])):
            callback(data)


class PrivateChannel(Channel):
    def __init__(self, client: EchoClient, name: str) -> None:
        super().__init__(client, PRIVATE_CHANNEL_PREFIX + name)


class EchoClient:
    """Channel-oriented client for the board realtime server.

    Channels can be opened before ``connect()``; their subscriptions are sent
    once the connection is up and replayed after every reconnect.
    """

    def __init__(
        self,
        url: str | None = None,
        token: str | None = None,
        sio: socketio.Client | None = None,
        **client_kwargs: Any,
    ) -> None:
        self.url = url
        self.token = token
        self.sio = sio if sio is not None else socketio.Client(**client_kwargs)
        self._channels: dict[str, Channel] = {}
        self._global_handlers: dict[str, list[GlobalHandler]] = {}
        self.sio.on("connect", self._on_connect)
        self.sio.on("disconnect", self._on_disconnect)
        self.sio.on("*", self._on_event)

    @property
    def connected(self) -> bool:
        return bool(self.sio.connected)

    def connect(self, url: str | None = None, token: str | None = None) -> None:
        """Open the socket.io connection.

        Raises:
            socketio.exceptions.ConnectionError: If the server can't be reached.
        """
        self.url = url or self.url
        self.token = token or self.token
        if self.url is None:
            raise ValueError("No realtime server url configured")
        auth = {"token": self.token} if self.token else None
        logging.info(f"Connecting to realtime server: {self.url}")
        self.sio.connect(self.url, auth=auth)

    def disconnect(self) -> None:
        if self.connected:
            logging.info("Disconnecting from realtime server")
            self.sio.disconnect()

    def channel(self, name: str) -> Channel:
        if name not in self._channels:
            self._channels[name] = Channel(self, name)
        return self._channels[name]

    def private(self, name: str) -> Channel:
        wire_name = PRIVATE_CHANNEL_PREFIX + name
        if wire_name not in self._channels:
            self._channels[wire_name] = PrivateChannel(self, name)
        return self._channels[wire_name]

    def leave(self, name: str) -> None:
        """Unsubscribe the public, private and presence variants of ``name``."""
        for wire_name in (name, PRIVATE_CHANNEL_PREFIX + name, PRESENCE_CHANNEL_PREFIX + name):
            channel = self._channels.pop(wire_name, None)
            if channel is not None:
                channel.unsubscribe()
                self._global_handlers.pop(wire_name, None)
                logging.debug(f"Left channel: {wire_name}")

    def bind_global(self, channel_name: str, handler: GlobalHandler) -> None:
        self._global_handlers.setdefault(channel_name, []).append(handler)

    def unbind_global(self, channel_name: str, handler: GlobalHandler | None = None) -> None:
        if handler is None:
            self._global_handlers.pop(channel_name, None)
        elif handler in self._global_handlers.get(channel_name, []):
            self._global_handlers[channel_name].remove(handler)

    def emit(self, event: str, data: Any) -> None:
        if not self.connected:
            # replayed by _on_connect
            return
        self.sio.emit(event, data)

    def _on_connect(self) -> None:
        logging.info(f"Connected to realtime server, subscribing {len(self._channels)} channel(s)")
        for name in list(self._channels):
            self.sio.emit("subscribe", {"channel": name})

    def _on_disconnect(self, *args: Any) -> None:
        logging.info("Realtime connection closed")

    def _on_event(self, event: str, *args: Any) -> None:
        if not args:
            logging.debug(f"Ignoring event without channel: {event}")
            return
        channel_name = args[0]
        data = args[1] if len(args) > 1 else None
        for handler in list(self._global_handlers.get(channel_name, [])):
            handler(event, data)
        channel = self._channels.get(channel_name)
        if channel is not None:
            channel.deliver(event, data)
