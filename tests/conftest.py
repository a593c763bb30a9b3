"""Pytest fixtures for boardsync tests."""

import pytest

from boardsync.app import create_app
from boardsync.config import ConfigType
from boardsync.lib.realtime_client import RealtimeClient
from boardsync.lib.state_machine import StateMachine
from boardsync.lib.subscribe_board import BoardSubscription


class FakeChannel:
    """Channel handle that records listeners and lets tests push messages."""

    def __init__(self, transport, name):
        self.transport = transport
        self.name = name
        self.listeners = {}
        self.global_handlers = []

    def listen(self, event, callback):
        self.listeners.setdefault(event, []).append(callback)
        return self

    def bind_global(self, handler):
        self.global_handlers.append(handler)

    def unbind_global(self, handler=None):
        if handler is None:
            self.global_handlers.clear()
        elif handler in self.global_handlers:
            self.global_handlers.remove(handler)

    def disconnect(self):
        self.transport.calls.append(("disconnect", self.name))

    def deliver(self, event, data):
        for callback in list(self.listeners.get(event, [])):
            callback(data)

    def deliver_global(self, event, data):
        for handler in list(self.global_handlers):
            handler(event, data)


class FakeTransport:
    """Minimal Echo-style transport recording every call in order.

    Leaving a channel deliberately keeps its listeners so tests can check that
    late messages on an old channel are ignored by the subscriber itself.
    """

    def __init__(self):
        self.calls = []
        self.channels = {}

    def channel(self, name):
        self.calls.append(("channel", name))
        self.channels[name] = FakeChannel(self, name)
        return self.channels[name]

    def private(self, name):
        self.calls.append(("private", name))
        wire_name = "private-" + name
        self.channels[wire_name] = FakeChannel(self, wire_name)
        return self.channels[wire_name]

    def leave(self, name):
        self.calls.append(("leave", name))

    def disconnect(self):
        self.calls.append(("disconnect",))


class TransportWithoutDisconnect:
    """Transport handle lacking the optional disconnect capability."""

    def __init__(self):
        self.calls = []

    def channel(self, name):
        self.calls.append(("channel", name))
        return FakeChannel(self, name)

    def leave(self, name):
        self.calls.append(("leave", name))


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def router():
    return StateMachine(debug=True)


@pytest.fixture
def production_router():
    return StateMachine(debug=False)


@pytest.fixture
def board_subscription(router, transport):
    return BoardSubscription(router, lambda: transport)


@pytest.fixture
def realtime_client(router, transport):
    return RealtimeClient(router=router, transport=transport)


@pytest.fixture
def app_and_socketio():
    return create_app(ConfigType.TESTING.value, async_mode="threading")


@pytest.fixture
def app(app_and_socketio):
    return app_and_socketio[0]


@pytest.fixture
def socketio(app_and_socketio):
    return app_and_socketio[1]


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def bare_transport():
    return TransportWithoutDisconnect()
