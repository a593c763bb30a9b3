from boardsync.lib.state_machine import StateMachine
from boardsync.version import __version__

PACKAGE = __package__
VERSION = __version__

__all__ = [
    "VERSION",
    "PACKAGE",
    StateMachine.__name__,
]
