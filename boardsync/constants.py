BOARD_CHANNEL_PREFIX = "board."
NOTIFICATION_CHANNEL_PREFIX = "notifications."

# Echo channel name prefixes on the wire
PRIVATE_CHANNEL_PREFIX = "private-"
PRESENCE_CHANNEL_PREFIX = "presence-"

# Events not under this namespace must be listened for with a leading "."
EVENT_NAMESPACE = "App.Events"
CARD_MOVED_LISTEN_LABEL = ".CardMoved"

# Connection-level events of the transport, never routed to the UI
RESERVED_EVENT_PREFIXES = ("pusher:", "pusher_internal:", "subscription_")
EVENT_NAME_MARKER = "."

DEFAULT_SERVER_PORT = 6001
DEFAULT_REALTIME_URL = f"http://localhost:{DEFAULT_SERVER_PORT}"
DEFAULT_TOKEN_MAX_AGE = 60 * 60 * 12
