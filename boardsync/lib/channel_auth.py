"""Signed connection tokens and the channel authorization rules."""

from __future__ import annotations

import logging

from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer

from boardsync.constants import (
    BOARD_CHANNEL_PREFIX,
    NOTIFICATION_CHANNEL_PREFIX,
    PRIVATE_CHANNEL_PREFIX,
)
from boardsync.lib.utils import parse_id

TOKEN_SALT = "boardsync-channel-auth"


def _serializer(secret_key: str) -> URLSafeTimedSerializer:
    return URLSafeTimedSerializer(secret_key, salt=TOKEN_SALT)


def issue_channel_token(secret_key: str, user_id: int | str) -> str:
    """Sign a token identifying ``user_id`` for the socket connection."""
    return _serializer(secret_key).dumps({"user_id": str(user_id)})


def verify_channel_token(secret_key: str, token: str | None, max_age: int | None = None) -> str | None:
    """Return the user id carried by ``token``, or None if it is missing, forged or expired."""
    if not token:
        return None
    try:
        data = _serializer(secret_key).loads(token, max_age=max_age)
    except SignatureExpired:
        logging.warning("Rejected expired channel token")
        return None
    except BadSignature:
        logging.warning("Rejected channel token with bad signature")
        return None
    return data.get("user_id") if isinstance(data, dict) else None


def authorize_channel(channel: str, user_id: str | None) -> bool:
    """Decide whether a connection may subscribe to ``channel``.

    Board channels are public. A private notification channel is only open to
    the user it belongs to. Everything else is refused.
    """
    if channel.startswith(BOARD_CHANNEL_PREFIX):
        return len(channel) > len(BOARD_CHANNEL_PREFIX)

    private_prefix = PRIVATE_CHANNEL_PREFIX + NOTIFICATION_CHANNEL_PREFIX
    if channel.startswith(private_prefix):
        owner = channel[len(private_prefix) :]
        owner_id = parse_id(owner)
        return owner_id is not None and owner_id == parse_id(user_id)

    return False
