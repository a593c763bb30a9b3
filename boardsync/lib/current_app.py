from flask import current_app

from boardsync.lib.broadcaster import Broadcaster


def get_broadcaster() -> Broadcaster:
    """Get the current app's Broadcaster instance
    Returns:
        Broadcaster: The Broadcaster stored on the current app by create_app.
    """
    return current_app.broadcaster


def get_secret_key() -> str:
    return current_app.config["SECRET_KEY"]


def get_token_max_age() -> int:
    return current_app.config["TOKEN_MAX_AGE"]


def token_issue_allowed() -> bool:
    return bool(current_app.config.get("ALLOW_TOKEN_ISSUE"))
