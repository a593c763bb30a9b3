"""HTTP endpoints that trigger realtime broadcasts."""

import logging

from flask import Blueprint, jsonify, request

from boardsync.lib.channel_auth import issue_channel_token
from boardsync.lib.current_app import get_broadcaster, get_secret_key, token_issue_allowed
from boardsync.lib.utils import parse_id

broadcast_bp = Blueprint("broadcast", __name__)


def _bad_request(message: str):
    return jsonify({"error": message}), 400


def _json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


@broadcast_bp.route("/api/realtime/token", methods=["POST"])
def issue_token():
    """Issue a signed channel token for a user.
    ---
    tags:
      - Realtime
    responses:
      200:
        description: Token to pass as ``auth.token`` when connecting
      403:
        description: Token issuing is disabled in this configuration
    """
    if not token_issue_allowed():
        return jsonify({"error": "Token issuing is disabled"}), 403
    user_id = parse_id(_json_body().get("user_id"))
    if user_id is None:
        return _bad_request("user_id must be an integer")
    return jsonify({"token": issue_channel_token(get_secret_key(), user_id)})


@broadcast_bp.route("/api/broadcast/test", methods=["POST"])
def send_test_broadcast():
    """Send a TestBroadcast to one user's notification channel."""
    data = _json_body()
    user_id = parse_id(data.get("user_id"))
    if user_id is None:
        return _bad_request("user_id must be an integer")
    message = data.get("message") or "Default test message"
    payload = get_broadcaster().test_broadcast(user_id, message)
    return jsonify(payload)


@broadcast_bp.route("/api/boards/<board_id>/card-moved", methods=["POST"])
def card_moved(board_id):
    """Broadcast that a card moved to another column.
    ---
    tags:
      - Realtime
    parameters:
      - name: X-Socket-ID
        in: header
        type: string
        required: false
        description: Socket id of the sender, excluded from the broadcast
    responses:
      200:
        description: The CardMoved payload that was broadcast
      400:
        description: Post or column missing or invalid
    """
    data = _json_body()
    post = data.get("post")
    if not isinstance(post, dict) or "new_column_id" not in data:
        return _bad_request("post and new_column_id are required")
    post = {**post, "fid_board": board_id}
    skip_sid = request.headers.get("X-Socket-ID") or data.get("socket_id")
    try:
        payload = get_broadcaster().card_moved(post, data["new_column_id"], skip_sid=skip_sid)
    except (KeyError, TypeError, ValueError) as e:
        logging.warning(f"Invalid CardMoved request for board {board_id}: {e}")
        return _bad_request(f"Invalid post: {e}")
    return jsonify(payload)


@broadcast_bp.route("/api/notifications/broadcast", methods=["POST"])
def broadcast_notifications():
    """Push notification records to their owners."""
    notifications = _json_body().get("notifications")
    if not isinstance(notifications, list):
        return _bad_request("notifications must be a list")
    records = [n for n in notifications if isinstance(n, dict)]
    delivered = get_broadcaster().notify(records)
    return jsonify({"delivered": delivered})
