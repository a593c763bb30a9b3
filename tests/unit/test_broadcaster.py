"""Tests for Broadcaster emissions.

These document the exact (event, channel, data) triples Echo clients rely on.
"""

from unittest.mock import MagicMock, patch

import pytest

from boardsync.lib.broadcaster import Broadcaster, notification_channel


@pytest.fixture
def broadcaster():
    return Broadcaster(MagicMock())


def _emitted(broadcaster):
    return [
        (call.args[0], call.args[1][0], call.args[1][1], call.kwargs)
        for call in broadcaster.socketio.emit.call_args_list
    ]


def _notification(**overrides):
    notification = {
        "id": 1,
        "type": "comment",
        "content": "Jane commented on Fix bug",
        "fid_post": 7,
        "fid_board": 42,
        "fid_user": 5,
        "created_by": 2,
        "created_at": "2025-06-01 10:00:00",
        "updated_at": "2025-06-01 10:00:00",
    }
    notification.update(overrides)
    return notification


def test_notification_channel_name():
    assert notification_channel(5) == "private-notifications.5"


class TestCardMoved:
    def test_emits_to_board_room(self, broadcaster):
        post = {
            "id": 7,
            "fid_board": 42,
            "title": "Fix bug",
            "desc": "...",
            "deadline": None,
            "pinned": 0,
            "priority": "high",
            "assignee_id": 5,
            "assignee_name": "Jane",
        }

        payload = broadcaster.card_moved(post, 3, skip_sid="sid-1")

        [(event, channel, data, kwargs)] = _emitted(broadcaster)
        assert event == "CardMoved"
        assert channel == "board.42"
        assert data == payload
        assert kwargs == {"to": "board.42", "namespace": "/", "skip_sid": "sid-1"}
        assert payload["new_column_id"] == 3


class TestNotify:
    def test_comment_notification_fans_out(self, broadcaster):
        delivered = broadcaster.notify([_notification()])

        emitted = _emitted(broadcaster)
        assert delivered == 1
        assert [e[0] for e in emitted] == [
            "UserNotificationReceived",
            "CommentNotificationReceived",
        ]
        assert all(e[1] == "private-notifications.5" for e in emitted)
        assert emitted[0][2] == {"notification": _notification()}

    @pytest.mark.parametrize(
        "notification_type, typed_event",
        [
            ("linked_issue", "LinkedIssueNotificationReceived"),
            ("branch", "BranchNotificationReceived"),
        ],
    )
    def test_typed_events(self, broadcaster, notification_type, typed_event):
        broadcaster.notify([_notification(type=notification_type)])

        assert [e[0] for e in _emitted(broadcaster)] == ["UserNotificationReceived", typed_event]

    @pytest.mark.parametrize("notification_type", ["post", "board", "mystery", None])
    def test_other_types_only_user_event(self, broadcaster, notification_type):
        broadcaster.notify([_notification(type=notification_type)])

        assert [e[0] for e in _emitted(broadcaster)] == ["UserNotificationReceived"]

    def test_numeric_strings_accepted(self, broadcaster):
        broadcaster.notify([_notification(fid_user="5", fid_post="7")])

        assert _emitted(broadcaster)[0][1] == "private-notifications.5"

    @pytest.mark.parametrize(
        "overrides",
        [
            {"fid_user": None},
            {"fid_post": "abc"},
            {"fid_user": "five"},
            {"fid_user": True},
            {"fid_user": "1.9"},
            {"fid_user": 1.9},
            {"fid_user": "nan"},
            {"fid_user": "inf"},
            {"fid_user": "1e400"},
            {"fid_user": float("inf")},
            {"fid_user": "\u00b2"},
            {"fid_user": -1},
            {"fid_post": "7.5"},
        ],
    )
    def test_invalid_records_skipped(self, broadcaster, overrides):
        delivered = broadcaster.notify([_notification(**overrides)])

        assert delivered == 0
        broadcaster.socketio.emit.assert_not_called()

    def test_fractional_user_never_rounded_to_another_user(self, broadcaster):
        broadcaster.notify([_notification(fid_user="1.9", type="post")])

        channels = [e[1] for e in _emitted(broadcaster)]
        assert "private-notifications.1" not in channels

    def test_integral_float_accepted(self, broadcaster):
        broadcaster.notify([_notification(fid_user=5.0)])

        assert _emitted(broadcaster)[0][1] == "private-notifications.5"

    def test_empty_list(self, broadcaster):
        assert broadcaster.notify([]) == 0


class TestTestBroadcast:
    @patch("boardsync.lib.broadcaster.time.time", return_value=1700000000.5)
    def test_payload(self, mock_time, broadcaster):
        payload = broadcaster.test_broadcast(5, "ping")

        [(event, channel, data, _)] = _emitted(broadcaster)
        assert event == "TestBroadcast"
        assert channel == "private-notifications.5"
        assert data == payload == {"message": "ping", "serverTimestamp": 1700000000.5}

    def test_default_message(self, broadcaster):
        assert broadcaster.test_broadcast(5)["message"] == "Default test message"
