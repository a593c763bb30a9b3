"""Realtime event names and payload contracts shared by broadcaster and client."""

from __future__ import annotations

import enum
from typing import Any, Callable, Literal, Optional, TypedDict, Union

from boardsync.lib.utils import parse_id

EventHandler = Callable[[Any], None]


class EventName(str, enum.Enum):
    """Closed set of broadcast event names the board understands."""

    CARD_MOVED = "CardMoved"
    USER_NOTIFICATION_RECEIVED = "UserNotificationReceived"
    COMMENT_NOTIFICATION_RECEIVED = "CommentNotificationReceived"
    LINKED_ISSUE_NOTIFICATION_RECEIVED = "LinkedIssueNotificationReceived"
    BRANCH_NOTIFICATION_RECEIVED = "BranchNotificationReceived"
    TEST_BROADCAST = "TestBroadcast"

    @classmethod
    def parse(cls, value: Any) -> EventName | None:
        """Return the matching member, or None for anything outside the set."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


class Priority(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class NotificationType(str, enum.Enum):
    COMMENT = "comment"
    POST = "post"
    BOARD = "board"
    LINKED_ISSUE = "linked_issue"
    BRANCH = "branch"


class CardMovedPayload(TypedDict):
    post_id: int
    new_column_id: int
    title: str
    desc: str
    deadline: Optional[str]
    pinned: int
    priority: Literal["high", "medium", "low"]
    assignee_id: Union[str, int]
    assignee_name: str


class _RawNotificationBase(TypedDict):
    id: Union[int, str]
    type: str
    content: str
    fid_post: Union[int, str]
    fid_board: Union[int, str]
    fid_user: Union[int, str]
    created_by: Union[int, str]
    created_at: str
    updated_at: str


class RawNotification(_RawNotificationBase, total=False):
    seen_at: Optional[str]


class NotificationPayload(TypedDict):
    notification: RawNotification


class TestBroadcastPayload(TypedDict):
    message: str
    serverTimestamp: float


# Type-specific notification events, keyed by the notification "type" column.
# Every notification also goes out as UserNotificationReceived.
NOTIFICATION_EVENTS = {
    NotificationType.COMMENT: EventName.COMMENT_NOTIFICATION_RECEIVED,
    NotificationType.LINKED_ISSUE: EventName.LINKED_ISSUE_NOTIFICATION_RECEIVED,
    NotificationType.BRANCH: EventName.BRANCH_NOTIFICATION_RECEIVED,
}

CARD_MOVED_FIELDS = tuple(CardMovedPayload.__annotations__)


def _require_id(field: str, value: Any) -> int:
    parsed = parse_id(value)
    if parsed is None:
        raise ValueError(f"{field} must be a non-negative integer, got {value!r}")
    return parsed


def build_card_moved_payload(post: dict[str, Any], new_column_id: Any) -> CardMovedPayload:
    """Shape a post record into the CardMoved payload.

    Args:
        post: Post record with ``id``, ``title``, ``desc``, ``deadline``, ``pinned``,
            ``priority``, ``assignee_id`` and optionally ``assignee_name``.
        new_column_id: Column the card was dropped into.

    Raises:
        KeyError: If a required post field is missing.
        ValueError: If the priority or an id is not valid.
    """
    priority = Priority(post["priority"]).value
    return {
        "post_id": _require_id("id", post["id"]),
        "new_column_id": _require_id("new_column_id", new_column_id),
        "title": post["title"],
        "desc": post.get("desc") or "",
        "deadline": post.get("deadline"),
        "pinned": _require_id("pinned", post.get("pinned") or 0),
        "priority": priority,
        "assignee_id": post.get("assignee_id"),
        "assignee_name": post.get("assignee_name") or "Unassigned",
    }
