"""Tests for best-effort live delivery of notifications."""

import json
from datetime import datetime, timezone

from hostelia.domain.entities import Notification, RelatedEntity
from hostelia.infrastructure.notifications import (
    format_sse_event,
    serialize_notification,
)


def _notification(user_id: int = 1, notification_id: int = 10) -> Notification:
    return Notification(
        id=notification_id,
        user_id=user_id,
        type="problem_created",
        title="New Problem Reported",
        message="Tap in room 204 is leaking",
        related_entity=RelatedEntity(type="problem", id="abc123"),
        created_at=datetime(2026, 10, 1, 9, 30, tzinfo=timezone.utc),
    )


def _decode(frame: str) -> dict:
    assert frame.startswith("data: ")
    assert frame.endswith("\n\n")
    return json.loads(frame[len("data: ") : -2])


def test_dispatch_without_channels_is_a_noop(publisher):
    assert publisher.dispatch(_notification()) == 0


def test_each_registered_channel_receives_exactly_one_event(
    manager, publisher, channel_factory
):
    first, second = channel_factory(), channel_factory()
    manager.register(1, first)
    manager.register(1, second)

    delivered = publisher.dispatch(_notification(notification_id=42))

    assert delivered == 2
    for channel in (first, second):
        assert len(channel.frames) == 1
        assert _decode(channel.frames[0])["id"] == 42


def test_other_users_channels_are_not_touched(manager, publisher, channel_factory):
    mine, theirs = channel_factory(), channel_factory()
    manager.register(1, mine)
    manager.register(2, theirs)

    publisher.dispatch(_notification(user_id=1))

    assert len(mine.frames) == 1
    assert theirs.frames == []


def test_failing_channel_is_deregistered_and_healthy_one_still_served(
    manager, publisher, channel_factory
):
    healthy, broken = channel_factory(), channel_factory(fail=True)
    manager.register(1, healthy)
    manager.register(1, broken)

    delivered = publisher.dispatch(_notification())

    assert delivered == 1
    assert len(healthy.frames) == 1
    assert manager.channels_for(1) == frozenset({healthy})


def test_last_failing_channel_removes_the_user_entry(manager, publisher, channel_factory):
    manager.register(1, channel_factory(fail=True))

    assert publisher.dispatch(_notification()) == 0
    assert 1 not in manager._connections


def test_dispatch_many_preserves_creation_order(manager, publisher, channel_factory):
    channel = channel_factory()
    manager.register(1, channel)

    publisher.dispatch_many([_notification(notification_id=i) for i in (1, 2, 3)])

    assert [_decode(frame)["id"] for frame in channel.frames] == [1, 2, 3]


def test_serialized_payload_uses_client_field_names():
    payload = serialize_notification(_notification())

    assert payload == {
        "id": 10,
        "type": "problem_created",
        "title": "New Problem Reported",
        "message": "Tap in room 204 is leaking",
        "relatedEntityId": "abc123",
        "relatedEntityType": "problem",
        "read": False,
        "readAt": None,
        "createdAt": "2026-10-01T09:30:00+00:00",
    }


def test_format_sse_event_frames_a_single_data_line():
    assert format_sse_event({"type": "connected"}) == 'data: {"type": "connected"}\n\n'
