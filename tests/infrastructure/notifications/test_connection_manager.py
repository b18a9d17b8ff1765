"""Tests for the per-user live channel registry."""

from hostelia.infrastructure.notifications import NotificationConnectionManager


def test_deregistering_last_channel_drops_the_user_entry(manager, channel_factory):
    channel = channel_factory()
    manager.register(7, channel)

    manager.deregister(7, channel)

    assert manager.channels_for(7) == frozenset()
    assert manager.connection_count() == 0
    assert 7 not in manager._connections


def test_deregistering_one_of_two_channels_keeps_the_other(manager, channel_factory):
    first, second = channel_factory(), channel_factory()
    manager.register(7, first)
    manager.register(7, second)

    manager.deregister(7, first)

    assert manager.channels_for(7) == frozenset({second})


def test_register_is_idempotent_for_the_same_channel(manager, channel_factory):
    channel = channel_factory()
    manager.register(3, channel)
    manager.register(3, channel)

    assert manager.connection_count(3) == 1


def test_deregister_unknown_user_or_channel_is_a_noop(manager, channel_factory):
    registered, stranger = channel_factory(), channel_factory()
    manager.register(1, registered)

    manager.deregister(99, stranger)
    manager.deregister(1, stranger)
    manager.deregister(1, registered)
    manager.deregister(1, registered)

    assert manager.channels_for(1) == frozenset()


def test_channels_for_returns_a_snapshot(manager, channel_factory):
    first, second = channel_factory(), channel_factory()
    manager.register(5, first)
    snapshot = manager.channels_for(5)

    manager.register(5, second)
    manager.deregister(5, first)

    assert snapshot == frozenset({first})
    assert manager.channels_for(5) == frozenset({second})


def test_users_are_tracked_independently(channel_factory):
    registry = NotificationConnectionManager()
    alice, bob = channel_factory(), channel_factory()
    registry.register(1, alice)
    registry.register(2, bob)

    assert registry.channels_for(1) == frozenset({alice})
    assert registry.channels_for(2) == frozenset({bob})
    assert registry.connection_count() == 2
    assert sorted(registry._connections) == [1, 2]
