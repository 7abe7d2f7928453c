"""Tests for the event bus system."""

import asyncio
from typing import Any

import pytest

from event_server.constants import CHANNELS, PARTICIPANT_ADDED, USER_CREATED
from event_server.event_bus import EventBus, EventHandler, Subscription
from event_server.event_bus.core import HandlerRegistrationError, UnknownChannelError


async def simple_handler(payload: dict) -> str:
    """Simple async function handler."""
    return f"processed: {payload['id']}"


def sync_handler(payload: dict) -> str:
    """Plain function handler."""
    return f"sync: {payload['id']}"


class CountingHandler(EventHandler[dict]):
    """Test class-based handler."""

    def __init__(self):
        self.seen: list[Any] = []

    async def handle(self, payload: dict) -> int:
        self.seen.append(payload)
        return len(self.seen)


class FailingHandler(EventHandler[dict]):
    """Handler that always fails."""

    async def handle(self, payload: dict) -> str:
        raise ValueError("Test handler failure")


class TestSubscriptions:
    """Test cases for subscribe/publish fan-out."""

    @pytest.mark.asyncio
    async def test_subscriber_receives_payloads_in_order(self):
        bus = EventBus(channels=CHANNELS)
        subscription = bus.subscribe(USER_CREATED)

        for i in range(3):
            assert bus.publish(USER_CREATED, {"id": i}) == 1

        received = [await anext(subscription) for _ in range(3)]
        assert received == [{"id": 0}, {"id": 1}, {"id": 2}]

    @pytest.mark.asyncio
    async def test_fan_out_to_every_subscriber(self):
        bus = EventBus(channels=CHANNELS)
        first = bus.subscribe(USER_CREATED)
        second = bus.subscribe(USER_CREATED)
        payload = {"id": "u1"}

        assert bus.publish(USER_CREATED, payload) == 2

        assert await anext(first) is payload
        assert await anext(second) is payload

    @pytest.mark.asyncio
    async def test_no_replay_for_late_subscribers(self):
        bus = EventBus(channels=CHANNELS)
        bus.publish(USER_CREATED, {"id": "early"})

        subscription = bus.subscribe(USER_CREATED)
        assert subscription.pending() == 0

        bus.publish(USER_CREATED, {"id": "late"})
        assert await anext(subscription) == {"id": "late"}

    @pytest.mark.asyncio
    async def test_channels_are_separate(self):
        bus = EventBus(channels=CHANNELS)
        users = bus.subscribe(USER_CREATED)

        assert bus.publish(PARTICIPANT_ADDED, {"id": "p1"}) == 0
        assert users.pending() == 0

    @pytest.mark.asyncio
    async def test_close_detaches_and_ends_iteration(self):
        bus = EventBus(channels=CHANNELS)
        subscription = bus.subscribe(USER_CREATED)
        bus.publish(USER_CREATED, {"id": 1})
        assert bus.get_subscriber_count(USER_CREATED) == 1

        subscription.close()
        assert subscription.closed
        assert bus.get_subscriber_count(USER_CREATED) == 0
        assert bus.publish(USER_CREATED, {"id": 2}) == 0

        # Payloads queued before the close are still handed out
        assert [payload async for payload in subscription] == [{"id": 1}]

    @pytest.mark.asyncio
    async def test_subscription_context_manager(self):
        bus = EventBus(channels=CHANNELS)
        async with bus.subscribe(USER_CREATED) as subscription:
            assert isinstance(subscription, Subscription)
            assert bus.get_subscriber_count(USER_CREATED) == 1
        assert bus.get_subscriber_count(USER_CREATED) == 0

    @pytest.mark.asyncio
    async def test_listen_detaches_when_closed(self):
        bus = EventBus(channels=CHANNELS)
        stream = bus.listen(USER_CREATED)

        pending = asyncio.ensure_future(anext(stream))
        await asyncio.sleep(0.01)
        assert bus.get_subscriber_count(USER_CREATED) == 1

        bus.publish(USER_CREATED, {"id": "a"})
        assert await pending == {"id": "a"}

        await stream.aclose()
        assert bus.get_subscriber_count(USER_CREATED) == 0

    @pytest.mark.asyncio
    async def test_isolated_payloads(self):
        bus = EventBus(channels=CHANNELS, isolate_events=True)
        first = bus.subscribe(USER_CREATED)
        second = bus.subscribe(USER_CREATED)
        payload = {"id": "u1", "tags": ["a"]}

        bus.publish(USER_CREATED, payload)
        received_first = await anext(first)
        received_first["tags"].append("b")

        received_second = await anext(second)
        assert received_second == {"id": "u1", "tags": ["a"]}
        assert received_first is not payload

    def test_unknown_channel(self):
        bus = EventBus(channels=CHANNELS)
        with pytest.raises(UnknownChannelError, match="Unknown channel: locationAdded"):
            bus.subscribe("locationAdded")
        with pytest.raises(UnknownChannelError):
            bus.publish("locationAdded", {})

    def test_undeclared_bus_accepts_any_channel(self):
        bus = EventBus()
        bus.subscribe("anything")
        assert bus.get_registered_channels() == ["anything"]

    def test_close_all(self):
        bus = EventBus(channels=CHANNELS)
        subscriptions = [bus.subscribe(USER_CREATED), bus.subscribe(PARTICIPANT_ADDED)]

        assert bus.close_all() == 2
        assert all(subscription.closed for subscription in subscriptions)
        assert bus.get_subscriber_count(USER_CREATED) == 0


class TestHandlers:
    """Test cases for channel handlers."""

    def test_register_handlers(self):
        bus = EventBus(channels=CHANNELS)
        bus.on(USER_CREATED, simple_handler)
        bus.on(USER_CREATED, CountingHandler())

        assert bus.get_handler_count(USER_CREATED) == 2
        assert bus.get_handler_count(PARTICIPANT_ADDED) == 0

    def test_register_invalid_handler(self):
        bus = EventBus(channels=CHANNELS)
        with pytest.raises(HandlerRegistrationError):
            bus.on(USER_CREATED, "not_callable")

    def test_register_on_unknown_channel(self):
        bus = EventBus(channels=CHANNELS)
        with pytest.raises(UnknownChannelError):
            bus.on("nowhere", simple_handler)

    def test_remove_and_clear_handlers(self):
        bus = EventBus(channels=CHANNELS)
        bus.on(USER_CREATED, simple_handler)
        bus.on(PARTICIPANT_ADDED, simple_handler)

        assert bus.remove_handler(USER_CREATED, simple_handler) is True
        assert bus.remove_handler(USER_CREATED, simple_handler) is False

        bus.clear_handlers(PARTICIPANT_ADDED)
        assert bus.get_handler_count(PARTICIPANT_ADDED) == 0

        bus.on(USER_CREATED, simple_handler)
        bus.clear_handlers()
        assert bus.get_handler_count(USER_CREATED) == 0

    @pytest.mark.asyncio
    async def test_publish_and_wait_collects_results(self):
        bus = EventBus(channels=CHANNELS)
        handler = CountingHandler()
        bus.on(USER_CREATED, simple_handler)
        bus.on(USER_CREATED, sync_handler)
        bus.on(USER_CREATED, handler)

        results = await bus.publish_and_wait(USER_CREATED, {"id": "u1"})

        assert results == ["processed: u1", "sync: u1", 1]
        assert handler.seen == [{"id": "u1"}]

    @pytest.mark.asyncio
    async def test_publish_and_wait_without_handlers(self):
        bus = EventBus(channels=CHANNELS)
        assert await bus.publish_and_wait(USER_CREATED, {"id": 1}) == []

    @pytest.mark.asyncio
    async def test_handler_failure_is_isolated(self):
        bus = EventBus(channels=CHANNELS)
        subscription = bus.subscribe(USER_CREATED)
        bus.on(USER_CREATED, FailingHandler())
        bus.on(USER_CREATED, simple_handler)

        results = await bus.publish_and_wait(USER_CREATED, {"id": "u1"})

        assert isinstance(results[0], ValueError)
        assert str(results[0]) == "Test handler failure"
        assert results[1] == "processed: u1"
        assert await anext(subscription) == {"id": "u1"}

    @pytest.mark.asyncio
    async def test_publish_schedules_handlers(self):
        bus = EventBus(channels=CHANNELS)
        handler = CountingHandler()
        bus.on(USER_CREATED, handler)

        bus.publish(USER_CREATED, {"id": 1})
        assert handler.seen == []

        await asyncio.sleep(0.01)
        assert handler.seen == [{"id": 1}]

    def test_publish_without_loop_runs_handlers(self):
        bus = EventBus(channels=CHANNELS)
        handler = CountingHandler()
        bus.on(USER_CREATED, handler)

        bus.publish(USER_CREATED, {"id": 1})
        assert handler.seen == [{"id": 1}]

    @pytest.mark.asyncio
    async def test_publish_wakes_waiting_subscriber(self):
        bus = EventBus(channels=CHANNELS)
        subscription = bus.subscribe(USER_CREATED)
        waiting = asyncio.create_task(anext(subscription))
        await asyncio.sleep(0)

        bus.publish(USER_CREATED, {"id": 7})

        assert await asyncio.wait_for(waiting, timeout=1) == {"id": 7}

    @pytest.mark.asyncio
    async def test_shutdown_ends_open_subscriptions(self):
        bus = EventBus(channels=CHANNELS)
        subscription = bus.subscribe(USER_CREATED)
        waiting = asyncio.create_task(anext(subscription))
        await asyncio.sleep(0)

        bus.shutdown()

        with pytest.raises(StopAsyncIteration):
            await asyncio.wait_for(waiting, timeout=1)
        assert bus.get_subscriber_count(USER_CREATED) == 0
