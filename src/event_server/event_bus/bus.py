"""Event Bus Implementation.

This module provides the main EventBus class: a registry of named channels,
each holding the set of attached subscriptions and the registered handlers.

## Key Features

- **Fan-out**: Every subscriber attached to a channel receives every payload
- **Ordered delivery**: Payloads arrive in publish order, per subscriber
- **No replay**: Subscribers only see payloads published after they attach
- **Error Isolation**: Handler failures don't affect subscribers or other handlers

## Advanced Usage

```python
from event_server.event_bus import EventBus

bus = EventBus(channels=["userCreated"])

async def audit(payload: dict) -> None:
    logger.info(f"created {payload['id']}")

bus.on("userCreated", audit)

# Deliver to subscribers, then wait for the handlers
results = await bus.publish_and_wait("userCreated", {"id": "1"})

# Stream payloads until the consumer stops iterating
async for payload in bus.listen("userCreated"):
    ...
```

"""

import asyncio
import copy
import inspect
from collections.abc import AsyncGenerator, Callable, Iterable
from typing import Any

from loguru import logger

from .core import HandlerRegistrationError, Subscription, UnknownChannelError

T_Handler = Callable[[Any], Any]


class EventBus:
    """Channel-keyed publish/subscribe bus.

    Subscribers attach with ``subscribe`` (or ``listen``) and receive every
    payload published on their channel afterwards. Handlers registered with
    ``on`` are called for every payload as well and their results can be
    collected with ``publish_and_wait``.

    Example:
        ```python
        bus = EventBus(channels=["userCreated"])
        subscription = bus.subscribe("userCreated")
        bus.publish("userCreated", {"id": "1"})
        assert await anext(subscription) == {"id": "1"}
        ```
    """

    def __init__(self, channels: Iterable[str] | None = None, isolate_events: bool = False) -> None:
        """Initialize a new EventBus instance.

        Args:
            channels: Declared channel names. None accepts any channel name.
            isolate_events: If True, each subscriber and handler receives a deep
                           copy of the payload. Can be overridden per publish call.
        """
        self._channels: set[str] | None = set(channels) if channels is not None else None
        self._subscribers: dict[str, set[Subscription]] = {}
        self._handlers: dict[str, list[T_Handler]] = {}
        self._isolate_events = isolate_events
        logger.debug(f"EventBus initialized (channels={sorted(self._channels or [])}, isolate_events={isolate_events})")

    def _check_channel(self, channel: str) -> None:
        if self._channels is not None and channel not in self._channels:
            raise UnknownChannelError(channel)

    def _payload_for(self, payload: Any, isolate: bool | None) -> Any:
        should_isolate = isolate if isolate is not None else self._isolate_events
        return copy.deepcopy(payload) if should_isolate else payload

    # Subscriptions

    def subscribe(self, channel: str) -> Subscription:
        """Attach a new subscriber to a channel.

        Args:
            channel: Channel name

        Returns:
            The subscription; iterate it asynchronously to receive payloads

        Raises:
            UnknownChannelError: If the channel was not declared
        """
        self._check_channel(channel)
        subscription = Subscription(channel, on_close=self._detach)
        self._subscribers.setdefault(channel, set()).add(subscription)
        logger.debug(f"Subscriber attached to {channel} ({len(self._subscribers[channel])} total)")
        return subscription

    def _detach(self, subscription: Subscription) -> None:
        subscribers = self._subscribers.get(subscription.channel)
        if subscribers is not None:
            subscribers.discard(subscription)
            if not subscribers:
                del self._subscribers[subscription.channel]

    async def listen(self, channel: str) -> AsyncGenerator[Any, None]:
        """Yield payloads published on a channel until the consumer stops.

        The subscription is detached when the generator is closed, which is
        what happens when a GraphQL subscription client disconnects.
        """
        subscription = self.subscribe(channel)
        try:
            async for payload in subscription:
                yield payload
        finally:
            subscription.close()

    def get_subscriber_count(self, channel: str) -> int:
        """Get the number of subscribers attached to a channel."""
        return len(self._subscribers.get(channel, ()))

    # Handlers

    def on(self, channel: str, handler: T_Handler) -> None:
        """Register a handler for a channel.

        Args:
            channel: Channel name
            handler: Callable taking the payload, sync or async

        Raises:
            UnknownChannelError: If the channel was not declared
            HandlerRegistrationError: If the handler is not callable
        """
        self._check_channel(channel)
        if not callable(handler):
            raise HandlerRegistrationError(f"Handler must be callable: {handler}")

        self._handlers.setdefault(channel, []).append(handler)
        logger.debug(f"Registered handler for {channel}: {handler}")

    def remove_handler(self, channel: str, handler: T_Handler) -> bool:
        """Remove a specific handler for a channel."""
        if channel in self._handlers:
            try:
                self._handlers[channel].remove(handler)
                logger.debug(f"Removed handler for {channel}: {handler}")
                return True
            except ValueError:
                pass
        return False

    def clear_handlers(self, channel: str | None = None) -> None:
        """Clear handlers for a specific channel or all channels."""
        if channel is None:
            self._handlers.clear()
            logger.debug("Cleared all handlers")
        elif channel in self._handlers:
            del self._handlers[channel]
            logger.debug(f"Cleared handlers for {channel}")

    def get_handler_count(self, channel: str) -> int:
        """Get the number of handlers registered for a channel."""
        return len(self._handlers.get(channel, []))

    def get_registered_channels(self) -> list[str]:
        """Get the declared channels, or the channels in use when none were declared."""
        if self._channels is not None:
            return sorted(self._channels)
        return sorted(set(self._subscribers) | set(self._handlers))

    # Publishing

    def _fan_out(self, channel: str, payload: Any, isolate: bool | None) -> int:
        subscribers = list(self._subscribers.get(channel, ()))
        for subscription in subscribers:
            subscription.deliver(self._payload_for(payload, isolate))
        logger.trace(f"Delivered {channel} payload to {len(subscribers)} subscribers")
        return len(subscribers)

    def publish(self, channel: str, payload: Any, isolate: bool | None = None) -> int:
        """Publish a payload without waiting for handlers (fire-and-forget).

        Subscribers have the payload queued before this returns. Handlers are
        scheduled on the running loop, or run to completion when there is none.

        Args:
            channel: Channel name
            payload: Value to deliver
            isolate: Whether to deep copy the payload per receiver

        Returns:
            Number of subscribers the payload was delivered to
        """
        self._check_channel(channel)
        delivered = self._fan_out(channel, payload, isolate)

        if self._handlers.get(channel):
            try:
                loop = asyncio.get_running_loop()
            except RuntimeError:
                asyncio.run(self._run_handlers(channel, payload, isolate))
            else:
                loop.create_task(self._run_handlers(channel, payload, isolate))

        return delivered

    async def publish_and_wait(self, channel: str, payload: Any, isolate: bool | None = None) -> list[Any]:
        """Publish a payload and wait for all handlers to complete.

        Args:
            channel: Channel name
            payload: Value to deliver
            isolate: If True, each receiver gets a deep copy of the payload.
                    If None (default), uses the bus-level setting.

        Returns:
            List of results from all handlers (including exceptions)

        Raises:
            UnknownChannelError: If the channel was not declared
        """
        self._check_channel(channel)
        self._fan_out(channel, payload, isolate)
        return await self._run_handlers(channel, payload, isolate)

    async def _run_handlers(self, channel: str, payload: Any, isolate: bool | None) -> list[Any]:
        handlers = list(self._handlers.get(channel, []))
        if not handlers:
            logger.trace(f"No handlers registered for {channel}")
            return []

        logger.debug(f"Running {len(handlers)} handlers for {channel}")
        tasks = [self._execute_handler(handler, self._payload_for(payload, isolate)) for handler in handlers]
        results = await asyncio.gather(*tasks, return_exceptions=True)

        successful = sum(1 for r in results if not isinstance(r, Exception))
        failed = len(results) - successful
        if failed > 0:
            logger.warning(f"Channel {channel}: {successful} successful, {failed} failed handlers")
        logger.trace(f"Channel {channel} handler results: {results}")

        return results

    async def _execute_handler(self, handler: T_Handler, payload: Any) -> Any:
        """Execute a single handler, returning its result or the exception it raised."""
        try:
            logger.trace(f"Executing handler {handler}")
            result = handler(payload)
            if inspect.isawaitable(result):
                result = await result
            return result
        except Exception as e:
            logger.error(f"Handler {handler} failed: {e}")
            return e

    def close_all(self) -> int:
        """Close every attached subscription and return how many were closed."""
        subscriptions = [s for subscribers in self._subscribers.values() for s in subscribers]
        for subscription in subscriptions:
            subscription.close()
        return len(subscriptions)

    def shutdown(self) -> None:
        """Shutdown the EventBus and release resources.

        Call this during application shutdown: open subscriptions are closed
        so their consumers stop iterating.
        """
        closed = self.close_all()
        if closed:
            logger.debug(f"Closed {closed} open subscriptions")
        logger.debug("EventBus shutdown complete")
