"""Core Event Bus Components.

This module contains the fundamental abstractions for the event bus system.
These components are framework-agnostic and can be used in any async Python
application.

## Key Components

- **Subscription**: One subscriber's ordered, unbounded stream of payloads
- **EventHandler**: Base class for in-process channel listeners
- **EventBusError**: Base exception for all event bus related errors
- **UnknownChannelError**: Raised when a channel was never declared
- **HandlerRegistrationError**: Raised when handler registration fails

## Usage Example

```python
from event_server.event_bus import EventBus

bus = EventBus(channels=["userCreated"])

async with bus.subscribe("userCreated") as subscription:
    bus.publish("userCreated", {"id": "1", "username": "alice"})
    payload = await anext(subscription)
```

"""

import asyncio
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

from loguru import logger

_CLOSED = object()


class EventBusError(Exception):
    """Base exception for all event bus related errors.

    Use this for catching any event bus related error:
        ```python
        try:
            bus.publish(channel, payload)
        except EventBusError as e:
            logger.error(f"Event bus error: {e}")
        ```
    """


class UnknownChannelError(EventBusError):
    """Raised when publishing, subscribing or registering on an undeclared channel."""

    def __init__(self, channel: str):
        self.channel = channel
        super().__init__(f"Unknown channel: {channel}")


class HandlerRegistrationError(EventBusError):
    """Raised when handler registration fails.

    This occurs when the handler is not callable.
    """


class Subscription:
    """A subscriber attached to one channel.

    Published payloads are queued without bound and handed out in publish
    order by async iteration. Closing the subscription detaches it from the
    bus; iteration then stops once the payloads queued before the close are
    consumed.
    """

    def __init__(self, channel: str, on_close: Callable[["Subscription"], None] | None = None):
        self.channel = channel
        self._queue: asyncio.Queue[Any] = asyncio.Queue()
        self._on_close = on_close
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def pending(self) -> int:
        """Number of delivered payloads not consumed yet."""
        return self._queue.qsize()

    def deliver(self, payload: Any) -> None:
        """Queue a payload for this subscriber. Ignored once closed."""
        if self._closed:
            return
        self._queue.put_nowait(payload)

    def close(self) -> None:
        """Detach from the bus and end iteration."""
        if self._closed:
            return
        self._closed = True
        self._queue.put_nowait(_CLOSED)
        if self._on_close is not None:
            self._on_close(self)
        logger.debug(f"Subscription to {self.channel} closed")

    def __aiter__(self) -> "Subscription":
        return self

    async def __anext__(self) -> Any:
        payload = await self._queue.get()
        if payload is _CLOSED:
            raise StopAsyncIteration
        return payload

    async def __aenter__(self) -> "Subscription":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        self.close()


class EventHandler[T_Payload](ABC):
    """Base class for in-process channel listeners.

    Handlers are registered on a channel with ``EventBus.on`` and called with
    every payload published there. Unlike subscriptions they are not queued:
    they run when the payload is published.
    """

    @abstractmethod
    async def handle(self, payload: T_Payload) -> Any:
        """Handle a published payload.

        Args:
            payload: The value published on the channel.

        Returns:
            Optional result, collected by ``EventBus.publish_and_wait``.

        Raises:
            Any exception that occurs during handling. Exceptions are caught
            by the event bus and included in the results list.
        """

    def __call__(self, payload: T_Payload) -> Any:
        """Make the handler callable.

        This allows handler instances to be used directly with the event bus.
        """
        return self.handle(payload)
