"""Event Bus System for Record Notifications.

This module provides a framework-agnostic publish/subscribe bus keyed by
channel name. It supports:

- **Live subscriptions**: Async iterators over payloads published after attaching
- **Fan-out**: Each subscriber on a channel receives every payload independently
- **Handlers**: In-process listeners called for every payload, sync or async
- **Error Isolation**: Handler failures don't affect other receivers
- **Declared channels**: Publishing to an unknown channel is an error

## Quick Start

```python
from event_server.event_bus import EventBus

bus = EventBus(channels=["userCreated"])

async def announce(payload: dict) -> None:
    print(f"New user {payload['username']}")

bus.on("userCreated", announce)
subscription = bus.subscribe("userCreated")
await bus.publish_and_wait("userCreated", {"id": "1", "username": "alice"})
```

The bus holds no global state: the application creates one instance at
startup and injects it where it is needed.

For the subscription and handler primitives, see `core.py`.
For the bus itself, see `bus.py`.

"""

from .bus import EventBus
from .core import EventBusError, EventHandler, HandlerRegistrationError, Subscription, UnknownChannelError

__all__ = [
    "EventBus",
    "EventBusError",
    "EventHandler",
    "HandlerRegistrationError",
    "Subscription",
    "UnknownChannelError",
]
