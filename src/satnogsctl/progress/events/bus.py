"""Publish/subscribe channel between the download pipeline and the reporters.

Downloaders and the run driver only emit events, they never talk to a reporter
directly, so a silent run and a live terminal view share the same code path.
"""

import threading
from contextvars import ContextVar
from typing import Callable

from satnogsctl.model import ProgressEvent, ProgressEventType

Handler = Callable[[ProgressEvent], None]


class EventBus:
    """Fan-out of progress events to every subscribed handler."""

    def __init__(self):
        self._handlers: list[Handler] = []
        self._lock = threading.Lock()

    def subscribe(self, handler: Handler) -> None:
        with self._lock:
            self._handlers.append(handler)

    def unsubscribe(self, handler: Handler) -> None:
        with self._lock:
            if handler in self._handlers:
                self._handlers.remove(handler)

    def emit(self, event: ProgressEvent) -> None:
        # handlers may unsubscribe while being notified
        with self._lock:
            handlers = tuple(self._handlers)
        for handler in handlers:
            handler(event)


_default_bus = EventBus()
_bus_override: ContextVar[EventBus | None] = ContextVar("satnogsctl_event_bus", default=None)


def get_bus() -> EventBus:
    """Return the bus installed with `set_bus`, or the process-wide default."""
    return _bus_override.get() or _default_bus


def set_bus(bus: EventBus | None) -> None:
    """Route events to `bus` in the current context, `None` restores the default."""
    _bus_override.set(bus)


def emit_event(event_type: ProgressEventType, task_id: str, **data) -> None:
    """
    Publish a progress event on the current bus.

    Args:
        event_type (ProgressEventType): what happened.
        task_id (str): download or page the event belongs to, e.g. `download_1234_0`.
        **data: event payload (description, duration, advance, success, ...).
    """
    get_bus().emit(ProgressEvent(type=event_type, task_id=task_id, data=data))
