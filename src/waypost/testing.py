"""Test utilities for waypost applications.

Provides an event recorder and a canned collection source::

    from waypost.testing import EventRecorder, StaticSource
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

import anyio

from waypost.navigation.events import NavigationEvent, NavigationEvents


class StaticSource:
    """A ``CollectionSource`` serving a fixed list of items.

    Counts fetches so tests can assert a parent collection was loaded
    once per activation. ``delay`` (seconds) makes the fetch yield to the
    event loop first, like a real network call::

        source = StaticSource([{"name": "tesla"}], delay=0.01)
        Route("cars", resolve={"cars": collection(source)})
    """

    __slots__ = ("delay", "fetch_count", "items")

    def __init__(self, items: Iterable[Any], *, delay: float = 0.0) -> None:
        self.items = list(items)
        self.delay = delay
        self.fetch_count = 0

    async def fetch(self) -> list[Any]:
        self.fetch_count += 1
        if self.delay:
            await anyio.sleep(self.delay)
        return list(self.items)


class EventRecorder:
    """Collects every event a ``NavigationEvents`` bus emits.

    Usage::

        recorder = EventRecorder.attach(navigator.events)
        await navigator.navigate("/cars/ford")
        assert recorder.kinds() == ["NavigationStart", "NavigationCancel", ...]
    """

    __slots__ = ("events", "unsubscribe")

    def __init__(self) -> None:
        self.events: list[NavigationEvent] = []
        self.unsubscribe = lambda: None

    @classmethod
    def attach(cls, bus: NavigationEvents) -> EventRecorder:
        recorder = cls()
        recorder.unsubscribe = bus.subscribe(recorder)
        return recorder

    def __call__(self, event: NavigationEvent) -> None:
        self.events.append(event)

    def kinds(self) -> list[str]:
        return [type(event).__name__ for event in self.events]

    def of_type[E](self, kind: type[E]) -> list[E]:
        return [event for event in self.events if isinstance(event, kind)]
