"""Router events and the listener bus that delivers them.

Every navigation emits ``NavigationStart`` followed by exactly one of
``NavigationEnd``, ``NavigationCancel`` or ``NavigationError``, all
carrying the same navigation ``id``. A recovery redirect is a new
navigation with its own id.
"""

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from waypost._internal.calls import call_hook

logger = logging.getLogger("waypost.navigation")


@dataclass(frozen=True, slots=True)
class NavigationStart:
    id: int
    url: str


@dataclass(frozen=True, slots=True)
class NavigationEnd:
    id: int
    url: str


@dataclass(frozen=True, slots=True)
class NavigationCancel:
    """The request was denied by a guard or resolver."""

    id: int
    url: str
    reason: str
    detail: str = ""


@dataclass(frozen=True, slots=True)
class NavigationError:
    """The request failed for a reason other than admission denial."""

    id: int
    url: str
    error: BaseException


type NavigationEvent = NavigationStart | NavigationEnd | NavigationCancel | NavigationError

type Listener = Callable[[NavigationEvent], Any]


class NavigationEvents:
    """Ordered broadcast of navigation events to listeners.

    Listeners may be sync or async and are called in subscription order::

        unsubscribe = navigator.events.subscribe(print)
        ...
        unsubscribe()

    A listener that raises is logged and skipped; it cannot break the
    navigation that emitted the event.
    """

    __slots__ = ("_listeners", "_lock")

    def __init__(self) -> None:
        self._listeners: list[Listener] = []
        self._lock = threading.Lock()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    async def emit(self, event: NavigationEvent) -> None:
        """Deliver *event* to every listener subscribed at call time."""
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                await call_hook(listener, event)
            except Exception:
                logger.exception("Navigation event listener %r failed on %r", listener, event)

    def __len__(self) -> int:
        with self._lock:
            return len(self._listeners)
