"""The Navigator — one per application instance.

Mutable during setup (route registration). Frozen when ``start()`` or
the first ``navigate()`` runs: the route table is compiled and the
configuration validated, so a missing fallback route is reported at
startup rather than when a user first hits a bad link.

Navigations are serialized: a second ``navigate()`` waits for the first
to settle. Supersession of an in-flight navigation is not supported.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable
from dataclasses import dataclass

import anyio

from waypost.config import NavigatorConfig
from waypost.errors import ConfigurationError, RecoveryError, RouteNotFound
from waypost.navigation.context import ActivationContext
from waypost.navigation.events import (
    NavigationCancel,
    NavigationEnd,
    NavigationError,
    NavigationEvents,
    NavigationStart,
)
from waypost.navigation.outcome import Rejected
from waypost.navigation.pipeline import run_activation
from waypost.navigation.recovery import RecoveryAction, Redirect, Revert, decide
from waypost.navigation.state import Idle, Navigating, NavigationState, Settled
from waypost.routing.route import Route
from waypost.routing.router import Router, normalize_url

logger = logging.getLogger("waypost.navigation")


@dataclass(frozen=True, slots=True)
class NavigationResult:
    """What a call to ``Navigator.navigate()`` ended in.

    Attributes:
        requested_url: The URL passed to ``navigate()``.
        final_state: Where the navigator settled (``Idle`` only if the
            request failed before anything ever settled).
        outcome: The rejection, or ``None`` if the request was admitted.
        recovery: How a rejection was recovered from, if it was.
    """

    requested_url: str
    final_state: Idle | Settled
    outcome: Rejected | None = None
    recovery: RecoveryAction | None = None

    @property
    def admitted(self) -> bool:
        return self.outcome is None

    @property
    def url(self) -> str | None:
        """The settled URL, or ``None`` if nothing is settled."""
        if isinstance(self.final_state, Settled):
            return self.final_state.url
        return None


class Navigator:
    """Client-side navigation over a nested route table.

    Usage::

        nav = Navigator(
            [Route("cars", resolve={"cars": collection(fetch_cars)},
                   children=(Route("{name}", resolve={"car": GuardedResolver("cars")}),))],
            NavigatorConfig(fallback_route="/cars"),
        )
        nav.start()

        result = await nav.navigate("/cars/ford")
        result.admitted    # False
        nav.location       # "/cars" — reverted, or redirected on cold entry
    """

    __slots__ = (
        "_events",
        "_freeze_lock",
        "_frozen",
        "_nav_lock",
        "_next_id",
        "_pending_routes",
        "_router",
        "_state",
        "config",
    )

    def __init__(
        self,
        routes: Iterable[Route] = (),
        config: NavigatorConfig | None = None,
    ) -> None:
        self.config: NavigatorConfig = config or NavigatorConfig()
        self._pending_routes: list[Route] = list(routes)
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()
        self._nav_lock: anyio.Lock | None = None  # Created lazily inside the event loop
        self._router: Router | None = None
        self._state: NavigationState = Idle()
        self._events: NavigationEvents = NavigationEvents()
        self._next_id: int = 0

    # -- Setup --

    def add_route(self, route: Route) -> None:
        """Register a top-level route (with its children)."""
        if self._frozen:
            msg = "Cannot add routes after the navigator has started."
            raise ConfigurationError(msg)
        self._pending_routes.append(route)

    def start(self) -> None:
        """Compile routes and validate configuration.

        Raises ``ConfigurationError`` when the route table is malformed,
        no ``fallback_route`` is configured, or the fallback matches no
        route. Calling it again is a no-op.
        """
        self._ensure_frozen()

    # -- Read surface --

    @property
    def events(self) -> NavigationEvents:
        return self._events

    @property
    def state(self) -> NavigationState:
        return self._state

    @property
    def location(self) -> str:
        """URL of the last settled route, or the root placeholder.

        While a navigation is in flight this still reports the location
        the user is looking at, not the requested URL.
        """
        state = self._state
        if isinstance(state, Navigating):
            state = state.previous
        if isinstance(state, Settled):
            return state.url
        return self.config.root_url

    @property
    def current(self) -> ActivationContext | None:
        """The settled leaf route's context, or ``None`` before first settle."""
        state = self._state
        if isinstance(state, Navigating):
            state = state.previous
        if isinstance(state, Settled):
            return state.activation.leaf
        return None

    @property
    def routes(self) -> list[str]:
        self._ensure_frozen()
        assert self._router is not None
        return self._router.routes

    # -- Navigation --

    async def navigate(self, url: str) -> NavigationResult:
        """Evaluate a navigation request and settle.

        Rejections are never raised: they end in a revert to the
        previous route or, on cold entry, a redirect to the fallback
        route. ``RouteNotFound`` and resolver failures are re-raised
        after the previous state is restored. ``RecoveryError`` is
        raised if the fallback route itself is rejected.
        """
        self._ensure_frozen()
        if self._nav_lock is None:
            self._nav_lock = anyio.Lock()
        async with self._nav_lock:
            return await self._navigate(url, redirected=False)

    async def _navigate(self, url: str, *, redirected: bool) -> NavigationResult:
        assert self._router is not None
        previous = self._state
        assert not isinstance(previous, Navigating)

        self._next_id += 1
        nav_id = self._next_id
        self._state = Navigating(url=url, previous=previous)
        await self._events.emit(NavigationStart(id=nav_id, url=url))

        try:
            match = self._router.match(url)
            activation = await run_activation(match)
        except Exception as exc:
            self._state = previous
            if isinstance(exc, RouteNotFound):
                logger.warning("Navigation %d: %s", nav_id, exc)
            else:
                logger.exception("Navigation %d to %r failed", nav_id, url)
            await self._events.emit(NavigationError(id=nav_id, url=url, error=exc))
            raise

        if activation.outcome is None:
            self._state = Settled(url=normalize_url(url), activation=activation)
            logger.debug("Navigation %d settled at %r", nav_id, self._state.url)
            await self._events.emit(NavigationEnd(id=nav_id, url=url))
            return NavigationResult(requested_url=url, final_state=self._state)

        outcome = activation.outcome
        logger.info(
            "Navigation %d to %r cancelled: %s%s",
            nav_id, url, outcome.reason, f" ({outcome.detail})" if outcome.detail else "",
        )
        await self._events.emit(
            NavigationCancel(id=nav_id, url=url, reason=str(outcome.reason), detail=outcome.detail)
        )

        # The location indicator goes back to what it showed before
        self._state = previous
        action = decide(previous, self.config)

        if isinstance(action, Revert):
            return NavigationResult(
                requested_url=url, final_state=previous, outcome=outcome, recovery=action,
            )

        if redirected:
            msg = (
                f"Fallback route {url!r} was rejected ({outcome.reason}); "
                "cold-entry recovery cannot settle."
            )
            raise RecoveryError(msg)

        logger.info("No settled route to return to; redirecting %r to %r", url, action.url)
        landed = await self._navigate(action.url, redirected=True)
        return NavigationResult(
            requested_url=url,
            final_state=landed.final_state,
            outcome=outcome,
            recovery=Redirect(action.url),
        )

    # -- Internal --

    def _ensure_frozen(self) -> None:
        """Freeze once, with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Compile the route table and validate configuration.

        MUST only be called while holding _freeze_lock.
        """
        # 1. Compile route table
        router = Router()
        for route in self._pending_routes:
            router.add(route)
        router.compile()

        # 2. Validate recovery configuration
        fallback = self.config.fallback_route
        if not fallback:
            msg = (
                "NavigatorConfig.fallback_route is required: a rejected cold-entry "
                "navigation must redirect somewhere."
            )
            raise ConfigurationError(msg)
        try:
            router.match(fallback)
        except RouteNotFound:
            msg = f"fallback_route {fallback!r} does not match any registered route."
            raise ConfigurationError(msg) from None
        if not self.config.root_url.startswith("/"):
            msg = f"root_url must start with '/', got {self.config.root_url!r}"
            raise ConfigurationError(msg)

        self._router = router
        self._frozen = True
        logger.debug("Navigator started with %d routes", len(router.routes))
