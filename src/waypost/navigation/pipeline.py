"""Activation pipeline — guards and resolvers, parent before child.

For a matched chain ``/cars`` → ``/cars/{name}`` the pipeline:

    1. Runs the ``cars`` route's guards, in order
    2. Runs the ``cars`` route's resolvers concurrently (anyio task group)
    3. Freezes their results into the ``cars`` context
    4. Only then moves on to ``{name}``, whose context points at step 3

Child resolvers therefore never observe a parent whose data is still
being produced. The ordering is enforced here, not left to scheduling.

A ``Rejected`` outcome or a raised ``NavigationCancelled`` stops the walk
and is reported as the activation's outcome. Any other exception is a
resolution failure and propagates to the caller.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import anyio

from waypost._internal.calls import call_hook, hook_name
from waypost.errors import NavigationCancelled
from waypost.navigation.context import ActivationContext
from waypost.navigation.outcome import RejectReason, Rejected, Resolved
from waypost.routing.route import Resolver, RouteMatch

logger = logging.getLogger("waypost.pipeline")


@dataclass(frozen=True, slots=True)
class ActivationResult:
    """What the pipeline produced for one navigation request.

    ``contexts`` holds the resolved context of every route that finished
    its resolve step, root first. ``outcome`` is ``None`` when the whole
    chain was admitted.
    """

    match: RouteMatch
    contexts: tuple[ActivationContext, ...]
    outcome: Rejected | None = None

    @property
    def admitted(self) -> bool:
        return self.outcome is None

    @property
    def leaf(self) -> ActivationContext | None:
        """The target route's context, or ``None`` if it was not activated."""
        if not self.admitted or not self.contexts:
            return None
        return self.contexts[-1]

    @property
    def data(self) -> Mapping[str, Any]:
        leaf = self.leaf
        return leaf.data if leaf is not None else {}

    def __bool__(self) -> bool:
        return self.admitted


async def run_activation(match: RouteMatch) -> ActivationResult:
    """Activate every route in *match.chain*, parent before child."""
    contexts: list[ActivationContext] = []
    parent: ActivationContext | None = None

    for depth, route in enumerate(match.chain):
        pending = ActivationContext(
            route=route,
            path_params=match.path_params,
            parent=parent,
            depth=depth,
        )

        rejection = await _run_guards(pending)
        if rejection is None:
            data, rejection = await _run_resolvers(pending)

        if rejection is not None:
            logger.debug(
                "Activation of %r stopped at %r: %s",
                match.url, route.path or "/", rejection.reason,
            )
            return ActivationResult(match=match, contexts=tuple(contexts), outcome=rejection)

        parent = pending.with_data(data)
        contexts.append(parent)

    return ActivationResult(match=match, contexts=tuple(contexts))


async def _run_guards(ctx: ActivationContext) -> Rejected | None:
    """Run ``can_activate`` guards in declaration order.

    The first guard that returns a falsy value (or raises
    ``NavigationCancelled``) denies activation. A guard that returns a
    ``Rejected`` outcome is reported with its own reason and detail.
    """
    for guard in ctx.route.can_activate:
        try:
            allowed = await call_hook(guard, ctx)
        except NavigationCancelled as exc:
            return Rejected(exc.reason, exc.detail)
        if isinstance(allowed, Rejected):
            return allowed
        if not allowed:
            return Rejected(RejectReason.GUARD_DENIED, f"{hook_name(guard)} denied activation")
    return None


async def _run_resolvers(
    ctx: ActivationContext,
) -> tuple[dict[str, Any], Rejected | None]:
    """Run the route's resolvers concurrently and collect their values.

    Returns the route's data and the first rejection in declaration
    order, if any. The first unexpected exception in declaration order
    is re-raised after every resolver has finished.
    """
    resolvers = ctx.route.resolve
    if not resolvers:
        return {}, None

    results: dict[str, Any] = {}
    failures: dict[str, Exception] = {}

    async def _resolve(key: str, resolver: Resolver) -> None:
        try:
            results[key] = await call_hook(resolver, ctx)
        except NavigationCancelled as exc:
            results[key] = Rejected(exc.reason, exc.detail)
        except Exception as exc:  # re-raised below, outside the task group
            failures[key] = exc

    async with anyio.create_task_group() as tg:
        for key, resolver in resolvers.items():
            tg.start_soon(_resolve, key, resolver)

    for key in resolvers:
        if key in failures:
            logger.error("Resolver %r on %r failed", key, ctx.route.path or "/")
            raise failures[key]

    data: dict[str, Any] = {}
    for key in resolvers:
        value = results[key]
        if isinstance(value, Rejected):
            return {}, value
        data[key] = value.item if isinstance(value, Resolved) else value
    return data, None
