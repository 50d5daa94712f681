"""Guarded resolver — data-dependent route admission control.

A child route such as ``/cars/{name}`` only makes sense when ``name``
identifies a member of the collection its parent ``/cars`` resolved.
``GuardedResolver`` is both the guard and the resolver for that child:
it admits the navigation by producing the matched item as the child's
data, or denies it with a ``Rejected`` outcome that the navigator turns
into a cancellation.

Usage::

    Route(
        "cars",
        resolve={"cars": collection(fetch_cars)},
        children=(Route("{name}", resolve={"car": GuardedResolver("cars")}),),
    )
"""

import logging

from waypost.navigation.context import ActivationContext
from waypost.navigation.outcome import RejectReason, Rejected, Resolved, ResolutionOutcome
from waypost.navigation.snapshot import CollectionSnapshot

logger = logging.getLogger("waypost.resolver")


def resolve(
    parent_snapshot: CollectionSnapshot | None,
    requested_key: str,
) -> ResolutionOutcome:
    """Match *requested_key* against *parent_snapshot*.

    Returns ``Resolved`` with the first item in sequence order whose key
    equals *requested_key* exactly, or ``Rejected(NOT_FOUND)``. The
    snapshot is never modified, so repeated calls give the same outcome.

    Fails closed: anything other than a ``CollectionSnapshot`` (a parent
    that has not produced its data yet) is ``Rejected(PREMATURE_INVOCATION)``.
    """
    if not isinstance(parent_snapshot, CollectionSnapshot):
        logger.warning(
            "resolve(%r) called with %s instead of a CollectionSnapshot; rejecting "
            "(parent data not produced yet)",
            requested_key, type(parent_snapshot).__name__,
        )
        return Rejected(RejectReason.PREMATURE_INVOCATION, "parent data unavailable")

    item = parent_snapshot.find(requested_key)
    if item is None:
        return Rejected(RejectReason.NOT_FOUND, f"no item with key {requested_key!r}")
    return Resolved(item)


class GuardedResolver:
    """Resolve a child route's item from its parent's collection snapshot.

    Args:
        parent_key: Data key under which an ancestor route stored its
            ``CollectionSnapshot``.
        param: Path parameter holding the requested key.

    The resolver fails closed: when the parent snapshot is missing or
    the parent's resolve step has not completed, the request is rejected
    with ``PREMATURE_INVOCATION`` and a warning is logged for operators.
    Users see the same recovery as for an unknown key.
    """

    __slots__ = ("param", "parent_key")

    def __init__(self, parent_key: str, param: str = "name") -> None:
        self.parent_key = parent_key
        self.param = param

    def __repr__(self) -> str:
        return f"GuardedResolver(parent_key={self.parent_key!r}, param={self.param!r})"

    def __call__(self, ctx: ActivationContext) -> ResolutionOutcome:
        snapshot = self._borrow_snapshot(ctx)
        if snapshot is None:
            return Rejected(
                RejectReason.PREMATURE_INVOCATION,
                f"parent data {self.parent_key!r} unavailable",
            )

        requested_key = ctx.path_params.get(self.param)
        if requested_key is None:
            # A route without the parameter cannot match any item
            return Rejected(RejectReason.NOT_FOUND, f"missing path parameter {self.param!r}")

        outcome = resolve(snapshot, requested_key)
        if not outcome:
            logger.debug(
                "No %r in %r (%d items)", requested_key, self.parent_key, len(snapshot),
            )
        return outcome

    def _borrow_snapshot(self, ctx: ActivationContext) -> CollectionSnapshot | None:
        """Return the ancestor's snapshot, or ``None`` if it is not ready."""
        node = ctx.parent
        while node is not None:
            if self.parent_key in node.data or not node.is_resolved:
                break
            node = node.parent

        if node is None:
            logger.warning(
                "GuardedResolver on %r invoked with no ancestor providing %r; "
                "rejecting",
                ctx.route.path, self.parent_key,
            )
            return None
        if not node.is_resolved:
            logger.warning(
                "GuardedResolver on %r invoked before parent route %r finished "
                "resolving; rejecting (framework ordering defect)",
                ctx.route.path, node.route.path,
            )
            return None

        value = node.data[self.parent_key]
        if not isinstance(value, CollectionSnapshot):
            logger.warning(
                "Parent data %r on %r is %s, not a CollectionSnapshot; rejecting",
                self.parent_key, node.route.path, type(value).__name__,
            )
            return None
        return value
