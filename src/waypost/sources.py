"""Parent data sources.

A *source* is anything that produces the collection a parent route
exposes to its children — an API client, a database query, a fixture.
Sources are consumed once per parent activation; the result is frozen
into a ``CollectionSnapshot`` before any child sees it.

Two shapes are accepted:

- an object with ``async fetch()`` (the ``CollectionSource`` protocol)
- a plain callable returning an iterable or an awaitable of one
"""

from collections.abc import Awaitable, Callable, Iterable
from typing import Any, Protocol, runtime_checkable

from waypost._internal.calls import call_hook
from waypost.navigation.context import ActivationContext
from waypost.navigation.snapshot import CollectionSnapshot

# A value that will resolve to T (already resolved or awaitable)
type Pending[T] = T | Awaitable[T]


@runtime_checkable
class CollectionSource(Protocol):
    """A source that can produce a complete collection."""

    async def fetch(self) -> Iterable[Any]: ...


type SourceLike = CollectionSource | Callable[[], Pending[Iterable[Any]]]


def collection(
    source: SourceLike,
    *,
    key_field: str = "name",
) -> Callable[[ActivationContext], Awaitable[CollectionSnapshot]]:
    """Wrap *source* as a resolver that produces a ``CollectionSnapshot``.

    Usage::

        async def fetch_cars() -> list[dict]:
            return await api.get_json("/cars")

        Route("cars", resolve={"cars": collection(fetch_cars)})
    """

    async def resolve_collection(ctx: ActivationContext) -> CollectionSnapshot:
        if isinstance(source, CollectionSource):
            items = await source.fetch()
        else:
            items = await call_hook(source)
        return CollectionSnapshot.of(items, key_field=key_field)

    return resolve_collection
