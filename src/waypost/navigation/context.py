"""Activation context — what a guard or resolver can see.

Each route in a matched chain gets its own context. The parent's context
is passed down by reference, read-only: the parent owns the data its
resolvers produced, children only borrow it.

Contexts are immutable. The pipeline creates a pending context for the
route's own resolve step and replaces it with a resolved one once every
resolver of that route has finished.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any

from waypost.routing.route import Route

_EMPTY: Mapping[str, Any] = MappingProxyType({})


@dataclass(frozen=True, slots=True)
class ActivationContext:
    """Read-only view of one route's activation.

    Attributes:
        route: The route being activated.
        path_params: All path parameters captured for the URL.
        data: Values produced by this route's resolvers (empty until
            ``is_resolved``).
        parent: The resolved context of the enclosing route, or ``None``
            for a top-level route.
        is_resolved: ``True`` once this route's resolve step completed.
    """

    route: Route
    path_params: Mapping[str, str] = field(default_factory=lambda: _EMPTY)
    data: Mapping[str, Any] = field(default_factory=lambda: _EMPTY)
    parent: ActivationContext | None = None
    is_resolved: bool = False
    depth: int = field(default=0, compare=False)

    def __post_init__(self) -> None:
        if not isinstance(self.path_params, MappingProxyType):
            object.__setattr__(self, "path_params", MappingProxyType(dict(self.path_params)))
        if not isinstance(self.data, MappingProxyType):
            object.__setattr__(self, "data", MappingProxyType(dict(self.data)))

    def parent_data(self, key: str, default: Any = None) -> Any:
        """Return *key* from the nearest resolved ancestor that has it."""
        node = self.parent
        while node is not None:
            if node.is_resolved and key in node.data:
                return node.data[key]
            node = node.parent
        return default

    def with_data(self, data: Mapping[str, Any]) -> ActivationContext:
        """Return the resolved form of this context."""
        return replace(self, data=MappingProxyType(dict(data)), is_resolved=True)
