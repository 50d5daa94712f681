"""Route, PathSegment and RouteMatch frozen dataclasses."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from waypost.navigation.context import ActivationContext

# A resolver receives the activation context of its own route and returns
# (or awaits) the value stored under its data key, or a ResolutionOutcome.
type Resolver = Callable[[ActivationContext], Any | Awaitable[Any]]

# A guard returns (or awaits) a bool, or a Rejected outcome carrying its own
# reason. A falsy value denies activation.
type Guard = Callable[[ActivationContext], Any | Awaitable[Any]]


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a route path.

    Static:  ``cars``    (is_param=False)
    Param:   ``{name}``  (is_param=True, param_name="name")
    """

    value: str
    is_param: bool = False
    param_name: str | None = None


@dataclass(frozen=True, slots=True)
class Route:
    """A frozen route definition.

    ``path`` is relative to the parent route. Children nest under it::

        Route(
            "cars",
            component=CarList,
            resolve={"cars": collection(fetch_cars)},
            children=(
                Route("{name}", component=CarDetail,
                      resolve={"car": GuardedResolver("cars")}),
            ),
        )
    """

    path: str
    component: Any = None
    resolve: Mapping[str, Resolver] = field(default_factory=dict)
    can_activate: tuple[Guard, ...] = ()
    children: tuple[Route, ...] = ()
    name: str | None = None


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match.

    ``chain`` runs from the outermost parent to the matched leaf.
    """

    chain: tuple[Route, ...]
    path_params: Mapping[str, str]
    url: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "path_params", MappingProxyType(dict(self.path_params)))

    @property
    def leaf(self) -> Route:
        return self.chain[-1]
