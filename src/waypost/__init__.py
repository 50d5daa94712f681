"""Waypost — data-dependent route admission for async Python applications.

A nested route table whose child routes are only entered when their path
parameter names something the parent route actually loaded. Rejected
navigations never leave a blank view: the user stays where they were,
or lands on a fallback route when there is nowhere to go back to.

Basic usage::

    from waypost import GuardedResolver, Navigator, NavigatorConfig, Route, collection

    nav = Navigator(
        [
            Route(
                "cars",
                resolve={"cars": collection(fetch_cars)},
                children=(Route("{name}", resolve={"car": GuardedResolver("cars")}),),
            ),
        ],
        NavigatorConfig(fallback_route="/cars"),
    )
    nav.start()

    result = await nav.navigate("/cars/tesla")
    nav.current.data["car"]  # {"name": "tesla", ...}
"""

__version__ = "0.1.0-dev"
__all__ = [
    "ActivationContext",
    "CollectionSnapshot",
    "ConfigurationError",
    "GuardedResolver",
    "Item",
    "NavigationCancelled",
    "NavigationResult",
    "Navigator",
    "NavigatorConfig",
    "RecoveryError",
    "RejectReason",
    "Rejected",
    "Resolved",
    "Route",
    "RouteNotFound",
    "WaypostError",
    "collection",
    "configure_logging",
    "resolve",
]


# Public name -> module that defines it
_LAZY_IMPORTS: dict[str, str] = {
    "ActivationContext": "waypost.navigation.context",
    "CollectionSnapshot": "waypost.navigation.snapshot",
    "ConfigurationError": "waypost.errors",
    "GuardedResolver": "waypost.navigation.resolver",
    "Item": "waypost.navigation.snapshot",
    "NavigationCancelled": "waypost.errors",
    "NavigationResult": "waypost.navigation.navigator",
    "Navigator": "waypost.navigation.navigator",
    "NavigatorConfig": "waypost.config",
    "RecoveryError": "waypost.errors",
    "RejectReason": "waypost.navigation.outcome",
    "Rejected": "waypost.navigation.outcome",
    "Resolved": "waypost.navigation.outcome",
    "Route": "waypost.routing.route",
    "RouteNotFound": "waypost.errors",
    "WaypostError": "waypost.errors",
    "collection": "waypost.sources",
    "configure_logging": "waypost.logging_setup",
    "resolve": "waypost.navigation.resolver",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import waypost`` fast while providing a clean top-level API.
    """
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)

    import importlib

    return getattr(importlib.import_module(module_name), name)
