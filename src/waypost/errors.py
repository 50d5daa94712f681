"""Waypost exception hierarchy.

Shared across Router, pipeline, resolvers, and Navigator so every module
raises and catches the same types.
"""


class WaypostError(Exception):
    """Base for all waypost-specific errors."""


class ConfigurationError(WaypostError):
    """Raised when navigator configuration is invalid.

    Typically raised by ``Navigator.start()`` at startup, never while a
    navigation request is being evaluated.
    """


class RouteNotFound(WaypostError):  # noqa: N818 — mirrors the HTTP name
    """No registered route matches the requested URL."""

    def __init__(self, url: str) -> None:
        super().__init__(f"No route matches {url!r}")
        self.url = url


class NavigationCancelled(WaypostError):  # noqa: N818 — a signal, not a fault
    """Recognized admission denial.

    Guards and resolvers may raise this instead of returning ``Rejected``.
    The activation pipeline converts it into a rejection; it never
    surfaces as a navigation error::

        async def resolve_car(ctx: ActivationContext) -> Car:
            car = await garage.get(ctx.path_params["name"])
            if car is None:
                raise NavigationCancelled(RejectReason.NOT_FOUND, "no such car")
            return car
    """

    def __init__(self, reason: str = "cancelled", detail: str = "") -> None:
        super().__init__(reason, detail)
        self.reason = reason
        self.detail = detail

    def __str__(self) -> str:
        if self.detail:
            return f"{self.reason}: {self.detail}"
        return str(self.reason)


class RecoveryError(WaypostError):
    """The fallback route was itself rejected during cold-entry recovery."""
