"""Navigator configuration.

NavigatorConfig is a frozen dataclass — immutable after creation,
IDE-autocompletable, no string-key dict lookups.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class NavigatorConfig:
    """Navigator configuration. Immutable after creation.

    Only ``fallback_route`` is required in practice; ``Navigator.start()``
    refuses to run without it::

        config = NavigatorConfig(fallback_route="/cars")
    """

    # Recovery
    fallback_route: str | None = None  # Redirect target for cold-entry rejections
    root_url: str = "/"  # Location reported before any route has settled

    # Collection snapshots
    key_field: str = "name"

    # Logging
    log_level: str = "info"
