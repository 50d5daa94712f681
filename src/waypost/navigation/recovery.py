"""Navigation-cancellation recovery policy.

A cancelled navigation leaves nothing new on screen, so the navigator
must decide where the user ends up:

- Some route already settled: stay there (``Revert``). The location the
  user sees does not change and no redirect happens.
- Nothing has settled yet (cold entry straight into a bad deep link, so
  the location is still the root placeholder): go to the configured
  fallback route (``Redirect``) instead of leaving a blank view.
"""

from __future__ import annotations

from dataclasses import dataclass

from waypost.config import NavigatorConfig
from waypost.errors import ConfigurationError
from waypost.navigation.state import Idle, Settled
from waypost.routing.router import same_path


@dataclass(frozen=True, slots=True)
class Revert:
    """Return to the previously settled route."""

    url: str


@dataclass(frozen=True, slots=True)
class Redirect:
    """Navigate to the fallback route."""

    url: str


type RecoveryAction = Revert | Redirect


def decide(previous: Idle | Settled, config: NavigatorConfig) -> RecoveryAction:
    """Pick the recovery for a rejected navigation.

    *previous* is the state the navigator was in when the rejected
    request started. A route settled at the root placeholder path (query
    and fragment ignored) counts as nothing settled.
    """
    if isinstance(previous, Settled) and not same_path(previous.url, config.root_url):
        return Revert(previous.url)
    if config.fallback_route is None:
        # Navigator.start() refuses this configuration
        msg = "No fallback_route configured for cold-entry recovery."
        raise ConfigurationError(msg)
    return Redirect(config.fallback_route)
