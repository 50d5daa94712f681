"""Navigation states.

One state machine per navigator::

    Idle ──navigate──▶ Navigating ──admitted──▶ Settled(url)
                            │
                            └──rejected──▶ Settled(previous) or Settled(fallback)

``Idle`` only exists before the first route settles. Its location is the
root placeholder (``NavigatorConfig.root_url``).
"""

from __future__ import annotations

from dataclasses import dataclass

from waypost.navigation.pipeline import ActivationResult


@dataclass(frozen=True, slots=True)
class Idle:
    """No route has settled yet."""


@dataclass(frozen=True, slots=True)
class Navigating:
    """A navigation request is being evaluated.

    ``previous`` is the state to return to if the request fails.
    """

    url: str
    previous: Idle | Settled


@dataclass(frozen=True, slots=True)
class Settled:
    """A route chain was activated and is on screen.

    ``url`` is the normalized location (see ``routing.router.normalize_url``).
    """

    url: str
    activation: ActivationResult


type NavigationState = Idle | Navigating | Settled
