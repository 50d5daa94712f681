"""Navigation — guarded resolution, activation, and recovery.

The pieces, from the inside out:

    snapshot   — CollectionSnapshot, the parent's immutable collection
    resolver   — resolve() and GuardedResolver, admission by key
    pipeline   — parent-before-child guards and resolvers
    recovery   — where a cancelled navigation lands
    navigator  — the state machine tying them together
"""

from waypost.navigation.context import ActivationContext
from waypost.navigation.events import (
    NavigationCancel,
    NavigationEnd,
    NavigationError,
    NavigationEvents,
    NavigationStart,
)
from waypost.navigation.navigator import NavigationResult, Navigator
from waypost.navigation.outcome import RejectReason, Rejected, Resolved, ResolutionOutcome
from waypost.navigation.pipeline import ActivationResult, run_activation
from waypost.navigation.recovery import Redirect, Revert, decide
from waypost.navigation.resolver import GuardedResolver, resolve
from waypost.navigation.snapshot import CollectionSnapshot, Item
from waypost.navigation.state import Idle, Navigating, Settled

__all__ = [
    "ActivationContext",
    "ActivationResult",
    "CollectionSnapshot",
    "GuardedResolver",
    "Idle",
    "Item",
    "NavigationCancel",
    "NavigationEnd",
    "NavigationError",
    "NavigationEvents",
    "NavigationResult",
    "NavigationStart",
    "Navigating",
    "Navigator",
    "Redirect",
    "RejectReason",
    "Rejected",
    "Resolved",
    "ResolutionOutcome",
    "Revert",
    "Settled",
    "decide",
    "resolve",
    "run_activation",
]
