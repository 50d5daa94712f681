"""Resolution outcomes — the accept/reject result of a resolve step.

Frozen dataclasses, produced exactly once per navigation request. The
pipeline inspects the variant to decide whether the target route is
activated::

    match resolve(snapshot, key):
        case Resolved(item):
            ...
        case Rejected(reason):
            ...
"""

from dataclasses import dataclass
from enum import StrEnum
from typing import Any


class RejectReason(StrEnum):
    """Why a navigation request was denied."""

    NOT_FOUND = "not-found"
    # Parent data was not available yet; treated as NOT_FOUND for users
    PREMATURE_INVOCATION = "premature-invocation"
    GUARD_DENIED = "guard-denied"
    CANCELLED = "cancelled"


@dataclass(frozen=True, slots=True)
class Resolved:
    """The requested key matched; ``item`` becomes the child's data."""

    item: Any

    def __bool__(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class Rejected:
    """Deliberate admission denial. Not an error.

    Falsy, so callers can write ``if not outcome:``.
    """

    reason: RejectReason | str = RejectReason.NOT_FOUND
    detail: str = ""

    def __bool__(self) -> bool:
        return False


type ResolutionOutcome = Resolved | Rejected
