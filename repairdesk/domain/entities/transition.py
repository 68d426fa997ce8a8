from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TransitionResult:
    """Outcome of one state-machine transition.

    Rejected transitions (``accepted=False``) never change state; ``reason``
    names why the transition was not valid in the current state.
    """

    accepted: bool
    action: str
    reason: str | None = None
