"""Per-bake state machine.

Enforces VALID_TRANSITIONS and keeps the transition history of one bake.
"""

from __future__ import annotations

import logging

from deltabake.models.states import (
    VALID_TRANSITIONS,
    BakeState,
    BakeTransition,
    is_build_state,
)

logger = logging.getLogger(__name__)


class InvalidTransitionError(RuntimeError):
    """Raised when a requested state transition is not valid."""


class BakeMachine:
    """Tracks one bake from IDLE to DONE or FAILED.

    Parameters
    ----------
    label:
        Used only in log lines (usually the baked entry name).
    """

    def __init__(self, label: str = "") -> None:
        self.label = label
        self._state = BakeState.IDLE
        self._history: list[BakeTransition] = []

    @property
    def state(self) -> BakeState:
        return self._state

    @property
    def history(self) -> list[BakeTransition]:
        return list(self._history)

    @property
    def is_building(self) -> bool:
        return is_build_state(self._state)

    def transition(self, target: BakeState, detail: str = "") -> BakeTransition:
        """Move to *target*, raising InvalidTransitionError if not allowed."""
        allowed = VALID_TRANSITIONS.get(self._state, set())
        if target not in allowed:
            raise InvalidTransitionError(
                f"Cannot transition {self.label or 'bake'} from {self._state.value} "
                f"to {target.value}. Allowed: {sorted(s.value for s in allowed)}"
            )
        record = BakeTransition(from_state=self._state, to_state=target, detail=detail)
        self._history.append(record)
        logger.debug(
            "%s: %s -> %s %s", self.label, self._state.value, target.value, detail
        )
        self._state = target
        return record

    def fail(self, detail: str = "") -> BakeTransition:
        """Enter FAILED from whichever build state the bake is in."""
        return self.transition(BakeState.FAILED, detail)
