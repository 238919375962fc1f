"""
Scan State Transitions
======================

Explicit transition table for the scan lifecycle.

    IDLE       → CAPTURING
    CAPTURING  → EXTRACTING | FAILED
    EXTRACTING → SCORING    | FAILED
    SCORING    → COMPLETED
    COMPLETED  → IDLE       (reset)
    FAILED     → IDLE       (reset)

Any other move is a programming error and raises InvalidTransitionError.
An unexpected exception during a scan aborts it to FAILED from whatever
in-flight state it reached, so reset() always works afterwards.
A scan request outside IDLE is a caller error and raises
ScanRejectedError: concurrent or back-to-back scans are rejected, not
queued.
"""

import logging
from typing import Dict, FrozenSet, List

from safety_scanner.models.state import ScanState


logger = logging.getLogger(__name__)


ALLOWED_TRANSITIONS: Dict[ScanState, FrozenSet[ScanState]] = {
    ScanState.IDLE: frozenset({ScanState.CAPTURING}),
    ScanState.CAPTURING: frozenset({ScanState.EXTRACTING, ScanState.FAILED}),
    ScanState.EXTRACTING: frozenset({ScanState.SCORING, ScanState.FAILED}),
    ScanState.SCORING: frozenset({ScanState.COMPLETED}),
    ScanState.COMPLETED: frozenset({ScanState.IDLE}),
    ScanState.FAILED: frozenset({ScanState.IDLE}),
}

IN_FLIGHT_STATES = frozenset({
    ScanState.CAPTURING,
    ScanState.EXTRACTING,
    ScanState.SCORING,
})


class InvalidTransitionError(RuntimeError):
    """Raised on a transition the lifecycle does not allow."""
    pass


class ScanRejectedError(RuntimeError):
    """Raised when a scan is requested while the orchestrator is not idle."""
    pass


class ScanStateMachine:
    """
    Holds the current ScanState and enforces ALLOWED_TRANSITIONS.

    Attributes:
        history: States entered during the current scan, starting at IDLE
    """

    def __init__(self) -> None:
        self._state = ScanState.IDLE
        self.history: List[ScanState] = [ScanState.IDLE]

    @property
    def state(self) -> ScanState:
        return self._state

    @property
    def in_flight(self) -> bool:
        return self._state in IN_FLIGHT_STATES

    def begin(self) -> None:
        """
        Enter CAPTURING for a new scan.

        Raises:
            ScanRejectedError: If a scan is in flight or awaiting reset
        """
        if self._state != ScanState.IDLE:
            reason = "in flight" if self.in_flight else "awaiting reset"
            raise ScanRejectedError(
                f"Scan rejected: previous scan is {reason} (state={self._state.value})"
            )
        self.history = [ScanState.IDLE]
        self.transition(ScanState.CAPTURING)

    def transition(self, target: ScanState) -> None:
        if target not in ALLOWED_TRANSITIONS[self._state]:
            raise InvalidTransitionError(
                f"Invalid scan transition: {self._state.value} → {target.value}"
            )
        logger.debug(f"Scan state: {self._state.value} → {target.value}")
        self._state = target
        self.history.append(target)

    def reset(self) -> None:
        """
        Return to IDLE after a finished scan ("retake").

        No-op when already IDLE.

        Raises:
            InvalidTransitionError: If a scan is still in flight
        """
        if self._state == ScanState.IDLE:
            return
        self.transition(ScanState.IDLE)

    def abort(self) -> None:
        """
        Force FAILED after an unexpected error.

        Unlike transition(), this accepts any in-flight state, so a scan
        that crashed in SCORING can still be reset. No-op outside a scan.
        """
        if not self.in_flight:
            return
        logger.warning(f"Scan aborted in state {self._state.value}")
        self._state = ScanState.FAILED
        self.history.append(ScanState.FAILED)
