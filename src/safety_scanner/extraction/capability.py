"""
Capability Negotiator
=====================

Tracks whether the accelerated backend is usable.

Lifecycle (fire-once, never retried):
    UNINITIALIZED → INITIALIZING → READY
                                 → FAILED  (loader error, timeout, or disabled)

The initialization task runs in the background, concurrently with scans.
Scans never wait for it: the orchestrator reads `accelerated_ready` once
when a scan starts, and that value decides the strategy for that scan
only.
"""

import asyncio
import logging
from typing import Callable, Optional

from safety_scanner.extraction.accelerated import warm_up_backend
from safety_scanner.models.state import CapabilityState


logger = logging.getLogger(__name__)


class CapabilityNegotiator:
    """
    Single capability cell for the accelerated strategy.

    Attributes:
        enabled: When False the cell goes straight to FAILED
        timeout_seconds: Loader budget before the cell is marked FAILED

    Example:
        negotiator = CapabilityNegotiator(timeout_seconds=10.0)
        negotiator.start()               # returns immediately
        ...
        if negotiator.accelerated_ready:
            ...
    """

    def __init__(
        self,
        loader: Optional[Callable[[], None]] = None,
        timeout_seconds: float = 10.0,
        enabled: bool = True,
    ) -> None:
        """
        Initialize the negotiator.

        Args:
            loader: Blocking callable that prepares the backend; it runs
                in a worker thread. Defaults to the OpenCV warm-up.
            timeout_seconds: Maximum time to wait for the loader
            enabled: Whether accelerated processing may be used at all
        """
        if timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be positive")

        self.enabled = enabled
        self.timeout_seconds = timeout_seconds
        self._loader = loader or warm_up_backend
        self._state = CapabilityState.UNINITIALIZED
        self._task: Optional[asyncio.Task] = None
        self._failure_reason: Optional[str] = None

    @property
    def state(self) -> CapabilityState:
        return self._state

    @property
    def accelerated_ready(self) -> bool:
        """Current value of the ready flag."""
        return self._state == CapabilityState.READY

    @property
    def failure_reason(self) -> Optional[str]:
        return self._failure_reason

    def start(self) -> asyncio.Task:
        """
        Launch the initialization task (idempotent).

        Must be called from a running event loop. A second call returns
        the task created by the first.
        """
        if self._task is None:
            self._task = asyncio.create_task(
                self._initialize(),
                name="accelerated_backend_init",
            )
        return self._task

    async def wait(self, timeout: Optional[float] = None) -> CapabilityState:
        """
        Wait for initialization to settle, for callers that choose to.

        Scans never call this. Returns the state reached within the
        timeout (which may still be INITIALIZING).
        """
        if self._task is None:
            return self._state
        try:
            await asyncio.wait_for(asyncio.shield(self._task), timeout)
        except asyncio.TimeoutError:
            pass
        return self._state

    async def _initialize(self) -> None:
        if not self.enabled:
            self._fail("accelerated processing disabled by configuration")
            return

        self._state = CapabilityState.INITIALIZING
        logger.info("Accelerated backend initialization started")

        try:
            await asyncio.wait_for(
                asyncio.to_thread(self._loader),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError:
            self._fail(f"initialization timed out after {self.timeout_seconds}s")
            return
        except Exception as e:
            self._fail(f"initialization error: {e}")
            return

        self._state = CapabilityState.READY
        logger.info("Accelerated backend ready")

    def _fail(self, reason: str) -> None:
        self._state = CapabilityState.FAILED
        self._failure_reason = reason
        logger.warning(f"Accelerated backend unavailable, using basic strategy: {reason}")

    def get_metrics(self) -> dict:
        """Get negotiator metrics for observability."""
        return {
            "state": self._state.value,
            "accelerated_ready": self.accelerated_ready,
            "failure_reason": self._failure_reason,
        }
