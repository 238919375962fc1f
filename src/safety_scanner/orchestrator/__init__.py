"""
Orchestrator Module
===================

LangGraph-based scan state machine.

    - graph.py: ScanOrchestrator and its workflow
    - transitions.py: Allowed lifecycle transitions

Key Design Decisions:
    - LangGraph is used for STRUCTURE, not model inference
    - The strategy is fixed when a scan starts
    - Failures become error results; malformed frames are raised
"""

from safety_scanner.orchestrator.graph import ScanOrchestrator, build_failure_result
from safety_scanner.orchestrator.transitions import (
    InvalidTransitionError,
    ScanRejectedError,
    ScanStateMachine,
)

__all__ = [
    "ScanOrchestrator",
    "build_failure_result",
    "ScanStateMachine",
    "ScanRejectedError",
    "InvalidTransitionError",
]
