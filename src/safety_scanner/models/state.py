"""
Lifecycle States
================

Discrete states used by the stateful parts of the pipeline.

    - ScanState: Orchestrator lifecycle for one capture
    - ScanMethod: Which strategy produced a result (the method tag)
    - CapabilityState: Accelerated backend initialization lifecycle

Scan lifecycle:
    IDLE → CAPTURING → EXTRACTING → SCORING → COMPLETED
    CAPTURING / EXTRACTING → FAILED
    COMPLETED / FAILED → IDLE (explicit reset, "retake")
"""

from enum import Enum


class ScanState(str, Enum):
    """
    Orchestrator states for a single scan.

    Attributes:
        IDLE: Ready to accept a scan request
        CAPTURING: Obtaining a frame from the source
        EXTRACTING: Running feature extractors
        SCORING: Computing score and recommendations
        COMPLETED: Result delivered, waiting for reset
        FAILED: Error result delivered, waiting for reset
    """

    IDLE = "idle"
    CAPTURING = "capturing"
    EXTRACTING = "extracting"
    SCORING = "scoring"
    COMPLETED = "completed"
    FAILED = "failed"


class ScanMethod(str, Enum):
    """Strategy that actually produced a result."""

    ACCELERATED = "accelerated"
    BASIC = "basic"
    ERROR = "error"


class CapabilityState(str, Enum):
    """
    Accelerated backend initialization lifecycle.

    Transitions happen once: UNINITIALIZED → INITIALIZING → READY | FAILED.
    """

    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"
    FAILED = "failed"
