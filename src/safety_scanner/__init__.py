"""
SafetyScanner
=============

Environmental safety-scanning pipeline for single camera frames.

This package turns one captured RGBA frame into an auditable safety
assessment: illumination, dominant color / environment class and
structural pattern are extracted, combined into a bounded 0-100 safety
score, and explained with ordered human-readable advisories.

Components:
    - frame: Immutable Frame type, image decoding and frame sources
    - extraction: Basic (numpy) and accelerated (OpenCV) strategies,
      plus the capability negotiator that chooses between them
    - scoring: Safety score policy and recommendation generator
    - orchestrator: LangGraph-based scan state machine
    - main: Thin FastAPI adapter around the orchestrator

Example:
    from safety_scanner.extraction import CapabilityNegotiator
    from safety_scanner.frame import StaticFrameSource
    from safety_scanner.orchestrator import ScanOrchestrator

    negotiator = CapabilityNegotiator()
    negotiator.start()
    orchestrator = ScanOrchestrator(negotiator)
    result = await orchestrator.scan(StaticFrameSource(frame))
"""

__version__ = "0.1.0"
__author__ = "SafetyScanner Project"

__all__ = [
    "__version__",
]
