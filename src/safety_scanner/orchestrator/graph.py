"""
Scan Orchestrator Graph
=======================

LangGraph state machine that runs one scan from capture to result.

This module defines the orchestrator's computation graph using LangGraph.
LangGraph is used for CONTROL FLOW only; every node is deterministic.

Graph Structure:
    START → capture ─┬─► extract → score → complete → END
                     └─► fail → END

    capture:  ask the FrameSource for a frame (missing/undecodable → fail)
    extract:  run the strategy chosen at scan start; on an accelerated
              fault, discard its output and rerun the basic strategy
    score:    safety score + recommendations
    complete: assemble the AnalysisResult
    fail:     assemble the error result (score 50, one advisory)

Concurrency:
    One scan at a time. `scan()` enters CAPTURING before its first await,
    so a second request made while a scan is in flight (or before reset)
    is rejected with ScanRejectedError. Extractors run in a worker thread
    so the capability negotiator can keep initializing meanwhile.
"""

import asyncio
import logging
import time
from typing import Any, Callable, Dict, List, Optional, TypedDict

from langgraph.graph import StateGraph, END

from safety_scanner.extraction.accelerated import AcceleratedStrategy
from safety_scanner.extraction.basic import BasicStrategy
from safety_scanner.extraction.capability import CapabilityNegotiator
from safety_scanner.extraction.strategy import (
    ExtractionStrategy,
    FeatureSet,
    extract_features,
)
from safety_scanner.frame.frame import Frame
from safety_scanner.frame.image_decoder import ImageDecodeError
from safety_scanner.frame.source import CaptureUnavailableError, FrameSource
from safety_scanner.models.result import AnalysisResult
from safety_scanner.models.state import ScanMethod, ScanState
from safety_scanner.orchestrator.transitions import ScanStateMachine
from safety_scanner.scoring.policy import (
    FAILURE_SCORE,
    classify_safety,
    compute_safety_score,
)
from safety_scanner.scoring.recommendations import (
    ANALYSIS_FAILED_ADVICE,
    CAPTURE_UNAVAILABLE_ADVICE,
    generate_recommendations,
)


logger = logging.getLogger(__name__)


class ScanGraphState(TypedDict, total=False):
    """
    State passed through the scan graph.

    Attributes:
        source: Where the frame comes from
        use_accelerated: Strategy decision, read once at scan start
        frame: Captured frame (None when capture failed)
        features: Extracted features
        safety_score: Computed score
        recommendations: Computed advisories
        error: Failure description
        advice: Advisory for the failure result
        result: Final AnalysisResult
    """
    source: FrameSource
    use_accelerated: bool
    frame: Optional[Frame]
    features: Optional[FeatureSet]
    safety_score: Optional[int]
    recommendations: Optional[List[str]]
    error: Optional[str]
    advice: Optional[str]
    result: Optional[AnalysisResult]


def build_failure_result(error: str, advice: str) -> AnalysisResult:
    """Error result with safe defaults."""
    return AnalysisResult(
        safety_score=FAILURE_SCORE,
        safety_status=classify_safety(FAILURE_SCORE),
        recommendations=(advice,),
        method=ScanMethod.ERROR,
        timestamp=time.time(),
        error=error,
    )


class ScanOrchestrator:
    """
    Stateful coordinator for capture → extraction → scoring → result.

    The orchestrator is the only stateful component of the pipeline.
    Everything it calls is a pure function of the frame.

    Example:
        orchestrator = ScanOrchestrator(negotiator)
        result = await orchestrator.scan(StaticFrameSource(frame))
        orchestrator.reset()    # "retake"
    """

    def __init__(
        self,
        negotiator: Optional[CapabilityNegotiator] = None,
        basic: Optional[ExtractionStrategy] = None,
        accelerated: Optional[ExtractionStrategy] = None,
        on_complete: Optional[Callable[[AnalysisResult], None]] = None,
    ) -> None:
        """
        Initialize the orchestrator.

        Args:
            negotiator: Capability cell; None means basic strategy only
            basic: Basic strategy (defaults to BasicStrategy)
            accelerated: Accelerated strategy (defaults to AcceleratedStrategy)
            on_complete: Optional consumer called with every result; its
                errors are logged, never raised out of scan()
        """
        self._negotiator = negotiator
        self._basic = basic or BasicStrategy()
        self._accelerated = accelerated or AcceleratedStrategy()
        self._on_complete = on_complete

        self._machine = ScanStateMachine()
        self._graph = self._build_graph()
        self._last_result: Optional[AnalysisResult] = None

        self._completed_count = 0
        self._failed_count = 0
        self._fallback_count = 0

        logger.info("ScanOrchestrator initialized")

    def _build_graph(self) -> StateGraph:
        """Build the LangGraph workflow."""
        workflow = StateGraph(ScanGraphState)

        workflow.add_node("capture", self._capture_node)
        workflow.add_node("extract", self._extract_node)
        workflow.add_node("score", self._score_node)
        workflow.add_node("complete", self._complete_node)
        workflow.add_node("fail", self._fail_node)

        workflow.set_entry_point("capture")
        workflow.add_conditional_edges(
            "capture",
            self._route_after_capture,
            {"extract": "extract", "fail": "fail"},
        )
        workflow.add_edge("extract", "score")
        workflow.add_edge("score", "complete")
        workflow.add_edge("complete", END)
        workflow.add_edge("fail", END)

        return workflow.compile()

    # -------------------------------------------------------------------------
    # Nodes
    # -------------------------------------------------------------------------

    async def _capture_node(self, state: ScanGraphState) -> Dict[str, Any]:
        source = state["source"]

        try:
            frame = await source.capture()
        except CaptureUnavailableError as e:
            logger.warning(f"Capture unavailable: {e}")
            return {"frame": None, "error": f"Capture unavailable: {e}",
                    "advice": CAPTURE_UNAVAILABLE_ADVICE}
        except ImageDecodeError as e:
            logger.warning(f"Captured frame could not be decoded: {e}")
            return {"frame": None, "error": f"Undecodable frame: {e}",
                    "advice": ANALYSIS_FAILED_ADVICE}

        if frame is None:
            logger.warning("Capture unavailable: source returned no frame")
            return {"frame": None, "error": "Capture unavailable: no frame obtained",
                    "advice": CAPTURE_UNAVAILABLE_ADVICE}

        return {"frame": frame}

    def _route_after_capture(self, state: ScanGraphState) -> str:
        return "extract" if state.get("frame") is not None else "fail"

    async def _extract_node(self, state: ScanGraphState) -> Dict[str, Any]:
        """
        Run extraction with the strategy decided at scan start.

        An accelerated failure is recovered locally: the partial output is
        dropped and the basic strategy runs on the same frame.
        """
        self._machine.transition(ScanState.EXTRACTING)
        frame = state["frame"]

        if state.get("use_accelerated"):
            try:
                features = await asyncio.to_thread(
                    extract_features, self._accelerated, frame
                )
                return {"features": features}
            except Exception as e:
                self._fallback_count += 1
                logger.warning(
                    f"Accelerated extraction failed, falling back to basic strategy: {e}"
                )

        features = await asyncio.to_thread(extract_features, self._basic, frame)
        return {"features": features}

    async def _score_node(self, state: ScanGraphState) -> Dict[str, Any]:
        self._machine.transition(ScanState.SCORING)
        features = state["features"]

        return {
            "safety_score": compute_safety_score(
                features.brightness, features.environment, features.structure
            ),
            "recommendations": generate_recommendations(
                features.brightness, features.environment, features.structure
            ),
        }

    async def _complete_node(self, state: ScanGraphState) -> Dict[str, Any]:
        features = state["features"]
        score = state["safety_score"]

        result = AnalysisResult(
            brightness=features.brightness,
            environment=features.environment,
            structure=features.structure,
            safety_score=score,
            safety_status=classify_safety(score),
            recommendations=tuple(state["recommendations"]),
            method=features.method,
            timestamp=time.time(),
        )

        self._machine.transition(ScanState.COMPLETED)
        self._completed_count += 1
        logger.info(
            f"Scan completed: score={score}, status={result.safety_status.value}, "
            f"method={result.method.value}, "
            f"lighting={features.brightness.status.value}, "
            f"environment={features.environment.classification.value}, "
            f"structure={features.structure.classification.value}"
        )
        return {"result": result}

    async def _fail_node(self, state: ScanGraphState) -> Dict[str, Any]:
        result = build_failure_result(
            state.get("error") or "Scan failed",
            state.get("advice") or ANALYSIS_FAILED_ADVICE,
        )
        self._machine.transition(ScanState.FAILED)
        self._failed_count += 1
        return {"result": result}

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    async def scan(self, source: FrameSource) -> AnalysisResult:
        """
        Run one scan to completion or failure.

        Args:
            source: Frame source to capture from

        Returns:
            AnalysisResult (method=error on a failed capture)

        Raises:
            ScanRejectedError: If a scan is in flight or awaiting reset
            InvalidFrameError: If the source hands over a malformed frame

        Once the scan has started, any exception leaves the orchestrator
        in FAILED, ready for reset().
        """
        self._machine.begin()

        # Read once; a later flip does not affect this scan
        use_accelerated = (
            self._negotiator is not None and self._negotiator.accelerated_ready
        )
        logger.debug(f"Scan started: accelerated={use_accelerated}")

        try:
            final_state = await self._graph.ainvoke({
                "source": source,
                "use_accelerated": use_accelerated,
            })
        except Exception:
            if self._machine.in_flight:
                self._machine.abort()
                self._failed_count += 1
            raise

        result: AnalysisResult = final_state["result"]
        self._last_result = result

        if self._on_complete is not None:
            try:
                self._on_complete(result)
            except Exception as e:
                logger.error(f"Result consumer failed: {e}", exc_info=True)

        return result

    def reset(self) -> None:
        """Return to IDLE after a finished scan ("retake")."""
        self._machine.reset()
        self._last_result = None
        logger.debug("ScanOrchestrator reset")

    @property
    def state(self) -> ScanState:
        return self._machine.state

    @property
    def in_flight(self) -> bool:
        return self._machine.in_flight

    @property
    def history(self) -> List[ScanState]:
        """States entered during the most recent scan."""
        return list(self._machine.history)

    @property
    def last_result(self) -> Optional[AnalysisResult]:
        return self._last_result

    def get_metrics(self) -> Dict[str, Any]:
        """Get orchestrator metrics for observability."""
        return {
            "state": self._machine.state.value,
            "scans_completed": self._completed_count,
            "scans_failed": self._failed_count,
            "accelerated_fallbacks": self._fallback_count,
            "accelerated_ready": (
                self._negotiator.accelerated_ready if self._negotiator else False
            ),
        }
