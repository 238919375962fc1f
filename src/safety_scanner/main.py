"""
SafetyScanner Service
=====================

FastAPI adapter around the scan orchestrator.

The service is a thin outer surface: it decodes a posted screenshot,
runs one scan and returns the AnalysisResult. It stores nothing.

Endpoints:
    GET  /        - Service information
    GET  /health  - Liveness probe
    GET  /ready   - Readiness + accelerated backend state
    GET  /metrics - Orchestrator and negotiator counters
    POST /scan    - Scan one base64-encoded image
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from safety_scanner.config import settings, setup_logging
from safety_scanner.extraction import CapabilityNegotiator
from safety_scanner.frame import EncodedFrameSource, InvalidFrameError
from safety_scanner.orchestrator import ScanOrchestrator, ScanRejectedError


logger = logging.getLogger(__name__)


# =============================================================================
# Global State
# =============================================================================

_negotiator: Optional[CapabilityNegotiator] = None
_orchestrator: Optional[ScanOrchestrator] = None
_startup_time: float = 0.0


def get_negotiator() -> Optional[CapabilityNegotiator]:
    return _negotiator

def get_orchestrator() -> Optional[ScanOrchestrator]:
    return _orchestrator


# =============================================================================
# Request Models
# =============================================================================

class ScanRequest(BaseModel):
    """Body of POST /scan."""

    image: str = Field(
        default="",
        description="Base64-encoded JPEG/PNG or data URL; empty means no capture",
    )


# =============================================================================
# Lifespan Management
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan manager."""
    global _negotiator, _orchestrator, _startup_time

    setup_logging(settings)

    _startup_time = time.time()
    logger.info(f"Starting {settings.service.name} {settings.service.version}")

    _negotiator = CapabilityNegotiator(
        timeout_seconds=settings.scanner.init_timeout_seconds,
        enabled=settings.scanner.accelerated_enabled,
    )
    init_task = _negotiator.start()
    _orchestrator = ScanOrchestrator(_negotiator)

    yield

    logger.info("Shutting down...")
    if not init_task.done():
        init_task.cancel()
    logger.info("Shutdown complete")


# =============================================================================
# FastAPI Application
# =============================================================================

app = FastAPI(
    title="SafetyScanner",
    description="Environmental safety scan for single camera frames",
    version=settings.service.version,
    lifespan=lifespan,
)


# =============================================================================
# HTTP Endpoints
# =============================================================================

@app.get("/")
async def root() -> JSONResponse:
    """Service information endpoint."""
    return JSONResponse({
        "service": "SafetyScanner",
        "version": settings.service.version,
        "name": settings.service.name,
        "status": "running",
    })


@app.get("/health")
async def health() -> JSONResponse:
    """Liveness probe - always 200 while the process runs."""
    return JSONResponse({
        "status": "healthy",
        "uptime_seconds": round(time.time() - _startup_time, 1),
    })


@app.get("/ready")
async def ready() -> JSONResponse:
    """
    Readiness probe.

    Always 200 once started: the basic strategy needs no initialization,
    so the accelerated backend state is informational.
    """
    negotiator = get_negotiator()
    return JSONResponse({
        "status": "ready",
        "accelerated_backend": negotiator.state.value if negotiator else "uninitialized",
        "accelerated_ready": negotiator.accelerated_ready if negotiator else False,
    })


@app.get("/metrics")
async def metrics() -> JSONResponse:
    """Detailed metrics for observability."""
    orchestrator = get_orchestrator()
    negotiator = get_negotiator()
    return JSONResponse({
        "uptime_seconds": round(time.time() - _startup_time, 1),
        "orchestrator": orchestrator.get_metrics() if orchestrator else {},
        "capability": negotiator.get_metrics() if negotiator else {},
    })


@app.post("/scan")
async def scan(request: ScanRequest) -> JSONResponse:
    """
    Scan one image.

    Returns the AnalysisResult; an empty or undecodable image yields an
    error result (method=error, score 50), not an HTTP error. A request
    made while another scan is in flight gets 409. Any other failure is a
    500, and the scanner is reset either way so the next request can run.
    """
    orchestrator = get_orchestrator()
    if orchestrator is None:
        raise HTTPException(status_code=503, detail="Scanner not initialized")

    try:
        result = await orchestrator.scan(EncodedFrameSource(request.image))
    except ScanRejectedError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except InvalidFrameError as e:
        raise HTTPException(status_code=422, detail=str(e))
    finally:
        # Leave an in-flight scan (the one that caused a 409) alone
        if not orchestrator.in_flight:
            orchestrator.reset()

    return JSONResponse(result.model_dump(mode="json"))


# =============================================================================
# Main Entry Point
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    # PORT and SAFETY_SCAN_PORT are already folded into settings
    uvicorn.run(
        "safety_scanner.main:app",
        host=settings.server.host,
        port=settings.server.port,
        reload=False,
    )
