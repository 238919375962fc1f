#!/usr/bin/env python3
"""
Scan Image Script
=================

Standalone script to run one safety scan over an image file.

This script:
    1. Starts the capability negotiator (unless --basic-only)
    2. Optionally waits for the accelerated backend to settle
    3. Runs one scan over the image
    4. Prints the AnalysisResult as JSON

Prerequisites:
    - Install the package: pip install -e .

Usage:
    python scripts/scan_image.py hallway.jpg
    python scripts/scan_image.py hallway.jpg --basic-only
    python scripts/scan_image.py hallway.jpg --wait 5
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from safety_scanner.extraction import CapabilityNegotiator
from safety_scanner.frame import ImageDecodeError, StaticFrameSource, decode_image_bytes
from safety_scanner.models import AnalysisResult
from safety_scanner.orchestrator import ScanOrchestrator, build_failure_result
from safety_scanner.scoring import ANALYSIS_FAILED_ADVICE


# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%S",
)
logger = logging.getLogger(__name__)


async def run_scan(path: Path, basic_only: bool, wait_seconds: float) -> AnalysisResult:
    """
    Run one scan over an image file.

    Args:
        path: Image file to scan
        basic_only: Skip accelerated backend initialization
        wait_seconds: Time to let the accelerated backend initialize

    Returns:
        The scan's AnalysisResult
    """
    negotiator = None
    if not basic_only:
        negotiator = CapabilityNegotiator()
        negotiator.start()
        if wait_seconds > 0:
            state = await negotiator.wait(wait_seconds)
            logger.info(f"Accelerated backend: {state.value}")

    try:
        frame = decode_image_bytes(path.read_bytes())
    except ImageDecodeError as e:
        logger.error(f"Could not decode {path}: {e}")
        return build_failure_result(f"Undecodable frame: {e}", ANALYSIS_FAILED_ADVICE)

    logger.info(f"Scanning {path} ({frame.width}x{frame.height})")
    orchestrator = ScanOrchestrator(negotiator)
    return await orchestrator.scan(StaticFrameSource(frame))


def main():
    parser = argparse.ArgumentParser(
        description="Run one environmental safety scan over an image file"
    )
    parser.add_argument(
        "image",
        type=Path,
        help="Path to a JPEG/PNG image",
    )
    parser.add_argument(
        "--basic-only",
        action="store_true",
        help="Use the basic strategy only",
    )
    parser.add_argument(
        "--wait",
        type=float,
        default=5.0,
        help="Seconds to wait for the accelerated backend (default: 5)",
    )

    args = parser.parse_args()

    if not args.image.exists():
        logger.error(f"No such file: {args.image}")
        sys.exit(2)

    result = asyncio.run(run_scan(
        path=args.image,
        basic_only=args.basic_only,
        wait_seconds=args.wait,
    ))

    print(json.dumps(result.model_dump(mode="json"), indent=2))

    # Exit with appropriate code
    sys.exit(0 if result.error is None else 1)


if __name__ == "__main__":
    main()
