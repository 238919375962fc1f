"""
Capability Negotiator Tests
===========================

Background initialization of the accelerated backend.
"""

import asyncio
import time

import pytest

from safety_scanner.extraction import CapabilityNegotiator
from safety_scanner.models import CapabilityState


class TestCapabilityNegotiator:
    """Fire-once lifecycle: UNINITIALIZED → INITIALIZING → READY | FAILED."""

    def test_starts_uninitialized(self):
        negotiator = CapabilityNegotiator(loader=lambda: None)
        assert negotiator.state == CapabilityState.UNINITIALIZED
        assert negotiator.accelerated_ready is False

    def test_rejects_non_positive_timeout(self):
        with pytest.raises(ValueError):
            CapabilityNegotiator(loader=lambda: None, timeout_seconds=0)

    @pytest.mark.asyncio
    async def test_successful_loader_becomes_ready(self):
        negotiator = CapabilityNegotiator(loader=lambda: None)
        negotiator.start()

        assert await negotiator.wait(5) == CapabilityState.READY
        assert negotiator.accelerated_ready is True
        assert negotiator.failure_reason is None

    @pytest.mark.asyncio
    async def test_start_does_not_block(self):
        """start() returns before a slow loader finishes."""
        negotiator = CapabilityNegotiator(loader=lambda: time.sleep(0.3))
        negotiator.start()
        await asyncio.sleep(0.05)

        assert negotiator.state == CapabilityState.INITIALIZING
        assert negotiator.accelerated_ready is False
        assert await negotiator.wait(5) == CapabilityState.READY

    @pytest.mark.asyncio
    async def test_loader_error_fails(self):
        def broken_loader():
            raise RuntimeError("backend library missing")

        negotiator = CapabilityNegotiator(loader=broken_loader)
        negotiator.start()

        assert await negotiator.wait(5) == CapabilityState.FAILED
        assert negotiator.accelerated_ready is False
        assert "backend library missing" in negotiator.failure_reason

    @pytest.mark.asyncio
    async def test_timeout_fails(self):
        negotiator = CapabilityNegotiator(
            loader=lambda: time.sleep(1.0),
            timeout_seconds=0.05,
        )
        negotiator.start()

        assert await negotiator.wait(5) == CapabilityState.FAILED
        assert "timed out" in negotiator.failure_reason

    @pytest.mark.asyncio
    async def test_disabled_never_calls_loader(self):
        calls = []
        negotiator = CapabilityNegotiator(loader=lambda: calls.append(1), enabled=False)
        negotiator.start()

        assert await negotiator.wait(5) == CapabilityState.FAILED
        assert calls == []

    @pytest.mark.asyncio
    async def test_start_is_idempotent(self):
        calls = []
        negotiator = CapabilityNegotiator(loader=lambda: calls.append(1))

        first = negotiator.start()
        second = negotiator.start()
        await negotiator.wait(5)

        assert first is second
        assert calls == [1]

    @pytest.mark.asyncio
    async def test_wait_without_start(self):
        negotiator = CapabilityNegotiator(loader=lambda: None)
        assert await negotiator.wait(0.01) == CapabilityState.UNINITIALIZED

    @pytest.mark.asyncio
    async def test_wait_timeout_leaves_initializing(self):
        negotiator = CapabilityNegotiator(loader=lambda: time.sleep(0.3))
        negotiator.start()

        assert await negotiator.wait(0.01) == CapabilityState.INITIALIZING
        assert await negotiator.wait(5) == CapabilityState.READY

    @pytest.mark.asyncio
    async def test_metrics(self):
        negotiator = CapabilityNegotiator(loader=lambda: None)
        negotiator.start()
        await negotiator.wait(5)

        assert negotiator.get_metrics() == {
            "state": "ready",
            "accelerated_ready": True,
            "failure_reason": None,
        }
