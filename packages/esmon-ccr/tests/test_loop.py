"""
Tests for CollectorLoop.

These tests verify the loop:
- Runs cycles until stopped
- Keeps running after a failed cycle and logs the failure
"""

import asyncio
import logging
from unittest.mock import AsyncMock

import pytest

from esmon_ccr.exceptions import UpstreamError
from esmon_ccr.loop import CollectorLoop


def make_loop(side_effect) -> CollectorLoop:
    collector = AsyncMock()
    collector.run_cycle.side_effect = side_effect
    return CollectorLoop(collector, interval_seconds=0.01, install_signal_handlers=False)


@pytest.mark.asyncio
async def test_runs_until_stopped():
    results = iter([[], [], []])
    loop = None

    async def cycle():
        try:
            return next(results)
        except StopIteration:
            loop.stop()
            return []

    loop = make_loop(cycle)

    await asyncio.wait_for(loop.run(), timeout=5)

    assert loop.cycle_count == 4
    assert loop.failure_count == 0


@pytest.mark.asyncio
async def test_failed_cycle_does_not_stop_loop(caplog):
    calls = 0
    loop = None

    async def cycle():
        nonlocal calls
        calls += 1
        if calls == 1:
            raise UpstreamError("license", "HTTP 401 from /_license")
        loop.stop()
        return []

    loop = make_loop(cycle)

    with caplog.at_level(logging.ERROR, logger="esmon_ccr.loop"):
        await asyncio.wait_for(loop.run(), timeout=5)

    assert loop.cycle_count == 2
    assert loop.failure_count == 1
    assert "Collection cycle failed" in caplog.text
    assert "HTTP 401" in caplog.text


@pytest.mark.asyncio
async def test_stop_before_run_runs_no_cycles():
    loop = make_loop(None)
    loop.stop()

    await asyncio.wait_for(loop.run(), timeout=5)

    assert loop.cycle_count == 0
    loop.collector.run_cycle.assert_not_awaited()


@pytest.mark.asyncio
async def test_heartbeat_reports_cycle_stats(caplog):
    loop = None

    async def cycle():
        loop.stop()
        return ["event-a", "event-b"]

    loop = make_loop(cycle)

    with caplog.at_level(logging.DEBUG, logger="esmon_ccr.loop"):
        await asyncio.wait_for(loop.run(), timeout=5)

    assert "Cycle 1 complete: 2 events, 0 failed cycles so far" in caplog.text
