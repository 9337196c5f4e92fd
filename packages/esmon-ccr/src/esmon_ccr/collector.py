"""
CCRCollector - one collection cycle of cross-cluster replication stats.

Each cycle:
1. Asks the skip decider whether to do any work
2. Reads cluster identity and version
3. Checks license, feature flag, and version gates
4. If CCR is unavailable: warns at most once per minute and ends the cycle
5. Otherwise reads /_ccr/stats, maps it to events, and publishes them

Unavailability is an expected, long-lived state (e.g., a cluster on a basic
license), not an error. Warning every cycle would flood the logs, so the
warning is throttled per collector instance. The throttle window does not
depend on the message: a different reason inside the window stays silent.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Callable

from esmon_ccr.availability import AvailabilityChecker
from esmon_ccr.es_client import CCR_STATS_PATH
from esmon_ccr.exceptions import UpstreamError
from esmon_ccr.mapping import map_events
from esmon_protocols import (
    ClusterInfoProviderProtocol,
    EventSinkProtocol,
    MetricEvent,
    SkipDecisionProtocol,
    TransportProtocol,
)

# Minimum seconds between two unavailability warnings
WARNING_INTERVAL = 60.0


@dataclass
class PollState:
    """
    State carried across cycles by one collector instance.

    Attributes:
        last_warned_at: Monotonic clock reading of the last unavailability
            warning, None if never.
    """

    last_warned_at: float | None = None

    def should_warn(self, now: float, interval: float = WARNING_INTERVAL) -> bool:
        """Return True if more than interval seconds have passed since the last warning."""
        return self.last_warned_at is None or now - self.last_warned_at > interval

    def mark_warned(self, now: float) -> None:
        """Record a warning. The timestamp never moves backwards."""
        if self.last_warned_at is None or now > self.last_warned_at:
            self.last_warned_at = now


@dataclass
class CCRCollector:
    """
    Poll coordinator for CCR stats.

    Collaborators are injected so one collector can be built per monitored
    cluster. Instances share no state.

    Attributes:
        cluster: Provider of cluster identity and version.
        checker: License/feature/version gate.
        transport: Raw reader used for /_ccr/stats.
        skip: External skip decision provider.
        sink: Receives the events of every successful cycle.
        extended: Emit the full field set.
        logger: Receives throttled unavailability warnings.
        now: Monotonic clock (seconds) used for warning throttling.
        state: Warning throttle state for this instance.

    Example:
        collector = create_ccr_collector(settings)
        events = await collector.run_cycle()
    """

    cluster: ClusterInfoProviderProtocol
    checker: AvailabilityChecker
    transport: TransportProtocol
    skip: SkipDecisionProtocol
    sink: EventSinkProtocol | None = None
    extended: bool = False
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger(__name__))
    now: Callable[[], float] = time.monotonic
    state: PollState = field(default_factory=PollState)

    async def run_cycle(self) -> list[MetricEvent]:
        """
        Run one collection cycle.

        Returns:
            Events produced this cycle. Empty when the cycle was skipped,
            CCR is unavailable, or the cluster has no follower shards.

        Raises:
            UpstreamError: If any cluster API read fails.
            SchemaError: If the stats payload has an unexpected shape.
        """
        if await self.skip.should_skip_fetch():
            return []

        try:
            info = await self.cluster.get_info()
        except UpstreamError:
            raise
        except Exception as e:
            raise UpstreamError("cluster info", str(e)) from e

        message = await self.checker.check_availability(info.version)
        if message:
            now = self.now()
            if self.state.should_warn(now):
                self.state.mark_warned(now)
                self.logger.warning(message)
            return []

        try:
            content = await self.transport.get(CCR_STATS_PATH)
        except UpstreamError:
            raise
        except Exception as e:
            raise UpstreamError("ccr stats", str(e)) from e

        events = map_events(info, content, extended=self.extended)
        if self.sink is not None:
            self.sink.publish(events)
        return events
