"""
Elasticsearch cross-cluster replication (CCR) stats collector.

This package polls an Elasticsearch cluster for follower shard statistics.
It includes:

- CCRCollector: One collection cycle with throttled unavailability warnings
- AvailabilityChecker: License, feature flag, and version gating
- map_events: /_ccr/stats payload to MetricEvent conversion
- ElasticsearchClient: httpx-backed implementation of the collaborator protocols
- CollectorLoop: Periodic collection daemon
"""

from esmon_ccr.availability import CCR_LICENSE_TYPES, AvailabilityChecker
from esmon_ccr.collector import WARNING_INTERVAL, CCRCollector, PollState
from esmon_ccr.config import Settings
from esmon_ccr.es_client import CCR_STATS_PATH, ElasticsearchClient
from esmon_ccr.exceptions import CollectorError, SchemaError, UpstreamError
from esmon_ccr.factory import create_ccr_collector, create_http_client
from esmon_ccr.loop import CollectorLoop
from esmon_ccr.mapping import MONITORING_INDEX, map_events
from esmon_ccr.scope import MasterOnlySkipDecider, Scope
from esmon_ccr.sinks import ConsoleEventSink, ListEventSink
from esmon_ccr.version import CCR_STATS_API_AVAILABLE_VERSION, Version

__all__ = [
    # Collection
    "CCRCollector",
    "PollState",
    "WARNING_INTERVAL",
    "CollectorLoop",
    # Availability
    "AvailabilityChecker",
    "CCR_LICENSE_TYPES",
    "Version",
    "CCR_STATS_API_AVAILABLE_VERSION",
    # Mapping
    "map_events",
    "MONITORING_INDEX",
    # Client and scope
    "ElasticsearchClient",
    "CCR_STATS_PATH",
    "MasterOnlySkipDecider",
    "Scope",
    # Sinks
    "ListEventSink",
    "ConsoleEventSink",
    # Config and wiring
    "Settings",
    "create_ccr_collector",
    "create_http_client",
    # Errors
    "CollectorError",
    "UpstreamError",
    "SchemaError",
]
