"""
Protocol definitions for the esmon metrics collectors.

This package provides the generic Protocol definitions and data types shared
by every collector. It has zero dependencies on other esmon-* packages.

Key protocols:
- TransportProtocol: Raw reads against the cluster API
- ClusterInfoProviderProtocol, LicenseProviderProtocol,
  FeatureFlagsProviderProtocol: Cluster metadata lookups
- SkipDecisionProtocol: External cadence/backoff decisions
- EventSinkProtocol: Downstream event delivery

Key types:
- ClusterInfo, LicenseInfo, FeatureFlags: Cluster metadata
- MetricEvent: Normalized metric event
"""

from esmon_protocols.events import EventSinkProtocol, MetricEvent
from esmon_protocols.providers import (
    ClusterInfoProviderProtocol,
    FeatureFlagsProviderProtocol,
    LicenseProviderProtocol,
    SkipDecisionProtocol,
    TransportProtocol,
)
from esmon_protocols.types import ClusterId, ClusterInfo, FeatureFlags, LicenseInfo

__all__ = [
    # Protocols
    "TransportProtocol",
    "ClusterInfoProviderProtocol",
    "LicenseProviderProtocol",
    "FeatureFlagsProviderProtocol",
    "SkipDecisionProtocol",
    "EventSinkProtocol",
    # Data types
    "ClusterId",
    "ClusterInfo",
    "LicenseInfo",
    "FeatureFlags",
    "MetricEvent",
]
