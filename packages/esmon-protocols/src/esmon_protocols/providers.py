"""
Collaborator protocol definitions.

A collector does not talk to the network itself. It is handed objects that
satisfy these protocols: something that can describe the cluster, report
its license and feature flags, read raw bytes from an API path, and decide
whether the current cycle should be skipped.

Implementations may raise any exception on failure; collectors propagate
them as cycle failures.
"""

from typing import Protocol, runtime_checkable

from esmon_protocols.types import ClusterInfo, FeatureFlags, LicenseInfo


@runtime_checkable
class TransportProtocol(Protocol):
    """
    Protocol for raw reads against the cluster API.

    The transport owns authentication, TLS, timeouts, and retries. Paths are
    relative to the cluster base URL (e.g., "/_ccr/stats").
    """

    async def get(self, path: str) -> bytes:
        """
        Perform a GET against the given path.

        Returns:
            Raw response body.
        """
        ...


@runtime_checkable
class ClusterInfoProviderProtocol(Protocol):
    """Protocol for retrieving cluster identity and version."""

    async def get_info(self) -> ClusterInfo:
        """Return the identity of the connected cluster."""
        ...


@runtime_checkable
class LicenseProviderProtocol(Protocol):
    """Protocol for retrieving the active cluster license."""

    async def get_license(self) -> LicenseInfo:
        """Return the license currently installed on the cluster."""
        ...


@runtime_checkable
class FeatureFlagsProviderProtocol(Protocol):
    """Protocol for retrieving optional subsystem capability flags."""

    async def get_xpack(self) -> FeatureFlags:
        """Return the feature flags reported by the cluster."""
        ...


@runtime_checkable
class SkipDecisionProtocol(Protocol):
    """
    Protocol for cadence/backoff decisions made outside the collector.

    Example: a collector pointed at every node of a cluster only collects
    from the elected master and skips on all other nodes.
    """

    async def should_skip_fetch(self) -> bool:
        """Return True if the current cycle should do no work."""
        ...
