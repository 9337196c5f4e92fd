"""
Generic types for the esmon collector system.

This module defines the data structures that flow between a collector and
its collaborators: what the monitored cluster reports about itself, which
license it runs under, and which optional subsystems are switched on.

All types use @dataclass for simplicity. Cluster-facing types are frozen
because they are fetched fresh every poll cycle and never edited.
"""

from dataclasses import dataclass


ClusterId = str
"""Unique identifier (UUID) of a monitored cluster."""


@dataclass(frozen=True)
class ClusterInfo:
    """
    Identity of the cluster a collector is pointed at.

    Attributes:
        name: Human-readable cluster name (e.g., "prod-eu").
        id: Cluster UUID as reported by the cluster itself.
        version: Reported software version string (e.g., "8.11.1",
            "7.0.0-beta1").
    """

    name: str
    id: ClusterId
    version: str


@dataclass(frozen=True)
class LicenseInfo:
    """
    Active license of a cluster.

    Attributes:
        type: License type tag. Known values:
            - "trial", "platinum", "enterprise": commercial features enabled
            - "basic", "gold", "standard": limited feature set
            - "missing": no license installed
        status: License status (e.g., "active", "expired").
    """

    type: str
    status: str = "active"

    def is_one_of(self, *types: str) -> bool:
        """Return True if the license type matches any of the given tags."""
        return self.type in types


@dataclass(frozen=True)
class FeatureFlags:
    """
    Capability flags for optional cluster subsystems.

    Attributes:
        ccr_available: Cross-cluster replication is licensed on the cluster.
        ccr_enabled: Cross-cluster replication is switched on.
    """

    ccr_available: bool = False
    ccr_enabled: bool = False
