"""
CCR availability checks.

Before reading /_ccr/stats a collector confirms, in this order, that:
1. The cluster license includes CCR (trial, platinum, or enterprise)
2. CCR is enabled in the cluster's X-Pack feature flags
3. The cluster version ships the CCR stats API

The order matters for diagnostics: an operator without the right license
should not be told to upgrade their cluster. Each failed check produces a
human-readable message and skips the remaining checks.

Results are never cached. License, flags, and version can all change
between polls.
"""

from dataclasses import dataclass
from typing import Callable

from esmon_ccr.exceptions import UpstreamError
from esmon_ccr.version import (
    CCR_STATS_API_AVAILABLE_VERSION,
    Version,
    is_feature_available,
)
from esmon_protocols import FeatureFlagsProviderProtocol, LicenseProviderProtocol

CCR_LICENSE_TYPES = ("trial", "platinum", "enterprise")


@dataclass
class AvailabilityChecker:
    """
    Decides whether CCR stats can be collected this cycle.

    Attributes:
        licenses: Provider for the active cluster license.
        features: Provider for X-Pack feature flags.
        name: Fully qualified collector name used in messages.
        required_version: Minimum version that ships the stats API.
        version_check: Version comparison function. Injectable so tests can
            observe whether the comparison ran.

    Example:
        checker = AvailabilityChecker(licenses=client, features=client)
        message = await checker.check_availability("8.11.1")
        if message:
            logger.warning(message)
    """

    licenses: LicenseProviderProtocol
    features: FeatureFlagsProviderProtocol
    name: str = "elasticsearch.ccr"
    required_version: Version = CCR_STATS_API_AVAILABLE_VERSION
    version_check: Callable[[Version, Version], bool] = is_feature_available

    async def check_availability(self, cluster_version: str) -> str:
        """
        Check license, feature flag, and version gates.

        Args:
            cluster_version: Version string reported by the cluster.

        Returns:
            Empty string if CCR stats may be collected, otherwise a message
            explaining why not and how to fix it.

        Raises:
            UpstreamError: If the license or feature flags cannot be read,
                or the reported version cannot be parsed.
        """
        try:
            license_info = await self.licenses.get_license()
        except UpstreamError:
            raise
        except Exception as e:
            raise UpstreamError("license", str(e)) from e

        if not license_info.is_one_of(*CCR_LICENSE_TYPES):
            return (
                "the CCR feature is available with a platinum or enterprise "
                f"Elasticsearch license. You currently have a {license_info.type} "
                f"license. Either upgrade your license or remove the {self.name} "
                "collector from your configuration."
            )

        try:
            flags = await self.features.get_xpack()
        except UpstreamError:
            raise
        except Exception as e:
            raise UpstreamError("xpack features", str(e)) from e

        if not flags.ccr_enabled:
            return "the CCR feature is not enabled on your Elasticsearch cluster."

        try:
            current = Version.parse(cluster_version)
        except ValueError as e:
            raise UpstreamError("version", str(e)) from e

        if not self.version_check(current, self.required_version):
            return (
                f"the {self.name} collector is only supported with Elasticsearch "
                f">= {self.required_version}. You are currently running "
                f"Elasticsearch {cluster_version}."
            )

        return ""
