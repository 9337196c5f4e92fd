"""
Elasticsearch API client for CCR stats collection.

This module provides the ElasticsearchClient class, which satisfies every
collaborator protocol a CCR collector needs: cluster info, license, X-Pack
feature flags, raw stats reads, and the node/master lookups used for
scope-based skipping.

ElasticsearchClient receives an injected httpx.AsyncClient with base_url set
to the cluster (or node) URL. Authentication, TLS, and timeouts are
configured on that client. All failures are raised as UpstreamError.

Elasticsearch API Documentation:
- https://www.elastic.co/guide/en/elasticsearch/reference/current/ccr-get-stats.html
- https://www.elastic.co/guide/en/elasticsearch/reference/current/get-license.html
"""

from dataclasses import dataclass
from typing import Any

import httpx
from pydantic import ValidationError

from esmon_ccr.exceptions import UpstreamError
from esmon_ccr.types import (
    ESInfoResponse,
    ESLicenseResponse,
    LocalNodesResponse,
    MasterNodeResponse,
    XPackResponse,
)
from esmon_protocols import ClusterInfo, FeatureFlags, LicenseInfo

CCR_STATS_PATH = "/_ccr/stats"


@dataclass
class ElasticsearchClient:
    """
    Elasticsearch API client with injected httpx client.

    Attributes:
        http: Pre-configured httpx.AsyncClient with base_url set to the
            Elasticsearch endpoint.

    Example:
        async with httpx.AsyncClient(base_url="http://es:9200") as http:
            client = ElasticsearchClient(http=http)
            info = await client.get_info()
            print(f"{info.name} runs Elasticsearch {info.version}")
    """

    http: httpx.AsyncClient

    async def get(self, path: str) -> bytes:
        """
        Read the raw body of any API path.

        Used as the stats transport: the CCR mapper parses the bytes itself
        so that schema problems surface as SchemaError, not UpstreamError.

        Raises:
            UpstreamError: On connection failures or HTTP errors.
        """
        response = await self._request(path, operation=path)
        return response.content

    async def get_info(self) -> ClusterInfo:
        """
        Get identity and version of the connected cluster.

        Calls GET / and converts the response to a ClusterInfo.

        Raises:
            UpstreamError: On HTTP errors or malformed response data.
        """
        data = await self._get_model("/", ESInfoResponse, operation="cluster info")
        return ClusterInfo(
            name=data.cluster_name,
            id=data.cluster_uuid,
            version=data.version.number,
        )

    async def get_license(self) -> LicenseInfo:
        """
        Get the active cluster license.

        Raises:
            UpstreamError: On HTTP errors or malformed response data.
        """
        data = await self._get_model("/_license", ESLicenseResponse, operation="license")
        return LicenseInfo(type=data.license.type, status=data.license.status)

    async def get_xpack(self) -> FeatureFlags:
        """
        Get X-Pack feature flags.

        Raises:
            UpstreamError: On HTTP errors or malformed response data.
        """
        data = await self._get_model("/_xpack", XPackResponse, operation="xpack features")
        return FeatureFlags(
            ccr_available=data.features.ccr.available,
            ccr_enabled=data.features.ccr.enabled,
        )

    async def get_local_node_id(self) -> str:
        """
        Get the id of the node this client is connected to.

        Raises:
            UpstreamError: On HTTP errors, malformed data, or an empty node map.
        """
        data = await self._get_model(
            "/_nodes/_local/nothing", LocalNodesResponse, operation="local node"
        )
        if not data.nodes:
            raise UpstreamError("local node", "no nodes in response")
        return next(iter(data.nodes))

    async def get_master_node_id(self) -> str | None:
        """
        Get the id of the elected master node.

        Returns None while no master is elected.

        Raises:
            UpstreamError: On HTTP errors or malformed response data.
        """
        data = await self._get_model(
            "/_cluster/state/master_node", MasterNodeResponse, operation="master node"
        )
        return data.master_node

    async def _get_model(self, path: str, model: type[Any], operation: str) -> Any:
        """GET a path and validate its JSON body against a response model."""
        response = await self._request(path, operation=operation)
        try:
            return model.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            # ValueError covers JSON decode failures
            raise UpstreamError(operation, f"malformed response from {path}: {e}") from e

    async def _request(self, path: str, operation: str) -> httpx.Response:
        try:
            response = await self.http.get(path)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise UpstreamError(
                operation, f"HTTP {e.response.status_code} from {path}"
            ) from e
        except httpx.HTTPError as e:
            raise UpstreamError(operation, f"request to {path} failed: {e}") from e
        return response
