"""
Tests for ElasticsearchClient and scope-based skipping.

These tests verify the ElasticsearchClient correctly:
- Converts GET /, /_license, and /_xpack responses to esmon_protocols types
- Returns raw bytes for stats reads
- Raises UpstreamError on HTTP errors, connection failures, and malformed data

And that MasterOnlySkipDecider skips only non-master nodes in node scope.
"""

import httpx
import pytest

from esmon_ccr.es_client import ElasticsearchClient
from esmon_ccr.exceptions import UpstreamError
from esmon_ccr.scope import MasterOnlySkipDecider, Scope
from esmon_protocols import ClusterInfo, FeatureFlags, LicenseInfo


def make_client(responses: dict[str, httpx.Response]) -> ElasticsearchClient:
    """Client whose transport answers from a path -> response mapping."""

    def handler(request: httpx.Request) -> httpx.Response:
        return responses.get(request.url.path, httpx.Response(404))

    http = httpx.AsyncClient(
        base_url="http://es:9200", transport=httpx.MockTransport(handler)
    )
    return ElasticsearchClient(http=http)


@pytest.fixture
def info_response():
    return {
        "name": "node-1",
        "cluster_name": "prod-eu",
        "cluster_uuid": "w2sXw6bYQ9KcyYdgG1VnTA",
        "version": {"number": "8.11.1", "build_flavor": "default"},
        "tagline": "You Know, for Search",
    }


class TestGetInfo:
    """Tests for ElasticsearchClient.get_info()."""

    @pytest.mark.asyncio
    async def test_returns_cluster_info(self, info_response):
        client = make_client({"/": httpx.Response(200, json=info_response)})

        info = await client.get_info()

        assert info == ClusterInfo(
            name="prod-eu", id="w2sXw6bYQ9KcyYdgG1VnTA", version="8.11.1"
        )

    @pytest.mark.asyncio
    async def test_http_error_raises_upstream_error(self):
        client = make_client({"/": httpx.Response(503)})

        with pytest.raises(UpstreamError) as exc_info:
            await client.get_info()

        assert exc_info.value.operation == "cluster info"
        assert "503" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_malformed_response_raises_upstream_error(self):
        client = make_client({"/": httpx.Response(200, json={"name": "node-1"})})

        with pytest.raises(UpstreamError):
            await client.get_info()

    @pytest.mark.asyncio
    async def test_non_json_response_raises_upstream_error(self):
        client = make_client({"/": httpx.Response(200, content=b"<html>")})

        with pytest.raises(UpstreamError):
            await client.get_info()

    @pytest.mark.asyncio
    async def test_connection_error_raises_upstream_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        http = httpx.AsyncClient(base_url="http://es:9200", transport=httpx.MockTransport(handler))
        client = ElasticsearchClient(http=http)

        with pytest.raises(UpstreamError) as exc_info:
            await client.get_info()

        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


class TestLicenseAndXPack:
    """Tests for get_license() and get_xpack()."""

    @pytest.mark.asyncio
    async def test_get_license(self):
        client = make_client(
            {
                "/_license": httpx.Response(
                    200, json={"license": {"type": "platinum", "status": "active", "uid": "x"}}
                )
            }
        )

        assert await client.get_license() == LicenseInfo(type="platinum", status="active")

    @pytest.mark.asyncio
    async def test_get_license_unauthorized(self):
        client = make_client({"/_license": httpx.Response(401)})

        with pytest.raises(UpstreamError) as exc_info:
            await client.get_license()

        assert exc_info.value.operation == "license"

    @pytest.mark.asyncio
    async def test_get_xpack(self):
        client = make_client(
            {
                "/_xpack": httpx.Response(
                    200,
                    json={
                        "build": {},
                        "features": {
                            "ccr": {"available": True, "enabled": True},
                            "ml": {"available": True, "enabled": False},
                        },
                    },
                )
            }
        )

        assert await client.get_xpack() == FeatureFlags(ccr_available=True, ccr_enabled=True)

    @pytest.mark.asyncio
    async def test_get_xpack_without_ccr_feature(self):
        """Clusters that predate CCR report no ccr entry at all."""
        client = make_client({"/_xpack": httpx.Response(200, json={"features": {}})})

        assert await client.get_xpack() == FeatureFlags(ccr_available=False, ccr_enabled=False)


class TestRawGet:
    """Tests for the raw stats transport."""

    @pytest.mark.asyncio
    async def test_returns_body_bytes(self):
        client = make_client({"/_ccr/stats": httpx.Response(200, content=b'{"follow_stats": {}}')})

        assert await client.get("/_ccr/stats") == b'{"follow_stats": {}}'

    @pytest.mark.asyncio
    async def test_http_error_raises_upstream_error(self):
        client = make_client({"/_ccr/stats": httpx.Response(403)})

        with pytest.raises(UpstreamError):
            await client.get("/_ccr/stats")


class TestMasterOnlySkipDecider:
    """Tests for scope-based skip decisions."""

    @staticmethod
    def _client(local_id: str, master_id: str | None) -> ElasticsearchClient:
        return make_client(
            {
                "/_nodes/_local/nothing": httpx.Response(
                    200, json={"_nodes": {"total": 1}, "nodes": {local_id: {}}}
                ),
                "/_cluster/state/master_node": httpx.Response(
                    200, json={"cluster_name": "prod-eu", "master_node": master_id}
                ),
            }
        )

    @pytest.mark.asyncio
    async def test_master_node_does_not_skip(self):
        decider = MasterOnlySkipDecider(client=self._client("abc", "abc"))

        assert await decider.should_skip_fetch() is False

    @pytest.mark.asyncio
    async def test_non_master_node_skips(self):
        decider = MasterOnlySkipDecider(client=self._client("abc", "xyz"))

        assert await decider.should_skip_fetch() is True

    @pytest.mark.asyncio
    async def test_no_elected_master_skips(self):
        decider = MasterOnlySkipDecider(client=self._client("abc", None))

        assert await decider.should_skip_fetch() is True

    @pytest.mark.asyncio
    async def test_cluster_scope_never_skips(self):
        # No responses configured: any request would 404
        decider = MasterOnlySkipDecider(client=make_client({}), scope=Scope.CLUSTER)

        assert await decider.should_skip_fetch() is False

    @pytest.mark.asyncio
    async def test_master_lookup_failure_raises(self):
        decider = MasterOnlySkipDecider(client=make_client({}))

        with pytest.raises(UpstreamError):
            await decider.should_skip_fetch()

    @pytest.mark.asyncio
    async def test_empty_node_map_raises(self):
        client = make_client(
            {"/_nodes/_local/nothing": httpx.Response(200, json={"nodes": {}})}
        )

        with pytest.raises(UpstreamError):
            await MasterOnlySkipDecider(client=client).should_skip_fetch()
