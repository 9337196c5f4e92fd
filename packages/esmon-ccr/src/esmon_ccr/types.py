"""
Elasticsearch-specific Pydantic response types.

This module provides Pydantic models for parsing responses from:
- GET /                             cluster identity and version
- GET /_license                     active license
- GET /_xpack                       optional feature flags
- GET /_nodes/_local/nothing        local node id
- GET /_cluster/state/master_node   elected master id
- GET /_ccr/stats                   follower shard and auto-follow stats

These are API response types for external data validation. Internal
types (ClusterInfo, LicenseInfo, etc.) are dataclasses in esmon_protocols.

Notes:
- Follower shard records are validated one at a time so a single malformed
  record does not discard the whole payload (see FollowIndexStats.shards)
- Unknown fields are ignored; Elasticsearch adds fields between releases
"""

from typing import Any

from pydantic import BaseModel, Field


# =============================================================================
# Cluster metadata responses
# =============================================================================


class ESVersion(BaseModel):
    """The nested 'version' object of GET /."""

    number: str


class ESInfoResponse(BaseModel):
    """
    Response from GET /.

    Example response:
    {
        "name": "node-1",
        "cluster_name": "prod-eu",
        "cluster_uuid": "w2sXw6bYQ9KcyYdgG1VnTA",
        "version": {"number": "8.11.1"}
    }
    """

    name: str = ""
    cluster_name: str
    cluster_uuid: str
    version: ESVersion


class ESLicense(BaseModel):
    """The nested 'license' object of GET /_license."""

    type: str
    status: str = "active"


class ESLicenseResponse(BaseModel):
    """Response from GET /_license."""

    license: ESLicense


class XPackFeature(BaseModel):
    """Availability flags for a single X-Pack feature."""

    available: bool = False
    enabled: bool = False


class XPackFeatures(BaseModel):
    """The nested 'features' object of GET /_xpack."""

    ccr: XPackFeature = Field(default_factory=XPackFeature)


class XPackResponse(BaseModel):
    """
    Response from GET /_xpack.

    Example response:
    {"features": {"ccr": {"available": true, "enabled": true}}}
    """

    features: XPackFeatures = Field(default_factory=XPackFeatures)


class LocalNodesResponse(BaseModel):
    """
    Response from GET /_nodes/_local/nothing.

    Example response:
    {"_nodes": {"total": 1}, "cluster_name": "prod-eu", "nodes": {"abc123": {}}}
    """

    nodes: dict[str, Any]


class MasterNodeResponse(BaseModel):
    """Response from GET /_cluster/state/master_node."""

    master_node: str | None = None


# =============================================================================
# CCR stats response
# =============================================================================
# Based on: GET /_ccr/stats
# Response structure:
# {"auto_follow_stats": {...}, "follow_stats": {"indices": [{"index": ..., "shards": [...]}]}}


class FatalException(BaseModel):
    """Exception that stopped a follower shard."""

    type: str = ""
    reason: str = ""


class FollowerShardStats(BaseModel):
    """
    Replication stats for a single follower shard.

    Identifiers and the core progress counters are required; a record
    missing any of them is treated as malformed. Other counters were added
    across releases and are optional.
    """

    remote_cluster: str
    leader_index: str
    follower_index: str
    shard_id: int

    leader_global_checkpoint: int
    leader_max_seq_no: int
    follower_global_checkpoint: int
    follower_max_seq_no: int
    operations_written: int
    time_since_last_read_millis: int

    last_requested_seq_no: int | None = None
    outstanding_read_requests: int | None = None
    outstanding_write_requests: int | None = None
    write_buffer_operation_count: int | None = None
    write_buffer_size_in_bytes: int | None = None
    follower_mapping_version: int | None = None
    follower_settings_version: int | None = None
    follower_aliases_version: int | None = None
    total_read_time_millis: int | None = None
    total_read_remote_exec_time_millis: int | None = None
    successful_read_requests: int | None = None
    failed_read_requests: int | None = None
    operations_read: int | None = None
    bytes_read: int | None = None
    total_write_time_millis: int | None = None
    successful_write_requests: int | None = None
    failed_write_requests: int | None = None
    read_exceptions: list[dict[str, Any]] = Field(default_factory=list)
    fatal_exception: FatalException | None = None


class FollowIndexStats(BaseModel):
    """
    Stats for one follower index.

    Shards are kept raw here and validated individually by the mapper. The
    index name is informational; every shard carries its own follower index.
    """

    index: str = ""
    shards: list[Any] = Field(default_factory=list)


class FollowStats(BaseModel):
    """The 'follow_stats' object of GET /_ccr/stats."""

    indices: list[FollowIndexStats] = Field(default_factory=list)


class AutoFollowStats(BaseModel):
    """The 'auto_follow_stats' object of GET /_ccr/stats."""

    number_of_failed_follow_indices: int = 0
    number_of_failed_remote_cluster_state_requests: int = 0
    number_of_successful_follow_indices: int = 0


class CCRStatsResponse(BaseModel):
    """
    Response from GET /_ccr/stats.

    Example response:
    {
        "auto_follow_stats": {
            "number_of_failed_follow_indices": 0,
            "number_of_failed_remote_cluster_state_requests": 0,
            "number_of_successful_follow_indices": 1
        },
        "follow_stats": {
            "indices": [
                {"index": "follower-logs", "shards": [{"shard_id": 0, ...}]}
            ]
        }
    }
    """

    auto_follow_stats: AutoFollowStats | None = None
    follow_stats: FollowStats
