"""Shared fixtures for CCR collector tests."""

import json

import pytest

from esmon_protocols import ClusterInfo


def shard_record(index: str = "follower-logs", shard_id: int = 0, **overrides) -> dict:
    """Build a complete follower shard record as returned by /_ccr/stats."""
    record = {
        "remote_cluster": "leader-us",
        "leader_index": index.replace("follower", "leader"),
        "follower_index": index,
        "shard_id": shard_id,
        "leader_global_checkpoint": 1020,
        "leader_max_seq_no": 1020,
        "follower_global_checkpoint": 1000,
        "follower_max_seq_no": 1005,
        "last_requested_seq_no": 1005,
        "outstanding_read_requests": 1,
        "outstanding_write_requests": 0,
        "write_buffer_operation_count": 0,
        "write_buffer_size_in_bytes": 0,
        "follower_mapping_version": 2,
        "follower_settings_version": 1,
        "follower_aliases_version": 1,
        "total_read_time_millis": 9000,
        "total_read_remote_exec_time_millis": 8000,
        "successful_read_requests": 120,
        "failed_read_requests": 2,
        "operations_read": 1005,
        "bytes_read": 65536,
        "total_write_time_millis": 3000,
        "successful_write_requests": 119,
        "failed_write_requests": 0,
        "operations_written": 1000,
        "read_exceptions": [],
        "time_since_last_read_millis": 42,
    }
    record.update(overrides)
    return record


def stats_document(*indices: tuple[str, list]) -> dict:
    """Build a /_ccr/stats document from (index, shard records) pairs."""
    return {
        "auto_follow_stats": {
            "number_of_failed_follow_indices": 0,
            "number_of_failed_remote_cluster_state_requests": 1,
            "number_of_successful_follow_indices": 2,
            "recent_auto_follow_errors": [],
            "auto_followed_clusters": [],
        },
        "follow_stats": {
            "indices": [{"index": name, "shards": shards} for name, shards in indices]
        },
    }


def to_payload(document: dict) -> bytes:
    return json.dumps(document).encode()


@pytest.fixture
def cluster_info():
    """Identity of the cluster under test."""
    return ClusterInfo(name="prod-eu", id="w2sXw6bYQ9KcyYdgG1VnTA", version="8.11.1")


@pytest.fixture
def stats_payload():
    """Stats payload with three follower shards across two indices."""
    return to_payload(
        stats_document(
            ("follower-logs", [shard_record("follower-logs", 0), shard_record("follower-logs", 1)]),
            ("follower-metrics", [shard_record("follower-metrics", 0)]),
        )
    )


@pytest.fixture
def empty_stats_payload():
    """Stats payload of a cluster with no followers."""
    return to_payload({"auto_follow_stats": {}, "follow_stats": {"indices": []}})
