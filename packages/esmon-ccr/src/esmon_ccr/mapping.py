"""
Mapping of /_ccr/stats payloads to metric events.

One MetricEvent is produced per follower shard. The reduced field set
carries shard identity, replication progress, and failure counts. The
extended field set adds request timings, buffer usage, settings/mapping
versions, and cluster-wide auto-follow counters, and addresses events to
the stack monitoring index.

Malformed shard records are skipped; a payload that is not a CCR stats
document at all raises SchemaError.
"""

import json
import logging
from typing import Any

from pydantic import ValidationError

from esmon_ccr.exceptions import SchemaError
from esmon_ccr.types import AutoFollowStats, CCRStatsResponse, FollowerShardStats
from esmon_protocols import ClusterInfo, MetricEvent

logger = logging.getLogger(__name__)

MONITORING_INDEX = ".monitoring-es-8-mb"


def map_events(
    cluster: ClusterInfo, payload: bytes, extended: bool = False
) -> list[MetricEvent]:
    """
    Convert a raw /_ccr/stats body into metric events.

    Args:
        cluster: Identity of the cluster the payload came from.
        payload: Raw response body.
        extended: Emit the full field set instead of the reduced one.

    Returns:
        One event per valid follower shard record. Empty for an idle
        cluster with no followers.

    Raises:
        SchemaError: If the payload is not JSON or not shaped like a CCR
            stats response.
    """
    try:
        document = json.loads(payload)
    except ValueError as e:
        raise SchemaError(f"invalid JSON: {e}") from e

    try:
        stats = CCRStatsResponse.model_validate(document)
    except ValidationError as e:
        raise SchemaError(str(e)) from e

    auto_follow = stats.auto_follow_stats or AutoFollowStats()
    index = MONITORING_INDEX if extended else None

    events: list[MetricEvent] = []
    for follow_index in stats.follow_stats.indices:
        for raw in follow_index.shards:
            try:
                shard = FollowerShardStats.model_validate(raw)
            except ValidationError as e:
                logger.debug(
                    f"Skipping malformed shard record of {follow_index.index}: {e}"
                )
                continue

            metrics = _shard_metrics(shard)
            if extended:
                metrics.update(_extended_shard_metrics(shard))
                metrics.update(_auto_follow_metrics(auto_follow))

            events.append(MetricEvent.for_cluster(cluster, metrics, index=index))

    return events


def _shard_metrics(shard: FollowerShardStats) -> dict[str, Any]:
    """Reduced field set: identity, progress, and failures."""
    metrics: dict[str, Any] = {
        "remote_cluster": shard.remote_cluster,
        "leader.index": shard.leader_index,
        "leader.max_seq_no": shard.leader_max_seq_no,
        "leader.global_checkpoint": shard.leader_global_checkpoint,
        "follower.index": shard.follower_index,
        "follower.shard.number": shard.shard_id,
        "follower.operations_written": shard.operations_written,
        "follower.max_seq_no": shard.follower_max_seq_no,
        "follower.global_checkpoint": shard.follower_global_checkpoint,
        "follower.time_since_last_read.ms": shard.time_since_last_read_millis,
        # Operations the follower still has to replicate
        "follower.checkpoint_lag": max(
            0, shard.leader_global_checkpoint - shard.follower_global_checkpoint
        ),
    }

    if shard.failed_read_requests is not None:
        metrics["requests.failed.read.count"] = shard.failed_read_requests
    if shard.failed_write_requests is not None:
        metrics["requests.failed.write.count"] = shard.failed_write_requests
    if shard.fatal_exception is not None:
        metrics["fatal_exception.type"] = shard.fatal_exception.type
        metrics["fatal_exception.reason"] = shard.fatal_exception.reason

    return metrics


def _extended_shard_metrics(shard: FollowerShardStats) -> dict[str, Any]:
    """Additional per-shard fields emitted only in extended mode."""
    optional = {
        "last_requested_seq_no": shard.last_requested_seq_no,
        "requests.outstanding.read.count": shard.outstanding_read_requests,
        "requests.outstanding.write.count": shard.outstanding_write_requests,
        "requests.successful.read.count": shard.successful_read_requests,
        "requests.successful.write.count": shard.successful_write_requests,
        "write_buffer.operation.count": shard.write_buffer_operation_count,
        "write_buffer.size.bytes": shard.write_buffer_size_in_bytes,
        "follower.mapping_version": shard.follower_mapping_version,
        "follower.settings_version": shard.follower_settings_version,
        "follower.aliases_version": shard.follower_aliases_version,
        "follower.operations.read.count": shard.operations_read,
        "bytes_read": shard.bytes_read,
        "total_time.read.ms": shard.total_read_time_millis,
        "total_time.read.remote_exec.ms": shard.total_read_remote_exec_time_millis,
        "total_time.write.ms": shard.total_write_time_millis,
    }
    metrics = {key: value for key, value in optional.items() if value is not None}
    metrics["read_exceptions.count"] = len(shard.read_exceptions)
    return metrics


def _auto_follow_metrics(auto_follow: AutoFollowStats) -> dict[str, Any]:
    return {
        "auto_follow.failed.follow_indices.count": auto_follow.number_of_failed_follow_indices,
        "auto_follow.failed.remote_cluster_state_requests.count": (
            auto_follow.number_of_failed_remote_cluster_state_requests
        ),
        "auto_follow.success.follow_indices.count": (
            auto_follow.number_of_successful_follow_indices
        ),
    }
