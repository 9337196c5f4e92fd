"""
Metric event type and the event sink protocol.

A MetricEvent is the unit a collector hands downstream. Sinks decide what
happens to events next (print, buffer, ship to an index); collectors never
deliver events themselves.
"""

from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

from esmon_protocols.types import ClusterInfo


@dataclass
class MetricEvent:
    """
    A normalized metric event.

    Attributes:
        metrics: Flat mapping of dotted metric paths to values, e.g.
            {"follower.shard.number": 0, "follower.operations_written": 42}.
        tags: Cluster metadata tags ("cluster.name", "cluster.id",
            "service.name").
        index: Optional destination index override. None means the sink's
            default destination.
    """

    metrics: dict[str, Any]
    tags: dict[str, str] = field(default_factory=dict)
    index: str | None = None

    @classmethod
    def for_cluster(
        cls,
        cluster: ClusterInfo,
        metrics: dict[str, Any],
        service: str = "elasticsearch",
        index: str | None = None,
    ) -> "MetricEvent":
        """Build an event tagged with the given cluster's identity."""
        return cls(
            metrics=metrics,
            tags={
                "cluster.name": cluster.name,
                "cluster.id": cluster.id,
                "service.name": service,
            },
            index=index,
        )

    def to_dict(self) -> dict[str, Any]:
        """Flatten tags and metrics into a single document."""
        doc: dict[str, Any] = dict(self.tags)
        doc.update(self.metrics)
        if self.index is not None:
            doc["@index"] = self.index
        return doc


@runtime_checkable
class EventSinkProtocol(Protocol):
    """
    Protocol for downstream event delivery.

    Sinks receive every event list a collector produces, including empty
    lists for idle clusters.
    """

    def publish(self, events: list[MetricEvent]) -> None:
        """Accept a batch of events for delivery."""
        ...
