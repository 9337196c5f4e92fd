"""
Event sinks for collected metric events.

- ListEventSink: Buffers events in memory (embedding code and tests)
- ConsoleEventSink: Prints each event as a JSON document
"""

from dataclasses import dataclass, field

from rich.console import Console

from esmon_protocols import MetricEvent


@dataclass
class ListEventSink:
    """
    In-memory sink.

    Attributes:
        events: Every event published so far, in publish order.
        batches: Number of publish() calls, including empty batches.
    """

    events: list[MetricEvent] = field(default_factory=list)
    batches: int = 0

    def publish(self, events: list[MetricEvent]) -> None:
        self.events.extend(events)
        self.batches += 1

    def clear(self) -> None:
        """Drop buffered events."""
        self.events.clear()
        self.batches = 0


@dataclass
class ConsoleEventSink:
    """
    Sink that prints every event as JSON to a rich console.

    Attributes:
        console: Target console (stdout by default).
    """

    console: Console = field(default_factory=Console)

    def publish(self, events: list[MetricEvent]) -> None:
        for event in events:
            self.console.print_json(data=event.to_dict())
