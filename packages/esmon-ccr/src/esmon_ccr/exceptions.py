"""
Exception classes for CCR stats collection.

- UpstreamError: A cluster API read failed (network, HTTP status, or a
  response that could not be validated)
- SchemaError: The /_ccr/stats payload is not the expected document shape

Unavailability (license, feature flag, or version gating) is not an
exception. It is reported as a warning message by the collector.
"""


class CollectorError(Exception):
    """Base class for errors that fail a single collection cycle."""


class UpstreamError(CollectorError):
    """
    Raised when a read against the cluster API fails.

    Attributes:
        operation: What was being retrieved (e.g., "license", "xpack",
            "cluster info", "ccr stats")
        reason: Description of the underlying failure
    """

    def __init__(self, operation: str, reason: str) -> None:
        self.operation = operation
        self.reason = reason
        super().__init__(f"error determining Elasticsearch {operation}: {reason}")


class SchemaError(CollectorError):
    """
    Raised when a stats payload does not match the expected structure.

    Attributes:
        reason: What was wrong with the payload
    """

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"unexpected /_ccr/stats payload: {reason}")
