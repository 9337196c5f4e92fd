"""
Factory function for creating a CCR collector.

Wires an ElasticsearchClient, skip decider, availability checker, and
collector together from Settings, so the CLI (and embedding code) never
has to assemble collaborators by hand.
"""

import httpx

from esmon_ccr.availability import AvailabilityChecker
from esmon_ccr.collector import CCRCollector
from esmon_ccr.config import Settings
from esmon_ccr.es_client import ElasticsearchClient
from esmon_ccr.scope import MasterOnlySkipDecider
from esmon_protocols import EventSinkProtocol


def create_http_client(settings: Settings) -> httpx.AsyncClient:
    """Create an httpx client with the configured URL, timeout, and basic auth."""
    auth = None
    if settings.username:
        auth = httpx.BasicAuth(settings.username, settings.password or "")
    return httpx.AsyncClient(
        base_url=settings.elasticsearch_url,
        timeout=settings.timeout_seconds,
        auth=auth,
    )


def create_ccr_collector(
    settings: Settings,
    http: httpx.AsyncClient | None = None,
    sink: EventSinkProtocol | None = None,
) -> CCRCollector:
    """
    Create a CCR collector for one cluster.

    Args:
        settings: Collector configuration.
        http: Optional pre-configured httpx client. If None, one is created
            via create_http_client(); the caller owns closing it either way.
        sink: Optional sink for produced events.

    Returns:
        CCRCollector ready for run_cycle().

    Example:
        collector = create_ccr_collector(Settings(scope=Scope.CLUSTER))
        events = await collector.run_cycle()
    """
    if http is None:
        http = create_http_client(settings)

    client = ElasticsearchClient(http=http)

    return CCRCollector(
        cluster=client,
        checker=AvailabilityChecker(
            licenses=client,
            features=client,
            name=settings.metricset_name,
        ),
        transport=client,
        skip=MasterOnlySkipDecider(
            client=client,
            scope=settings.scope,
            name=settings.metricset_name,
        ),
        sink=sink,
        extended=settings.extended,
    )
