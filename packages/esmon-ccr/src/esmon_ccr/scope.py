"""
Scope-based skip decisions.

A collector configured with node scope is usually deployed next to every
node of a cluster. CCR stats are cluster-wide, so only the instance talking
to the elected master collects; every other instance skips its cycle.
With cluster scope the collector talks to a single cluster endpoint and
never skips.
"""

import logging
from dataclasses import dataclass
from enum import Enum

from esmon_ccr.es_client import ElasticsearchClient

logger = logging.getLogger(__name__)


class Scope(str, Enum):
    """How the collector is connected to the cluster."""

    NODE = "node"
    CLUSTER = "cluster"


@dataclass
class MasterOnlySkipDecider:
    """
    Skip decision provider based on collection scope.

    Attributes:
        client: Client connected to the node or cluster being monitored.
        scope: Collection scope (defaults to node).
        name: Collector name used in log output.
    """

    client: ElasticsearchClient
    scope: Scope = Scope.NODE
    name: str = "elasticsearch.ccr"

    async def should_skip_fetch(self) -> bool:
        """
        Return True when connected to a non-master node in node scope.

        Raises:
            UpstreamError: If the local or master node cannot be determined.
        """
        if self.scope is not Scope.NODE:
            return False

        local_id = await self.client.get_local_node_id()
        master_id = await self.client.get_master_node_id()
        if local_id != master_id:
            logger.debug(f"trying to fetch {self.name} stats from a non-master node")
            return True
        return False
