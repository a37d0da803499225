"""Persistence bridge: publish the node set whenever it changes.

Publication is fire-and-forget. A failing publisher is logged and
otherwise ignored; the editor never sees the error.
"""

import logging
from typing import Callable

from designer.adapters.publishers import PipelinePublisher
from designer.graph.model import GraphChange, GraphModel
from designer.models.pipeline_node import PipelineNode
from designer.utils.identifiers import epoch_millis

logger = logging.getLogger(__name__)


class PersistenceBridge:
    """Watches a GraphModel and pushes its nodes to a PipelinePublisher."""

    def __init__(
        self,
        graph: GraphModel,
        publisher: PipelinePublisher,
        clock: Callable[[], int] = epoch_millis,
    ) -> None:
        self.graph = graph
        self.publisher = publisher
        self.clock = clock
        self.failures = 0
        self._last_published: tuple[PipelineNode, ...] | None = None
        self._unsubscribe = graph.subscribe(self._on_change)
        self.publish_now()

    def _on_change(self, graph: GraphModel, change: GraphChange) -> None:
        if change.nodes:
            self.publish_now()

    def publish_now(self) -> bool:
        """Publish the current node set; returns whether anything was sent."""
        nodes = tuple(self.graph.nodes)
        if not nodes or nodes == self._last_published:
            return False
        try:
            self.publisher.publish(list(nodes), self.clock())
        except Exception as exc:
            self.failures += 1
            logger.warning("pipeline publish failed (%s): %s", type(exc).__name__, exc)
            return False
        self._last_published = nodes
        return True

    def close(self) -> None:
        """Stop following the graph."""
        self._unsubscribe()
