"""Reading the published projection back, for consumers and at startup.

Consumers must tolerate both absence (nothing authored yet) and garbage;
every reader here answers None rather than raising.
"""

import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from designer.defaults import default_edges
from designer.graph.model import GraphModel
from designer.models.pipeline_node import NodeKind
from designer.models.snapshot import PublishedPipeline

logger = logging.getLogger(__name__)


def read_published_pipeline(raw: str | bytes | dict[str, Any] | None) -> PublishedPipeline | None:
    """Parse a persisted projection; None if absent or malformed."""
    if raw is None or raw == "" or raw == b"":
        return None
    try:
        if isinstance(raw, dict):
            return PublishedPipeline.model_validate(raw)
        return PublishedPipeline.model_validate_json(raw)
    except (ValidationError, TypeError, ValueError) as exc:
        logger.warning("ignoring malformed pipeline snapshot: %s", exc)
        return None


def read_pipeline_file(path: Path | str) -> PublishedPipeline | None:
    """Read a FilePublisher output; None if the file is missing or unreadable."""
    try:
        raw = Path(path).read_text()
    except OSError:
        return None
    return read_published_pipeline(raw)


def has_pipeline(published: PublishedPipeline | None) -> bool:
    return published is not None and len(published.nodes) > 0


def count_active(published: PublishedPipeline | None, kind: NodeKind) -> int:
    """Number of active nodes of a given kind in a projection (0 if absent)."""
    if published is None:
        return 0
    return sum(1 for node in published.nodes if node.active and node.kind == kind)


def load_graph(raw: PublishedPipeline | str | bytes | dict[str, Any] | None) -> GraphModel:
    """Build the startup graph from a persisted projection.

    The projection carries nodes only, so the built-in edges are reattached
    wherever both endpoints survived. Absent, malformed or empty input
    yields the built-in default graph.
    """
    if isinstance(raw, PublishedPipeline):
        published = raw
    else:
        published = read_published_pipeline(raw)
    if not has_pipeline(published):
        return GraphModel.default()
    try:
        nodes = published.nodes
        node_ids = {node.id for node in nodes}
        edges = [e for e in default_edges() if e.source in node_ids and e.target in node_ids]
        return GraphModel(nodes, edges)
    except ValueError as exc:  # e.g. duplicate node ids
        logger.warning("persisted pipeline rejected, using default graph: %s", exc)
        return GraphModel.default()
