"""Publishers: where the read-only node projection gets written.

Anything with a ``publish(nodes, timestamp)`` method can serve as the
target, so the shared store can be a file, an HTTP endpoint, a sqlite row
or a list in a test.
"""

from pathlib import Path
from typing import Protocol, Sequence

import httpx

from designer.models.pipeline_node import PipelineNode
from designer.models.snapshot import PublishedPipeline


class PipelinePublisher(Protocol):
    """Protocol for receiving node-set publications."""

    def publish(self, nodes: Sequence[PipelineNode], timestamp: int) -> None:
        """Store nodes with their epoch-millisecond timestamp."""
        ...


def build_payload(nodes: Sequence[PipelineNode], timestamp: int) -> PublishedPipeline:
    return PublishedPipeline(nodes=list(nodes), updated_at=timestamp)


class ListPublisher:
    """Keeps every publication in memory."""

    def __init__(self) -> None:
        self.published: list[PublishedPipeline] = []

    def publish(self, nodes: Sequence[PipelineNode], timestamp: int) -> None:
        self.published.append(build_payload(nodes, timestamp))

    @property
    def latest(self) -> PublishedPipeline | None:
        return self.published[-1] if self.published else None


class FilePublisher:
    """Overwrites a JSON file with the latest projection."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def publish(self, nodes: Sequence[PipelineNode], timestamp: int) -> None:
        payload = build_payload(nodes, timestamp).model_dump_json(by_alias=True)
        # write-then-rename so readers never see half a file
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(payload)
        tmp_path.replace(self.path)


class HttpPublisher:
    """PUTs the projection to the designer server."""

    def __init__(self, base_url: str, key: str = "active_pipeline", timeout: float = 10.0) -> None:
        self.base_url = base_url.rstrip("/")
        self.key = key
        self.timeout = timeout

    def publish(self, nodes: Sequence[PipelineNode], timestamp: int) -> None:
        payload = build_payload(nodes, timestamp).model_dump(mode="json", by_alias=True)
        url = f"{self.base_url}/api/pipelines/{self.key}"
        with httpx.Client(timeout=self.timeout) as client:
            response = client.put(url, json=payload)
            response.raise_for_status()
