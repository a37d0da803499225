"""Data model for directed edges between pipeline steps."""

from pydantic import BaseModel


class PipelineEdge(BaseModel):
    """a directed edge source -> target, both referencing node ids."""

    model_config = {"extra": "forbid", "frozen": True}

    id: str
    source: str
    target: str
