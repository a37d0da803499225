"""Data model for pipeline steps.

Nodes are plain frozen values: every change produces a new instance, so a
snapshot taken by the history can never be mutated behind its back.
"""

from enum import Enum

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


# shared by every model that is also published: snake_case in Python,
# camelCase on the wire ("baseLatencyMs", "updatedAt", ...)
WIRE_CONFIG = {
    "alias_generator": to_camel,
    "populate_by_name": True,
    "protected_namespaces": (),  # we have a field called "model"
}


class NodeKind(str, Enum):
    """Roles a pipeline step can play."""

    GUARDRAIL = "GUARDRAIL"
    ROUTING = "ROUTING"
    PROCESSING = "PROCESSING"
    RETRIEVAL = "RETRIEVAL"
    RERANK = "RERANK"
    GENERATION = "GENERATION"


class Position(BaseModel):
    """canvas coordinate. owned by the renderer, never interpreted here."""

    model_config = {"frozen": True}

    x: float
    y: float


class NodeConfig(BaseModel):
    """Everything a caller has to supply to add a node."""

    model_config = {**WIRE_CONFIG, "extra": "forbid"}

    kind: NodeKind
    label: str
    model: str  # e.g. "Gemini 3 Flash", "BM25 + BGE-M3"
    base_latency_ms: float = Field(ge=0)
    base_cost_per_million: float = Field(ge=0)


class PipelineNode(BaseModel):
    """a single step in the pipeline graph."""

    model_config = {**WIRE_CONFIG, "extra": "forbid", "frozen": True}

    id: str
    kind: NodeKind
    label: str
    model: str
    active: bool = True
    base_latency_ms: float = Field(ge=0)
    base_cost_per_million: float = Field(ge=0)
    position: Position | None = None

    @property
    def effective_latency_ms(self) -> float:
        """Latency this node contributes to a run (zero while inactive)."""
        return self.base_latency_ms if self.active else 0.0

    @property
    def effective_cost_per_million(self) -> float:
        return self.base_cost_per_million if self.active else 0.0
