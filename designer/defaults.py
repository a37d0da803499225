"""Built-in default pipeline and the node palette."""

from designer.models.pipeline_edge import PipelineEdge
from designer.models.pipeline_node import NodeKind, PipelineNode, Position


NODE_DESCRIPTIONS = {
    NodeKind.PROCESSING: "Pre-computation steps like Chunking or Entity Extraction before vectorization.",
    NodeKind.ROUTING: "Decides whether to retrieve, how many steps, or which source to use (Vector vs Graph).",
    NodeKind.RETRIEVAL: "Fetches candidate documents from Vector DBs or Knowledge Graphs.",
    NodeKind.RERANK: "Re-scores candidates using high-precision models (Cross-Encoder, CoT).",
    NodeKind.GENERATION: "Synthesizes the final answer using retrieved context.",
    NodeKind.GUARDRAIL: "Safety layers for PII detection, Jailbreak defense, and Hallucination checks.",
}

# what flows in and out of each kind of step
NODE_IO = {
    NodeKind.PROCESSING: ("Text", "Chunks"),
    NodeKind.ROUTING: ("Query", "Decision"),
    NodeKind.RETRIEVAL: ("Vector", "Docs"),
    NodeKind.RERANK: ("Docs", "Ranked"),
    NodeKind.GENERATION: ("Context", "Answer"),
    NodeKind.GUARDRAIL: ("Prompt", "Safe?"),
}

# models offered in the node picker
MODEL_CHOICES = [
    "Gemini 3 Pro",
    "Gemini 3 Flash",
    "Semantic Router (BERT)",
    "BM25 Only",
    "ColBERTv2",
    "Jina-Reranker-v2",
    "CoT-Reranker",
    "Presidio",
    "Self-RAG Critic",
]

# (id, kind, label, model, active, latency ms, cost per 1M)
_DEFAULT_STEPS = [
    ("n0", NodeKind.GUARDRAIL, "PII Detection", "Presidio", True, 30, 0.02),
    ("n7", NodeKind.ROUTING, "Adaptive Router", "Semantic Router (BERT)", True, 15, 0.01),
    ("n1", NodeKind.PROCESSING, "Late Chunking", "Jina-Late-Chunking", True, 45, 0.05),
    ("n2", NodeKind.RETRIEVAL, "Hybrid Retrieval", "BM25 + BGE-M3", True, 120, 0.20),
    ("n3", NodeKind.RETRIEVAL, "Knowledge Graph", "Neo4j + GraphRAG", False, 250, 0.40),
    ("n4", NodeKind.RERANK, "Custom Reranker", "CoT-Reranker", True, 180, 0.60),
    ("n5", NodeKind.GENERATION, "Synthesis Core", "Gemini 3 Flash", True, 200, 0.15),
    ("n6", NodeKind.GUARDRAIL, "Hallucination Check", "Self-RAG Critic", True, 50, 0.05),
]

_DEFAULT_LINKS = [
    ("n0", "n7"),
    ("n7", "n1"),
    ("n1", "n2"),
    ("n2", "n3"),
    ("n3", "n4"),
    ("n4", "n5"),
    ("n5", "n6"),
]


def default_layout(index: int) -> Position:
    """Staggered vertical column used for the initial canvas."""
    return Position(x=250 + (0 if index % 2 == 0 else 40), y=index * 160 + 20)


def default_nodes() -> list[PipelineNode]:
    return [
        PipelineNode(
            id=node_id,
            kind=kind,
            label=label,
            model=model,
            active=active,
            base_latency_ms=latency,
            base_cost_per_million=cost,
            position=default_layout(idx),
        )
        for idx, (node_id, kind, label, model, active, latency, cost) in enumerate(_DEFAULT_STEPS)
    ]


def default_edges() -> list[PipelineEdge]:
    return [
        PipelineEdge(id=f"e{source[1:]}-{target[1:]}", source=source, target=target)
        for source, target in _DEFAULT_LINKS
    ]
