"""Fixed rule sets: bulk presets and model repricing."""

from enum import Enum
from typing import Callable

from designer.errors import UnknownPreset
from designer.models.pipeline_node import NodeKind, PipelineNode


class Preset(str, Enum):
    FAST = "FAST"
    BALANCED = "BALANCED"
    PRECISION = "PRECISION"


# steps kept alive by the FAST preset (hybrid retrieval + synthesis in the default graph)
FAST_KEEP = frozenset({"n2", "n5"})
FAST_GENERATION_MODEL = "Gemini 3 Flash"
FAST_LATENCY_MS = 50

PRECISION_MODEL = "Gemini 3 Pro"
PRECISION_LATENCY_MS = 300

# model names containing any of these are billed as premium
PREMIUM_MARKERS = ("Pro", "ColBERT", "CoT")
PREMIUM_PROFILE = (300.0, 1.5)  # (latency ms, cost per 1M)
STANDARD_PROFILE = (80.0, 0.2)


def _fast(node: PipelineNode) -> PipelineNode:
    active = node.id in FAST_KEEP
    model = FAST_GENERATION_MODEL if node.kind == NodeKind.GENERATION else node.model
    latency = FAST_LATENCY_MS if active else node.base_latency_ms
    return node.model_copy(update={"active": active, "model": model, "base_latency_ms": latency})


def _balanced(node: PipelineNode) -> PipelineNode:
    return node.model_copy(update={"active": True})


def _precision(node: PipelineNode) -> PipelineNode:
    return node.model_copy(
        update={"active": True, "model": PRECISION_MODEL, "base_latency_ms": PRECISION_LATENCY_MS}
    )


PRESET_RULES: dict[Preset, Callable[[PipelineNode], PipelineNode]] = {
    Preset.FAST: _fast,
    Preset.BALANCED: _balanced,
    Preset.PRECISION: _precision,
}


def resolve_preset(name: "Preset | str") -> Preset:
    try:
        return Preset(name)
    except ValueError:
        raise UnknownPreset(f"Unknown preset: {name!r}") from None


def apply_rule(preset: Preset, node: PipelineNode) -> PipelineNode:
    """The node as the preset wants it (may equal the input)."""
    return PRESET_RULES[preset](node)


def model_profile(model: str) -> tuple[float, float]:
    """(latency ms, cost per 1M) implied by a model name."""
    if any(marker in model for marker in PREMIUM_MARKERS):
        return PREMIUM_PROFILE
    return STANDARD_PROFILE
