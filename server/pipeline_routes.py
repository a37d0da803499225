"""API routes for reading and writing published pipelines.

Other features read these to find out whether a pipeline exists and what
shape it has.
"""

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from designer.adapters.reader import count_active
from designer.analysis.metrics import compute_metrics
from designer.models.metrics import SimulationMetrics
from designer.models.pipeline_node import NodeKind
from designer.models.snapshot import PublishedPipeline
from server.pipeline_db import (
    delete_pipeline as db_delete_pipeline,
    get_pipeline as db_get_pipeline,
    upsert_pipeline as db_upsert_pipeline,
)

router = APIRouter()


class PipelineSummary(BaseModel):
    """what consumers usually want to know about a pipeline."""

    exists: bool
    node_count: int = 0
    active_by_kind: dict[NodeKind, int] = {}
    updated_at: int | None = None
    metrics: SimulationMetrics | None = None


@router.get("/pipelines/{key}")
def get_pipeline(key: str) -> PublishedPipeline:
    """get the published projection stored under key."""
    pipeline = db_get_pipeline(key)
    if not pipeline:
        raise HTTPException(status_code=404, detail=f"Pipeline not found: {key}")
    return pipeline


@router.put("/pipelines/{key}")
def put_pipeline(key: str, pipeline: PublishedPipeline) -> PublishedPipeline:
    """store a projection. Used by HttpPublisher; last write wins."""
    db_upsert_pipeline(key, pipeline)
    return pipeline


@router.get("/pipelines/{key}/summary")
def get_pipeline_summary(key: str) -> PipelineSummary:
    """counts and metrics; absence is a normal answer, not an error."""
    pipeline = db_get_pipeline(key)
    if not pipeline:
        return PipelineSummary(exists=False)
    return PipelineSummary(
        exists=len(pipeline.nodes) > 0,
        node_count=len(pipeline.nodes),
        active_by_kind={kind: count_active(pipeline, kind) for kind in NodeKind},
        updated_at=pipeline.updated_at,
        metrics=compute_metrics(pipeline.nodes),
    )


@router.delete("/pipelines/{key}")
def delete_pipeline(key: str) -> dict:
    """delete a published projection."""
    if not db_get_pipeline(key):
        raise HTTPException(status_code=404, detail=f"Pipeline not found: {key}")
    db_delete_pipeline(key)
    return {"deleted": key}
