"""API routes driving the server's designer session.

Every mutating route maps onto exactly one PipelineEditor call, so undo
over HTTP steps through the same history a local view would. All handlers
are coroutines: they run one at a time on the event loop that also drives
the simulation, never on worker threads.
"""

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel

from designer.analysis.metrics import compute_metrics
from designer.defaults import MODEL_CHOICES, NODE_DESCRIPTIONS, NODE_IO
from designer.errors import AlreadyRunning, CycleDetected, InvalidEndpoint, UnknownPreset
from designer.models.metrics import SimulationMetrics
from designer.models.pipeline_edge import PipelineEdge
from designer.models.pipeline_node import NodeConfig, NodeKind, PipelineNode, Position
from designer.models.simulation_event import SimulationEvent
from designer.session import PipelineDesigner

router = APIRouter(prefix="/designer")


class GraphResponse(BaseModel):
    nodes: list[PipelineNode]
    edges: list[PipelineEdge]
    history_pointer: int
    history_length: int
    can_undo: bool
    can_redo: bool
    active_preset: str | None = None


class DeleteNodesRequest(BaseModel):
    ids: list[str]


class ConnectRequest(BaseModel):
    source: str
    target: str


class SetModelRequest(BaseModel):
    model_config = {"protected_namespaces": ()}

    model: str
    reprice: bool = False


class UpdateNodeRequest(BaseModel):
    """inspector edit; omitted fields stay as they are."""

    model_config = {"protected_namespaces": ()}

    label: str | None = None
    model: str | None = None
    base_latency_ms: float | None = None
    base_cost_per_million: float | None = None


class ChangeResponse(BaseModel):
    changed: bool


class SimulationStatus(BaseModel):
    state: str
    run_id: str | None = None
    elapsed_ms: float
    active_node_id: str | None = None
    active_edge_id: str | None = None
    visited: list[str] = []


class KindInfo(BaseModel):
    kind: NodeKind
    description: str
    input: str
    output: str


class CatalogResponse(BaseModel):
    kinds: list[KindInfo]
    models: list[str]


async def get_designer(request: Request) -> PipelineDesigner:
    """the session created at startup."""
    return request.app.state.designer


def _graph_response(designer: PipelineDesigner) -> GraphResponse:
    history = designer.history
    preset = designer.editor.active_preset
    return GraphResponse(
        nodes=designer.graph.nodes,
        edges=designer.graph.edges,
        history_pointer=history.pointer,
        history_length=len(history),
        can_undo=history.can_undo(),
        can_redo=history.can_redo(),
        active_preset=preset.value if preset else None,
    )


@router.get("/graph")
async def get_graph(designer: PipelineDesigner = Depends(get_designer)) -> GraphResponse:
    """current nodes, edges and history position."""
    return _graph_response(designer)


@router.post("/nodes", status_code=201)
async def add_node(config: NodeConfig, designer: PipelineDesigner = Depends(get_designer)) -> dict:
    """create a node; missing or negative fields are rejected with 422."""
    return {"id": designer.editor.add_node(config)}


@router.post("/nodes/delete")
async def delete_nodes(
    request: DeleteNodesRequest, designer: PipelineDesigner = Depends(get_designer)
) -> dict:
    """delete nodes and their edges. unknown ids are ignored."""
    return {"deleted": designer.editor.delete_nodes(request.ids)}


@router.post("/nodes/{node_id}/toggle")
async def toggle_node(node_id: str, designer: PipelineDesigner = Depends(get_designer)) -> ChangeResponse:
    return ChangeResponse(changed=designer.editor.toggle_active(node_id))


@router.put("/nodes/{node_id}/model")
async def set_model(
    node_id: str, request: SetModelRequest, designer: PipelineDesigner = Depends(get_designer)
) -> ChangeResponse:
    return ChangeResponse(
        changed=designer.editor.set_model(node_id, request.model, reprice=request.reprice)
    )


@router.patch("/nodes/{node_id}")
async def update_node(
    node_id: str, request: UpdateNodeRequest, designer: PipelineDesigner = Depends(get_designer)
) -> ChangeResponse:
    fields = request.model_dump(exclude_none=True)
    try:
        changed = designer.editor.update_node(node_id, **fields)
    except ValueError as e:  # pydantic.ValidationError included
        raise HTTPException(status_code=422, detail=str(e))
    return ChangeResponse(changed=changed)


@router.put("/nodes/{node_id}/position")
async def move_node(
    node_id: str, position: Position, designer: PipelineDesigner = Depends(get_designer)
) -> ChangeResponse:
    return ChangeResponse(changed=designer.editor.move_node(node_id, position))


@router.post("/edges", status_code=201)
async def connect(request: ConnectRequest, designer: PipelineDesigner = Depends(get_designer)) -> dict:
    """connect two existing nodes."""
    try:
        edge_id = designer.editor.connect(request.source, request.target)
    except InvalidEndpoint as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"id": edge_id}


@router.post("/presets/{preset}")
async def apply_preset(preset: str, designer: PipelineDesigner = Depends(get_designer)) -> GraphResponse:
    try:
        designer.editor.apply_preset(preset.upper())
    except UnknownPreset as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _graph_response(designer)


@router.post("/undo")
async def undo(designer: PipelineDesigner = Depends(get_designer)) -> ChangeResponse:
    return ChangeResponse(changed=designer.editor.undo())


@router.post("/redo")
async def redo(designer: PipelineDesigner = Depends(get_designer)) -> ChangeResponse:
    return ChangeResponse(changed=designer.editor.redo())


@router.get("/search")
async def search(q: str = "", designer: PipelineDesigner = Depends(get_designer)) -> dict:
    """ids of nodes whose label matches q."""
    return {"matches": designer.editor.label_matches(q)}


@router.get("/metrics")
async def get_metrics(designer: PipelineDesigner = Depends(get_designer)) -> SimulationMetrics:
    return compute_metrics(designer.graph.nodes)


@router.get("/catalog")
async def get_catalog() -> CatalogResponse:
    """node kinds with their descriptions and I/O, plus selectable models."""
    kinds = [
        KindInfo(kind=kind, description=NODE_DESCRIPTIONS[kind], input=NODE_IO[kind][0], output=NODE_IO[kind][1])
        for kind in NodeKind
    ]
    return CatalogResponse(kinds=kinds, models=MODEL_CHOICES)


# --- simulation ---

def _simulation_status(designer: PipelineDesigner) -> SimulationStatus:
    engine = designer.engine
    result = engine.last_result
    return SimulationStatus(
        state=engine.state.value,
        run_id=result.run_id if result else None,
        elapsed_ms=engine.elapsed_ms,
        active_node_id=engine.active_node_id,
        active_edge_id=engine.active_edge_id,
        visited=list(result.visited) if result else [],
    )


@router.get("/simulation")
async def get_simulation(designer: PipelineDesigner = Depends(get_designer)) -> SimulationStatus:
    return _simulation_status(designer)


@router.post("/simulation/start")
async def start_simulation(designer: PipelineDesigner = Depends(get_designer)) -> SimulationStatus:
    """start a run in the background; poll GET /simulation for progress."""
    try:
        designer.engine.start()
    except AlreadyRunning as e:
        raise HTTPException(status_code=409, detail=str(e))
    except CycleDetected as e:
        raise HTTPException(status_code=422, detail=str(e))
    return _simulation_status(designer)


@router.post("/simulation/cancel")
async def cancel_simulation(designer: PipelineDesigner = Depends(get_designer)) -> SimulationStatus:
    designer.engine.cancel()
    return _simulation_status(designer)


@router.get("/simulation/events")
async def get_simulation_events(
    designer: PipelineDesigner = Depends(get_designer),
) -> list[SimulationEvent]:
    """events of the latest run, in emission order."""
    return list(getattr(designer.sink, "events", []))
