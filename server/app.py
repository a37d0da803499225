"""FastAPI application serving the pipeline designer and its published pipeline."""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from designer.adapters.reader import load_graph
from designer.adapters.sinks import LatestRunSink
from designer.config import DesignerSettings, SimulationSettings
from designer.session import PipelineDesigner
from server.db import init_all
from server.designer_routes import router as designer_router
from server.pipeline_db import PIPELINE_DB_PATH, SqlitePublisher, get_pipeline
from server.pipeline_routes import router as pipeline_router

from dotenv import load_dotenv
load_dotenv()  # load environment variables from .env file

logger = logging.getLogger(__name__)

# CORS origins - configurable via environment variable
# Use comma-separated values for multiple origins, or "*" for all (development only)
CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*").split(",")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize database tables and the designer session on startup."""
    init_all()
    settings = DesignerSettings.from_env()
    graph = load_graph(get_pipeline(settings.pipeline_key))
    app.state.designer = PipelineDesigner(
        graph=graph,
        publisher=SqlitePublisher(settings.pipeline_key),
        sink=LatestRunSink(),
        settings=settings,
        simulation_settings=SimulationSettings.from_env(),
    )
    logger.info("designer session %s ready (%d nodes)", app.state.designer.session_id, len(graph))
    yield
    app.state.designer.close()


app = FastAPI(
    title="Pipeline Designer API",
    description="API server for RAG pipeline design, undo/redo and latency simulation",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# include routes
app.include_router(pipeline_router, prefix="/api")
app.include_router(designer_router, prefix="/api")


@app.get("/")
def root():
    """Health check endpoint."""
    return {
        "status": "ok",
        "version": "0.1.0",
        "pipeline_db": str(PIPELINE_DB_PATH),
        "endpoints": {
            "pipelines": "/api/pipelines/{key}",
            "designer": "/api/designer/graph",
            "simulation": "/api/designer/simulation",
        },
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
