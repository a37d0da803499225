"""database initialization helpers."""

from server.pipeline_db import init_db as init_pipeline_db


def init_all() -> None:
    """initialize all sqlite tables."""
    init_pipeline_db()
