"""SQLite storage for published pipeline projections."""

import os
import sqlite3
from pathlib import Path
from typing import Sequence

from designer.adapters.publishers import build_payload
from designer.adapters.reader import read_published_pipeline
from designer.models.pipeline_node import PipelineNode
from designer.models.snapshot import PublishedPipeline


DEFAULT_DB_PATH = Path(__file__).parent / "data" / "designer.db"
PIPELINE_DB_PATH = Path(os.getenv("PIPELINE_DB_PATH", str(DEFAULT_DB_PATH)))


def _connect() -> sqlite3.Connection:
    PIPELINE_DB_PATH.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(PIPELINE_DB_PATH)
    conn.row_factory = sqlite3.Row
    return conn


def init_db() -> None:
    with _connect() as conn:
        conn.execute(
            """
            create table if not exists pipelines (
                pipeline_key text primary key,
                pipeline_json text not null,
                node_count integer not null,
                updated_at integer not null
            )
            """
        )
        conn.commit()


def upsert_pipeline(key: str, pipeline: PublishedPipeline) -> None:
    """insert or replace the projection stored under key."""
    with _connect() as conn:
        conn.execute(
            """
            insert into pipelines (pipeline_key, pipeline_json, node_count, updated_at)
            values (?, ?, ?, ?)
            on conflict(pipeline_key) do update set
                pipeline_json = excluded.pipeline_json,
                node_count = excluded.node_count,
                updated_at = excluded.updated_at
            """,
            (
                key,
                pipeline.model_dump_json(by_alias=True),
                len(pipeline.nodes),
                pipeline.updated_at,
            ),
        )
        conn.commit()


def get_pipeline(key: str) -> PublishedPipeline | None:
    """the stored projection, or None if absent or unreadable."""
    with _connect() as conn:
        row = conn.execute(
            "select pipeline_json from pipelines where pipeline_key = ?",
            (key,),
        ).fetchone()
    if not row:
        return None
    return read_published_pipeline(row["pipeline_json"])


def delete_pipeline(key: str) -> None:
    with _connect() as conn:
        conn.execute("delete from pipelines where pipeline_key = ?", (key,))
        conn.commit()


class SqlitePublisher:
    """PipelinePublisher writing into the pipelines table."""

    def __init__(self, key: str = "active_pipeline") -> None:
        self.key = key

    def publish(self, nodes: Sequence[PipelineNode], timestamp: int) -> None:
        upsert_pipeline(self.key, build_payload(nodes, timestamp))
