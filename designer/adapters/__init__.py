"""Adapters connecting the designer core to the outside: event sinks and publishers."""

from designer.adapters.bridge import PersistenceBridge
from designer.adapters.event_api import EventEmitter
from designer.adapters.publishers import (
    FilePublisher,
    HttpPublisher,
    ListPublisher,
    PipelinePublisher,
)
from designer.adapters.reader import (
    count_active,
    has_pipeline,
    load_graph,
    read_pipeline_file,
    read_published_pipeline,
)
from designer.adapters.sinks import (
    CallbackSink,
    EventSink,
    FanOutSink,
    FileSink,
    LatestRunSink,
    ListSink,
)

__all__ = [
    "EventSink",
    "ListSink",
    "FileSink",
    "CallbackSink",
    "FanOutSink",
    "LatestRunSink",
    "EventEmitter",
    "PipelinePublisher",
    "ListPublisher",
    "FilePublisher",
    "HttpPublisher",
    "PersistenceBridge",
    "read_published_pipeline",
    "read_pipeline_file",
    "has_pipeline",
    "count_active",
    "load_graph",
]
