"""Step-wise latency simulation over the pipeline graph.

The engine walks from the entry node along the first outgoing edge of each
node, dwelling ``ticks`` ticks per node and accumulating the node's
latency. It is read-only with respect to the graph and only reports what
it sees through simulation events.

    engine = SimulationEngine(graph, sink=ListSink())
    result = await engine.run()
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Awaitable, Callable

from designer.adapters.event_api import EventEmitter
from designer.adapters.sinks import EventSink, ListSink
from designer.config import SimulationSettings
from designer.errors import AlreadyRunning
from designer.graph.model import GraphModel
from designer.graph.topology import check_acyclic, entry_point
from designer.utils.identifiers import generate_session_id

logger = logging.getLogger(__name__)


class SimulationState(str, Enum):
    idle = "idle"
    running = "running"
    cancelled = "cancelled"  # behaves like idle, remembers how the last run ended


@dataclass
class SimulationResult:
    """Outcome of one run."""

    run_id: str
    visited: list[str] = field(default_factory=list)
    elapsed_ms: float = 0.0
    cancelled: bool = False


class SimulationEngine:
    """Cancellable, cooperative walk over a GraphModel."""

    def __init__(
        self,
        graph: GraphModel,
        sink: EventSink | None = None,
        settings: SimulationSettings | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.graph = graph
        self.sink: EventSink = sink if sink is not None else ListSink()
        self.settings = settings or SimulationSettings()
        self._sleep = sleep

        self.state = SimulationState.idle
        self.elapsed_ms = 0.0
        self.active_node_id: str | None = None
        self.active_edge_id: str | None = None
        self._cancel_requested = False
        self._result: SimulationResult | None = None
        self._task: asyncio.Task[SimulationResult] | None = None

    @property
    def is_running(self) -> bool:
        return self.state == SimulationState.running

    @property
    def last_result(self) -> SimulationResult | None:
        return self._result

    def start(self) -> asyncio.Task[SimulationResult]:
        """Begin a run on the current event loop and return its task.

        Raises AlreadyRunning if a run is in progress and CycleDetected if
        the graph has a directed cycle; neither changes any state.
        """
        if self.is_running:
            raise AlreadyRunning("a simulation is already running")
        check_acyclic(self.graph)

        entry = entry_point(self.graph)
        self._cancel_requested = False
        self._result = SimulationResult(run_id=generate_session_id())
        self.elapsed_ms = 0.0
        self.active_node_id = None
        self.active_edge_id = None
        self.state = SimulationState.running
        logger.info("simulation %s started at %s", self._result.run_id, entry)

        emitter = EventEmitter(self._result.run_id, self.sink)
        self._task = asyncio.get_running_loop().create_task(self._walk(entry, emitter))
        self._task.add_done_callback(lambda task: self._settle(task, emitter))
        return self._task

    def _settle(self, task: asyncio.Task[SimulationResult], emitter: EventEmitter) -> None:
        if task is not self._task:
            return
        if not task.cancelled() and task.exception() is not None:
            # nobody may await a background run, so the failure is reported here
            logger.error("simulation %s failed", self._result.run_id, exc_info=task.exception())
            if self.is_running:
                self.state = SimulationState.idle
                self.active_node_id = None
                self.active_edge_id = None
            return
        # a task cancelled before its first step never entered _walk
        if self.is_running:
            self._finish(emitter, cancelled=True)

    async def run(self) -> SimulationResult:
        """Start a run and wait for it to end."""
        return await self.start()

    def cancel(self) -> None:
        """Ask the running walk to stop at its next tick. Safe when idle."""
        if self.is_running:
            self._cancel_requested = True

    async def _pause(self, duration_ms: float) -> bool:
        """Sleep in tick-sized slices; False as soon as cancellation is seen."""
        slice_ms = self.settings.tick_ms or duration_ms
        remaining = duration_ms
        while True:
            if self._cancel_requested:
                return False
            step = min(slice_ms, remaining)
            await self._sleep(step / 1000)
            remaining -= step
            if remaining <= 0:
                return not self._cancel_requested

    async def _walk(self, node_id: str | None, emitter: EventEmitter) -> SimulationResult:
        result = self._result
        seen: set[str] = set()
        ticks = self.settings.ticks
        current = node_id
        try:
            while current is not None:
                node = self.graph.get_node(current)
                if node is None:
                    # deleted (or undone away) while we were travelling
                    break
                if current in seen:
                    # an edit made mid-run closed a loop
                    logger.warning("simulation %s revisited %s, stopping", result.run_id, current)
                    break
                seen.add(current)
                result.visited.append(current)

                self.active_node_id, self.active_edge_id = current, None
                emitter.emit_node_active(current, self.elapsed_ms)

                per_tick = node.effective_latency_ms / ticks
                for _ in range(ticks):
                    if not await self._pause(self.settings.tick_ms):
                        return self._finish(emitter, cancelled=True)
                    self.elapsed_ms += per_tick
                    emitter.emit_elapsed(current, self.elapsed_ms)

                outgoing = self.graph.outgoing(current)
                if not outgoing:
                    break
                edge = outgoing[0]  # first edge wins; no branching
                self.active_node_id, self.active_edge_id = None, edge.id
                emitter.emit_edge_active(edge.id, self.elapsed_ms)
                if not await self._pause(self.settings.edge_pause_ms):
                    return self._finish(emitter, cancelled=True)
                current = edge.target
        except asyncio.CancelledError:
            self._finish(emitter, cancelled=True)
            raise
        return self._finish(emitter, cancelled=False)

    def _finish(self, emitter: EventEmitter, cancelled: bool) -> SimulationResult:
        result = self._result
        result.elapsed_ms = self.elapsed_ms
        result.cancelled = cancelled
        self.active_node_id = None
        self.active_edge_id = None
        self.state = SimulationState.cancelled if cancelled else SimulationState.idle
        emitter.emit_finished(self.elapsed_ms, cancelled=cancelled)
        logger.info(
            "simulation %s %s after %.0f ms (%d nodes)",
            result.run_id,
            "cancelled" if cancelled else "finished",
            self.elapsed_ms,
            len(result.visited),
        )
        return result

    def __repr__(self) -> str:
        return f"SimulationEngine(state={self.state.value}, elapsed_ms={self.elapsed_ms:.0f})"
