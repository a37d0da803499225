"""Sinks receiving simulation events."""

from pathlib import Path
from typing import Callable, Protocol

from designer.models.simulation_event import SimulationEvent


class EventSink(Protocol):
    """Protocol for receiving simulation events."""

    def append(self, event: SimulationEvent) -> None:
        """Append an event to the sink."""
        ...


class ListSink:
    """Stores events in a list."""

    def __init__(self) -> None:
        self.events: list[SimulationEvent] = []

    def append(self, event: SimulationEvent) -> None:
        """Append an event to the list."""
        self.events.append(event)

    def clear(self) -> None:
        """Clear all events."""
        self.events.clear()


class FileSink:
    """Writes events to a JSONL file, one run after another."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def append(self, event: SimulationEvent) -> None:
        """Append an event to the file."""
        with open(self.path, "a") as f:
            f.write(event.model_dump_json() + "\n")


class CallbackSink:
    """Forwards each event to a function, e.g. a renderer's highlight hook."""

    def __init__(self, callback: Callable[[SimulationEvent], None]) -> None:
        self.callback = callback

    def append(self, event: SimulationEvent) -> None:
        self.callback(event)


class FanOutSink:
    """Delivers every event to several sinks in order."""

    def __init__(self, *sinks: EventSink) -> None:
        self.sinks = list(sinks)

    def append(self, event: SimulationEvent) -> None:
        for sink in self.sinks:
            sink.append(event)


class LatestRunSink:
    """Keeps the events of the most recent run only.

    A long-lived session (the server's) starts many runs; memory stays
    bounded by the length of one walk.
    """

    def __init__(self) -> None:
        self.events: list[SimulationEvent] = []

    def append(self, event: SimulationEvent) -> None:
        if self.events and self.events[-1].run_id != event.run_id:
            self.events.clear()
        self.events.append(event)
