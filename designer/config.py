"""Runtime settings read from the environment (and .env, via python-dotenv)."""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()  # load environment variables from .env file


def _env_int(name: str, default: int) -> int:
    return int(os.getenv(name, str(default)))


@dataclass(frozen=True)
class SimulationSettings:
    """Timing of the step-wise walk.

    A node dwells for ``ticks`` ticks of ``tick_ms`` each; moving along an
    edge pauses for ``edge_pause_ms``.
    """

    ticks: int = 5
    tick_ms: int = 100
    edge_pause_ms: int = 800

    def __post_init__(self) -> None:
        if self.ticks < 1:
            raise ValueError("ticks must be at least 1")
        if self.tick_ms < 0 or self.edge_pause_ms < 0:
            raise ValueError("durations must be non-negative")

    @classmethod
    def from_env(cls) -> "SimulationSettings":
        return cls(
            ticks=_env_int("DESIGNER_SIM_TICKS", cls.ticks),
            tick_ms=_env_int("DESIGNER_SIM_TICK_MS", cls.tick_ms),
            edge_pause_ms=_env_int("DESIGNER_SIM_EDGE_PAUSE_MS", cls.edge_pause_ms),
        )


@dataclass(frozen=True)
class DesignerSettings:
    history_capacity: int = 20
    pipeline_key: str = "active_pipeline"  # fixed publication key read by other features

    def __post_init__(self) -> None:
        if self.history_capacity < 1:
            raise ValueError("history_capacity must be at least 1")

    @classmethod
    def from_env(cls) -> "DesignerSettings":
        return cls(
            history_capacity=_env_int("DESIGNER_HISTORY_CAPACITY", cls.history_capacity),
            pipeline_key=os.getenv("DESIGNER_PIPELINE_KEY", cls.pipeline_key),
        )
