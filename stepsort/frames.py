from __future__ import annotations

import enum
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass, field


class RunState(enum.Enum):
    IDLE      = "idle"
    RUNNING   = "running"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class Frame:
    """
    One observation of the engine: what the renderer draws.

    values     : tuple[int, ...]  snapshot of the sequence store
    highlight  : (a, b) or None   indices touched by the latest step
    state      : RunState
    sorted     : bool             terminal render-only flag, set on completion
    step       : int              steps emitted so far in the current run
    delay      : int              pacing value when the frame was taken (ms)
    algorithm  : str | None       key of the variant of the current/last run
    """

    values: tuple
    highlight: tuple | None
    state: RunState
    sorted: bool = False
    step: int = 0
    delay: int = 0
    algorithm: str | None = None


class FrameSink(ABC):
    """Consumer of frames. publish() is called from the run thread."""

    @abstractmethod
    def publish(self, frame: Frame) -> None: ...


@dataclass
class InMemoryFrameSink(FrameSink):
    """Keeps every frame in publication order."""

    frames: list[Frame] = field(default_factory=list)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    def publish(self, frame: Frame) -> None:
        with self._lock:
            self.frames.append(frame)

    def states(self) -> list[RunState]:
        """Run states in the order they were first entered."""
        with self._lock:
            seen = []
            for f in self.frames:
                if not seen or seen[-1] is not f.state:
                    seen.append(f.state)
            return seen


class LatestFrameSink(FrameSink):
    """
    Holds only the newest frame. A renderer polling once per display frame
    drops intermediate steps but always ends up on the final one.
    """

    def __init__(self):
        self._lock   = threading.Lock()
        self._latest: Frame | None = None
        self.count   = 0

    def publish(self, frame: Frame) -> None:
        with self._lock:
            self._latest = frame
            self.count  += 1

    def latest(self) -> Frame | None:
        with self._lock:
            return self._latest
