"""StepSort: paced, cancellable step-by-step sorting for visualization."""

from stepsort.algorithms import ALGORITHMS, Algorithm, get_sorter
from stepsort.controller import RunController
from stepsort.emitter import CancellationToken, StepEmitter
from stepsort.errors import (
    AlreadyRunning, EngineError, IndexOutOfRange, NotIdle, StopRequested,
    UnknownAlgorithm,
)
from stepsort.frames import Frame, FrameSink, InMemoryFrameSink, LatestFrameSink, RunState
from stepsort.pacing import PacingController
from stepsort.store import SequenceStore

__version__ = "1.0.0"

__all__ = [
    "ALGORITHMS", "Algorithm", "get_sorter",
    "RunController",
    "CancellationToken", "StepEmitter",
    "AlreadyRunning", "EngineError", "IndexOutOfRange", "NotIdle",
    "StopRequested", "UnknownAlgorithm",
    "Frame", "FrameSink", "InMemoryFrameSink", "LatestFrameSink", "RunState",
    "PacingController",
    "SequenceStore",
]
