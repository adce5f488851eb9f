import logging
import threading
import time

from stepsort.errors import StopRequested
from stepsort.frames import Frame, FrameSink, RunState
from stepsort.pacing import PacingController
from stepsort.store import SequenceStore

logger = logging.getLogger(__name__)

# Pacing values are milliseconds
TIME_UNIT = 0.001


class CancellationToken:
    """Stop flag for one run. Never blocks, never resets."""

    def __init__(self):
        self._event = threading.Event()

    def request_stop(self):
        self._event.set()

    def is_stopped(self) -> bool:
        return self._event.is_set()


class StepEmitter:
    """
    The single yield point of every sorter.

    emit_step(a, b) publishes the store and highlight, pauses for the
    current delay, and raises StopRequested if the token was tripped
    before or after the pause.
    """

    def __init__(self, store: SequenceStore, pacing: PacingController,
                 token: CancellationToken, sink: FrameSink | None = None,
                 algorithm: str | None = None, sleep=time.sleep,
                 time_unit: float = TIME_UNIT):
        self.store     = store
        self.pacing    = pacing
        self.token     = token
        self.sink      = sink
        self.algorithm = algorithm
        self.sleep     = sleep
        self.time_unit = time_unit
        self.highlight: tuple | None = None
        self.steps     = 0

    def __call__(self, a: int, b: int):
        self.emit_step(a, b)

    def emit_step(self, a: int, b: int):
        if self.token.is_stopped():
            raise StopRequested()
        self.highlight = (a, b)
        self.steps += 1
        delay = self.pacing.current_delay()
        if self.sink is not None:
            self.sink.publish(Frame(
                values=self.store.snapshot(),
                highlight=self.highlight,
                state=RunState.RUNNING,
                step=self.steps,
                delay=delay,
                algorithm=self.algorithm,
            ))
        logger.debug("step %d: highlight (%d, %d), delay %d", self.steps, a, b, delay)
        self.sleep(delay * self.time_unit)
        if self.token.is_stopped():
            raise StopRequested()
