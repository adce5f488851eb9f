import logging
import threading
import time

import numpy as np

from stepsort.algorithms import Algorithm
from stepsort.emitter import TIME_UNIT, CancellationToken, StepEmitter
from stepsort.errors import AlreadyRunning, NotIdle, StopRequested
from stepsort.frames import Frame, FrameSink, RunState
from stepsort.pacing import PacingController
from stepsort.settings import DEFAULT_SIZE, MAX_SIZE, MIN_SIZE
from stepsort.store import SequenceStore

logger = logging.getLogger(__name__)


class RunController:
    """
    Owns the store between runs and hands it to exactly one sorter thread
    during a run.

    While RUNNING only the sorter thread writes the store; the caller may
    read frames, change the delay and request a stop. resize()/shuffle()
    are the only writers outside a run.
    """

    def __init__(self, store: SequenceStore | None = None,
                 pacing: PacingController | None = None,
                 sink: FrameSink | None = None, seed=None,
                 sleep=time.sleep, time_unit: float = TIME_UNIT):
        self.rng       = np.random.default_rng(seed)
        self.store     = store if store is not None else SequenceStore()
        self.pacing    = pacing if pacing is not None else PacingController()
        self.sink      = sink
        self.sleep     = sleep
        self.time_unit = time_unit
        if store is None:
            self.store.regenerate(DEFAULT_SIZE, self.rng)

        # _feed_lock keeps each transition and its frame together so the
        # sink sees transitions in the order they happened.
        self._feed_lock = threading.Lock()
        self._lock      = threading.Lock()
        self._state     = RunState.IDLE
        self._sorted    = False
        self._token: CancellationToken | None = None
        self._thread: threading.Thread | None = None
        self._emitter: StepEmitter | None = None
        self._algorithm: Algorithm | None = None
        self.failure: BaseException | None = None

    # ---------------------------------------------------------- state

    @property
    def state(self) -> RunState:
        with self._lock:
            return self._state

    @property
    def sorted(self) -> bool:
        with self._lock:
            return self._sorted

    @property
    def algorithm(self) -> Algorithm | None:
        return self._algorithm

    def is_running(self) -> bool:
        return self.state is RunState.RUNNING

    def frame(self) -> Frame:
        """Current observation, for renderers that poll instead of subscribing."""
        with self._lock:
            state, done = self._state, self._sorted
        emitter = self._emitter
        highlight = None
        step = 0
        if emitter is not None and state is RunState.RUNNING:
            highlight = emitter.highlight
        if emitter is not None:
            step = emitter.steps
        return Frame(
            values=self.store.snapshot(),
            highlight=highlight,
            state=state,
            sorted=done,
            step=step,
            delay=self.pacing.current_delay(),
            algorithm=self._algorithm.value if self._algorithm else None,
        )

    def _publish(self):
        if self.sink is not None:
            self.sink.publish(self.frame())

    # ------------------------------------------------------- commands

    def start(self, algorithm) -> threading.Thread:
        algo = Algorithm.parse(algorithm)
        with self._feed_lock:
            with self._lock:
                if self._state is RunState.RUNNING:
                    raise AlreadyRunning(f"{self._algorithm.display_name} is already running")
                self._token     = CancellationToken()
                self._algorithm = algo
                self._sorted    = False
                self.failure    = None
                self._emitter   = StepEmitter(
                    self.store, self.pacing, self._token, self.sink,
                    algorithm=algo.value, sleep=self.sleep, time_unit=self.time_unit,
                )
                self._state     = RunState.RUNNING
                thread = self._thread = threading.Thread(
                    target=self._run, args=(algo, self._emitter),
                    name=f"stepsort-{algo.value}", daemon=True,
                )
            logger.info("Starting %s on %d items", algo.display_name, self.store.length())
            self._publish()
        thread.start()
        return thread

    def request_stop(self):
        with self._lock:
            if self._state is not RunState.RUNNING:
                return
            token = self._token
        if not token.is_stopped():
            logger.info("Stop requested for %s", self._algorithm.display_name)
        token.request_stop()

    def set_delay(self, v: int) -> int:
        return self.pacing.set_delay(v)

    def resize(self, n: int):
        n = int(n)
        if not MIN_SIZE <= n <= MAX_SIZE:
            raise ValueError(f"size must be in [{MIN_SIZE}, {MAX_SIZE}], got {n}")
        self._regenerate(n)

    def shuffle(self):
        self._regenerate(self.store.length())

    def _regenerate(self, n: int):
        with self._feed_lock:
            with self._lock:
                if self._state is RunState.RUNNING:
                    raise NotIdle("cannot change the array while a sort is running")
                self.store.regenerate(n, self.rng)
                self._state   = RunState.IDLE
                self._sorted  = False
                self._emitter = None
            logger.debug("Regenerated %d items", n)
            self._publish()

    def wait(self, timeout: float | None = None) -> bool:
        """Join the run thread. True once no run is in progress."""
        thread = self._thread
        if thread is not None:
            thread.join(timeout)
        return not self.is_running()

    def close(self, timeout: float | None = None):
        self.request_stop()
        self.wait(timeout)

    # ----------------------------------------------------- run thread

    def _run(self, algo: Algorithm, emitter: StepEmitter):
        outcome = RunState.CANCELLED
        try:
            algo.sorter(self.store, emitter)
            outcome = RunState.COMPLETED
        except StopRequested:
            logger.info("%s cancelled after %d steps", algo.display_name, emitter.steps)
        except Exception as e:
            # A sorter bug (e.g. IndexOutOfRange). The run ends, the store
            # stays where it got to, and the error is kept for the caller.
            logger.exception("%s failed after %d steps", algo.display_name, emitter.steps)
            self.failure = e
        if outcome is RunState.COMPLETED:
            logger.info("%s completed in %d steps", algo.display_name, emitter.steps)
        with self._feed_lock:
            with self._lock:
                self._state  = outcome
                self._sorted = outcome is RunState.COMPLETED
            self._publish()
