class EngineError(Exception):
    """Base for commands rejected by the run controller."""


class AlreadyRunning(EngineError):
    """start() was called while a run is in progress."""


class NotIdle(EngineError):
    """A structural edit (resize/shuffle) was attempted during a run."""


class UnknownAlgorithm(EngineError, ValueError):
    """The requested variant is not one of the built-in sorters."""


class IndexOutOfRange(IndexError):
    """A sorter touched an index outside the sequence. Always a bug."""

    def __init__(self, index: int, length: int):
        super().__init__(f"index {index} out of range for length {length}")
        self.index  = index
        self.length = length


class StopRequested(Exception):
    """
    Raised by the step emitter when the run's cancellation token is tripped.
    Sorters let it propagate; the run controller catches it exactly once.
    """
