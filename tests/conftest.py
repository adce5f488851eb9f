import threading

import pytest

from stepsort.controller import RunController
from stepsort.frames import InMemoryFrameSink
from stepsort.store import SequenceStore


def no_sleep(_seconds):
    pass


class Gate:
    """
    A sleep replacement that parks the run thread until released, so tests
    can act while a run is guaranteed to be in progress.
    """

    def __init__(self):
        self.entered = threading.Event()
        self.release = threading.Event()
        self.calls = 0

    def __call__(self, _seconds):
        self.calls += 1
        self.entered.set()
        assert self.release.wait(5.0), "gate never released"


def is_permutation(a, b):
    return sorted(a) == sorted(b)


@pytest.fixture
def sink():
    return InMemoryFrameSink()


@pytest.fixture
def make_controller(sink):
    made = []

    def _make(values=None, sleep=no_sleep, seed=1234):
        store = SequenceStore(values) if values is not None else None
        c = RunController(store=store, sink=sink, seed=seed, sleep=sleep)
        made.append(c)
        return c

    yield _make
    for c in made:
        c.close(timeout=5.0)
