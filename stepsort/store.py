import threading

import numpy as np

from stepsort.errors import IndexOutOfRange
from stepsort.settings import VALUE_HIGH, VALUE_LOW


def random_magnitudes(n: int, rng: np.random.Generator | None = None) -> list:
    """n integers drawn uniformly from [VALUE_LOW, VALUE_HIGH]."""
    rng = rng if rng is not None else np.random.default_rng()
    return rng.integers(VALUE_LOW, VALUE_HIGH + 1, size=n).tolist()


class SequenceStore:
    """
    The array being sorted.

    Every mutation and every snapshot takes the same lock, so a renderer
    reading from another thread sees either both halves of a swap or neither.
    """

    def __init__(self, values=()):
        self._values = [int(v) for v in values]
        self._lock   = threading.Lock()

    def __len__(self):
        return len(self._values)

    def length(self) -> int:
        return len(self._values)

    def _check(self, i: int):
        if not 0 <= i < len(self._values):
            raise IndexOutOfRange(i, len(self._values))

    def read(self, i: int) -> int:
        self._check(i)
        return self._values[i]

    def write(self, i: int, v: int):
        with self._lock:
            self._check(i)
            self._values[i] = int(v)

    def swap(self, i: int, j: int):
        with self._lock:
            self._check(i)
            self._check(j)
            self._values[i], self._values[j] = self._values[j], self._values[i]

    def snapshot(self) -> tuple:
        with self._lock:
            return tuple(self._values)

    def load(self, values):
        with self._lock:
            self._values = [int(v) for v in values]

    def regenerate(self, n: int, rng: np.random.Generator | None = None):
        self.load(random_magnitudes(n, rng))
