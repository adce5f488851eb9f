import threading

import numpy as np
import pytest

from stepsort.errors import IndexOutOfRange
from stepsort.settings import VALUE_HIGH, VALUE_LOW
from stepsort.store import SequenceStore, random_magnitudes


def test_read_write_swap():
    s = SequenceStore([5, 3, 8, 1])
    assert s.length() == len(s) == 4
    s.write(0, 9)
    s.swap(1, 3)
    assert [s.read(i) for i in range(4)] == [9, 1, 8, 3]


@pytest.mark.parametrize("index", [-1, 4, 100])
def test_out_of_range_index_raises(index):
    s = SequenceStore([5, 3, 8, 1])
    with pytest.raises(IndexOutOfRange):
        s.read(index)
    with pytest.raises(IndexOutOfRange):
        s.write(index, 1)
    with pytest.raises(IndexOutOfRange):
        s.swap(0, index)
    assert s.snapshot() == (5, 3, 8, 1)


def test_index_out_of_range_is_an_index_error():
    with pytest.raises(IndexError):
        SequenceStore([1]).read(1)


def test_snapshot_is_an_immutable_copy():
    s = SequenceStore([2, 1])
    snap = s.snapshot()
    s.swap(0, 1)
    assert snap == (2, 1)
    assert s.snapshot() == (1, 2)


def test_snapshot_never_sees_half_a_swap():
    s = SequenceStore([1, 2])
    done = threading.Event()

    def swapper():
        for _ in range(20000):
            s.swap(0, 1)
        done.set()

    t = threading.Thread(target=swapper)
    t.start()
    while not done.is_set():
        assert sorted(s.snapshot()) == [1, 2]
    t.join()


def test_regenerate_uses_value_range_and_seed():
    a = SequenceStore()
    b = SequenceStore()
    a.regenerate(300, np.random.default_rng(7))
    b.regenerate(300, np.random.default_rng(7))
    assert a.length() == 300
    assert a.snapshot() == b.snapshot()
    assert all(VALUE_LOW <= v <= VALUE_HIGH for v in a.snapshot())


def test_random_magnitudes_are_plain_ints():
    vals = random_magnitudes(10, np.random.default_rng(0))
    assert len(vals) == 10
    assert all(type(v) is int for v in vals)
