import pytest

from stepsort.emitter import CancellationToken, StepEmitter
from stepsort.errors import StopRequested
from stepsort.frames import InMemoryFrameSink, RunState
from stepsort.pacing import PacingController, speed_to_delay
from stepsort.store import SequenceStore


@pytest.mark.parametrize("given, expected", [(0, 1), (-5, 1), (1, 1), (100, 100), (201, 201), (999, 201)])
def test_delay_is_clamped(given, expected):
    p = PacingController()
    assert p.set_delay(given) == expected
    assert p.current_delay() == expected


def test_speed_maps_to_delay_like_the_slider():
    assert speed_to_delay(0) == 201
    assert speed_to_delay(40) == 161
    assert speed_to_delay(200) == 1
    p = PacingController()
    p.set_speed(250)
    assert p.current_delay() == 1
    assert p.current_speed() == 200


def test_token_is_idempotent():
    t = CancellationToken()
    assert not t.is_stopped()
    t.request_stop()
    t.request_stop()
    assert t.is_stopped()


def test_emit_publishes_then_sleeps_for_current_delay():
    store = SequenceStore([3, 1, 2])
    sink = InMemoryFrameSink()
    slept = []
    pacing = PacingController(37)
    em = StepEmitter(store, pacing, CancellationToken(), sink,
                     algorithm="bubble", sleep=slept.append, time_unit=0.001)
    em.emit_step(0, 1)
    pacing.set_delay(5)
    em.emit_step(1, 2)

    assert slept == [pytest.approx(0.037), pytest.approx(0.005)]
    assert [f.highlight for f in sink.frames] == [(0, 1), (1, 2)]
    assert [f.step for f in sink.frames] == [1, 2]
    assert [f.delay for f in sink.frames] == [37, 5]
    assert all(f.state is RunState.RUNNING for f in sink.frames)
    assert sink.frames[0].values == (3, 1, 2)
    assert em.highlight == (1, 2)


def test_emit_raises_before_pause_when_already_stopped():
    token = CancellationToken()
    token.request_stop()
    sink = InMemoryFrameSink()
    slept = []
    em = StepEmitter(SequenceStore([1, 2]), PacingController(1), token, sink, sleep=slept.append)
    with pytest.raises(StopRequested):
        em.emit_step(0, 1)
    assert sink.frames == []
    assert slept == []


def test_emit_raises_after_pause_when_stopped_during_it():
    token = CancellationToken()
    sink = InMemoryFrameSink()
    em = StepEmitter(SequenceStore([1, 2]), PacingController(1), token, sink,
                     sleep=lambda _s: token.request_stop())
    with pytest.raises(StopRequested):
        em.emit_step(0, 1)
    assert len(sink.frames) == 1


def test_emitter_works_without_a_sink():
    em = StepEmitter(SequenceStore([1, 2]), PacingController(1), CancellationToken(),
                     sleep=lambda _s: None)
    em(0, 1)
    assert em.steps == 1
