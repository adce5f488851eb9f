import pygame

from stepsort.algorithms import Algorithm
from stepsort.app import Window
from stepsort.frames import LatestFrameSink, RunState
from stepsort.settings import defaults

from conftest import Gate


def make_window(controller, algorithm=Algorithm.BUBBLE):
    return Window(controller, LatestFrameSink(), algorithm, defaults())


def test_number_keys_pick_algorithm_and_space_starts(make_controller):
    c = make_controller([5, 3, 8, 1])
    w = make_window(c)
    assert w.handle_key(pygame.K_5)
    assert w.algorithm is Algorithm.QUICK
    w.handle_key(pygame.K_SPACE)
    assert c.wait(5.0)
    assert c.algorithm is Algorithm.QUICK
    assert c.state is RunState.COMPLETED


def test_space_stops_a_running_sort_and_edits_are_ignored(make_controller):
    gate = Gate()
    c = make_controller([9, 8, 7, 6, 5, 4, 3, 2, 1, 0], sleep=gate)
    w = make_window(c)
    w.handle_key(pygame.K_SPACE)
    assert gate.entered.wait(5.0)
    assert w.handle_key(pygame.K_s)
    assert w.handle_key(pygame.K_UP)
    w.handle_key(pygame.K_2)
    assert w.algorithm is Algorithm.BUBBLE
    assert c.store.length() == 10
    w.handle_key(pygame.K_SPACE)
    gate.release.set()
    assert c.wait(5.0)
    assert c.state is RunState.CANCELLED


def test_arrow_keys_resize_and_change_speed(make_controller):
    c = make_controller([5, 3, 8, 1, 7, 2, 6, 4, 9, 0])
    w = make_window(c)
    w.handle_key(pygame.K_UP)
    assert c.store.length() == 20
    w.handle_key(pygame.K_DOWN)
    w.handle_key(pygame.K_DOWN)
    assert c.store.length() == 10
    c.set_delay(101)
    w.handle_key(pygame.K_RIGHT)
    assert c.pacing.current_delay() == 91
    w.handle_key(pygame.K_LEFT)
    w.handle_key(pygame.K_LEFT)
    assert c.pacing.current_delay() == 111


def test_escape_closes():
    assert make_window(None).handle_key(pygame.K_ESCAPE) is False
