"""
Pygame adapter tests

Only the event translation and command line are tested; they do not
need a display.
"""

import pygame
import pytest

from mandelzoom.app import PygameInput, build_parser
from mandelzoom.ports import KEY_PRESS, POINTER_DOWN, POINTER_MOVE, POINTER_UP


@pytest.fixture
def source():
    source = PygameInput()
    source.received = []
    for kind in (POINTER_DOWN, POINTER_MOVE, POINTER_UP):
        source.subscribe(kind, lambda x, y, kind=kind: source.received.append((kind, x, y)))
    source.subscribe(KEY_PRESS, lambda key: source.received.append((KEY_PRESS, key)))
    return source


def test_left_button_gesture(source):
    events = [
        pygame.event.Event(pygame.MOUSEBUTTONDOWN, pos=(10, 10), button=1),
        pygame.event.Event(pygame.MOUSEMOTION, pos=(50, 12), rel=(40, 2), buttons=(1, 0, 0)),
        pygame.event.Event(pygame.MOUSEBUTTONUP, pos=(50, 12), button=1),
    ]
    for event in events:
        assert source.dispatch(event)

    assert source.received == [
        (POINTER_DOWN, 10, 10),
        (POINTER_MOVE, 50, 12),
        (POINTER_UP, 50, 12),
    ]


def test_other_buttons_are_not_translated(source):
    assert not source.dispatch(pygame.event.Event(pygame.MOUSEBUTTONDOWN, pos=(1, 1), button=3))
    assert not source.dispatch(pygame.event.Event(pygame.MOUSEBUTTONUP, pos=(1, 1), button=3))
    assert source.received == []


def test_key_press_uses_character(source):
    assert source.dispatch(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_z, unicode='z', mod=0))

    assert source.received == [(KEY_PRESS, 'z')]


def test_unrelated_events_are_not_translated(source):
    assert not source.dispatch(pygame.event.Event(pygame.QUIT))


def test_unknown_event_kind():
    with pytest.raises(ValueError):
        PygameInput().subscribe('scroll', print)


def test_parser_options():
    opt = build_parser().parse_args(['--width', '640', '--max-iter', '80', '--verbose'])

    assert opt.width == 640
    assert opt.height is None
    assert opt.max_iter == 80
    assert opt.verbose
    assert opt.settings is None
