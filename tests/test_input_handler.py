import pygame
import pytest

from raycaster.input_handler import InputHandler, Intent


class FakeKeys:
    """Key state stub answering True for a fixed set of key codes."""

    def __init__(self, pressed=()):
        self._pressed = set(pressed)

    def __getitem__(self, key):
        return key in self._pressed

    def __len__(self):
        return 512


def test_intent_without_polling_is_idle():
    assert InputHandler().intent() == Intent()


@pytest.mark.parametrize(
    "pressed,expected",
    [
        ((pygame.K_w,), Intent(forward=1)),
        ((pygame.K_DOWN,), Intent(forward=-1)),
        ((pygame.K_w, pygame.K_s), Intent()),
        ((pygame.K_a,), Intent(strafe=-1)),
        ((pygame.K_d, pygame.K_LEFT), Intent(strafe=1, turn=-1)),
        ((pygame.K_RIGHT,), Intent(turn=1)),
        ((pygame.K_LEFTBRACKET,), Intent(zoom=-1)),
    ],
)
def test_intent_from_keys(pressed, expected):
    handler = InputHandler()
    handler._keys = FakeKeys(pressed)
    assert handler.intent() == expected


def test_process_events_one_shot_actions(monkeypatch):
    events = [
        pygame.event.Event(pygame.KEYDOWN, key=pygame.K_m),
        pygame.event.Event(pygame.KEYDOWN, key=pygame.K_p),
    ]
    monkeypatch.setattr(pygame.event, "get", lambda: events)
    monkeypatch.setattr(pygame.key, "get_pressed", lambda: FakeKeys())
    handler = InputHandler()
    handler.process_events()
    assert handler.toggle_map_pressed()
    assert handler.pause_pressed()
    assert not handler.should_quit()
    # One-shot actions reset on the next poll
    monkeypatch.setattr(pygame.event, "get", lambda: [])
    handler.process_events()
    assert not handler.toggle_map_pressed()


def test_process_events_quit(monkeypatch):
    monkeypatch.setattr(
        pygame.event, "get", lambda: [pygame.event.Event(pygame.QUIT)]
    )
    monkeypatch.setattr(pygame.key, "get_pressed", lambda: FakeKeys())
    handler = InputHandler()
    handler.process_events()
    assert handler.should_quit()


def test_intent_uses_keys_captured_by_polling(monkeypatch):
    monkeypatch.setattr(pygame.event, "get", lambda: [])
    monkeypatch.setattr(
        pygame.key, "get_pressed", lambda: FakeKeys((pygame.K_UP, pygame.K_a))
    )
    handler = InputHandler()
    handler.process_events()
    assert handler.intent() == Intent(forward=1, strafe=-1)
