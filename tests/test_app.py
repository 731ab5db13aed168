"""Tests for the pygame front end (headless)."""

import os

import pytest

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
pygame = pytest.importorskip("pygame")

from game.types import HSVRange
from game import config
from ui.app import BallGameApp, FrameSlot, Slider, ToggleButton, to_surface


@pytest.fixture(scope="module", autouse=True)
def _pygame():
    pygame.init()
    yield
    pygame.quit()


def _click(pos, kind=None, button=1):
    kind = kind if kind is not None else pygame.MOUSEBUTTONDOWN
    if kind == pygame.MOUSEMOTION:
        return pygame.event.Event(kind, pos=pos, rel=(0, 0), buttons=(1, 0, 0))
    return pygame.event.Event(kind, pos=pos, button=button)


def test_defaults_match_presets(fake_camera):
    """Fresh window: sliders at their presets, pipeline in sync."""
    app = BallGameApp(camera=fake_camera())
    assert app.hsv_range() == HSVRange.from_presets()
    assert app.game.hsv_range == HSVRange.from_presets()
    assert app.game.speed == config.SPEED_PRESET["default"]
    assert app.button.label == "Start Camera"
    assert [s.key for s in app.sliders] == list(config.SLIDER_PRESETS)


def test_slider_maps_track_to_range():
    slider = Slider("hue_stop", "Hue max", 0, 180, 50, (0, 0, 300, 20))
    left, right = slider.track
    assert slider.value_at(left) == 0
    assert slider.value_at(right) == 180
    assert slider.value_at(left - 100) == 0, "Clamped below"
    assert slider.value_at(right + 100) == 180, "Clamped above"
    assert slider.value_at((left + right) // 2) == pytest.approx(90, abs=1)


def test_slider_drag():
    """Press on the slider, drag, release: value follows the mouse until release."""
    slider = Slider("speed", "Speed", 1, 50, 5, (0, 0, 300, 20))
    left, right = slider.track

    assert slider.handle_event(_click((right, 10)))
    assert slider.value == 50
    assert slider.handle_event(_click((left, 10), pygame.MOUSEMOTION))
    assert slider.value == 1
    slider.handle_event(_click((left, 10), pygame.MOUSEBUTTONUP))
    assert not slider.handle_event(_click((right, 10), pygame.MOUSEMOTION))
    assert slider.value == 1


def test_click_outside_slider_ignored():
    slider = Slider("speed", "Speed", 1, 50, 5, (0, 0, 300, 20))
    assert not slider.handle_event(_click((100, 200)))
    assert slider.value == 5


def test_slider_event_updates_pipeline(fake_camera):
    """Moving a range slider changes the range the worker reads next tick."""
    app = BallGameApp(camera=fake_camera())
    hue_stop = next(s for s in app.sliders if s.key == "hue_stop")
    _, right = hue_stop.track
    app.handle_event(_click((right, hue_stop.y + 5)))
    assert app.game.hsv_range.high[0] == config.HUE_MAX

    _, right = app.speed_slider.track
    app.handle_event(_click((right, app.speed_slider.y + 5)))
    assert app.game.speed == config.SPEED_PRESET["max"]


def test_toggle_with_unavailable_camera(fake_camera):
    """Failed open: button stays on Start, status explains why."""
    app = BallGameApp(camera=fake_camera(available=False))
    assert app.toggle() is False
    assert app.button.label == "Start Camera"
    assert app.status.startswith("Impossible")


def test_toggle_start_stop(fake_camera, make_frame):
    """Start shows frames; stop releases the camera and clears all surfaces."""
    camera = fake_camera([make_frame()])
    app = BallGameApp(camera=camera)

    assert app.toggle() is True
    assert app.button.label == "Stop Camera"
    deadline = pygame.time.get_ticks() + 2000
    while app.live is None and pygame.time.get_ticks() < deadline:
        app.poll()
        pygame.time.wait(10)
    assert app.live is not None
    assert app.label == app.game.hsv_range.describe()

    assert app.toggle() is False
    assert app.button.label == "Start Camera"
    assert camera.released
    assert app.live is None and app.mask is None and app.morph is None


def test_restart_keeps_the_same_ball(fake_camera, make_frame):
    """The ball lives for the whole session; stop and start resume it."""
    app = BallGameApp(camera=fake_camera([make_frame()]))
    game = app.game

    app.toggle()
    deadline = pygame.time.get_ticks() + 2000
    while game.ticks < 3 and pygame.time.get_ticks() < deadline:
        pygame.time.wait(10)
    worker = app.driver._thread
    app.toggle()
    worker.join(2)
    ticks, paused = game.ticks, game.ball.copy()
    assert ticks >= 3
    assert (paused.x, paused.y) != (config.BALL_START_X, config.BALL_START_Y)

    assert app.toggle() is True
    assert app.game is game
    assert game.ticks >= ticks
    assert game.ball.x != config.BALL_START_X, "Ball is not put back at its start"
    worker = app.driver._thread
    app.toggle()
    worker.join(2)


def test_button_click_routes_to_toggle(fake_camera):
    app = BallGameApp(camera=fake_camera(available=False))
    assert app.handle_event(_click((app.button.x + 2, app.button.y + 2)))
    assert app.status.startswith("Impossible")


def test_quit_event():
    app = BallGameApp()
    assert app.handle_event(pygame.event.Event(pygame.QUIT)) is False


def test_frame_slot_keeps_latest():
    """Worker may publish faster than the UI draws; only the newest is kept."""
    slot = FrameSlot()
    assert slot.take() is None
    slot.publish("a")
    slot.publish("b")
    assert slot.take() == "b"
    assert slot.take() is None


def test_surfaces_have_display_sizes(make_frame):
    import numpy as np

    frame = make_frame()
    mask = np.zeros((480, 640), dtype=np.uint8)
    assert to_surface(frame).get_size() == (640, 480)
    preview = (config.PREVIEW_WIDTH, config.PREVIEW_HEIGHT)
    assert to_surface(mask, preview).get_size() == preview


def test_toggle_button_labels():
    button = ToggleButton((0, 0, 100, 30))
    assert button.label == "Start Camera"
    button.active = True
    assert button.label == "Stop Camera"
    assert button.hit((50, 15))
    assert not button.hit((150, 15))
