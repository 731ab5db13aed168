"""Pygame front end: live frame, mask previews, HSV sliders and the camera toggle."""

import threading
from typing import Optional

try:
    import pygame
except ImportError:
    pygame = None

import cv2
import numpy as np

from game.driver import Camera, TickDriver
from game.pipeline import BallGame
from game.types import HSVRange, TickResult
from game import config


# Window layout
WIN_W = 760
WIN_H = 700
MARGIN = 10

LIVE_RECT = (MARGIN, MARGIN, config.FIELD_WIDTH, config.FIELD_HEIGHT)
MASK_RECT = (MARGIN, 500, config.PREVIEW_WIDTH, config.PREVIEW_HEIGHT)
MORPH_RECT = (MARGIN + config.PREVIEW_WIDTH + 10, 500, config.PREVIEW_WIDTH, config.PREVIEW_HEIGHT)
LABEL_RECT = (MARGIN, 662, 2 * config.PREVIEW_WIDTH + 10, 24)
CONTROLS_X = 440
CONTROLS_W = WIN_W - CONTROLS_X - MARGIN
BUTTON_RECT = (CONTROLS_X + 180, 496, CONTROLS_W - 180, 28)
SPEED_RECT = (CONTROLS_X, 500, 170, 20)
SLIDER_TOP = 536
SLIDER_STEP = 26

# Colors
BG_COLOR = (12, 12, 22)
PANEL_BG = (22, 33, 62)
BORDER = (42, 42, 74)
TRACK = (60, 60, 90)
KNOB = (233, 69, 96)
TEXT_WHITE = (224, 224, 224)
TEXT_DIM = (136, 136, 136)
ACTIVE_GREEN = (40, 167, 69)
EDGE_RED = (255, 107, 107)

LABEL_W = 64
VALUE_W = 34


class Slider:
    """Horizontal integer slider with a label on the left and the value on the right."""

    def __init__(self, key, label, lo, hi, value, rect):
        self.key = key
        self.label = label
        self.lo = lo
        self.hi = hi
        self.value = value
        self.x, self.y, self.w, self.h = rect
        self.dragging = False

    @property
    def track(self) -> tuple[int, int]:
        """Left and right pixel of the slider track."""
        return self.x + LABEL_W, self.x + self.w - VALUE_W

    def hit(self, pos) -> bool:
        px, py = pos
        return self.x <= px < self.x + self.w and self.y <= py < self.y + self.h

    def value_at(self, px: int) -> int:
        left, right = self.track
        frac = (px - left) / max(right - left, 1)
        frac = min(max(frac, 0.0), 1.0)
        return int(round(self.lo + frac * (self.hi - self.lo)))

    def knob_x(self) -> int:
        left, right = self.track
        span = max(self.hi - self.lo, 1)
        return int(left + (self.value - self.lo) / span * (right - left))

    def handle_event(self, event) -> bool:
        """Feed a mouse event; True if the value changed."""
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1 and self.hit(event.pos):
            self.dragging = True
        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            self.dragging = False
            return False
        elif event.type != pygame.MOUSEMOTION or not self.dragging:
            return False

        new = self.value_at(event.pos[0])
        changed = new != self.value
        self.value = new
        return changed

    def draw(self, surface, font):
        left, right = self.track
        mid = self.y + self.h // 2
        surface.blit(font.render(self.label, True, TEXT_DIM), (self.x, mid - 7))
        pygame.draw.line(surface, TRACK, (left, mid), (right, mid), 4)
        pygame.draw.circle(surface, KNOB, (self.knob_x(), mid), 7)
        surface.blit(font.render(str(self.value), True, TEXT_WHITE), (right + 8, mid - 7))


class ToggleButton:
    """Two-state button: inactive shows the start label, active the stop label."""

    LABELS = ("Start Camera", "Stop Camera")

    def __init__(self, rect):
        self.x, self.y, self.w, self.h = rect
        self.active = False

    @property
    def label(self) -> str:
        return self.LABELS[1] if self.active else self.LABELS[0]

    def hit(self, pos) -> bool:
        px, py = pos
        return self.x <= px < self.x + self.w and self.y <= py < self.y + self.h

    def draw(self, surface, font):
        color = KNOB if self.active else ACTIVE_GREEN
        pygame.draw.rect(surface, color, (self.x, self.y, self.w, self.h), border_radius=4)
        txt = font.render(self.label, True, TEXT_WHITE)
        surface.blit(txt, (self.x + (self.w - txt.get_width()) // 2, self.y + (self.h - txt.get_height()) // 2))


class FrameSlot:
    """Latest tick result, handed from the worker thread to the UI loop.

    ``publish`` never blocks on the UI; an older result that was never drawn
    is simply replaced.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._latest: Optional[TickResult] = None

    def publish(self, result: TickResult):
        with self._lock:
            self._latest = result

    def take(self) -> Optional[TickResult]:
        with self._lock:
            result, self._latest = self._latest, None
        return result


def to_surface(image: np.ndarray, size=None):
    """BGR frame or single-channel mask to a pygame surface."""
    if image.ndim == 2:
        rgb = cv2.cvtColor(image, cv2.COLOR_GRAY2RGB)
    else:
        rgb = cv2.cvtColor(image, cv2.COLOR_BGR2RGB)
    if size is not None:
        rgb = cv2.resize(rgb, size, interpolation=cv2.INTER_AREA)
    return pygame.surfarray.make_surface(rgb.swapaxes(0, 1))


def build_sliders() -> list[Slider]:
    sliders = []
    for i, (key, preset) in enumerate(config.SLIDER_PRESETS.items()):
        rect = (CONTROLS_X, SLIDER_TOP + i * SLIDER_STEP, CONTROLS_W, 20)
        sliders.append(Slider(key, preset["label"], preset["min"], preset["max"], preset["default"], rect))
    return sliders


class BallGameApp:
    """Window state and controls around one ``BallGame`` session."""

    def __init__(self, device_index: int = config.DEFAULT_DEVICE, camera=None):
        self.device_index = device_index
        self.game = BallGame()
        self.slot = FrameSlot()
        self.camera = camera if camera is not None else Camera()
        self.driver = TickDriver(self.camera, self.game, self.slot.publish)

        self.sliders = build_sliders()
        p = config.SPEED_PRESET
        self.speed_slider = Slider("speed", p["label"], p["min"], p["max"], p["default"], SPEED_RECT)
        self.button = ToggleButton(BUTTON_RECT)

        self.live = None
        self.mask = None
        self.morph = None
        self.label = ""
        self.status = "Press Start Camera"
        self.sync_controls()

    def hsv_range(self) -> HSVRange:
        v = {s.key: s.value for s in self.sliders}
        return HSVRange(
            low=(v["hue_start"], v["saturation_start"], v["value_start"]),
            high=(v["hue_stop"], v["saturation_stop"], v["value_stop"]),
        )

    def sync_controls(self):
        """Push slider values into the pipeline; the worker reads them next tick."""
        self.game.hsv_range = self.hsv_range()
        self.game.speed = self.speed_slider.value

    def toggle(self) -> bool:
        """Start or stop the camera. Returns the new active state."""
        if not self.button.active:
            if self.driver.start(self.device_index):
                self.button.active = True
                self.status = f"Camera {self.device_index} running"
            else:
                self.status = "Impossible to open the camera connection..."
        else:
            self.button.active = False
            self.driver.stop()
            self.slot.take()
            self.clear_surfaces()
            self.status = "Camera stopped"
        return self.button.active

    def clear_surfaces(self):
        self.live = None
        self.mask = None
        self.morph = None

    def update_surfaces(self, result: TickResult):
        preview = (config.PREVIEW_WIDTH, config.PREVIEW_HEIGHT)
        self.live = to_surface(result.frame)
        self.mask = to_surface(result.mask, preview)
        self.morph = to_surface(result.morph, preview)
        self.label = result.label

    def handle_event(self, event) -> bool:
        """Route one pygame event; False means quit."""
        if event.type == pygame.QUIT:
            return False
        if event.type == pygame.KEYDOWN and event.key == pygame.K_q:
            return False
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1 and self.button.hit(event.pos):
            self.toggle()
            return True

        changed = False
        for slider in self.sliders + [self.speed_slider]:
            changed = slider.handle_event(event) or changed
        if changed:
            self.sync_controls()
        return True

    def poll(self):
        """Pick up the newest tick result, if any."""
        result = self.slot.take()
        if result is not None and self.button.active:
            self.update_surfaces(result)

    def close(self):
        if self.button.active or self.driver.running:
            self.button.active = False
            self.driver.stop()

    def draw(self, screen, font, font_sm):
        screen.fill(BG_COLOR)

        for surf, rect in ((self.live, LIVE_RECT), (self.mask, MASK_RECT), (self.morph, MORPH_RECT)):
            if surf is None:
                pygame.draw.rect(screen, (0, 0, 0), rect)
            else:
                screen.blit(surf, rect[:2])
            pygame.draw.rect(screen, BORDER, rect, 1)

        pygame.draw.rect(screen, PANEL_BG, LABEL_RECT)
        pygame.draw.rect(screen, BORDER, LABEL_RECT, 1)
        screen.blit(font_sm.render(self.label, True, TEXT_WHITE), (LABEL_RECT[0] + 4, LABEL_RECT[1] + 6))

        self.speed_slider.draw(screen, font_sm)
        self.button.draw(screen, font)
        for slider in self.sliders:
            slider.draw(screen, font_sm)

        status_color = ACTIVE_GREEN if self.button.active else TEXT_DIM
        if self.status.startswith("Impossible"):
            status_color = EDGE_RED
        screen.blit(font_sm.render(self.status, True, status_color), (CONTROLS_X, WIN_H - 22))


def run_app(device_index: int = config.DEFAULT_DEVICE):
    """Launch the ball game window."""
    if pygame is None:
        print("ERROR: pygame is not installed. Run: pip install pygame")
        return

    pygame.init()
    screen = pygame.display.set_mode((WIN_W, WIN_H))
    pygame.display.set_caption("OpenCV Test - Ball Game")
    clock = pygame.time.Clock()

    font = pygame.font.SysFont("monospace", 14, bold=True)
    font_sm = pygame.font.SysFont("monospace", 12)

    app = BallGameApp(device_index)
    running = True
    try:
        while running:
            clock.tick(60)
            for event in pygame.event.get():
                if not app.handle_event(event):
                    running = False
                    break
            app.poll()
            app.draw(screen, font, font_sm)
            pygame.display.flip()
    finally:
        app.close()
        pygame.quit()
