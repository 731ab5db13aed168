"""Shared fixtures: synthetic frames and a scripted capture device."""

import numpy as np
import pytest

from game.types import HSVRange

RED = (0, 0, 255)  # BGR
RED_RANGE = HSVRange(low=(0, 100, 100), high=(10, 255, 255))


class FakeCamera:
    """Capture device that plays back a list of frames, then repeats the last one."""

    def __init__(self, frames=None, available=True):
        self.frames = list(frames or [])
        self.available = available
        self.opened = False
        self.released = False
        self.reads = 0

    def open(self, index=0):
        self.opened = self.available
        return self.opened

    def is_opened(self):
        return self.opened

    def read(self):
        self.reads += 1
        if len(self.frames) > 1:
            return self.frames.pop(0)
        return self.frames[0] if self.frames else None

    def release(self):
        self.released = True
        self.opened = False


@pytest.fixture
def make_frame():
    """Black 640x480 frame with optional colored squares: (x, y, size, bgr)."""
    def _make(*squares, width=640, height=480):
        frame = np.zeros((height, width, 3), dtype=np.uint8)
        for x, y, size, color in squares:
            frame[y:y + size, x:x + size] = color
        return frame
    return _make


@pytest.fixture
def red_range():
    return RED_RANGE


@pytest.fixture
def fake_camera():
    return FakeCamera
