"""Core data types for the ball game pipeline."""

from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from game import config


@dataclass(frozen=True)
class HSVRange:
    """Inclusive lower/upper HSV thresholds."""
    low: tuple[int, int, int] = (0, 0, 0)
    high: tuple[int, int, int] = (config.HUE_MAX, config.CHANNEL_MAX, config.CHANNEL_MAX)

    def bounds(self) -> tuple[np.ndarray, np.ndarray]:
        return np.array(self.low, dtype=np.uint8), np.array(self.high, dtype=np.uint8)

    def describe(self) -> str:
        (h0, s0, v0), (h1, s1, v1) = self.low, self.high
        return (
            f"Hue range: {h0}-{h1}. Sat. range: {s0}-{s1}. "
            f"Value range: {v0}-{v1}"
        )

    @classmethod
    def from_presets(cls) -> "HSVRange":
        p = {k: v["default"] for k, v in config.SLIDER_PRESETS.items()}
        return cls(
            low=(p["hue_start"], p["saturation_start"], p["value_start"]),
            high=(p["hue_stop"], p["saturation_stop"], p["value_stop"]),
        )


@dataclass(frozen=True)
class Rect:
    """Axis-aligned bounding rectangle of a contour."""
    x: int
    y: int
    width: int
    height: int

    @property
    def center(self) -> tuple[int, int]:
        return self.x + self.width // 2, self.y + self.height // 2

    def contains(self, px: float, py: float) -> bool:
        """Strict-inside test; points on the border do not count."""
        return (
            self.x < px < self.x + self.width
            and self.y < py < self.y + self.height
        )


@dataclass
class Detection:
    """One tracked region: its outer contour and bounding box."""
    contour: np.ndarray
    rect: Rect

    @property
    def center(self) -> tuple[int, int]:
        return self.rect.center


@dataclass
class Ball:
    """The bouncing ball and the field it lives in."""
    x: int = config.BALL_START_X
    y: int = config.BALL_START_Y
    dx: int = config.BALL_START_DX
    dy: int = config.BALL_START_DY
    r: int = config.BALL_RADIUS
    width: int = config.FIELD_WIDTH
    height: int = config.FIELD_HEIGHT

    def copy(self) -> "Ball":
        return Ball(
            x=self.x, y=self.y, dx=self.dx, dy=self.dy,
            r=self.r, width=self.width, height=self.height,
        )


@dataclass
class TickResult:
    """Everything one tick hands over to the display."""
    frame: np.ndarray          # annotated BGR frame
    mask: np.ndarray           # raw HSV threshold mask
    morph: np.ndarray          # mask after erode/dilate
    detections: list = field(default_factory=list)  # list[Detection]
    contacted: bool = False
    label: str = ""
    ball: Optional[Ball] = None  # snapshot after the move
