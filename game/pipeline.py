"""Per-tick frame pipeline: segment, clean, track, bounce, draw.

``BallGame`` owns everything that survives between ticks: the ball, the
contact flag, and the latest control values. The UI thread replaces
``hsv_range`` and ``speed`` whenever a slider moves; the worker reads them
once at the start of each tick.
"""

import logging
from typing import Optional

import cv2
import numpy as np

from game.types import Ball, HSVRange, TickResult
from game.physics import apply_speed, check_contact, move
from game.render import draw_ball, draw_crosshair, draw_outlines
from game.vision import clean, find_objects, segment
from game import config

logger = logging.getLogger(__name__)


def is_empty(frame: Optional[np.ndarray]) -> bool:
    return frame is None or frame.size == 0


class BallGame:
    """Pipeline owner for one play session."""

    def __init__(
        self,
        width: int = config.FIELD_WIDTH,
        height: int = config.FIELD_HEIGHT,
        hsv_range: Optional[HSVRange] = None,
        speed: int = config.SPEED_PRESET["default"],
        mirror: bool = config.MIRROR_FRAME,
    ):
        self.width = width
        self.height = height
        self.ball = Ball(width=width, height=height)
        self.contacted = False
        self.hsv_range = hsv_range or HSVRange.from_presets()
        self.speed = speed
        self.mirror = mirror
        self.ticks = 0

    def _prepare(self, frame: np.ndarray) -> np.ndarray:
        if self.mirror:
            frame = cv2.flip(frame, 1)
        else:
            frame = frame.copy()
        h, w = frame.shape[:2]
        if (w, h) != (self.width, self.height):
            frame = cv2.resize(frame, (self.width, self.height))
        return frame

    def process(self, frame: Optional[np.ndarray]) -> Optional[TickResult]:
        """Run one tick over a captured frame.

        Returns None and leaves all state untouched when the frame is empty.
        """
        if is_empty(frame):
            logger.debug("Empty frame, skipping tick")
            return None

        hsv_range = self.hsv_range
        speed = self.speed

        frame = self._prepare(frame)
        mask = segment(frame, hsv_range)
        morph = clean(mask)
        detections = find_objects(morph)

        draw_outlines(frame, detections)

        # Contact lasts a single tick
        self.contacted = False
        for det in detections:
            self.contacted = check_contact(self.ball, [det.rect], self.contacted)
            draw_crosshair(frame, det)
        if self.contacted:
            logger.debug("Ball hit tracked object at (%d,%d)", self.ball.x, self.ball.y)

        apply_speed(self.ball, speed)
        move(self.ball)
        draw_ball(frame, self.ball)
        self.ticks += 1

        return TickResult(
            frame=frame,
            mask=mask,
            morph=morph,
            detections=detections,
            contacted=self.contacted,
            label=hsv_range.describe(),
            ball=self.ball.copy(),
        )
