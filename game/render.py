"""Overlay drawing on the live frame."""

import cv2
import numpy as np

from game.types import Ball, Detection
from game import config


def draw_outlines(frame: np.ndarray, detections: list[Detection]) -> np.ndarray:
    if detections:
        cv2.drawContours(frame, [d.contour for d in detections], -1, config.OUTLINE_COLOR, 1)
    return frame


def draw_crosshair(frame: np.ndarray, detection: Detection) -> np.ndarray:
    """Circle, four arms and a coordinate label at the detection center."""
    x, y = detection.center
    arm = config.CROSSHAIR_ARM
    color = config.CROSSHAIR_COLOR
    thick = config.LINE_THICKNESS

    cv2.circle(frame, (x, y), config.CROSSHAIR_RADIUS, color, thick)
    for end in ((x, y - arm), (x, y + arm), (x - arm, y), (x + arm, y)):
        cv2.line(frame, (x, y), end, color, thick)
    cv2.putText(
        frame, f"Tracking object at ({x},{y})", (x, y),
        cv2.FONT_HERSHEY_PLAIN, 1, config.LABEL_COLOR, thick,
    )
    return frame


def draw_ball(frame: np.ndarray, ball: Ball) -> np.ndarray:
    cv2.circle(frame, (int(ball.x), int(ball.y)), ball.r, config.BALL_COLOR, -1)
    return frame
