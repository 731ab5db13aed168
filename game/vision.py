"""Color segmentation, morphological cleanup, and contour extraction.

All pixel work is done by OpenCV. Frames are BGR ``uint8`` arrays as
delivered by ``cv2.VideoCapture``; masks are single-channel 0/255 arrays.
"""

import cv2
import numpy as np

from game.types import Detection, HSVRange, Rect
from game import config

_ERODE_ELEMENT = cv2.getStructuringElement(
    cv2.MORPH_RECT, (config.ERODE_KERNEL, config.ERODE_KERNEL)
)
_DILATE_ELEMENT = cv2.getStructuringElement(
    cv2.MORPH_RECT, (config.DILATE_KERNEL, config.DILATE_KERNEL)
)


def segment(frame: np.ndarray, hsv_range: HSVRange) -> np.ndarray:
    """Threshold a BGR frame against an inclusive HSV range.

    The blur runs on BGR, before the conversion: blurring hue directly would
    smear values across the 0/180 wraparound.
    """
    blurred = cv2.blur(frame, (config.BLUR_SIZE, config.BLUR_SIZE))
    hsv = cv2.cvtColor(blurred, cv2.COLOR_BGR2HSV)
    lower, upper = hsv_range.bounds()
    return cv2.inRange(hsv, lower, upper)


def clean(mask: np.ndarray) -> np.ndarray:
    """Remove speckle noise, then grow what survives.

    Erosion with the small element drops isolated blobs; dilation with the
    large element restores the survivors and merges nearby fragments.
    """
    eroded = cv2.erode(mask, _ERODE_ELEMENT, iterations=config.MORPH_ITERATIONS)
    return cv2.dilate(eroded, _DILATE_ELEMENT, iterations=config.MORPH_ITERATIONS)


def find_objects(mask: np.ndarray) -> list[Detection]:
    """Outer contours of the mask with their bounding boxes.

    An empty mask gives an empty list.
    """
    contours, _ = cv2.findContours(
        mask.copy(), cv2.RETR_EXTERNAL, cv2.CHAIN_APPROX_SIMPLE
    )
    return [Detection(contour=c, rect=Rect(*cv2.boundingRect(c))) for c in contours]
