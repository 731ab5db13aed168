"""Matplotlib stage inspector: each pipeline stage of a still image, side by side.

Useful for tuning the HSV sliders against a still image before going live.
"""

from typing import Optional

import cv2
import matplotlib.pyplot as plt
import numpy as np

from game.render import draw_crosshair, draw_outlines
from game.types import HSVRange
from game.vision import clean, find_objects, segment
from game import config


def _style_panel(ax, title):
    """Apply dark theme styling to an image panel."""
    ax.set_facecolor("#0f0f1a")
    ax.set_title(title, color="#e0e0e0", fontsize=11, fontweight="bold", pad=8)
    ax.set_xticks([])
    ax.set_yticks([])
    for spine in ax.spines.values():
        spine.set_color("#333333")


def demo_frame(width=config.FIELD_WIDTH, height=config.FIELD_HEIGHT) -> np.ndarray:
    """Dark frame with one object inside the default range and one outside it."""
    frame = np.full((height, width, 3), 30, dtype=np.uint8)
    frame[120:200, 160:240] = (60, 200, 220)   # warm yellow, matches the presets
    frame[260:340, 400:480] = (200, 80, 20)    # blue, filtered out
    return frame


def run_stages(frame: np.ndarray, hsv_range: HSVRange) -> dict:
    """Segment, clean and extract, returning every intermediate image."""
    mask = segment(frame, hsv_range)
    morph = clean(mask)
    detections = find_objects(morph)

    annotated = frame.copy()
    draw_outlines(annotated, detections)
    for det in detections:
        draw_crosshair(annotated, det)

    return {
        "frame": annotated,
        "mask": mask,
        "morph": morph,
        "detections": detections,
    }


def plot_stages(frame: np.ndarray, hsv_range: Optional[HSVRange] = None):
    """Build the 2x2 stage figure. Returns (fig, stages)."""
    hsv_range = hsv_range or HSVRange.from_presets()
    stages = run_stages(frame, hsv_range)

    fig, axes = plt.subplots(2, 2, figsize=(10, 7.5))
    fig.set_facecolor("#0f0f1a")
    fig.suptitle(hsv_range.describe(), color="#aaaaaa", fontsize=10)

    ax_frame, ax_blur, ax_mask, ax_morph = axes.flat

    _style_panel(ax_frame, f"Tracked objects: {len(stages['detections'])}")
    ax_frame.imshow(cv2.cvtColor(stages["frame"], cv2.COLOR_BGR2RGB))

    _style_panel(ax_blur, "Blurred HSV (hue)")
    blurred = cv2.blur(frame, (config.BLUR_SIZE, config.BLUR_SIZE))
    ax_blur.imshow(cv2.cvtColor(blurred, cv2.COLOR_BGR2HSV)[:, :, 0], cmap="hsv", vmin=0, vmax=config.HUE_MAX)

    _style_panel(ax_mask, "Threshold mask")
    ax_mask.imshow(stages["mask"], cmap="gray", vmin=0, vmax=255)

    _style_panel(ax_morph, f"After erode {config.ERODE_KERNEL}px / dilate {config.DILATE_KERNEL}px")
    ax_morph.imshow(stages["morph"], cmap="gray", vmin=0, vmax=255)

    for det in stages["detections"]:
        r = det.rect
        ax_morph.add_patch(plt.Rectangle(
            (r.x, r.y), r.width, r.height, fill=False, edgecolor="#28a745", linewidth=1.5,
        ))

    plt.tight_layout()
    return fig, stages


def show_stages(frame: np.ndarray, hsv_range: Optional[HSVRange] = None):
    """Plot the stages and open an interactive window."""
    fig, stages = plot_stages(frame, hsv_range)
    for i, det in enumerate(stages["detections"]):
        print(f"  Object {i + 1}: rect=({det.rect.x},{det.rect.y},{det.rect.width},{det.rect.height}) "
              f"center={det.center}")
    plt.show()
    return fig
