"""Tests for the matplotlib stage inspector and the CLI."""

import matplotlib
matplotlib.use("Agg")  # Non-interactive backend
import logging

import matplotlib.pyplot as plt
import pytest

import main
from game.types import HSVRange
from ui.stages import demo_frame, plot_stages, run_stages


def test_demo_frame_tracks_one_object():
    """Demo frame: the yellow square matches the presets, the blue one does not."""
    stages = run_stages(demo_frame(), HSVRange.from_presets())
    assert len(stages["detections"]) == 1
    cx, cy = stages["detections"][0].center
    assert abs(cx - 200) <= 4 and abs(cy - 160) <= 4


def test_plot_has_four_panels():
    fig, stages = plot_stages(demo_frame())
    try:
        assert len(fig.axes) == 4
        assert fig.axes[0].get_title() == "Tracked objects: 1"
        assert stages["mask"].shape == stages["morph"].shape
    finally:
        plt.close(fig)


def test_check_prints_identity(capsys):
    """Smoke test command prints a 3x3 identity matrix."""
    with pytest.raises(SystemExit) as exc:
        main.main(["check"])
    assert exc.value.code == 0
    out = capsys.readouterr().out
    assert "OpenCV" in out
    assert "mat = [[1 0 0]" in out
    assert "[0 0 1]]" in out


def test_unknown_command_shows_usage(capsys):
    with pytest.raises(SystemExit) as exc:
        main.main(["dance"])
    assert exc.value.code == 1
    assert "Available commands" in capsys.readouterr().out


def test_inspect_missing_image(capsys, tmp_path):
    with pytest.raises(SystemExit) as exc:
        main.main(["inspect", str(tmp_path / "nope.png")])
    assert exc.value.code == 1
    assert "Could not read image" in capsys.readouterr().out


def test_play_rejects_bad_device(capsys):
    with pytest.raises(SystemExit) as exc:
        main.main(["play", "front"])
    assert exc.value.code == 1


@pytest.mark.parametrize("flags, level", [
    ([], logging.INFO),
    (["-v"], logging.DEBUG),
    (["-q"], logging.ERROR),
])
def test_log_level_flags(flags, level, capsys):
    """-v/-q pick the root level; calling again just changes it."""
    root = logging.getLogger()
    saved = root.level
    try:
        with pytest.raises(SystemExit):
            main.main(flags + ["check"])
        assert root.level == level
    finally:
        root.setLevel(saved)
