#!/usr/bin/env python3
"""CLI entry point for the HSV Ball Game.

Usage:
    python main.py play [device]      Open the camera window and play
    python main.py check              OpenCV smoke test (prints an identity matrix)
    python main.py inspect [image]    Show the pipeline stages for a still image
    python main.py test               Run all tests

Flags:
    -v, --verbose    Debug logging
    -q, --quiet      Errors only
"""

import logging
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from game.logging_utils import configure_logging

logger = logging.getLogger("ballgame")


def _arg(args, i, default=None):
    return args[i] if len(args) > i else default


def cmd_play(args):
    """Launch the ball game window."""
    from game import config

    device = _arg(args, 0, str(config.DEFAULT_DEVICE))
    if not device.isdigit():
        print(f"Device index must be a number, got {device!r}")
        return 1

    print("Launching Ball Game...")
    print("Controls: Start/Stop Camera button, HSV sliders, speed slider, Q=quit")
    print("-" * 60)
    from ui.app import run_app
    run_app(int(device))
    return 0


def cmd_check(args):
    """OpenCV smoke test."""
    import cv2
    import numpy as np

    mat = np.zeros((3, 3), dtype=np.uint8)
    cv2.setIdentity(mat)
    print(f"OpenCV {cv2.__version__}")
    print(f"mat = {mat}")
    return 0


def cmd_inspect(args):
    """Show segmentation stages for an image (or a demo frame)."""
    import cv2
    from ui.stages import demo_frame, show_stages

    path = _arg(args, 0)
    if path is None:
        frame = demo_frame()
        print("No image given, using the demo frame")
    else:
        frame = cv2.imread(path)
        if frame is None:
            print(f"Could not read image: {path}")
            return 1

    print("-" * 60)
    show_stages(frame)
    return 0


def cmd_test(args):
    """Run all tests."""
    import subprocess
    print("Running tests...")
    print("-" * 60)
    result = subprocess.run(
        [sys.executable, "-m", "pytest", "tests/", "-v"],
        cwd=os.path.dirname(os.path.abspath(__file__)),
    )
    return result.returncode


COMMANDS = {
    "play": cmd_play,
    "check": cmd_check,
    "inspect": cmd_inspect,
    "test": cmd_test,
}


def main(argv=None):
    argv = list(sys.argv[1:] if argv is None else argv)

    verbose = sum(1 for a in argv if a in ("-v", "--verbose"))
    quiet = any(a in ("-q", "--quiet") for a in argv)
    args = [a for a in argv if a not in ("-v", "--verbose", "-q", "--quiet")]

    if not args or args[0] not in COMMANDS:
        print(__doc__)
        print("Available commands:")
        for name, func in COMMANDS.items():
            print(f"  {name:12s} {func.__doc__}")
        sys.exit(1)

    configure_logging(verbose=verbose, quiet=quiet)
    logger.debug("Running command %s", args[0])
    sys.exit(COMMANDS[args[0]](args[1:]))


if __name__ == "__main__":
    main()
