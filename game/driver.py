"""Frame acquisition and the fixed-period tick loop.

One worker thread grabs a frame, runs it through ``BallGame.process`` and
hands the result to a sink callback. The sink must not block: the worker
moves straight on to the next tick.
"""

import logging
import threading
import time
from typing import Callable, Optional

import cv2
import numpy as np

from game.pipeline import BallGame, is_empty
from game.types import TickResult
from game import config

logger = logging.getLogger(__name__)


class Camera:
    """Capture device backed by ``cv2.VideoCapture``."""

    def __init__(self, width: int = config.FIELD_WIDTH, height: int = config.FIELD_HEIGHT):
        self.width = width
        self.height = height
        self._cap: Optional[cv2.VideoCapture] = None

    def open(self, index: int = config.DEFAULT_DEVICE) -> bool:
        self.release()
        cap = cv2.VideoCapture(index)
        if not cap.isOpened():
            cap.release()
            return False
        cap.set(cv2.CAP_PROP_FRAME_WIDTH, self.width)
        cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self.height)
        self._cap = cap
        return True

    def is_opened(self) -> bool:
        cap = self._cap
        return cap is not None and cap.isOpened()

    def read(self) -> Optional[np.ndarray]:
        """Next frame, or None when the device gave nothing back."""
        cap = self._cap
        if cap is None:
            return None
        ok, frame = cap.read()
        if not ok:
            return None
        return frame

    def release(self):
        if self._cap is not None:
            self._cap.release()
            self._cap = None


class TickDriver:
    """Runs the pipeline every ``period`` seconds on a single worker thread."""

    def __init__(
        self,
        camera,
        game: BallGame,
        on_result: Callable[[TickResult], None],
        period: float = config.TICK_PERIOD,
        stop_timeout: float = config.STOP_TIMEOUT,
    ):
        self.camera = camera
        self.game = game
        self.on_result = on_result
        self.period = period
        self.stop_timeout = stop_timeout
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None
        # worker that outlived its stop() and may still be mid-tick
        self._lingering: Optional[threading.Thread] = None
        self.errors = 0

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self, device_index: int = config.DEFAULT_DEVICE) -> bool:
        """Open the device and start ticking.

        False if the device is unavailable or the worker from the previous
        run is still inside a tick.
        """
        if self.running:
            return True
        if not self._drain():
            logger.warning("Previous frame capture still busy, not starting")
            return False

        self.camera.open(device_index)
        if not self.camera.is_opened():
            logger.error("Impossible to open the camera connection (device %d)", device_index)
            return False

        # fresh event per run; an old worker keeps its own, already set
        self._stop = threading.Event()
        self._thread = threading.Thread(
            target=self._run, args=(self._stop,), name="frame-grabber", daemon=True
        )
        self._thread.start()
        logger.info("Camera %d started, ticking every %.0f ms", device_index, self.period * 1000)
        return True

    def stop(self):
        """Stop ticking and release the device.

        Waits at most ``stop_timeout`` for the in-flight tick. The device is
        released whether or not the worker has finished.
        """
        self._stop.set()
        worker, self._thread = self._thread, None
        if worker is not None:
            worker.join(timeout=self.stop_timeout)
            if worker.is_alive():
                logger.warning("Frame capture still busy, releasing the camera now")
                self._lingering = worker
        self.camera.release()
        logger.info("Camera released")

    def _drain(self) -> bool:
        """Give a worker left over from the last stop() a bounded wait.

        True once no old worker can tick any more.
        """
        worker = self._lingering
        if worker is not None:
            worker.join(timeout=self.stop_timeout)
            if worker.is_alive():
                return False
            self._lingering = None
        return True

    def tick(self) -> Optional[TickResult]:
        """Grab one frame and push it through the pipeline.

        Empty frames and processing failures abandon the tick; neither stops
        the loop.
        """
        if not self.camera.is_opened():
            return None
        try:
            frame = self.camera.read()
            if is_empty(frame):
                return None
            result = self.game.process(frame)
            if result is not None:
                self.on_result(result)
        except Exception:
            self.errors += 1
            logger.exception("Exception during the frame elaboration")
            return None
        return result

    def _run(self, stop: threading.Event):
        deadline = time.monotonic()
        while not stop.is_set():
            self.tick()
            deadline += self.period
            now = time.monotonic()
            if deadline < now:
                # fell behind; don't replay missed ticks in a burst
                deadline = now
            stop.wait(deadline - now)
