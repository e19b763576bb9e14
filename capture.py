import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import cv2
import numpy as np

from errors import ImageLoadError

logger = logging.getLogger(__name__)


@dataclass
class CapturedImage:
    frame: Optional[np.ndarray]
    timestamp: float
    ok: bool


def load_image(path) -> np.ndarray:
    path = Path(path)
    if not path.is_file():
        raise ImageLoadError(f"Image not found: {path}")
    frame = cv2.imread(str(path), cv2.IMREAD_COLOR)
    if frame is None:
        raise ImageLoadError(f"Could not decode image: {path}")
    return frame


def capture_still(camera_index: int = 0, width: int = 1280, height: int = 720, warmup_frames: int = 5) -> CapturedImage:
    capture = cv2.VideoCapture(camera_index)
    try:
        if not capture.isOpened():
            logger.warning("Could not open camera index %d", camera_index)
            return CapturedImage(None, time.time(), False)
        capture.set(cv2.CAP_PROP_FRAME_WIDTH, width)
        capture.set(cv2.CAP_PROP_FRAME_HEIGHT, height)

        # First frames are often dark while auto exposure settles.
        ok, frame = False, None
        for _ in range(max(1, warmup_frames)):
            ok, frame = capture.read()
        if not ok:
            return CapturedImage(None, time.time(), False)
        return CapturedImage(frame, time.time(), True)
    finally:
        capture.release()
