import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Sequence, Tuple

import cv2
import numpy as np

from errors import InferenceError
from overlay import NormalizedRect, PixelRect

logger = logging.getLogger(__name__)

DETECTION_INPUT_SIZE = (736, 736)
DETECTION_MEAN = (122.67891434, 116.66876762, 104.00698793)
RECOGNITION_INPUT_SIZE = (100, 32)


@dataclass(frozen=True)
class RecognizedText:
    bounding_box: NormalizedRect
    text: str


def load_vocabulary(path: Path) -> List[str]:
    with open(path, encoding="utf-8") as f:
        return [line.rstrip("\n") for line in f if line.rstrip("\n")]


def quad_to_pixel_rect(quad, image_size: Tuple[int, int]) -> PixelRect:
    # Axis-aligned box around a detected quadrilateral, clipped to the image.
    width, height = image_size
    x, y, w, h = cv2.boundingRect(np.asarray(quad, dtype=np.int32).reshape(-1, 2))
    x0 = min(max(x, 0), width)
    y0 = min(max(y, 0), height)
    x1 = min(max(x + w, 0), width)
    y1 = min(max(y + h, 0), height)
    return PixelRect(x0, y0, x1 - x0, y1 - y0)


def quad_to_rect(quad, image_size: Tuple[int, int]) -> NormalizedRect:
    width, height = image_size
    r = quad_to_pixel_rect(quad, image_size)
    return NormalizedRect(r.x / width, r.y / height, r.width / width, r.height / height)


def reading_order(results: Sequence[RecognizedText]) -> List[RecognizedText]:
    return sorted(results, key=lambda r: (round(r.bounding_box.y, 2), r.bounding_box.x))


def joined_text(results: Sequence[RecognizedText]) -> str:
    return "\n".join(r.text for r in results)


class TextRecognizer:
    def __init__(self, detector_path: Path, recognizer_path: Path, vocabulary_path: Path, grayscale: bool = True):
        for path in (detector_path, recognizer_path, vocabulary_path):
            if not Path(path).is_file():
                raise InferenceError(f"Text recognition asset not found: {path}")
        try:
            self._detector = cv2.dnn_TextDetectionModel_DB(str(detector_path))
            self._detector.setBinaryThreshold(0.3)
            self._detector.setPolygonThreshold(0.5)
            self._detector.setMaxCandidates(200)
            self._detector.setUnclipRatio(2.0)
            self._detector.setInputParams(1.0 / 255, DETECTION_INPUT_SIZE, DETECTION_MEAN, True)

            self._recognizer = cv2.dnn_TextRecognitionModel(str(recognizer_path))
            self._recognizer.setDecodeType("CTC-greedy")
            self._recognizer.setVocabulary(load_vocabulary(vocabulary_path))
            self._recognizer.setInputParams(1.0 / 127.5, RECOGNITION_INPUT_SIZE, (127.5, 127.5, 127.5))
        except cv2.error as exc:
            raise InferenceError(f"Could not load text models: {exc}") from exc
        self._grayscale = grayscale
        logger.info("Loaded text detector %s and recognizer %s", detector_path, recognizer_path)

    def recognize(self, frame_bgr) -> List[RecognizedText]:
        height, width = frame_bgr.shape[:2]
        try:
            quads, _ = self._detector.detect(frame_bgr)
        except cv2.error as exc:
            raise InferenceError(f"Text detection failed: {exc}") from exc

        source = cv2.cvtColor(frame_bgr, cv2.COLOR_BGR2GRAY) if self._grayscale else frame_bgr
        results: List[RecognizedText] = []
        for quad in quads:
            pixels = quad_to_pixel_rect(quad, (width, height))
            if pixels.width <= 0 or pixels.height <= 0:
                continue
            (x0, y0), (x1, y1) = pixels.top_left, pixels.bottom_right
            box = quad_to_rect(quad, (width, height))
            try:
                text = self._recognizer.recognize(source[y0:y1, x0:x1])
            except cv2.error as exc:
                logger.warning("Skipping text region %s: %s", box, exc)
                continue
            if text.strip():
                results.append(RecognizedText(box, text.strip()))
        logger.debug("Recognized %d text regions", len(results))
        return reading_order(results)

    def close(self) -> None:
        # OpenCV DNN models free their nets when released.
        self._detector = None
        self._recognizer = None
