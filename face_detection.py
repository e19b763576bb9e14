import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Sequence

import cv2
import mediapipe as mp
from mediapipe.tasks import python as mp_tasks
from mediapipe.tasks.python import vision as mp_vision

from errors import InferenceError
from overlay import NormalizedRect
from perception_types import (
    LEFT_EYE,
    LEFT_EYEBROW,
    OUTER_LIPS,
    RIGHT_EYE,
    RIGHT_EYEBROW,
    FaceLandmarks,
    NormalizedPoint,
)

logger = logging.getLogger(__name__)

# FaceMesh indices per group. The lip contour starts at a mouth corner and
# reaches the other corner exactly halfway round.
MESH_GROUPS = {
    OUTER_LIPS: [61, 185, 40, 39, 37, 0, 267, 269, 270, 409, 291, 375, 321, 405, 314, 17, 84, 181, 91, 146],
    LEFT_EYEBROW: [276, 283, 282, 295, 285, 300, 293, 334, 296, 336],
    RIGHT_EYEBROW: [46, 53, 52, 65, 55, 70, 63, 105, 66, 107],
    LEFT_EYE: [263, 249, 390, 373, 374, 380, 381, 382, 362, 398, 384, 385, 386, 387, 388, 466],
    RIGHT_EYE: [33, 7, 163, 144, 145, 153, 154, 155, 133, 173, 157, 158, 159, 160, 161, 246],
}


@dataclass
class DetectedFace:
    bounding_box: NormalizedRect
    landmarks: FaceLandmarks


def _clamp01(v: float) -> float:
    return max(0.0, min(1.0, float(v)))


def face_from_mesh(points: Sequence) -> DetectedFace:
    # Groups are re-expressed relative to the mesh extent with y pointing up.
    # Groups indexing past the end of the mesh are left out.
    xs = [_clamp01(p.x) for p in points]
    ys = [_clamp01(p.y) for p in points]
    if not xs:
        return DetectedFace(NormalizedRect(0.0, 0.0, 0.0, 0.0), FaceLandmarks())

    x0, x1 = min(xs), max(xs)
    y0, y1 = min(ys), max(ys)
    box_w = x1 - x0
    box_h = y1 - y0
    scale_w = box_w if box_w >= 1e-5 else 1.0
    scale_h = box_h if box_h >= 1e-5 else 1.0

    groups = {}
    for name, indices in MESH_GROUPS.items():
        if max(indices) >= len(xs):
            continue
        groups[name] = tuple(
            NormalizedPoint(
                _clamp01((xs[i] - x0) / scale_w),
                _clamp01((y1 - ys[i]) / scale_h),
            )
            for i in indices
        )
    return DetectedFace(NormalizedRect(x0, y0, box_w, box_h), FaceLandmarks(groups))


class FaceLandmarkDetector:
    def __init__(self, model_path: Path, max_faces: int = 4, min_detection_confidence: float = 0.5):
        if not Path(model_path).is_file():
            raise InferenceError(f"Face landmarker model not found: {model_path}")
        options = mp_vision.FaceLandmarkerOptions(
            base_options=mp_tasks.BaseOptions(model_asset_path=str(model_path)),
            running_mode=mp_vision.RunningMode.IMAGE,
            num_faces=max_faces,
            min_face_detection_confidence=min_detection_confidence,
        )
        try:
            self._landmarker = mp_vision.FaceLandmarker.create_from_options(options)
        except (RuntimeError, ValueError) as exc:
            raise InferenceError(f"Could not load face landmarker: {exc}") from exc
        logger.info("Loaded face landmarker from %s", model_path)

    def detect(self, frame_bgr) -> List[DetectedFace]:
        rgb = cv2.cvtColor(frame_bgr, cv2.COLOR_BGR2RGB)
        image = mp.Image(image_format=mp.ImageFormat.SRGB, data=rgb)
        try:
            result = self._landmarker.detect(image)
        except (RuntimeError, ValueError) as exc:
            raise InferenceError(f"Face analysis failed: {exc}") from exc
        faces = [face_from_mesh(mesh) for mesh in result.face_landmarks]
        logger.debug("Detected %d faces", len(faces))
        return faces

    def close(self) -> None:
        self._landmarker.close()
