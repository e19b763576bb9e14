import logging
from pathlib import Path
from typing import List, Sequence

import cv2
import mediapipe as mp
from mediapipe.tasks import python as mp_tasks
from mediapipe.tasks.python import vision as mp_vision

from errors import InferenceError
from perception_types import KeyPoint, NormalizedPoint

logger = logging.getLogger(__name__)

# BlazePose landmark index for each of the 17 keypoints, in keypoint order.
BLAZEPOSE_INDICES = (0, 2, 5, 7, 8, 11, 12, 13, 14, 15, 16, 23, 24, 25, 26, 27, 28)


def _clamp01(v) -> float:
    return max(0.0, min(1.0, float(v)))


def keypoints_from_landmarks(landmarks: Sequence) -> List[KeyPoint]:
    # Short or empty landmark lists yield no keypoints (classified as unknown).
    if len(landmarks) <= max(BLAZEPOSE_INDICES):
        return []
    keypoints = []
    for kp_id, idx in enumerate(BLAZEPOSE_INDICES):
        lm = landmarks[idx]
        visibility = getattr(lm, "visibility", None)
        keypoints.append(
            KeyPoint(
                id=kp_id,
                position=NormalizedPoint(_clamp01(lm.x), _clamp01(lm.y)),
                confidence=_clamp01(visibility if visibility is not None else 0.0),
            )
        )
    return keypoints


class PoseDetector:
    def __init__(self, model_path: Path, min_detection_confidence: float = 0.5):
        if not Path(model_path).is_file():
            raise InferenceError(f"Pose landmarker model not found: {model_path}")
        options = mp_vision.PoseLandmarkerOptions(
            base_options=mp_tasks.BaseOptions(model_asset_path=str(model_path)),
            running_mode=mp_vision.RunningMode.IMAGE,
            num_poses=1,
            min_pose_detection_confidence=min_detection_confidence,
        )
        try:
            self._landmarker = mp_vision.PoseLandmarker.create_from_options(options)
        except (RuntimeError, ValueError) as exc:
            raise InferenceError(f"Could not load pose landmarker: {exc}") from exc
        logger.info("Loaded pose landmarker from %s", model_path)

    def process(self, frame_bgr) -> List[KeyPoint]:
        frame_rgb = cv2.cvtColor(frame_bgr, cv2.COLOR_BGR2RGB)
        image = mp.Image(image_format=mp.ImageFormat.SRGB, data=frame_rgb)
        try:
            results = self._landmarker.detect(image)
        except (RuntimeError, ValueError) as exc:
            raise InferenceError(f"Pose estimation failed: {exc}") from exc
        if not results.pose_landmarks:
            return []
        return keypoints_from_landmarks(results.pose_landmarks[0])

    def close(self) -> None:
        self._landmarker.close()
