from dataclasses import dataclass
from typing import List, Sequence

from classifiers.base import ClassifierBase
from geometry import mean_y
from perception_types import (
    LEFT_HIP,
    LEFT_SHOULDER,
    LEFT_WRIST,
    NUM_KEYPOINTS,
    RIGHT_HIP,
    RIGHT_SHOULDER,
    RIGHT_WRIST,
    KeyPoint,
    NormalizedPoint,
    PoseAction,
)

_ORIGIN = NormalizedPoint(0.0, 0.0)


@dataclass(frozen=True)
class ActionThresholds:
    sitting_max_torso: float = 0.3


def position_at(keypoints: Sequence[KeyPoint], index: int) -> NormalizedPoint:
    # Out-of-range indices resolve to the origin instead of failing.
    if 0 <= index < len(keypoints):
        return keypoints[index].position
    return _ORIGIN


class ActionClassifier(ClassifierBase):
    name = "action"
    required_keypoints = [LEFT_SHOULDER, RIGHT_SHOULDER, LEFT_WRIST, RIGHT_WRIST, LEFT_HIP, RIGHT_HIP]

    def __init__(self, thresholds: ActionThresholds = ActionThresholds()):
        self._thresholds = thresholds

    def classify(self, keypoints: Sequence[KeyPoint]) -> PoseAction:
        if len(keypoints) < NUM_KEYPOINTS or max(self.required_keypoints) >= len(keypoints):
            return PoseAction.UNKNOWN

        # Confidence is not consulted here, only positions.
        left_shoulder = position_at(keypoints, LEFT_SHOULDER)
        right_shoulder = position_at(keypoints, RIGHT_SHOULDER)
        left_hip = position_at(keypoints, LEFT_HIP)
        right_hip = position_at(keypoints, RIGHT_HIP)
        left_wrist = position_at(keypoints, LEFT_WRIST)
        right_wrist = position_at(keypoints, RIGHT_WRIST)

        # Smaller y is higher in the image.
        if left_wrist.y < left_shoulder.y or right_wrist.y < right_shoulder.y:
            return PoseAction.RAISING

        torso = abs(mean_y(left_hip, right_hip) - mean_y(left_shoulder, right_shoulder))
        if torso < self._thresholds.sitting_max_torso:
            return PoseAction.SITTING
        return PoseAction.STANDING

    def describe(self) -> List[str]:
        return [
            "raising: either wrist above its shoulder",
            f"sitting: hips within {self._thresholds.sitting_max_torso} of shoulders",
            "standing: otherwise",
        ]


_DEFAULT = ActionClassifier()


def classify_action(keypoints: Sequence[KeyPoint]) -> PoseAction:
    return _DEFAULT.classify(keypoints)
