import logging
from dataclasses import dataclass
from typing import Iterable, List

from classifiers.base import ClassifierBase
from errors import DegenerateGeometryError, MissingInputError
from geometry import angle, mean, spread
from perception_types import (
    FACE_GROUPS,
    LEFT_EYE,
    LEFT_EYEBROW,
    OUTER_LIPS,
    RIGHT_EYE,
    RIGHT_EYEBROW,
    Emotion,
    FaceLandmarks,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmotionThresholds:
    happy_min_angle: float = 0.05
    happy_max_aspect: float = 0.35
    happy_min_width: float = 0.3
    sad_max_angle: float = -0.05
    sad_max_brow: float = 0.65
    sad_max_width: float = 0.35
    angry_max_brow: float = 0.55
    angry_max_height: float = 0.15
    angry_max_width: float = 0.3
    surprised_min_brow: float = 0.65
    surprised_min_height: float = 0.25
    surprised_min_eye: float = 0.2


@dataclass(frozen=True)
class FaceFeatures:
    mouth_height: float
    mouth_width: float
    mouth_aspect: float
    mouth_angle: float
    avg_brow_height: float
    avg_eye_height: float

    @classmethod
    def from_landmarks(cls, landmarks: FaceLandmarks, required: Iterable[str] = FACE_GROUPS) -> "FaceFeatures":
        # Missing groups raise MissingInputError; empty groups or a zero-width
        # mouth raise DegenerateGeometryError.
        groups = {name: landmarks.require(name) for name in required}
        empty = [name for name, points in groups.items() if not points]
        if empty:
            raise DegenerateGeometryError(f"empty landmark groups: {', '.join(empty)}")

        lips = groups[OUTER_LIPS]
        mouth_height = spread(lips, "y")
        mouth_width = spread(lips, "x")
        if mouth_width == 0:
            raise DegenerateGeometryError("mouth contour has zero width")

        # First point and the point halfway round the contour stand in for the mouth corners.
        mouth_angle = angle(lips[0], lips[len(lips) // 2])
        avg_brow_height = (mean(groups[LEFT_EYEBROW], "y") + mean(groups[RIGHT_EYEBROW], "y")) / 2
        avg_eye_height = (spread(groups[LEFT_EYE], "y") + spread(groups[RIGHT_EYE], "y")) / 2

        return cls(
            mouth_height=mouth_height,
            mouth_width=mouth_width,
            mouth_aspect=mouth_height / mouth_width,
            mouth_angle=mouth_angle,
            avg_brow_height=avg_brow_height,
            avg_eye_height=avg_eye_height,
        )


class EmotionClassifier(ClassifierBase):
    name = "emotion"
    required_groups = list(FACE_GROUPS)

    def __init__(self, thresholds: EmotionThresholds = EmotionThresholds()):
        self._thresholds = thresholds

    def classify(self, landmarks: FaceLandmarks) -> Emotion:
        try:
            features = FaceFeatures.from_landmarks(landmarks, self.required_groups)
        except (MissingInputError, DegenerateGeometryError) as exc:
            logger.debug("Falling back to neutral: %s", exc)
            return Emotion.NEUTRAL
        return self.classify_features(features)

    def classify_features(self, f: FaceFeatures) -> Emotion:
        t = self._thresholds
        if f.mouth_angle > t.happy_min_angle and f.mouth_aspect < t.happy_max_aspect and f.mouth_width > t.happy_min_width:
            return Emotion.HAPPY
        if f.mouth_angle < t.sad_max_angle and f.avg_brow_height < t.sad_max_brow and f.mouth_width < t.sad_max_width:
            return Emotion.SAD
        if f.avg_brow_height < t.angry_max_brow and f.mouth_height < t.angry_max_height and f.mouth_width < t.angry_max_width:
            return Emotion.ANGRY
        if (
            f.avg_brow_height > t.surprised_min_brow
            and f.mouth_height > t.surprised_min_height
            and f.avg_eye_height > t.surprised_min_eye
        ):
            return Emotion.SURPRISED
        return Emotion.NEUTRAL

    def describe(self) -> List[str]:
        t = self._thresholds
        return [
            f"happy: mouth angle > {t.happy_min_angle}, aspect < {t.happy_max_aspect}, width > {t.happy_min_width}",
            f"sad: mouth angle < {t.sad_max_angle}, brows < {t.sad_max_brow}, width < {t.sad_max_width}",
            f"angry: brows < {t.angry_max_brow}, mouth height < {t.angry_max_height}, width < {t.angry_max_width}",
            f"surprised: brows > {t.surprised_min_brow}, mouth height > {t.surprised_min_height}, eyes > {t.surprised_min_eye}",
        ]


_DEFAULT = EmotionClassifier()


def classify_emotion(landmarks: FaceLandmarks) -> Emotion:
    return _DEFAULT.classify(landmarks)
