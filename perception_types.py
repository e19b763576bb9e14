from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, Mapping, Optional, Tuple

from errors import MissingInputError


@dataclass(frozen=True)
class NormalizedPoint:
    x: float
    y: float


LandmarkGroup = Tuple[NormalizedPoint, ...]


OUTER_LIPS = "outer_lips"
LEFT_EYEBROW = "left_eyebrow"
RIGHT_EYEBROW = "right_eyebrow"
LEFT_EYE = "left_eye"
RIGHT_EYE = "right_eye"

FACE_GROUPS = (OUTER_LIPS, LEFT_EYEBROW, RIGHT_EYEBROW, LEFT_EYE, RIGHT_EYE)


class FaceLandmarks(Mapping[str, LandmarkGroup]):
    def __init__(self, groups: Optional[Mapping[str, LandmarkGroup]] = None):
        self._groups: Dict[str, LandmarkGroup] = {
            name: tuple(points) for name, points in (groups or {}).items() if points is not None
        }

    def __getitem__(self, name: str) -> LandmarkGroup:
        return self._groups[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._groups)

    def __len__(self) -> int:
        return len(self._groups)

    def __repr__(self) -> str:
        sizes = ", ".join(f"{k}={len(v)}" for k, v in self._groups.items())
        return f"FaceLandmarks({sizes})"

    def has(self, name: str) -> bool:
        return name in self._groups

    def require(self, name: str) -> LandmarkGroup:
        group = self._groups.get(name)
        if group is None:
            raise MissingInputError(f"landmark group '{name}' is missing")
        return group


# Keypoint indices, see KEYPOINT_NAMES for the full table.
LEFT_SHOULDER = 5
RIGHT_SHOULDER = 6
LEFT_WRIST = 9
RIGHT_WRIST = 10
LEFT_HIP = 11
RIGHT_HIP = 12

KEYPOINT_NAMES = (
    "nose",
    "left_eye",
    "right_eye",
    "left_ear",
    "right_ear",
    "left_shoulder",
    "right_shoulder",
    "left_elbow",
    "right_elbow",
    "left_wrist",
    "right_wrist",
    "left_hip",
    "right_hip",
    "left_knee",
    "right_knee",
    "left_ankle",
    "right_ankle",
)
NUM_KEYPOINTS = len(KEYPOINT_NAMES)


@dataclass(frozen=True)
class KeyPoint:
    id: int
    position: NormalizedPoint
    confidence: float

    @property
    def name(self) -> str:
        return KEYPOINT_NAMES[self.id]


class Emotion(Enum):
    HAPPY = "happy"
    SAD = "sad"
    ANGRY = "angry"
    SURPRISED = "surprised"
    NEUTRAL = "neutral"

    @property
    def emoji(self) -> str:
        return _EMOTION_EMOJI[self]

    @property
    def display_name(self) -> str:
        return self.value.title()


_EMOTION_EMOJI = {
    Emotion.HAPPY: "\U0001F60A",
    Emotion.SAD: "\U0001F622",
    Emotion.ANGRY: "\U0001F620",
    Emotion.SURPRISED: "\U0001F632",
    Emotion.NEUTRAL: "\U0001F610",
}


class PoseAction(Enum):
    STANDING = "standing"
    SITTING = "sitting"
    RAISING = "raising"
    UNKNOWN = "unknown"

    @property
    def display_name(self) -> str:
        return self.value.title()


class SentimentLabel(Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"

    @property
    def display_name(self) -> str:
        return self.value.title()
