import math

import pytest

from perception_types import (
    LEFT_EYE,
    LEFT_EYEBROW,
    NUM_KEYPOINTS,
    OUTER_LIPS,
    RIGHT_EYE,
    RIGHT_EYEBROW,
    FaceLandmarks,
    KeyPoint,
    NormalizedPoint,
)


def pts(*coords):
    return tuple(NormalizedPoint(x, y) for x, y in coords)


def brow(y):
    return pts((0.2, y), (0.3, y), (0.4, y))


def eye(center_y, height):
    return pts((0.2, center_y - height / 2), (0.3, center_y + height / 2), (0.4, center_y))


def make_face(lips, brow_y=0.7, eye_height=0.1, **overrides):
    groups = {
        OUTER_LIPS: lips,
        LEFT_EYEBROW: brow(brow_y),
        RIGHT_EYEBROW: brow(brow_y),
        LEFT_EYE: eye(0.6, eye_height),
        RIGHT_EYE: eye(0.6, eye_height),
    }
    groups.update(overrides)
    return FaceLandmarks({k: v for k, v in groups.items() if v is not None})


# Corner to opposite corner rises by 0.2 rad over a 0.4 wide, 0.1 tall mouth.
SMILE_LIPS = pts((0.3, 0.30), (0.5, 0.40), (0.7, 0.30 + 0.4 * math.tan(0.2)), (0.5, 0.30))
FLAT_LIPS = pts((0.3, 0.30), (0.5, 0.35), (0.7, 0.30), (0.5, 0.25))


def make_keypoints(count=NUM_KEYPOINTS, confidence=0.9, **positions):
    # All at (0.5, 0.5) unless overridden by index, e.g. kp5=(0.5, 0.3).
    keypoints = []
    for idx in range(count):
        x, y = positions.get(f"kp{idx}", (0.5, 0.5))
        keypoints.append(KeyPoint(idx, NormalizedPoint(x, y), confidence))
    return keypoints


@pytest.fixture
def happy_face():
    return make_face(SMILE_LIPS, brow_y=0.7)


@pytest.fixture
def neutral_face():
    return make_face(FLAT_LIPS, brow_y=0.6)
