# Overlay geometry only, nothing here draws.
# Image sizes are (width, height) in pixels; normalized rects use a top-left origin.
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from perception_types import KeyPoint, NormalizedPoint

SKELETON_CONNECTIONS: Tuple[Tuple[int, int], ...] = (
    (0, 1),  # nose - left eye
    (1, 3),  # left eye - left ear
    (0, 2),  # nose - right eye
    (2, 4),  # right eye - right ear
    (5, 6),  # shoulders
    (5, 7),  # left shoulder - left elbow
    (7, 9),  # left elbow - left wrist
    (6, 8),  # right shoulder - right elbow
    (8, 10),  # right elbow - right wrist
    (5, 11),  # left shoulder - left hip
    (6, 12),  # right shoulder - right hip
    (11, 12),  # hips
    (11, 13),  # left hip - left knee
    (13, 15),  # left knee - left ankle
    (12, 14),  # right hip - right knee
    (14, 16),  # right knee - right ankle
)

MIN_DRAW_CONFIDENCE = 0.5


@dataclass(frozen=True)
class NormalizedRect:
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class PixelRect:
    x: int
    y: int
    width: int
    height: int

    @property
    def top_left(self) -> Tuple[int, int]:
        return self.x, self.y

    @property
    def bottom_right(self) -> Tuple[int, int]:
        return self.x + self.width, self.y + self.height


def to_pixel_rect(box: NormalizedRect, image_size: Tuple[int, int]) -> PixelRect:
    width, height = image_size
    return PixelRect(
        int(round(box.x * width)),
        int(round(box.y * height)),
        int(round(box.width * width)),
        int(round(box.height * height)),
    )


def to_pixel(point: NormalizedPoint, image_size: Tuple[int, int]) -> Tuple[int, int]:
    width, height = image_size
    return int(point.x * width), int(point.y * height)


def face_annotation_rect(rect: PixelRect) -> PixelRect:
    # Detector boxes sit low on the face: shift up 15% and trim to 95% height.
    return PixelRect(
        rect.x,
        int(round(rect.y - rect.height * 0.15)),
        rect.width,
        int(round(rect.height * 0.95)),
    )


def emoji_font_size(rect: PixelRect) -> int:
    return max(1, int(rect.width * 0.3))


def emoji_anchor(rect: PixelRect, emoji_size: Tuple[int, int], gap: int = 2) -> Tuple[int, int]:
    # Top-left corner of an emoji centred above rect.
    emoji_w, emoji_h = emoji_size
    return rect.x + (rect.width - emoji_w) // 2, rect.y - emoji_h - gap


def text_label_rect(rect: PixelRect, label_height: int = 20) -> PixelRect:
    return PixelRect(rect.x, rect.y - label_height, rect.width, label_height)


def _inside(pt: Tuple[int, int], image_size: Tuple[int, int]) -> bool:
    width, height = image_size
    return 0 <= pt[0] <= width and 0 <= pt[1] <= height


def visible_joints(
    keypoints: Sequence[KeyPoint], image_size: Tuple[int, int], min_confidence: float = MIN_DRAW_CONFIDENCE
) -> List[Tuple[int, int]]:
    joints = []
    for kp in keypoints:
        if kp.confidence <= min_confidence:
            continue
        pt = to_pixel(kp.position, image_size)
        if _inside(pt, image_size):
            joints.append(pt)
    return joints


def visible_bones(
    keypoints: Sequence[KeyPoint], image_size: Tuple[int, int], min_confidence: float = MIN_DRAW_CONFIDENCE
) -> List[Tuple[Tuple[int, int], Tuple[int, int]]]:
    bones = []
    for a, b in SKELETON_CONNECTIONS:
        if a >= len(keypoints) or b >= len(keypoints):
            continue
        start, end = keypoints[a], keypoints[b]
        if start.confidence <= min_confidence or end.confidence <= min_confidence:
            continue
        pa = to_pixel(start.position, image_size)
        pb = to_pixel(end.position, image_size)
        if _inside(pa, image_size) and _inside(pb, image_size):
            bones.append((pa, pb))
    return bones


def mean_confidence(keypoints: Sequence[KeyPoint]) -> float:
    if not keypoints:
        return 0.0
    return sum(kp.confidence for kp in keypoints) / len(keypoints)
