from typing import Sequence, Tuple

import cv2

from overlay import (
    face_annotation_rect,
    text_label_rect,
    to_pixel_rect,
    visible_bones,
    visible_joints,
)
from perception_types import KeyPoint

GREEN = (0, 255, 0)
BLUE = (255, 0, 0)
RED = (0, 0, 255)
WHITE = (255, 255, 255)


def _image_size(frame) -> Tuple[int, int]:
    height, width = frame.shape[:2]
    return width, height


def draw_faces(frame, faces, emotions) -> None:
    size = _image_size(frame)
    for face, emotion in zip(faces, emotions):
        rect = face_annotation_rect(to_pixel_rect(face.bounding_box, size))
        cv2.rectangle(frame, rect.top_left, rect.bottom_right, GREEN, 3)
        # Hershey fonts cannot render emoji, so the overlay uses the label.
        label = emotion.display_name
        scale = max(0.5, rect.width / 300.0)
        (tw, th), _ = cv2.getTextSize(label, cv2.FONT_HERSHEY_SIMPLEX, scale, 2)
        x = rect.x + (rect.width - tw) // 2
        y = max(th, rect.y - 2)
        cv2.putText(frame, label, (x, y), cv2.FONT_HERSHEY_SIMPLEX, scale, WHITE, 2, cv2.LINE_AA)


def draw_text_boxes(frame, results) -> None:
    size = _image_size(frame)
    for item in results:
        rect = to_pixel_rect(item.bounding_box, size)
        cv2.rectangle(frame, rect.top_left, rect.bottom_right, BLUE, 2)
        label = text_label_rect(rect)
        overlay = frame.copy()
        cv2.rectangle(overlay, label.top_left, label.bottom_right, BLUE, -1)
        cv2.addWeighted(overlay, 0.3, frame, 0.7, 0, frame)
        cv2.putText(
            frame, item.text, (label.x + 2, label.y + label.height - 5),
            cv2.FONT_HERSHEY_SIMPLEX, 0.45, WHITE, 1, cv2.LINE_AA,
        )


def draw_pose(frame, keypoints: Sequence[KeyPoint], min_confidence: float = 0.5) -> None:
    size = _image_size(frame)
    for start, end in visible_bones(keypoints, size, min_confidence):
        cv2.line(frame, start, end, GREEN, 3)
    for center in visible_joints(keypoints, size, min_confidence):
        cv2.circle(frame, center, 4, RED, -1)


def draw_overlay(frame, text_lines, origin=(10, 30)) -> None:
    x, y = origin
    for line in text_lines:
        cv2.putText(frame, line, (x, y), cv2.FONT_HERSHEY_SIMPLEX, 0.7, (255, 255, 255), 2)
        y += 28
