import logging

import cv2
import numpy as np
import pytest

from capture import load_image
from config import AppConfig, parse_args
from errors import ImageLoadError
from face_detection import DetectedFace
from feature_registry import get_feature, get_feature_entries
from overlay import NormalizedRect
from perception_types import Emotion
from text_recognition import RecognizedText
from visualization import draw_faces, draw_pose, draw_text_boxes

from conftest import make_keypoints


def test_registry_lists_four_features():
    entries = get_feature_entries()
    assert [e.key for e in entries] == ["sentiment", "face", "text", "pose"]
    assert {e.input_kind for e in entries} == {"text", "image"}
    assert get_feature("pose").classifier.name == "action"
    with pytest.raises(KeyError):
        get_feature("gait")


def test_default_config():
    cfg = parse_args([])
    assert cfg == AppConfig()
    assert cfg.log_level_value == logging.INFO


def test_config_flags():
    cfg = parse_args(["--camera", "2", "--max-faces", "1", "--pose-model", "p.task", "--log-level", "debug"])
    assert cfg.camera_index == 2
    assert cfg.max_faces == 1
    assert str(cfg.pose_model) == "p.task"
    assert cfg.log_level_value == logging.DEBUG


def test_bad_log_level_falls_back_to_info():
    assert AppConfig(log_level="chatty").log_level_value == logging.INFO


def test_load_image(tmp_path):
    path = tmp_path / "img.png"
    cv2.imwrite(str(path), np.full((20, 30, 3), 127, dtype=np.uint8))
    assert load_image(path).shape == (20, 30, 3)


def test_load_image_errors(tmp_path):
    with pytest.raises(ImageLoadError):
        load_image(tmp_path / "missing.png")
    bogus = tmp_path / "bogus.png"
    bogus.write_bytes(b"not an image")
    with pytest.raises(ImageLoadError):
        load_image(bogus)


def test_drawing_marks_the_frame():
    frame = np.zeros((200, 200, 3), dtype=np.uint8)
    draw_pose(frame, make_keypoints(kp5=(0.3, 0.3), kp6=(0.7, 0.3)))
    assert frame.any()

    frame = np.zeros((200, 200, 3), dtype=np.uint8)
    face = DetectedFace(NormalizedRect(0.25, 0.4, 0.5, 0.5), None)
    draw_faces(frame, [face], [Emotion.HAPPY])
    assert frame[:, :, 1].any()

    frame = np.zeros((200, 200, 3), dtype=np.uint8)
    draw_text_boxes(frame, [RecognizedText(NormalizedRect(0.1, 0.5, 0.5, 0.2), "hi")])
    assert frame[:, :, 0].any()


def test_classifiers_describe_their_rules():
    for entry in get_feature_entries():
        if entry.classifier is not None:
            assert entry.classifier.describe()
    assert get_feature("sentiment").classifier.describe()[0] == "negative: score < -0.1"
