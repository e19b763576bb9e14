import pytest

from analysis import (
    FaceAnalysis,
    ScreenState,
    analyze_faces,
    analyze_handwriting,
    analyze_pose,
    analyze_text,
    processing,
)
from errors import InferenceError
from face_detection import DetectedFace
from overlay import NormalizedRect
from perception_types import Emotion, PoseAction, SentimentLabel
from text_recognition import RecognizedText

from conftest import SMILE_LIPS, make_face, make_keypoints

FRAME = object()


class FakeCollaborator:
    def __init__(self, output=None, error=None):
        self._output = output
        self._error = error

    def _run(self, *_):
        if self._error:
            raise InferenceError(self._error)
        return self._output

    detect = process = recognize = score = _run


def test_faces_are_classified():
    face = DetectedFace(NormalizedRect(0.1, 0.1, 0.3, 0.3), make_face(SMILE_LIPS))
    state = analyze_faces(FakeCollaborator([face, DetectedFace(face.bounding_box, make_face(None))]), FRAME)
    assert state.error is None
    assert state.result.emotions == [Emotion.HAPPY, Emotion.NEUTRAL]
    assert state.result.summary()[0] == "Faces detected: 2"


def test_no_face_is_an_error_string():
    state = analyze_faces(FakeCollaborator([]), FRAME)
    assert state.error == "No face detected"
    assert state.result == FaceAnalysis()


def test_inference_failure_becomes_error_string():
    state = analyze_faces(FakeCollaborator(error="Face analysis failed: boom"), FRAME)
    assert state == ScreenState(error="Face analysis failed: boom")


@pytest.mark.parametrize("analyze", [analyze_faces, analyze_pose, analyze_handwriting])
def test_missing_model_or_frame(analyze):
    assert "not loaded" in analyze(None, FRAME).error
    assert analyze(FakeCollaborator([]), None).error == "Could not process image"


def test_pose_action_and_confidence():
    kps = make_keypoints(confidence=0.6, kp9=(0.4, 0.1), kp5=(0.4, 0.3))
    state = analyze_pose(FakeCollaborator(kps), FRAME)
    assert state.result.action is PoseAction.RAISING
    assert state.result.confidence == pytest.approx(0.6)
    assert state.result.summary() == ["Action: Raising", "Confidence: 0.60"]


def test_failed_pose_is_unknown():
    state = analyze_pose(FakeCollaborator([]), FRAME)
    assert state.result.action is PoseAction.UNKNOWN


def test_handwriting_joins_lines():
    regions = [
        RecognizedText(NormalizedRect(0.1, 0.1, 0.5, 0.1), "first line"),
        RecognizedText(NormalizedRect(0.1, 0.3, 0.5, 0.1), "second line"),
    ]
    state = analyze_handwriting(FakeCollaborator(regions), FRAME)
    assert state.result.text == "first line\nsecond line"
    assert analyze_handwriting(FakeCollaborator([]), FRAME).error == "No text detected"


def test_text_sentiment():
    assert analyze_text(FakeCollaborator(0.5), "nice").result.label is SentimentLabel.POSITIVE
    assert analyze_text(FakeCollaborator(None), "hmm").result.label is SentimentLabel.NEUTRAL
    assert analyze_text(FakeCollaborator(error="Sentiment scoring failed"), "x").error == "Sentiment scoring failed"
    assert analyze_text(None, "x").error == "Sentiment model not loaded"


def test_processing_state():
    state = processing()
    assert state.processing and state.result is None and state.error is None
