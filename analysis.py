import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional

from classifiers.action import classify_action
from classifiers.emotion import classify_emotion
from errors import InferenceError
from face_detection import DetectedFace
from overlay import mean_confidence
from perception_types import Emotion, KeyPoint, PoseAction, SentimentLabel
from sentiment_scoring import analyze_sentiment
from text_recognition import RecognizedText, joined_text

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScreenState:
    # Replaced as a whole after each analysis, never mutated.
    result: Any = None
    error: Optional[str] = None
    processing: bool = False


@dataclass(frozen=True)
class FaceAnalysis:
    faces: List[DetectedFace] = field(default_factory=list)
    emotions: List[Emotion] = field(default_factory=list)

    def summary(self) -> List[str]:
        lines = [f"Faces detected: {len(self.faces)}"]
        for idx, emotion in enumerate(self.emotions):
            lines.append(f"Face {idx + 1}: {emotion.display_name} {emotion.emoji}")
        return lines


@dataclass(frozen=True)
class PoseAnalysis:
    keypoints: List[KeyPoint]
    action: PoseAction

    @property
    def confidence(self) -> float:
        return mean_confidence(self.keypoints)

    def summary(self) -> List[str]:
        return [f"Action: {self.action.display_name}", f"Confidence: {self.confidence:.2f}"]


@dataclass(frozen=True)
class HandwritingAnalysis:
    regions: List[RecognizedText]

    @property
    def text(self) -> str:
        return joined_text(self.regions)

    def summary(self) -> List[str]:
        return self.text.splitlines()


@dataclass(frozen=True)
class SentimentAnalysis:
    label: SentimentLabel

    def summary(self) -> List[str]:
        return [f"Sentiment: {self.label.display_name}"]


def processing() -> ScreenState:
    return ScreenState(processing=True)


def _failed(message: str) -> ScreenState:
    logger.warning(message)
    return ScreenState(error=message)


def analyze_faces(detector, frame) -> ScreenState:
    if detector is None:
        return _failed("Face model not loaded")
    if frame is None:
        return _failed("Could not process image")
    try:
        faces = detector.detect(frame)
    except InferenceError as exc:
        return _failed(str(exc))
    if not faces:
        return ScreenState(result=FaceAnalysis(), error="No face detected")
    emotions = [classify_emotion(face.landmarks) for face in faces]
    return ScreenState(result=FaceAnalysis(faces, emotions))


def analyze_pose(detector, frame) -> ScreenState:
    if detector is None:
        return _failed("Pose model not loaded")
    if frame is None:
        return _failed("Could not process image")
    try:
        keypoints = detector.process(frame)
    except InferenceError as exc:
        return _failed(str(exc))
    return ScreenState(result=PoseAnalysis(keypoints, classify_action(keypoints)))


def analyze_handwriting(recognizer, frame) -> ScreenState:
    if recognizer is None:
        return _failed("Text recognition model not loaded")
    if frame is None:
        return _failed("Could not process image")
    try:
        regions = recognizer.recognize(frame)
    except InferenceError as exc:
        return _failed(str(exc))
    if not regions:
        return ScreenState(result=HandwritingAnalysis([]), error="No text detected")
    return ScreenState(result=HandwritingAnalysis(regions))


def analyze_text(scorer, text: str) -> ScreenState:
    if scorer is None:
        return _failed("Sentiment model not loaded")
    try:
        label = analyze_sentiment(scorer, text)
    except InferenceError as exc:
        return _failed(str(exc))
    return ScreenState(result=SentimentAnalysis(label))
