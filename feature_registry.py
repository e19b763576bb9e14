from dataclasses import dataclass
from typing import List, Optional

from classifiers import ActionClassifier, EmotionClassifier, SentimentClassifier
from classifiers.base import ClassifierBase


@dataclass
class FeatureEntry:
    key: str
    name: str
    input_kind: str
    hint: str
    classifier: Optional[ClassifierBase] = None


def get_feature_entries() -> List[FeatureEntry]:
    return [
        FeatureEntry("sentiment", "Sentiment", "text", "Type a paragraph to score its tone", SentimentClassifier()),
        FeatureEntry("face", "Face Analysis", "image", "Front-facing photo, one or more faces", EmotionClassifier()),
        FeatureEntry("text", "Handwriting", "image", "Photo of printed or handwritten text"),
        FeatureEntry("pose", "Pose", "image", "Full body visible, facing the camera", ActionClassifier()),
    ]


def get_feature(key: str) -> FeatureEntry:
    for entry in get_feature_entries():
        if entry.key == key:
            return entry
    raise KeyError(key)
