from typing import List

from classifiers.base import ClassifierBase
from perception_types import SentimentLabel

NEGATIVE_BELOW = -0.1
POSITIVE_ABOVE = 0.1


class SentimentClassifier(ClassifierBase):
    name = "sentiment"

    def classify(self, score: float) -> SentimentLabel:
        # Both boundaries belong to neutral.
        if score < NEGATIVE_BELOW:
            return SentimentLabel.NEGATIVE
        if score > POSITIVE_ABOVE:
            return SentimentLabel.POSITIVE
        return SentimentLabel.NEUTRAL

    def describe(self) -> List[str]:
        return [
            f"negative: score < {NEGATIVE_BELOW}",
            f"positive: score > {POSITIVE_ABOVE}",
            "neutral: otherwise",
        ]


_DEFAULT = SentimentClassifier()


def classify_sentiment(score: float) -> SentimentLabel:
    return _DEFAULT.classify(score)
