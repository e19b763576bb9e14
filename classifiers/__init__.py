from classifiers.action import ActionClassifier, classify_action
from classifiers.emotion import EmotionClassifier, classify_emotion
from classifiers.sentiment import SentimentClassifier, classify_sentiment

__all__ = [
    "ActionClassifier",
    "EmotionClassifier",
    "SentimentClassifier",
    "classify_action",
    "classify_emotion",
    "classify_sentiment",
]
