import logging
from pathlib import Path
from typing import Optional, Sequence

from mediapipe.tasks import python as mp_tasks
from mediapipe.tasks.python import text as mp_text

from classifiers.sentiment import classify_sentiment
from errors import InferenceError
from perception_types import SentimentLabel

logger = logging.getLogger(__name__)


def score_from_categories(categories: Sequence) -> Optional[float]:
    # P(positive) - P(negative), None when neither category is reported.
    scores = {str(c.category_name).strip().lower(): float(c.score) for c in categories}
    if "positive" not in scores and "negative" not in scores:
        return None
    return scores.get("positive", 0.0) - scores.get("negative", 0.0)


class SentimentScorer:
    def __init__(self, model_path: Path):
        if not Path(model_path).is_file():
            raise InferenceError(f"Text classifier model not found: {model_path}")
        options = mp_text.TextClassifierOptions(
            base_options=mp_tasks.BaseOptions(model_asset_path=str(model_path)),
        )
        try:
            self._classifier = mp_text.TextClassifier.create_from_options(options)
        except (RuntimeError, ValueError) as exc:
            raise InferenceError(f"Could not load text classifier: {exc}") from exc
        logger.info("Loaded text classifier from %s", model_path)

    def score(self, text: str) -> Optional[float]:
        try:
            result = self._classifier.classify(text)
        except (RuntimeError, ValueError) as exc:
            raise InferenceError(f"Sentiment scoring failed: {exc}") from exc
        if not result.classifications:
            return None
        score = score_from_categories(result.classifications[0].categories)
        logger.debug("Sentiment score %s", score)
        return score

    def close(self) -> None:
        self._classifier.close()


def analyze_sentiment(scorer, text: str) -> SentimentLabel:
    if not text.strip():
        return SentimentLabel.NEUTRAL
    score = scorer.score(text)
    if score is None:
        return SentimentLabel.NEUTRAL
    return classify_sentiment(score)
