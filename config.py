import argparse
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

MODELS_DIR = Path("models")


@dataclass
class AppConfig:
    face_model: Path = field(default_factory=lambda: MODELS_DIR / "face_landmarker.task")
    pose_model: Path = field(default_factory=lambda: MODELS_DIR / "pose_landmarker.task")
    sentiment_model: Path = field(default_factory=lambda: MODELS_DIR / "bert_classifier.tflite")
    text_detector: Path = field(default_factory=lambda: MODELS_DIR / "DB_TD500_resnet50.onnx")
    text_recognizer: Path = field(default_factory=lambda: MODELS_DIR / "crnn_cs.onnx")
    text_vocabulary: Path = field(default_factory=lambda: MODELS_DIR / "alphabet_94.txt")
    camera_index: int = 0
    max_faces: int = 4
    min_draw_confidence: float = 0.5
    log_level: str = "INFO"

    @property
    def log_level_value(self) -> int:
        level = logging.getLevelName(self.log_level.upper())
        return level if isinstance(level, int) else logging.INFO


def add_config_arguments(p: argparse.ArgumentParser) -> None:
    d = AppConfig()
    p.add_argument("--face-model", type=Path, default=d.face_model, help="MediaPipe face landmarker .task file")
    p.add_argument("--pose-model", type=Path, default=d.pose_model, help="MediaPipe pose landmarker .task file")
    p.add_argument("--sentiment-model", type=Path, default=d.sentiment_model, help="MediaPipe text classifier model")
    p.add_argument("--text-detector", type=Path, default=d.text_detector, help="OpenCV DB text detection model")
    p.add_argument("--text-recognizer", type=Path, default=d.text_recognizer, help="OpenCV CRNN recognition model")
    p.add_argument("--text-vocabulary", type=Path, default=d.text_vocabulary, help="Recognizer alphabet, one symbol per line")
    p.add_argument("--camera", type=int, default=d.camera_index, help="Camera index (default: 0)")
    p.add_argument("--max-faces", type=int, default=d.max_faces, help="Maximum faces per image")
    p.add_argument("--min-confidence", type=float, default=d.min_draw_confidence, help="Keypoint confidence needed to draw")
    p.add_argument("--log-level", default=d.log_level, help="Logging level (default: INFO)")


def config_from_args(a: argparse.Namespace) -> AppConfig:
    return AppConfig(
        face_model=a.face_model,
        pose_model=a.pose_model,
        sentiment_model=a.sentiment_model,
        text_detector=a.text_detector,
        text_recognizer=a.text_recognizer,
        text_vocabulary=a.text_vocabulary,
        camera_index=a.camera,
        max_faces=a.max_faces,
        min_draw_confidence=a.min_confidence,
        log_level=a.log_level,
    )


def parse_args(argv: Optional[List[str]] = None) -> AppConfig:
    p = argparse.ArgumentParser(description="On-device perception demo")
    add_config_arguments(p)
    return config_from_args(p.parse_args(argv))


def setup_logging(cfg: AppConfig) -> None:
    logging.basicConfig(
        level=cfg.log_level_value,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
