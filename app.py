import argparse
import logging
import sys
from typing import List, Optional

import cv2

from analysis import (
    ScreenState,
    analyze_faces,
    analyze_handwriting,
    analyze_pose,
    analyze_text,
)
from capture import capture_still, load_image
from config import add_config_arguments, config_from_args, setup_logging
from errors import ImageLoadError, InferenceError
from face_detection import FaceLandmarkDetector
from feature_registry import get_feature_entries
from pose_detection import PoseDetector
from sentiment_scoring import SentimentScorer
from text_recognition import TextRecognizer
from visualization import draw_faces, draw_overlay, draw_pose, draw_text_boxes

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Perception demo: emotion, pose, text and sentiment")
    p.add_argument("feature", choices=[e.key for e in get_feature_entries()], help="Feature to run")
    p.add_argument("input", nargs="?", help="Image path, or the text to score for 'sentiment' (default: camera)")
    p.add_argument("--output", help="Save the annotated image here instead of opening a window")
    add_config_arguments(p)
    return p


def _read_frame(args, cfg):
    if args.input:
        return load_image(args.input)
    still = capture_still(cfg.camera_index)
    if not still.ok:
        raise ImageLoadError("Could not capture an image from the camera")
    return still.frame


def _load_collaborator(feature: str, cfg):
    if feature == "sentiment":
        return SentimentScorer(cfg.sentiment_model)
    if feature == "face":
        return FaceLandmarkDetector(cfg.face_model, max_faces=cfg.max_faces)
    if feature == "pose":
        return PoseDetector(cfg.pose_model)
    return TextRecognizer(cfg.text_detector, cfg.text_recognizer, cfg.text_vocabulary)


def run(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    cfg = config_from_args(args)
    setup_logging(cfg)

    try:
        frame = None if args.feature == "sentiment" else _read_frame(args, cfg)
        collaborator = _load_collaborator(args.feature, cfg)
    except (ImageLoadError, InferenceError) as exc:
        logger.error("%s", exc)
        return 1

    try:
        if args.feature == "sentiment":
            return _report(analyze_text(collaborator, args.input or sys.stdin.read()))
        if args.feature == "face":
            state = analyze_faces(collaborator, frame)
            if state.result is not None:
                draw_faces(frame, state.result.faces, state.result.emotions)
        elif args.feature == "pose":
            state = analyze_pose(collaborator, frame)
            if state.result is not None:
                draw_pose(frame, state.result.keypoints, cfg.min_draw_confidence)
                draw_overlay(frame, state.result.summary())
        else:
            state = analyze_handwriting(collaborator, frame)
            if state.result is not None:
                draw_text_boxes(frame, state.result.regions)
    finally:
        collaborator.close()

    status = _report(state)
    if args.output:
        if not cv2.imwrite(args.output, frame):
            logger.error("Could not write %s", args.output)
            return 1
        logger.info("Annotated image written to %s", args.output)
    else:
        window_name = "Perception Demo - any key to close"
        cv2.namedWindow(window_name, cv2.WINDOW_NORMAL)
        cv2.imshow(window_name, frame)
        cv2.waitKey(0)
        cv2.destroyAllWindows()
    return status


def _report(state: ScreenState) -> int:
    if state.result is not None:
        for line in state.result.summary():
            print(line)
    if state.error:
        print(f"Error: {state.error}")
        return 1
    return 0


def main():
    sys.exit(run())


if __name__ == "__main__":
    main()
