import pytest

from classifiers.action import ActionClassifier, ActionThresholds, classify_action, position_at
from perception_types import NormalizedPoint, PoseAction

from conftest import make_keypoints


@pytest.mark.parametrize("count", [0, 1, 6, 16])
def test_too_few_keypoints_is_unknown(count):
    kps = make_keypoints(count=count, kp9=(0.5, 0.0))
    assert classify_action(kps) is PoseAction.UNKNOWN


def test_left_wrist_above_shoulder_is_raising():
    kps = make_keypoints(kp9=(0.4, 0.1), kp5=(0.4, 0.3), kp6=(0.6, 0.3), kp11=(0.4, 0.35), kp12=(0.6, 0.35))
    assert classify_action(kps) is PoseAction.RAISING


def test_right_wrist_above_shoulder_is_raising():
    kps = make_keypoints(kp10=(0.6, 0.2), kp6=(0.6, 0.3), kp5=(0.4, 0.3), kp9=(0.4, 0.6))
    assert classify_action(kps) is PoseAction.RAISING


def test_short_torso_is_sitting():
    kps = make_keypoints(
        kp5=(0.4, 0.3), kp6=(0.6, 0.3), kp11=(0.4, 0.5), kp12=(0.6, 0.5), kp9=(0.4, 0.6), kp10=(0.6, 0.6)
    )
    assert classify_action(kps) is PoseAction.SITTING


def test_long_torso_is_standing():
    kps = make_keypoints(
        kp5=(0.4, 0.3), kp6=(0.6, 0.3), kp11=(0.4, 0.7), kp12=(0.6, 0.7), kp9=(0.4, 0.6), kp10=(0.6, 0.6)
    )
    assert classify_action(kps) is PoseAction.STANDING


def test_confidence_is_ignored():
    kps = make_keypoints(confidence=0.0, kp9=(0.4, 0.1), kp5=(0.4, 0.3))
    assert classify_action(kps) is PoseAction.RAISING


def test_extra_keypoints_are_accepted():
    kps = make_keypoints(count=20, kp5=(0.4, 0.3), kp6=(0.6, 0.3), kp11=(0.4, 0.7), kp12=(0.6, 0.7))
    assert classify_action(kps) is PoseAction.STANDING


def test_out_of_range_lookup_is_origin():
    kps = make_keypoints(count=3)
    assert position_at(kps, 12) == NormalizedPoint(0.0, 0.0)
    assert position_at(kps, -1) == NormalizedPoint(0.0, 0.0)
    assert position_at(kps, 1) == NormalizedPoint(0.5, 0.5)


def test_custom_sitting_threshold():
    kps = make_keypoints(
        kp5=(0.4, 0.3), kp6=(0.6, 0.3), kp11=(0.4, 0.7), kp12=(0.6, 0.7), kp9=(0.4, 0.6), kp10=(0.6, 0.6)
    )
    assert ActionClassifier(ActionThresholds(sitting_max_torso=0.5)).classify(kps) is PoseAction.SITTING


def test_required_keypoints_drive_validation():
    kps = make_keypoints(kp9=(0.5, 0.2))
    assert max(ActionClassifier.required_keypoints) < len(kps)

    class WideAction(ActionClassifier):
        required_keypoints = ActionClassifier.required_keypoints + [17]

    assert WideAction().classify(kps) is PoseAction.UNKNOWN
    assert WideAction().classify(make_keypoints(count=18, kp9=(0.5, 0.2))) is PoseAction.RAISING
