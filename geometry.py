import math
from typing import Sequence

from errors import EmptyInputError
from perception_types import NormalizedPoint


def _axis_values(points: Sequence[NormalizedPoint], axis: str):
    if axis not in ("x", "y"):
        raise ValueError(f"axis must be 'x' or 'y', got {axis!r}")
    if not points:
        raise EmptyInputError(f"cannot compute a statistic over an empty group ({axis} axis)")
    return [getattr(p, axis) for p in points]


def spread(points: Sequence[NormalizedPoint], axis: str) -> float:
    # max - min along one axis.
    values = _axis_values(points, axis)
    return max(values) - min(values)


def mean(points: Sequence[NormalizedPoint], axis: str) -> float:
    values = _axis_values(points, axis)
    return sum(values) / len(values)


def angle(p1: NormalizedPoint, p2: NormalizedPoint) -> float:
    # Signed angle of the segment p1 -> p2, radians in (-pi, pi].
    return math.atan2(p2.y - p1.y, p2.x - p1.x)


def mean_y(a: NormalizedPoint, b: NormalizedPoint) -> float:
    return (a.y + b.y) / 2.0
