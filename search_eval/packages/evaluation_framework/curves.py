"""
Precision-recall curves: raw curve, interpolation, eleven-point sampling and averaging.

Every function here is pure and returns a new curve.
"""

import logging
from typing import List, Sequence

from .models import Curve, ElevenPointCurve, Point, RankedResult, RECALL_LEVELS

logger = logging.getLogger(__name__)


def build_curve(results: Sequence[RankedResult], total_relevant: int) -> Curve:
    """Build the raw precision-recall curve, one point per retrieved rank.

    When total_relevant is 0 recall is defined as 0 at every rank.
    """
    if total_relevant < 0:
        raise ValueError(f"total_relevant must be >= 0, got {total_relevant}")

    curve: Curve = []
    relevant_seen = 0
    non_relevant_seen = 0

    for result in results:
        if result.relevant:
            relevant_seen += 1
        else:
            non_relevant_seen += 1

        if relevant_seen > total_relevant:
            raise ValueError(
                f"Found {relevant_seen} relevant results but total_relevant is {total_relevant}")

        recall = relevant_seen / total_relevant if total_relevant > 0 else 0.0
        precision = relevant_seen / (relevant_seen + non_relevant_seen)
        curve.append(Point(recall=recall, precision=precision))

    logger.debug(f"Built curve with {len(curve)} points, {relevant_seen}/{total_relevant} relevant")
    return curve


def interpolate(curve: Sequence[Point]) -> Curve:
    """Replace each precision by the maximum precision at the same or any higher recall.

    A backward running maximum over ranks, after which every point in a run of
    equal recall takes the run's maximum, i.e. the value of its first point.
    """
    folded: Curve = []
    running_max = 0.0

    for point in reversed(curve):
        running_max = max(running_max, point.precision)
        folded.append(Point(recall=point.recall, precision=running_max))

    folded.reverse()

    interpolated: Curve = []
    for point in folded:
        if interpolated and interpolated[-1].recall == point.recall:
            point = Point(recall=point.recall, precision=interpolated[-1].precision)
        interpolated.append(point)
    return interpolated


def sample_eleven_points(curve: Sequence[Point]) -> ElevenPointCurve:
    """Sample an interpolated curve at recall levels 0.0, 0.1, ..., 1.0.

    The curve must be ordered by non-decreasing recall. A single cursor walks
    it once. Levels past the end of the curve take the last point's precision,
    or 0.0 when the curve is empty.
    """
    points: List[Point] = []
    cursor = 0

    for level in RECALL_LEVELS:
        while cursor < len(curve) and curve[cursor].recall < level:
            cursor += 1

        if cursor < len(curve):
            precision = curve[cursor].precision
        elif curve:
            precision = curve[-1].precision
        else:
            precision = 0.0

        points.append(Point(recall=level, precision=precision))

    return ElevenPointCurve(points=tuple(points))


def average_curves(curves: Sequence[ElevenPointCurve]) -> ElevenPointCurve:
    """Average eleven-point curves pointwise on precision."""
    if len(curves) == 0:
        raise ValueError("Cannot average an empty list of curves")

    recall_levels = [p.recall for p in curves[0].points]
    for curve in curves[1:]:
        if [p.recall for p in curve.points] != recall_levels:
            raise ValueError("All curves must share the same recall levels")

    points = []
    for k, recall in enumerate(recall_levels):
        total = sum(curve.points[k].precision for curve in curves)
        points.append(Point(recall=recall, precision=total / len(curves)))

    logger.debug(f"Averaged {len(curves)} eleven-point curves")
    return ElevenPointCurve(points=tuple(points))
