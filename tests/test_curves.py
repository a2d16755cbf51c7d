import pytest

from search_eval.packages.evaluation_framework import (
    ElevenPointCurve,
    Point,
    RankedResult,
    RECALL_LEVELS,
    average_curves,
    build_curve,
    interpolate,
    sample_eleven_points,
)


def ranked(*labels):
    return [RankedResult(relevant=label) for label in labels]


def precisions(curve):
    return [p.precision for p in curve]


def recalls(curve):
    return [p.recall for p in curve]


def test_build_curve_mixed_ranking():
    curve = build_curve(ranked(True, False, True, False), total_relevant=2)

    assert recalls(curve) == [0.5, 0.5, 1.0, 1.0]
    assert precisions(curve) == pytest.approx([1.0, 0.5, 2 / 3, 0.5])


def test_build_curve_one_point_per_rank_and_recall_never_decreases():
    curve = build_curve(ranked(False, True, False, False, True, True, False), total_relevant=5)

    assert len(curve) == 7
    assert all(a.recall <= b.recall for a, b in zip(curve, curve[1:]))


def test_build_curve_all_relevant():
    curve = build_curve(ranked(True, True, True), total_relevant=4)

    assert recalls(curve) == [1 / 4, 2 / 4, 3 / 4]
    assert precisions(curve) == [1.0, 1.0, 1.0]


def test_build_curve_empty_results():
    assert build_curve([], total_relevant=5) == []


def test_build_curve_zero_total_relevant_gives_zero_recall():
    curve = build_curve(ranked(False, False), total_relevant=0)

    assert recalls(curve) == [0.0, 0.0]
    assert precisions(curve) == [0.0, 0.0]


def test_build_curve_rejects_negative_total():
    with pytest.raises(ValueError):
        build_curve(ranked(True), total_relevant=-1)


def test_build_curve_rejects_more_hits_than_total():
    with pytest.raises(ValueError):
        build_curve(ranked(True, True), total_relevant=1)


def test_interpolate_is_right_to_left_running_max():
    raw = build_curve(ranked(True, False, True, False), total_relevant=2)
    interpolated = interpolate(raw)

    assert recalls(interpolated) == [0.5, 0.5, 1.0, 1.0]
    assert precisions(interpolated) == pytest.approx([1.0, 1.0, 2 / 3, 0.5])


def test_interpolate_gives_equal_recall_points_the_same_precision():
    # Ranks 2-4 share recall 0.25 after one relevant hit out of four
    raw = build_curve(ranked(False, True, False, False, True), total_relevant=4)
    interpolated = interpolate(raw)

    assert recalls(interpolated) == [0.0, 0.25, 0.25, 0.25, 0.5]
    assert precisions(interpolated) == pytest.approx([0.5, 0.5, 0.5, 0.5, 0.4])


def test_interpolate_does_not_modify_input():
    raw = build_curve(ranked(False, True), total_relevant=1)
    before = list(raw)

    interpolate(raw)

    assert raw == before


def test_interpolate_edge_cases():
    assert interpolate([]) == []
    assert interpolate([Point(recall=0.25, precision=0.4)]) == [Point(recall=0.25, precision=0.4)]


def test_interpolate_is_idempotent_and_never_lowers_precision():
    raw = build_curve(ranked(False, True, False, True, True, False, False, True), total_relevant=6)
    once = interpolate(raw)
    twice = interpolate(once)

    assert twice == once
    assert all(i.precision >= r.precision for i, r in zip(once, raw))
    assert all(a.precision >= b.precision for a, b in zip(once, once[1:]))


def test_sample_eleven_points_mixed_ranking():
    interpolated = interpolate(build_curve(ranked(True, False, True, False), total_relevant=2))
    sampled = sample_eleven_points(interpolated)

    assert recalls(sampled.points) == list(RECALL_LEVELS)
    assert precisions(sampled.points) == pytest.approx([1.0] * 6 + [2 / 3] * 5)


def test_sample_eleven_points_empty_curve_is_all_zero():
    sampled = sample_eleven_points(build_curve([], total_relevant=5))

    assert len(sampled.points) == 11
    assert precisions(sampled.points) == [0.0] * 11


def test_sample_eleven_points_short_curve_fills_from_last_point():
    # Only one of four relevant documents found: recall stops at 0.25
    interpolated = interpolate(build_curve(ranked(False, True), total_relevant=4))
    sampled = sample_eleven_points(interpolated)

    assert recalls(sampled.points) == list(RECALL_LEVELS)
    assert precisions(sampled.points) == [0.5] * 11


def test_sample_eleven_points_uses_first_point_reaching_level():
    curve = [
        Point(recall=0.2, precision=0.9),
        Point(recall=0.5, precision=0.6),
        Point(recall=1.0, precision=0.3),
    ]
    sampled = sample_eleven_points(curve)

    assert precisions(sampled.points) == [0.9, 0.9, 0.9, 0.6, 0.6, 0.6, 0.3, 0.3, 0.3, 0.3, 0.3]


def test_eleven_point_curve_checks_recall_levels():
    with pytest.raises(ValueError):
        ElevenPointCurve(points=(Point(recall=0.0, precision=1.0),))

    shifted = tuple(Point(recall=r + 0.05, precision=0.5) for r in RECALL_LEVELS)
    with pytest.raises(ValueError):
        ElevenPointCurve(points=shifted)


def test_mean_precision():
    curve = sample_eleven_points([Point(recall=1.0, precision=0.5)])

    assert curve.mean_precision() == pytest.approx(0.5)


def test_average_single_curve_is_identity():
    curve = sample_eleven_points(interpolate(build_curve(ranked(True, False, True), total_relevant=3)))

    assert average_curves([curve]) == curve
    assert average_curves([curve, curve]) == curve


def test_average_is_pointwise_mean():
    perfect = sample_eleven_points(interpolate(build_curve(ranked(True), total_relevant=1)))
    empty = sample_eleven_points([])

    averaged = average_curves([perfect, empty])

    assert recalls(averaged.points) == list(RECALL_LEVELS)
    assert precisions(averaged.points) == [0.5] * 11


def test_average_rejects_empty_input():
    with pytest.raises(ValueError):
        average_curves([])
