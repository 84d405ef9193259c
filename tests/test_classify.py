from __future__ import annotations

import pytest

from targetcv.classify import select_black_circle, select_shot_candidates, select_target
from targetcv.config import ShapeThresholds
from targetcv.errors import NoTargetFoundError
from targetcv.models import DetectedShape


def _shape(area: float, tag: float = 0.0) -> DetectedShape:
    # tag 写进 bbox，用来区分面积相同的形状
    return DetectedShape(
        area=area,
        m00=area,
        centroid=(tag, tag),
        bounding_box=(int(tag), 0, 10, 10),
        enclosing_center=(tag, tag),
        enclosing_radius=1.0,
    )


def test_select_target_picks_largest_first_on_tie() -> None:
    shapes = [_shape(10.0, 1), _shape(500.0, 2), _shape(500.0, 3), _shape(20.0, 4)]
    best = select_target(shapes)
    assert best.area == 500.0
    assert best.bounding_box[0] == 2


def test_select_target_raises_on_empty() -> None:
    with pytest.raises(NoTargetFoundError):
        select_target([])


def test_black_circle_is_largest_in_range() -> None:
    th = ShapeThresholds()
    shapes = [_shape(600000.0), _shape(90000.0, 1), _shape(25000.0, 2), _shape(1500.0, 3)]
    black = select_black_circle(shapes, th)
    assert black is not None
    assert black.area == 90000.0


def test_black_circle_range_is_inclusive() -> None:
    th = ShapeThresholds()
    assert select_black_circle([_shape(20000.0)], th) is not None
    assert select_black_circle([_shape(500000.0)], th) is not None
    assert select_black_circle([_shape(19999.0)], th) is None


def test_no_black_circle() -> None:
    assert select_black_circle([_shape(50.0), _shape(600000.0)], ShapeThresholds()) is None


def test_shot_candidates_sorted_ascending_and_filtered() -> None:
    th = ShapeThresholds()
    shapes = [_shape(5000.0), _shape(50.0), _shape(900.0), _shape(600000.0), _shape(2000.0), _shape(10000.0), _shape(10001.0)]
    shots = select_shot_candidates(shapes, th)
    assert [s.area for s in shots] == [900.0, 2000.0, 5000.0, 10000.0]


def test_out_of_range_shapes_in_neither_pool() -> None:
    th = ShapeThresholds()
    shapes = [_shape(50.0), _shape(600000.0)]
    assert select_black_circle(shapes, th) is None
    assert select_shot_candidates(shapes, th) == []


def test_custom_thresholds() -> None:
    th = ShapeThresholds(black_circle_min_area=100.0, black_circle_max_area=200.0, shot_min_area=1.0, shot_max_area=10.0)
    shapes = [_shape(150.0), _shape(5.0), _shape(50.0)]
    black = select_black_circle(shapes, th)
    assert black is not None and black.area == 150.0
    assert [s.area for s in select_shot_candidates(shapes, th)] == [5.0]
