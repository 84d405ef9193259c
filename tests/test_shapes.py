from __future__ import annotations

import cv2
import numpy as np
import pytest

from targetcv.shapes import find_shapes, measure_contour


def test_measure_square_contour() -> None:
    contour = np.array([[[10, 10]], [[50, 10]], [[50, 50]], [[10, 50]]], dtype=np.int32)
    s = measure_contour(contour)

    assert s.area == pytest.approx(1600.0)
    assert s.centroid == pytest.approx((30.0, 30.0))
    assert s.bounding_box == (10, 10, 41, 41)
    assert s.enclosing_center == pytest.approx((30.0, 30.0), abs=0.5)
    assert s.enclosing_radius == pytest.approx(20.0 * np.sqrt(2.0), abs=0.5)
    assert not s.is_degenerate


def test_line_contour_is_degenerate() -> None:
    contour = np.array([[[0, 0]], [[20, 0]]], dtype=np.int32)
    s = measure_contour(contour)
    assert s.area == 0.0
    assert s.centroid is None
    assert s.is_degenerate


def test_find_shapes_modes() -> None:
    binary = np.zeros((200, 200), dtype=np.uint8)
    cv2.rectangle(binary, (20, 20), (180, 180), 255, -1)
    cv2.circle(binary, (100, 100), 40, 0, -1)

    external = find_shapes(binary, mode="external")
    assert len(external) == 1

    everything = find_shapes(binary, mode="all")
    assert len(everything) == 2

    with pytest.raises(ValueError):
        find_shapes(binary, mode="tree")  # type: ignore[arg-type]
