"""轮廓提取与形状测量（OpenCV 适配层）。

把 cv2 的轮廓/矩/最小外接圆/外接矩形统一成 `DetectedShape`，
分类、标定、计分模块只依赖 `DetectedShape`，不直接碰 cv2。
"""

from __future__ import annotations

from typing import Literal

import cv2
import numpy as np

from targetcv.models import DetectedShape

ShapeMode = Literal["external", "all"]

_RETRIEVAL = {
    "external": cv2.RETR_EXTERNAL,
    "all": cv2.RETR_LIST,
}


def measure_contour(contour: np.ndarray) -> DetectedShape:
    """测量单个轮廓。"""

    area = float(cv2.contourArea(contour))
    m = cv2.moments(contour)
    m00 = float(m["m00"])
    centroid = None
    if m00 != 0.0:
        centroid = (float(m["m10"]) / m00, float(m["m01"]) / m00)

    (ex, ey), er = cv2.minEnclosingCircle(contour)
    x, y, w, h = cv2.boundingRect(contour)

    return DetectedShape(
        area=area,
        m00=m00,
        centroid=centroid,
        bounding_box=(int(x), int(y), int(w), int(h)),
        enclosing_center=(float(ex), float(ey)),
        enclosing_radius=float(er),
        contour=contour,
    )


def find_shapes(binary: np.ndarray, mode: ShapeMode = "all") -> list[DetectedShape]:
    """在二值图上找轮廓并测量。

    Args:
        binary: 单通道二值图（uint8）。
        mode: external 只取最外层轮廓；all 取全部轮廓（不建层级）。

    Returns:
        按 OpenCV 返回顺序排列的形状列表。
    """

    try:
        retrieval = _RETRIEVAL[mode]
    except KeyError:
        raise ValueError(f"unknown shape mode: {mode} (expected: external|all)") from None

    cnts, _ = cv2.findContours(binary, retrieval, cv2.CHAIN_APPROX_SIMPLE)
    return [measure_contour(c) for c in cnts]
