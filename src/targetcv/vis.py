"""评分结果可视化（只画图，不做计算）。"""

from __future__ import annotations

import cv2
import numpy as np

from targetcv.models import ScoringResult

# BGR
_GREEN = (0, 255, 0)
_BLUE = (255, 0, 0)
_CYAN = (255, 255, 0)
_RED = (0, 0, 255)
_YELLOW = (0, 255, 255)

CROSSHAIR_HALF_SIZE = 20


def _pt(xy: tuple[float, float]) -> tuple[int, int]:
    return (int(round(xy[0])), int(round(xy[1])))


def draw_crosshair(img: np.ndarray, center: tuple[float, float], *, half_size: int = CROSSHAIR_HALF_SIZE) -> None:
    cx, cy = int(center[0]), int(center[1])
    cv2.line(img, (cx - half_size, cy), (cx + half_size, cy), _YELLOW, 2)
    cv2.line(img, (cx, cy - half_size), (cx, cy + half_size), _YELLOW, 2)


def draw_scoring_overlay(result: ScoringResult) -> np.ndarray:
    """在裁剪图副本上画出每个弹孔与计分中心。

    - 绿色：弹孔轮廓
    - 蓝色：最小外接圆；青色实心点：外接圆圆心（计分位置）
    - 红色实心点：轮廓质心（仅对比用）
    - 左上角逐行写分数；黄色十字：计分中心
    """

    vis = result.region.image.copy()

    for i, shot in enumerate(result.shots):
        if shot.contour is not None:
            cv2.drawContours(vis, [shot.contour], 0, _GREEN, 2)

        cv2.circle(vis, _pt(shot.enclosing_center), int(round(shot.enclosing_radius)), _BLUE, 2)
        cv2.circle(vis, _pt(shot.enclosing_center), 4, _CYAN, -1)
        cv2.circle(vis, (int(shot.centroid[0]), int(shot.centroid[1])), 5, _RED, -1)

        cv2.putText(
            vis,
            f"Score: {shot.score_label}",
            (20, 40 + 36 * i),
            cv2.FONT_HERSHEY_PLAIN,
            2.0,
            _RED,
            2,
        )

    draw_crosshair(vis, result.calibration.center)
    return vis
