"""形状分类：从轮廓池里挑出“靶纸”“黑色圆”“弹孔候选”。

规则全部基于面积：
- 靶纸：整图最外层轮廓里面积最大的一个；
- 黑色圆：裁剪图轮廓中面积落在 [black_circle_min_area, black_circle_max_area] 的最大者；
- 弹孔：裁剪图轮廓中面积落在 [shot_min_area, shot_max_area] 的全部，按面积升序。

面积相同的情况下保持输入顺序（先出现者优先），保证输出可复现。
"""

from __future__ import annotations

from typing import Sequence

from targetcv.config import ShapeThresholds
from targetcv.errors import NoTargetFoundError
from targetcv.models import DetectedShape


def _in_range(shape: DetectedShape, lo: float, hi: float) -> bool:
    a = float(shape.area)
    return float(lo) <= a <= float(hi)


def _pick_largest(shapes: Sequence[DetectedShape]) -> DetectedShape | None:
    best: DetectedShape | None = None
    best_area = float("-inf")
    for s in shapes:
        a = float(s.area)
        # 严格大于：面积相同时保留先出现的。
        if a > best_area:
            best = s
            best_area = a
    return best


def select_target(shapes: Sequence[DetectedShape]) -> DetectedShape:
    """选出靶纸外轮廓。

    Raises:
        NoTargetFoundError: 输入为空。
    """

    best = _pick_largest(shapes)
    if best is None:
        raise NoTargetFoundError("No target contours detected. Adjust threshold value.")
    return best


def select_black_circle(
    shapes: Sequence[DetectedShape],
    thresholds: ShapeThresholds,
) -> DetectedShape | None:
    """选出黑色瞄准圆；没有符合面积区间的形状时返回 None（可恢复，由标定走回退）。"""

    pool = [
        s
        for s in shapes
        if _in_range(s, thresholds.black_circle_min_area, thresholds.black_circle_max_area)
    ]
    return _pick_largest(pool)


def select_shot_candidates(
    shapes: Sequence[DetectedShape],
    thresholds: ShapeThresholds,
) -> list[DetectedShape]:
    """选出弹孔候选，按面积升序；空列表表示靶上没有弹孔（正常情况）。"""

    pool = [s for s in shapes if _in_range(s, thresholds.shot_min_area, thresholds.shot_max_area)]
    return sorted(pool, key=lambda s: float(s.area))
