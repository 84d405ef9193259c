"""targetcv 公共数据模型（高内聚：只放数据结构定义）。

坐标约定：
- 所有像素坐标都是 (x, y)，x 向右、y 向下，与 OpenCV 一致；
- `TargetRegion` 之后的坐标（标定中心、弹孔位置）都在裁剪后的靶纸坐标系下，
  需要回到原图时加上 `TargetRegion.x / y` 偏移。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

import numpy as np


class CalibrationStatus(str, Enum):
    """标定结果状态。只有 OK 时 mm 距离才有物理意义。"""

    OK = "ok"
    NO_CALIBRATION_CIRCLE = "no_calibration_circle"
    DEGENERATE_CIRCLE = "degenerate_circle"


class ShotStatus(str, Enum):
    OK = "ok"
    NO_SHOTS_DETECTED = "no_shots_detected"


@dataclass(frozen=True)
class DetectedShape:
    """一个闭合轮廓及其测量量。

    属性:
        area: 轮廓面积（px²）。
        m00: 零阶矩；为 0 时质心无定义。
        centroid: 质心 (m10/m00, m01/m00)；m00 为 0 时为 None。
        bounding_box: 外接矩形 (x, y, w, h)。
        enclosing_center: 最小外接圆圆心 (x, y)。
        enclosing_radius: 最小外接圆半径（px）。
        contour: 原始轮廓点（OpenCV 格式 Nx1x2 int32）；合成形状可以为 None。
    """

    area: float
    m00: float
    centroid: tuple[float, float] | None
    bounding_box: tuple[int, int, int, int]
    enclosing_center: tuple[float, float]
    enclosing_radius: float
    contour: np.ndarray | None = field(default=None, compare=False, repr=False)

    @property
    def is_degenerate(self) -> bool:
        return self.centroid is None or float(self.m00) == 0.0


@dataclass(frozen=True)
class TargetRegion:
    """从原图裁剪出的靶纸区域。

    `image` 是裁剪后的彩色图副本，(x, y, width, height) 是它在原图中的位置。
    """

    image: np.ndarray = field(compare=False, repr=False)
    x: int
    y: int
    width: int
    height: int

    @property
    def bounds(self) -> tuple[int, int, int, int]:
        return (int(self.x), int(self.y), int(self.width), int(self.height))

    @property
    def geometric_center(self) -> tuple[float, float]:
        return (self.width / 2.0, self.height / 2.0)


@dataclass(frozen=True)
class CalibrationResult:
    """像素到毫米的标定结果（靶纸坐标系）。

    说明：
        - 找不到黑色圆时 `pixels_per_mm` 回退为 1.0，中心回退为裁剪区域几何中心；
          此时 `calibrated` 为 False，下游不应把 mm 距离/分数当作真实值。
    """

    center_x: float
    center_y: float
    pixels_per_mm: float
    black_circle_radius_px: float
    status: CalibrationStatus = CalibrationStatus.OK

    @property
    def calibrated(self) -> bool:
        return self.status is CalibrationStatus.OK

    @property
    def center(self) -> tuple[float, float]:
        return (float(self.center_x), float(self.center_y))


@dataclass(frozen=True)
class ShotRecord:
    """单个弹孔的评分结果。

    计分位置使用最小外接圆圆心（enclosing_center）；centroid 只用于可视化对比。
    """

    area_px: float
    centroid: tuple[float, float]
    enclosing_center: tuple[float, float]
    enclosing_radius: float
    distance_px: float
    distance_mm: float
    decimal_score: float
    ring: int
    contour: np.ndarray | None = field(default=None, compare=False, repr=False)

    @property
    def score_label(self) -> str:
        return f"{self.decimal_score:.1f}"


@dataclass(frozen=True)
class ScoringResult:
    """一次裁剪靶纸的完整评分输出。"""

    region: TargetRegion
    calibration: CalibrationResult
    shots: tuple[ShotRecord, ...]
    shot_status: ShotStatus
    skipped_degenerate: int = 0
    # 裁剪区域的二值图（threshold_cropped.png 的来源）。
    threshold_image: np.ndarray | None = field(default=None, compare=False, repr=False)

    @property
    def calibrated(self) -> bool:
        return self.calibration.calibrated

    @property
    def total(self) -> float:
        return float(sum(s.decimal_score for s in self.shots))
