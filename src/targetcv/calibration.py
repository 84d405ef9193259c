"""由黑色瞄准圆得到计分中心与像素/毫米比例。

- 中心用轮廓质心（一阶矩 / 零阶矩），不用外接圆或外接矩形中心：
  质心对镜头/透视带来的轻微变形更稳；
- 半径用等面积半径 sqrt(area / π)，对轻微不圆的边界比最小外接圆更稳；
- pixels_per_mm = 半径像素 / 黑色圆物理半径（ISSF 10m 气步枪为 85mm）。
"""

from __future__ import annotations

import math

from targetcv.logging_utils import get_logger
from targetcv.models import CalibrationResult, CalibrationStatus, DetectedShape
from targetcv.rings import ISSF_10M_AIR_RIFLE, RingScheme

logger = get_logger(__name__)


def uncalibrated(
    width: float,
    height: float,
    *,
    status: CalibrationStatus = CalibrationStatus.NO_CALIBRATION_CIRCLE,
) -> CalibrationResult:
    """回退结果：区域几何中心 + 1 px/mm。"""

    return CalibrationResult(
        center_x=float(width) / 2.0,
        center_y=float(height) / 2.0,
        pixels_per_mm=1.0,
        black_circle_radius_px=0.0,
        status=status,
    )


def calibrate(
    black_circle: DetectedShape | None,
    *,
    region_width: float,
    region_height: float,
    scheme: RingScheme = ISSF_10M_AIR_RIFLE,
) -> CalibrationResult:
    """计算标定结果。

    Args:
        black_circle: 分类得到的黑色圆；None 表示没找到。
        region_width: 裁剪区域宽度（回退中心用）。
        region_height: 裁剪区域高度（回退中心用）。
        scheme: 靶型（提供黑色圆的物理半径）。

    Returns:
        CalibrationResult；找不到/退化时 `calibrated` 为 False。
    """

    if black_circle is None:
        logger.warning("no black circle in area range; falling back to 1 px/mm at region center")
        return uncalibrated(region_width, region_height)

    centroid = black_circle.centroid
    if centroid is None or black_circle.is_degenerate:
        logger.warning("black circle candidate has zero m00; falling back to 1 px/mm at region center")
        return uncalibrated(region_width, region_height, status=CalibrationStatus.DEGENERATE_CIRCLE)

    cx, cy = centroid
    radius_px = math.sqrt(float(black_circle.area) / math.pi)

    if radius_px <= 0.0:
        logger.warning("black circle has non-positive area; falling back to 1 px/mm at region center")
        return uncalibrated(region_width, region_height, status=CalibrationStatus.DEGENERATE_CIRCLE)

    ppm = radius_px / float(scheme.black_circle_radius_mm)
    logger.info("calibrated: center=(%.2f, %.2f) radius=%.2fpx scale=%.4f px/mm", cx, cy, radius_px, ppm)

    return CalibrationResult(
        center_x=float(cx),
        center_y=float(cy),
        pixels_per_mm=float(ppm),
        black_circle_radius_px=float(radius_px),
        status=CalibrationStatus.OK,
    )
