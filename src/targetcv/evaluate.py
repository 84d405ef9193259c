"""弹孔计分：每个候选形状 -> 一条 ShotRecord。"""

from __future__ import annotations

import math
from typing import Sequence

from targetcv.errors import DegenerateShapeError
from targetcv.logging_utils import get_logger
from targetcv.models import CalibrationResult, DetectedShape, ShotRecord
from targetcv.rings import ISSF_10M_AIR_RIFLE, RingScheme

logger = get_logger(__name__)


def evaluate_shot(
    shape: DetectedShape,
    calib: CalibrationResult,
    *,
    scheme: RingScheme = ISSF_10M_AIR_RIFLE,
) -> ShotRecord:
    """对单个弹孔计分。

    计分位置是最小外接圆圆心，不是质心：破损/不规则的弹孔边缘会把质心拉偏，
    而外接圆圆心更接近真实弹孔中心。

    Raises:
        DegenerateShapeError: 形状零阶矩为 0。
    """

    centroid = shape.centroid
    if centroid is None or shape.is_degenerate:
        raise DegenerateShapeError(f"shot shape has zero m00 (area={float(shape.area):.2f})")

    ex, ey = shape.enclosing_center
    cx, cy = calib.center
    distance_px = math.hypot(float(ex) - cx, float(ey) - cy)
    distance_mm = distance_px / float(calib.pixels_per_mm)

    return ShotRecord(
        area_px=float(shape.area),
        centroid=(float(centroid[0]), float(centroid[1])),
        enclosing_center=(float(ex), float(ey)),
        enclosing_radius=float(shape.enclosing_radius),
        distance_px=float(distance_px),
        distance_mm=float(distance_mm),
        decimal_score=float(scheme.score(distance_mm)),
        ring=scheme.ring_for_distance(distance_mm),
        contour=shape.contour,
    )


def evaluate_shots(
    shapes: Sequence[DetectedShape],
    calib: CalibrationResult,
    *,
    scheme: RingScheme = ISSF_10M_AIR_RIFLE,
) -> tuple[list[ShotRecord], int]:
    """批量计分。

    Returns:
        (records, skipped)：records 按面积升序；skipped 为跳过的退化形状数量。
    """

    records: list[ShotRecord] = []
    skipped = 0
    for shape in sorted(shapes, key=lambda s: float(s.area)):
        try:
            rec = evaluate_shot(shape, calib, scheme=scheme)
        except DegenerateShapeError as exc:
            skipped += 1
            logger.warning("skip shot candidate: %s", exc)
            continue
        logger.info("shot: distance=%.2fmm score=%.1f", rec.distance_mm, rec.decimal_score)
        records.append(rec)
    return records, skipped
