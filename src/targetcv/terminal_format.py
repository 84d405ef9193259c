"""终端输出格式化（纯函数，便于单测）。"""

from __future__ import annotations

from targetcv.models import CalibrationResult, ScoringResult, ShotRecord, TargetRegion

NO_SHOTS_LINE = "No shot holes detected. Adjust area range or threshold."
NO_TARGET_LINE = "No target contours detected. Adjust threshold value."


def format_target_line(region: TargetRegion) -> str:
    x, y, w, h = region.bounds
    return f"Target detected: {w}x{h}px at ({x}, {y})"


def format_calibration_lines(calib: CalibrationResult) -> list[str]:
    lines: list[str] = []
    if calib.calibrated:
        lines.append(f"Black circle center detected at: ({calib.center_x:.2f}, {calib.center_y:.2f})")
        lines.append(f"Black circle radius: {calib.black_circle_radius_px:.2f}px")
    else:
        lines.append(
            f"WARNING: uncalibrated ({calib.status.value}); "
            f"using region center ({calib.center_x:.2f}, {calib.center_y:.2f}), scores are not metric"
        )
    lines.append(f"Conversion: {calib.pixels_per_mm:.4f} pixels per mm")
    return lines


def format_shot_lines(shot: ShotRecord) -> list[str]:
    cx, cy = shot.centroid
    ex, ey = shot.enclosing_center
    return [
        f"Shot detected: Area={shot.area_px:.2f}px², ContourCentroid=({cx:.2f}, {cy:.2f}), "
        f"EnclosingCircleCenter=({ex:.2f}, {ey:.2f}), Distance from center={shot.distance_px:.2f}px",
        f"Distance from center: {shot.distance_px:.2f}px ({shot.distance_mm:.2f}mm)",
        f"SCORE: {shot.score_label}",
    ]


def format_result_lines(result: ScoringResult) -> list[str]:
    """整次评分的摘要（不含靶纸定位那一行）。"""

    lines = format_calibration_lines(result.calibration)
    if not result.shots:
        lines.append(NO_SHOTS_LINE)
        return lines

    for shot in result.shots:
        lines.extend(format_shot_lines(shot))
    if len(result.shots) > 1:
        lines.append(f"TOTAL: {result.total:.1f} ({len(result.shots)} shots)")
    return lines
