"""输出写入（高内聚：只管落盘 PNG/JSON/CSV）。"""

from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Any

import cv2
import numpy as np

from targetcv.errors import ImageReadError, ImageWriteError
from targetcv.models import ScoringResult, ShotRecord
from targetcv.vis import draw_scoring_overlay

CROPPED_TARGET_NAME = "cropped_target.png"
THRESHOLD_CROPPED_NAME = "threshold_cropped.png"
SHOT_DETECTION_NAME = "shot_detection.png"


def ensure_parent(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)


def read_image(path: Path) -> np.ndarray:
    img = cv2.imread(str(path), cv2.IMREAD_COLOR)
    if img is None or img.size == 0:
        raise ImageReadError(f"Failed to read image (empty Mat): {path}")
    return img


def write_image(path: Path, img: np.ndarray) -> Path:
    ensure_parent(path)
    if not cv2.imwrite(str(path), img):
        raise ImageWriteError(f"Failed to write image: {path}")
    return path


def write_result_images(out_dir: Path, result: ScoringResult) -> dict[str, Path]:
    """写出裁剪图、裁剪二值图，以及（有弹孔时）可视化图。

    Returns:
        {文件名: 路径}，只包含实际写出的文件。
    """

    out_dir = Path(out_dir)
    written: dict[str, Path] = {}

    written[CROPPED_TARGET_NAME] = write_image(out_dir / CROPPED_TARGET_NAME, result.region.image)

    if result.shots:
        written[SHOT_DETECTION_NAME] = write_image(out_dir / SHOT_DETECTION_NAME, draw_scoring_overlay(result))

    if result.threshold_image is not None:
        written[THRESHOLD_CROPPED_NAME] = write_image(out_dir / THRESHOLD_CROPPED_NAME, result.threshold_image)

    return written


def _as_json_shot(s: ShotRecord) -> dict[str, Any]:
    return {
        "area_px": s.area_px,
        "centroid": list(s.centroid),
        "enclosing_center": list(s.enclosing_center),
        "enclosing_radius": s.enclosing_radius,
        "distance_px": s.distance_px,
        "distance_mm": s.distance_mm,
        "decimal_score": s.decimal_score,
        "ring": s.ring,
    }


def result_to_json(result: ScoringResult) -> dict[str, Any]:
    """转成可 JSON 序列化的 dict（不含图像）。"""

    c = result.calibration
    return {
        "target_bounds": list(result.region.bounds),
        "calibration": {
            "status": c.status.value,
            "calibrated": c.calibrated,
            "center": list(c.center),
            "pixels_per_mm": c.pixels_per_mm,
            "black_circle_radius_px": c.black_circle_radius_px,
        },
        "shot_status": result.shot_status.value,
        "skipped_degenerate": result.skipped_degenerate,
        "shots": [_as_json_shot(s) for s in result.shots],
        "total": result.total,
    }


def write_json(path: Path, payload: dict[str, Any]) -> None:
    ensure_parent(path)
    with path.open("w", encoding="utf-8") as f:
        json.dump(payload, f, ensure_ascii=False, indent=2)


def write_shots_csv(path: Path, result: ScoringResult) -> None:
    ensure_parent(path)

    rows = [_as_json_shot(s) for s in result.shots]
    fieldnames = ["area_px", "centroid", "enclosing_center", "enclosing_radius", "distance_px", "distance_mm", "decimal_score", "ring"]
    with path.open("w", encoding="utf-8", newline="") as f:
        w = csv.DictWriter(f, fieldnames=fieldnames)
        w.writeheader()
        w.writerows(rows)
