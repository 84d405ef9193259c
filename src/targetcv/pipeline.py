"""单张照片的评分流水线（高内聚：只做编排，不做 IO）。

数据流：
    原图 -> 整图二值化 -> 最外层轮廓 -> 选靶纸 -> 裁剪
         -> 裁剪图二值化 -> 全部轮廓 -> 选黑色圆 / 选弹孔
         -> 标定 -> 逐个弹孔计分 -> ScoringResult

每次调用独立持有自己的中间结果，不共享可变状态；多张图并发时各跑各的即可。
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from targetcv.calibration import calibrate
from targetcv.classify import select_black_circle, select_shot_candidates, select_target
from targetcv.config import ScoringConfig
from targetcv.errors import NoTargetFoundError
from targetcv.evaluate import evaluate_shots
from targetcv.logging_utils import get_logger
from targetcv.models import ScoringResult, ShotStatus, TargetRegion
from targetcv.preprocess import binarize_full_image, binarize_target, crop_region
from targetcv.shapes import find_shapes

logger = get_logger(__name__)


@dataclass(frozen=True)
class PipelineRun:
    """一次完整运行的输出。

    `full_threshold` 总是存在（即使找不到靶纸，也便于落盘排查阈值）；
    找不到靶纸时 `result` 为 None，`target_error` 记录原因。
    """

    full_threshold: np.ndarray = field(repr=False)
    result: ScoringResult | None
    target_error: NoTargetFoundError | None = None

    @property
    def target_found(self) -> bool:
        return self.result is not None

    def require_result(self) -> ScoringResult:
        """取评分结果；找不到靶纸时抛出记录下来的 NoTargetFoundError。"""

        if self.result is None:
            raise self.target_error or NoTargetFoundError("No target contours detected. Adjust threshold value.")
        return self.result


def threshold_full_image(img_bgr: np.ndarray, cfg: ScoringConfig) -> np.ndarray:
    p = cfg.preprocess
    return binarize_full_image(img_bgr, blur_ksize=p.full_blur_ksize, cutoff=p.full_threshold, max_value=p.max_value)


def locate_target(img_bgr: np.ndarray, full_threshold: np.ndarray, cfg: ScoringConfig) -> TargetRegion:
    """在整图二值图上找靶纸并裁剪原图。

    Raises:
        NoTargetFoundError: 整图一个轮廓都没有。
    """

    shapes = find_shapes(full_threshold, mode="external")
    logger.debug("full image: %d external shapes", len(shapes))

    target = select_target(shapes)
    region = crop_region(img_bgr, target.bounding_box, margin=cfg.preprocess.crop_margin_px)
    logger.debug("target bounds: %s", region.bounds)
    return region


def score_target(region: TargetRegion, cfg: ScoringConfig) -> ScoringResult:
    """对已裁剪的靶纸做分类、标定、计分。"""

    p = cfg.preprocess
    scheme = cfg.scheme

    thresh = binarize_target(region.image, blur_ksize=p.crop_blur_ksize, cutoff=p.crop_threshold, max_value=p.max_value)
    shapes = find_shapes(thresh, mode="all")
    logger.debug("cropped target: %d shapes", len(shapes))

    black = select_black_circle(shapes, cfg.thresholds)
    calib = calibrate(black, region_width=region.width, region_height=region.height, scheme=scheme)

    candidates = select_shot_candidates(shapes, cfg.thresholds)
    shots, skipped = evaluate_shots(candidates, calib, scheme=scheme)

    return ScoringResult(
        region=region,
        calibration=calib,
        shots=tuple(shots),
        shot_status=ShotStatus.OK if shots else ShotStatus.NO_SHOTS_DETECTED,
        skipped_degenerate=int(skipped),
        threshold_image=thresh,
    )


def run_scoring_pipeline(img_bgr: np.ndarray, cfg: ScoringConfig | None = None) -> PipelineRun:
    """跑完整流水线。

    找不到靶纸（唯一的致命情况）不在这里抛出，而是返回 `result=None` 的 PipelineRun，
    让调用方仍能拿到整图二值图；需要异常语义时用 `PipelineRun.require_result()`。
    """

    cfg = cfg or ScoringConfig()
    full = threshold_full_image(img_bgr, cfg)
    try:
        region = locate_target(img_bgr, full, cfg)
    except NoTargetFoundError as exc:
        logger.warning("no target found: %s", exc)
        return PipelineRun(full_threshold=full, result=None, target_error=exc)
    return PipelineRun(full_threshold=full, result=score_target(region, cfg))
