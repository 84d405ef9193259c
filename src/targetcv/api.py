"""targetcv 对外稳定调用入口（public API）。

设计目标：
- 让其他程序用少量函数完成“读图 -> 评分”，不依赖内部模块划分；
- CLI 只是“参数解析 + 调用 + 落盘”。
"""

from __future__ import annotations

from pathlib import Path

import numpy as np

from targetcv.config import ScoringConfig, load_scoring_config
from targetcv.models import ScoringResult
from targetcv.outputs import read_image
from targetcv.pipeline import run_scoring_pipeline


def build_config(config_path: Path | None = None) -> ScoringConfig:
    """加载配置；不给路径时返回默认配置。

    Args:
        config_path: 配置文件路径（.json/.yaml/.yml）。

    Returns:
        ScoringConfig。
    """

    if config_path is None:
        return ScoringConfig()
    return load_scoring_config(Path(config_path).resolve())


def score_image(img_bgr: np.ndarray, cfg: ScoringConfig | None = None) -> ScoringResult:
    """对内存中的 BGR 图片评分。

    Raises:
        NoTargetFoundError: 找不到靶纸。
    """

    return run_scoring_pipeline(img_bgr, cfg).require_result()


def score_image_file(path: Path, cfg: ScoringConfig | None = None) -> ScoringResult:
    """读图并评分。

    Raises:
        ImageReadError: 图片无法解码。
        NoTargetFoundError: 找不到靶纸。
    """

    return score_image(read_image(Path(path)), cfg)
