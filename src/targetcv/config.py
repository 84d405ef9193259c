"""配置模型（dataclass）与 YAML/JSON 加载。

目标：
- 把“按分辨率/打印尺寸需要调参”的阈值集中成具名字段，而不是散落在代码里；
- 支持从 `.yaml/.yml/.json` 加载，缺省字段取默认值。

说明：
- 面积阈值单位是 px²，与拍照分辨率强相关，换相机/换靶纸尺寸时需要重新标定；
- ISSF 环值常量（85mm/11.5mm/115mm）不属于配置，见 `targetcv.rings`。
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from targetcv.rings import RingScheme, get_ring_scheme


def _load_mapping(path: Path) -> dict[str, Any]:
    path = Path(path)
    suf = path.suffix.lower()

    if suf == ".json":
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    elif suf in {".yaml", ".yml"}:
        try:
            import yaml  # type: ignore
        except Exception as exc:  # pragma: no cover
            raise RuntimeError("PyYAML 未安装，无法读取 YAML 配置") from exc

        with path.open("r", encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as exc:
                raise RuntimeError(f"YAML 配置解析失败: {path}") from exc
    else:
        raise RuntimeError(f"不支持的配置文件类型: {path}（仅支持 .json/.yaml/.yml）")

    if not isinstance(data, dict):
        raise RuntimeError("配置文件顶层必须是对象（dict）")

    return data


def _as_section(data: dict[str, Any], key: str) -> dict[str, Any]:
    sec = data.get(key, {})
    if sec is None:
        return {}
    if not isinstance(sec, dict):
        raise RuntimeError(f"config field '{key}' must be an object")
    return sec


def _check_ksize(name: str, k: int) -> None:
    if int(k) < 1 or int(k) % 2 == 0:
        raise ValueError(f"{name} must be an odd integer >= 1, got {k}")


def _check_range(name: str, lo: float, hi: float) -> None:
    if float(lo) < 0.0 or float(lo) > float(hi):
        raise ValueError(f"{name}: expected 0 <= min <= max, got [{lo}, {hi}]")


@dataclass(frozen=True)
class PreprocessConfig:
    """二值化相关参数。

    Attributes:
        full_blur_ksize: 整图中值滤波核（奇数，1 表示不滤波）。
        full_threshold: 整图二值化阈值（亮于此值的是白色靶纸）。
        crop_blur_ksize: 裁剪图中值滤波核（大核用来抹掉印刷环线）。
        crop_threshold: 裁剪图二值化阈值（暗于此值的是黑色圆）。
        max_value: 二值化输出的前景值。
        crop_margin_px: 裁剪时在靶纸外接矩形四周额外保留的像素（会被裁到图像边界内）。
    """

    full_blur_ksize: int = 3
    full_threshold: float = 200.0
    crop_blur_ksize: int = 15
    crop_threshold: float = 100.0
    max_value: float = 255.0
    crop_margin_px: int = 0

    def __post_init__(self) -> None:
        _check_ksize("full_blur_ksize", self.full_blur_ksize)
        _check_ksize("crop_blur_ksize", self.crop_blur_ksize)
        for name in ("full_threshold", "crop_threshold"):
            v = float(getattr(self, name))
            if v < 0.0 or v > float(self.max_value):
                raise ValueError(f"{name} must be within [0, max_value], got {v}")
        if int(self.crop_margin_px) < 0:
            raise ValueError(f"crop_margin_px must be >= 0, got {self.crop_margin_px}")


@dataclass(frozen=True)
class ShapeThresholds:
    """形状分类的面积区间（px²，闭区间）。"""

    black_circle_min_area: float = 20000.0
    black_circle_max_area: float = 500000.0
    shot_min_area: float = 900.0
    shot_max_area: float = 10000.0

    def __post_init__(self) -> None:
        _check_range("black circle area", self.black_circle_min_area, self.black_circle_max_area)
        _check_range("shot area", self.shot_min_area, self.shot_max_area)


@dataclass(frozen=True)
class ScoringConfig:
    preprocess: PreprocessConfig = field(default_factory=PreprocessConfig)
    thresholds: ShapeThresholds = field(default_factory=ShapeThresholds)
    ring_scheme: str = "issf_10m_air_rifle"

    def __post_init__(self) -> None:
        # 提前校验，避免跑到一半才发现靶型名字写错。
        get_ring_scheme(self.ring_scheme)

    @property
    def scheme(self) -> RingScheme:
        return get_ring_scheme(self.ring_scheme)


def scoring_config_from_mapping(data: dict[str, Any]) -> ScoringConfig:
    """从 dict 构造配置（缺省字段取默认值）。"""

    pre = _as_section(data, "preprocess")
    thr = _as_section(data, "thresholds")
    d_pre = PreprocessConfig()
    d_thr = ShapeThresholds()

    preprocess = PreprocessConfig(
        full_blur_ksize=int(pre.get("full_blur_ksize", d_pre.full_blur_ksize)),
        full_threshold=float(pre.get("full_threshold", d_pre.full_threshold)),
        crop_blur_ksize=int(pre.get("crop_blur_ksize", d_pre.crop_blur_ksize)),
        crop_threshold=float(pre.get("crop_threshold", d_pre.crop_threshold)),
        max_value=float(pre.get("max_value", d_pre.max_value)),
        crop_margin_px=int(pre.get("crop_margin_px", d_pre.crop_margin_px)),
    )
    thresholds = ShapeThresholds(
        black_circle_min_area=float(thr.get("black_circle_min_area", d_thr.black_circle_min_area)),
        black_circle_max_area=float(thr.get("black_circle_max_area", d_thr.black_circle_max_area)),
        shot_min_area=float(thr.get("shot_min_area", d_thr.shot_min_area)),
        shot_max_area=float(thr.get("shot_max_area", d_thr.shot_max_area)),
    )

    return ScoringConfig(
        preprocess=preprocess,
        thresholds=thresholds,
        ring_scheme=str(data.get("ring_scheme") or "issf_10m_air_rifle").strip(),
    )


def load_scoring_config(path: Path) -> ScoringConfig:
    """加载评分配置文件。"""

    return scoring_config_from_mapping(_load_mapping(Path(path)))
