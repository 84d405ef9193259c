"""pytest 运行期配置。

该仓库采用 src-layout（包代码在 ./src 下）。
为了让开发者直接在仓库根目录执行 `python -m pytest` 时也能导入 `targetcv`，
这里在测试收集阶段把 ./src 注入到 sys.path。

注意：这只是测试侧的便捷配置，不影响正式打包安装后的导入行为。
"""

from __future__ import annotations

import sys
from pathlib import Path

import cv2
import numpy as np
import pytest


def _ensure_src_on_syspath() -> None:
    """将仓库的 ./src 目录加入 sys.path（若尚未存在）。"""

    repo_root = Path(__file__).resolve().parents[1]
    src_str = str(repo_root / "src")
    if src_str not in sys.path:
        sys.path.insert(0, src_str)


_ensure_src_on_syspath()


def draw_synthetic_target(
    *,
    shots: list[tuple[int, int]] | None = None,
    black_radius: int = 170,
    shot_radius: int = 25,
    with_black_circle: bool = True,
) -> np.ndarray:
    """合成一张“拍照靶纸”。

    - 1000x1000 深灰背景，中间 800x800 白色靶纸（原图坐标 (100,100) 起）；
    - 黑色圆圆心 (500,500)；
    - 弹孔画成黑色圆内的白点（透光）。
    """

    img = np.full((1000, 1000, 3), 60, dtype=np.uint8)
    cv2.rectangle(img, (100, 100), (899, 899), (255, 255, 255), -1)
    if with_black_circle:
        cv2.circle(img, (500, 500), int(black_radius), (0, 0, 0), -1)
    for x, y in shots or []:
        cv2.circle(img, (int(x), int(y)), int(shot_radius), (255, 255, 255), -1)
    return img


@pytest.fixture
def synthetic_target() -> np.ndarray:
    return draw_synthetic_target(shots=[(560, 500)])


@pytest.fixture
def make_target():
    return draw_synthetic_target
