"""targetcv：拍照纸靶的 ISSF 10m 气步枪小数环值计分。

对外推荐从 `targetcv.api` 导入少量稳定入口函数，避免外部项目依赖内部目录结构。
"""

from targetcv.api import build_config, score_image, score_image_file

__all__ = [
    "build_config",
    "score_image",
    "score_image_file",
]
