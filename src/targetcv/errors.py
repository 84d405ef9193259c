"""异常类型（只放会跨模块抛出的错误）。

说明：
- 预期内的分类/标定结果（找不到黑色圆、没有弹孔）不抛异常，而是以状态字段返回，
  见 `targetcv.models.CalibrationStatus` / `ShotStatus`；
- 只有“整张图里找不到靶纸”属于致命错误，由调用方决定退出码。
"""

from __future__ import annotations


class TargetCVError(RuntimeError):
    """targetcv 所有错误的基类。"""


class NoTargetFoundError(TargetCVError):
    """整图二值化后一个形状都没有找到，无法裁剪靶纸。"""


class DegenerateShapeError(TargetCVError, ValueError):
    """形状零阶矩为 0，质心无定义。"""


class ImageReadError(TargetCVError):
    """图片解码失败（文件存在但读出来是空图）。"""


class ImageWriteError(TargetCVError):
    """图片编码/写盘失败。"""
