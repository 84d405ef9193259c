"""图像预处理（高内聚：滤波/灰度/二值化/裁剪）。"""

from __future__ import annotations

import cv2
import numpy as np

from targetcv.models import TargetRegion


def to_gray(img: np.ndarray) -> np.ndarray:
    if img.ndim == 2:
        return img
    return cv2.cvtColor(img, cv2.COLOR_BGR2GRAY)


def median_blur(img: np.ndarray, ksize: int) -> np.ndarray:
    # ksize=1 视为不滤波；cv2.medianBlur 要求奇数核。
    if int(ksize) <= 1:
        return img
    return cv2.medianBlur(img, int(ksize))


def binarize(img: np.ndarray, cutoff: float, max_value: float = 255.0) -> np.ndarray:
    """THRESH_BINARY：大于 cutoff 的像素置为 max_value，其余为 0。"""

    _, out = cv2.threshold(to_gray(img), float(cutoff), float(max_value), cv2.THRESH_BINARY)
    return out


def binarize_full_image(img_bgr: np.ndarray, *, blur_ksize: int, cutoff: float, max_value: float) -> np.ndarray:
    """整图：先对彩色图中值滤波，再转灰度二值化（找白色靶纸）。"""

    return binarize(median_blur(img_bgr, blur_ksize), cutoff, max_value)


def binarize_target(img_bgr: np.ndarray, *, blur_ksize: int, cutoff: float, max_value: float) -> np.ndarray:
    """裁剪图：先转灰度，再用大核中值滤波，最后二值化（分离黑色圆与弹孔）。"""

    return binarize(median_blur(to_gray(img_bgr), blur_ksize), cutoff, max_value)


def crop_region(
    img: np.ndarray,
    bbox: tuple[int, int, int, int],
    *,
    margin: int = 0,
) -> TargetRegion:
    """按外接矩形（可带 margin）裁剪，并保证不越出图像边界。"""

    h_img, w_img = int(img.shape[0]), int(img.shape[1])
    x, y, w, h = (int(v) for v in bbox)
    m = max(0, int(margin))

    x0 = max(0, x - m)
    y0 = max(0, y - m)
    w0 = min(w_img - x0, w + 2 * m)
    h0 = min(h_img - y0, h + 2 * m)

    crop = img[y0 : y0 + h0, x0 : x0 + w0].copy()
    return TargetRegion(image=crop, x=x0, y=y0, width=w0, height=h0)
