"""targetcv 日志工具。

约定：
    - 库内模块统一通过 `get_logger(__name__)` 获取 logger；
    - 只在第一次获取时挂 handler，避免重复输出；
    - CLI 通过 `--log-level` 调整控制台级别，可选落盘到文件。
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

_ROOT_NAME = "targetcv"


def get_logger(
    name: str = _ROOT_NAME,
    *,
    console_output: bool = True,
    file_output: bool = False,
    console_level: str = "WARNING",
    file_level: str = "DEBUG",
    log_file: str | None = None,
) -> logging.Logger:
    """创建或获取一个 logger。

    说明：
        - handler 只挂在根 logger `targetcv` 上，子模块 logger 通过 propagate 共用；
        - 对已配置过的根 logger，再次调用只会更新控制台级别。

    Args:
        name: logger 名称（通常是模块 `__name__`）。
        console_output: 是否输出到控制台。
        file_output: 是否输出到文件。
        console_level: 控制台日志级别（字符串）。
        file_level: 文件日志级别（字符串）。
        log_file: 日志文件路径；为 None 时默认写到当前工作目录下的 `targetcv.log`。

    Returns:
        logging.Logger: 配置完成的 logger。
    """

    root = logging.getLogger(_ROOT_NAME)

    if getattr(root, "_targetcv_configured", False):
        for h in root.handlers:
            if isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler):
                h.setLevel(_parse_level(console_level))
        # 库模块在 import 时已经配置过根 logger，CLI 之后要求落盘时需要补挂 FileHandler。
        if file_output:
            _attach_file_handler(root, Path(log_file or f"{_ROOT_NAME}.log"), file_level)
        return logging.getLogger(name)

    root.setLevel(logging.DEBUG)
    root.propagate = False

    if console_output:
        ch = logging.StreamHandler()
        ch.setLevel(_parse_level(console_level))
        ch.setFormatter(_formatter())
        root.addHandler(ch)

    if file_output:
        _attach_file_handler(root, Path(log_file or f"{_ROOT_NAME}.log"), file_level)

    setattr(root, "_targetcv_configured", True)
    return logging.getLogger(name)


def _formatter() -> logging.Formatter:
    return logging.Formatter(
        fmt="[%(asctime)s][%(levelname)s][%(name)s] %(message)s",
        datefmt="%H:%M:%S",
    )


def _attach_file_handler(root: logging.Logger, path: Path, level: str) -> None:
    """给根 logger 挂文件 handler；同一路径只挂一次。"""

    target = os.path.abspath(path)
    for h in root.handlers:
        if isinstance(h, logging.FileHandler) and h.baseFilename == target:
            h.setLevel(_parse_level(level))
            return

    path.parent.mkdir(parents=True, exist_ok=True)
    fh = logging.FileHandler(path, encoding="utf-8")
    fh.setLevel(_parse_level(level))
    fh.setFormatter(_formatter())
    root.addHandler(fh)


def _parse_level(level: str) -> int:
    """解析日志级别字符串。"""

    value = logging.getLevelName(str(level).upper())
    if isinstance(value, int):
        return value
    return logging.INFO
