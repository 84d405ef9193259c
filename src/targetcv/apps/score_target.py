"""离线：对一张靶纸照片计分，并把中间结果/可视化落盘。

退出码：
    0 成功；1 输入文件不存在；2 图片无法解码；3 写图失败；4 找不到靶纸；5 配置文件无效。
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional

from targetcv.config import ScoringConfig, load_scoring_config
from targetcv.errors import ImageReadError, ImageWriteError
from targetcv.logging_utils import get_logger
from targetcv.outputs import read_image, result_to_json, write_image, write_json, write_result_images, write_shots_csv
from targetcv.pipeline import run_scoring_pipeline
from targetcv.terminal_format import NO_TARGET_LINE, format_result_lines, format_target_line

EXIT_OK = 0
EXIT_INPUT_NOT_FOUND = 1
EXIT_READ_FAILED = 2
EXIT_WRITE_FAILED = 3
EXIT_NO_TARGET = 4
EXIT_BAD_CONFIG = 5


def build_arg_parser() -> argparse.ArgumentParser:
    # 说明：终端编码差异较大，这里尽量使用 ASCII，避免 --help 乱码。
    p = argparse.ArgumentParser(description="Score a photographed ISSF 10m air rifle target")
    p.add_argument("input", nargs="?", default="input.jpg", help="Input photo path")
    p.add_argument("output_dir", nargs="?", default="export", help="Directory for result images")
    p.add_argument(
        "output_file_name",
        nargs="?",
        default="output.png",
        help="File name for the full-image threshold output",
    )
    p.add_argument(
        "--config",
        default="",
        help="Optional scoring config file (.json/.yaml/.yml); defaults are used when empty",
    )
    p.add_argument("--out-json", default="", help="Optional JSON result path")
    p.add_argument("--out-csv", default="", help="Optional per-shot CSV path")
    p.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Console log level",
    )
    p.add_argument("--log-file", default="", help="Also write DEBUG logs to this file")
    return p


def main(argv: Optional[list[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)

    log_file = str(args.log_file or "").strip()
    logger = get_logger(
        "targetcv.apps.score_target",
        console_level=str(args.log_level),
        file_output=bool(log_file),
        log_file=log_file or None,
    )

    input_path = Path(args.input).resolve()
    out_dir = Path(args.output_dir).resolve()

    if not input_path.is_file():
        print(f"Input file not found: {input_path}", file=sys.stderr)
        return EXIT_INPUT_NOT_FOUND

    try:
        cfg = load_scoring_config(Path(args.config).resolve()) if str(args.config).strip() else ScoringConfig()
    except (OSError, RuntimeError, ValueError) as exc:
        print(f"Invalid config {args.config}: {exc}", file=sys.stderr)
        return EXIT_BAD_CONFIG

    try:
        image = read_image(input_path)
    except ImageReadError as exc:
        print(str(exc), file=sys.stderr)
        return EXIT_READ_FAILED

    out_dir.mkdir(parents=True, exist_ok=True)
    run = run_scoring_pipeline(image, cfg)
    result = run.result

    if result is None:
        print(NO_TARGET_LINE)
    else:
        print(format_target_line(result.region))
        for line in format_result_lines(result):
            print(line)

        try:
            written = write_result_images(out_dir, result)
        except ImageWriteError as exc:
            print(str(exc), file=sys.stderr)
            return EXIT_WRITE_FAILED
        for name, path in written.items():
            print(f"Saved {name}: {path}")

        if str(args.out_json).strip():
            write_json(Path(args.out_json).resolve(), result_to_json(result))
        if str(args.out_csv).strip():
            write_shots_csv(Path(args.out_csv).resolve(), result)

    output_path = out_dir / str(args.output_file_name)
    try:
        write_image(output_path, run.full_threshold)
    except ImageWriteError as exc:
        print(str(exc), file=sys.stderr)
        return EXIT_WRITE_FAILED

    print(f"Loaded:  {input_path}")
    print(f"Saved to {output_path}")

    if not run.target_found:
        logger.error("no target found in %s", input_path)
        return EXIT_NO_TARGET
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
