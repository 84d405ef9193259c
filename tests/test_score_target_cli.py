"""CLI：参数解析、落盘文件、退出码。"""

from __future__ import annotations

import csv
import json
import logging
from pathlib import Path

import cv2
import numpy as np
import pytest

from targetcv.apps.score_target import (
    EXIT_BAD_CONFIG,
    EXIT_INPUT_NOT_FOUND,
    EXIT_NO_TARGET,
    EXIT_OK,
    EXIT_READ_FAILED,
    build_arg_parser,
    main,
)


def test_arg_parser_defaults() -> None:
    args = build_arg_parser().parse_args([])
    assert args.input == "input.jpg"
    assert args.output_dir == "export"
    assert args.output_file_name == "output.png"
    assert args.log_level == "WARNING"


def test_scores_and_writes_artifacts(tmp_path: Path, synthetic_target: np.ndarray, capsys) -> None:
    src = tmp_path / "target.png"
    assert cv2.imwrite(str(src), synthetic_target)
    out_dir = tmp_path / "export"
    out_json = tmp_path / "result.json"

    rc = main([str(src), str(out_dir), "thresh.png", "--out-json", str(out_json)])
    assert rc == EXIT_OK

    for name in ["cropped_target.png", "threshold_cropped.png", "shot_detection.png", "thresh.png"]:
        assert (out_dir / name).is_file(), name

    stdout = capsys.readouterr().out
    assert "Target detected: 800x800px at (100, 100)" in stdout
    assert "SCORE: 8." in stdout

    payload = json.loads(out_json.read_text(encoding="utf-8"))
    assert payload["calibration"]["calibrated"] is True
    assert payload["shot_status"] == "ok"
    assert len(payload["shots"]) == 1
    assert payload["shots"][0]["ring"] == 8


def test_no_shots_skips_visualization(tmp_path: Path, make_target, capsys) -> None:
    src = tmp_path / "clean.png"
    assert cv2.imwrite(str(src), make_target(shots=[]))
    out_dir = tmp_path / "export"

    assert main([str(src), str(out_dir)]) == EXIT_OK
    assert (out_dir / "cropped_target.png").is_file()
    assert not (out_dir / "shot_detection.png").exists()
    assert "No shot holes detected" in capsys.readouterr().out


def test_missing_input(tmp_path: Path) -> None:
    assert main([str(tmp_path / "nope.jpg"), str(tmp_path / "out")]) == EXIT_INPUT_NOT_FOUND


def test_undecodable_input(tmp_path: Path) -> None:
    bad = tmp_path / "bad.png"
    bad.write_text("not an image", encoding="utf-8")
    assert main([str(bad), str(tmp_path / "out")]) == EXIT_READ_FAILED


def test_no_target_still_writes_threshold(tmp_path: Path) -> None:
    src = tmp_path / "dark.png"
    assert cv2.imwrite(str(src), np.zeros((200, 200, 3), dtype=np.uint8))
    out_dir = tmp_path / "export"

    assert main([str(src), str(out_dir)]) == EXIT_NO_TARGET
    assert (out_dir / "output.png").is_file()
    assert not (out_dir / "cropped_target.png").exists()


@pytest.fixture
def detach_file_handlers():
    # 说明：根 logger 是进程级的，测试结束后摘掉本用例挂上的文件 handler。
    root = logging.getLogger("targetcv")
    before = list(root.handlers)
    yield
    for h in list(root.handlers):
        if h not in before:
            root.removeHandler(h)
            h.close()


def _write_target(tmp_path: Path, img: np.ndarray, name: str = "target.png") -> Path:
    src = tmp_path / name
    assert cv2.imwrite(str(src), img)
    return src


def test_log_file_receives_library_logs(tmp_path: Path, synthetic_target: np.ndarray, detach_file_handlers) -> None:
    src = _write_target(tmp_path, synthetic_target)
    log = tmp_path / "logs" / "run.log"

    rc = main([str(src), str(tmp_path / "export"), "--log-file", str(log), "--log-level", "ERROR"])
    assert rc == EXIT_OK

    assert log.is_file()
    text = log.read_text(encoding="utf-8")
    assert "calibrated: center=" in text
    assert "shot: distance=" in text


def test_config_file_changes_shot_filter(tmp_path: Path, synthetic_target: np.ndarray, capsys) -> None:
    src = _write_target(tmp_path, synthetic_target)
    cfg = tmp_path / "scoring.json"
    cfg.write_text(json.dumps({"thresholds": {"shot_min_area": 100, "shot_max_area": 500}}), encoding="utf-8")
    out_dir = tmp_path / "export"

    assert main([str(src), str(out_dir), "--config", str(cfg)]) == EXIT_OK

    stdout = capsys.readouterr().out
    assert "Black circle radius:" in stdout
    assert "No shot holes detected" in stdout
    assert not (out_dir / "shot_detection.png").exists()


def test_out_csv(tmp_path: Path, synthetic_target: np.ndarray) -> None:
    src = _write_target(tmp_path, synthetic_target)
    out_csv = tmp_path / "tables" / "shots.csv"

    assert main([str(src), str(tmp_path / "export"), "--out-csv", str(out_csv)]) == EXIT_OK

    with out_csv.open("r", encoding="utf-8", newline="") as f:
        rows = list(csv.DictReader(f))
    assert len(rows) == 1
    assert rows[0]["ring"] == "8"
    assert 8.0 < float(rows[0]["decimal_score"]) < 9.0
    assert float(rows[0]["distance_px"]) == pytest.approx(60.0, abs=1.5)


@pytest.mark.parametrize(
    "payload",
    [
        {"preprocess": {"crop_blur_ksize": 4}},
        {"ring_scheme": "issf_50m_pistol"},
        [1, 2, 3],
    ],
)
def test_invalid_config_returns_exit_code(tmp_path: Path, synthetic_target: np.ndarray, payload, capsys) -> None:
    src = _write_target(tmp_path, synthetic_target)
    cfg = tmp_path / "bad.json"
    cfg.write_text(json.dumps(payload), encoding="utf-8")
    out_dir = tmp_path / "export"

    assert main([str(src), str(out_dir), "--config", str(cfg)]) == EXIT_BAD_CONFIG
    assert "Invalid config" in capsys.readouterr().err
    assert not out_dir.exists()


def test_missing_config_file_returns_exit_code(tmp_path: Path, synthetic_target: np.ndarray) -> None:
    src = _write_target(tmp_path, synthetic_target)
    rc = main([str(src), str(tmp_path / "export"), "--config", str(tmp_path / "absent.yaml")])
    assert rc == EXIT_BAD_CONFIG
