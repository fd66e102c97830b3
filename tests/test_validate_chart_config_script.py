"""Tests for the configuration validation script."""

from __future__ import annotations

import importlib.util
import json
from pathlib import Path
from types import ModuleType

import pytest

pytestmark = pytest.mark.integration


def _load_script() -> ModuleType:
    repo_root = Path(__file__).resolve().parents[1]
    script_path = repo_root / "scripts" / "validate_chart_config.py"
    spec = importlib.util.spec_from_file_location("validate_chart_config", script_path)
    assert spec is not None and spec.loader is not None
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_valid_config_exits_zero(tmp_path, capsys) -> None:
    path = tmp_path / "chart.yaml"
    path.write_text(
        "dimensions:\n"
        "  margin: {top: 10, right: 10, bottom: 20, left: 30}\n"
        "  width: 640\n"
        "  height: 480\n"
        "layout: {type: stacked_bar, direction: diverging}\n",
        encoding="utf-8",
    )

    exit_code = _load_script().main([str(path), "--show-config"])

    report = json.loads(capsys.readouterr().out)
    assert exit_code == 0
    assert report["is_valid"] is True
    assert report["errors"] == []
    assert report["config"]["layout"] == {"type": "stacked_bar", "direction": "diverging"}
    assert report["config"]["width"] == 640 - 34 - 10


def test_invalid_config_exits_one(tmp_path, capsys) -> None:
    path = tmp_path / "chart.yaml"
    path.write_text(
        "width: 100\nheight: 50\nscale: {type: log, base: 1}\n",
        encoding="utf-8",
    )

    exit_code = _load_script().main([str(path)])

    report = json.loads(capsys.readouterr().out)
    assert exit_code == 1
    assert report["is_valid"] is False
    assert "config" not in report
    assert any("log base" in error for error in report["errors"])
