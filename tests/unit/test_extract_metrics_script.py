"""
Unit тесты CLI скрипта scripts/extract_metrics.py (без OCR).
"""

import json

from config.settings import OUTPUT_DIR
from scripts.extract_metrics import build_request, save_results


def test_build_request_detects_url():
    assert build_request("https://cdn.example.com/a.jpg").image_url == "https://cdn.example.com/a.jpg"
    assert build_request("data/input/a.jpg").image_path == "data/input/a.jpg"


def test_save_results_writes_json(tmp_path):
    envelopes = {"a.jpg": {"success": False, "error": "x", "errorKind": "Unknown", "rawText": None, "parsedGMV": 0.0}}
    result_file = save_results(envelopes, output_dir=tmp_path / "output")

    assert result_file == tmp_path / "output" / "metrics_results.json"
    assert json.loads(result_file.read_text(encoding="utf-8")) == envelopes


def test_default_output_dir_is_under_data():
    assert OUTPUT_DIR.parts[-2:] == ("data", "output")
