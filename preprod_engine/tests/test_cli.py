"""CLI tests: extract / validate / detect / normalize / verify via python -m."""
from __future__ import annotations

import json
import subprocess
import sys
from pathlib import Path

import pytest

from preprod_engine.extraction.models import Location
from preprod_engine.schemas.records_v1 import dump_records

_REPO_ROOT = Path(__file__).resolve().parents[2]

_RAW_LOCATIONS = "Sure! Here are the locations:\n\nLocation 1: Coffee Shop\nType: interior\nScenes: 1-3\n"


def _preprod_engine_cmd():
    return [sys.executable, "-m", "preprod_engine"]


def _run(*args: str):
    return subprocess.run(
        [*_preprod_engine_cmd(), *args],
        capture_output=True, text=True, cwd=_REPO_ROOT,
    )


def _write(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def raw_path(tmp_path: Path) -> Path:
    return _write(tmp_path / "raw.txt", _RAW_LOCATIONS)


class TestExtract:
    def test_extract_to_stdout(self, raw_path: Path):
        r = _run("extract", "--domain", "location", "--input", str(raw_path))
        assert r.returncode == 0
        data = json.loads(r.stdout)
        assert data["domain"] == "location"
        assert data["records"][0]["name"] == "Coffee Shop"
        assert data["records"][0]["scenes"] == [1, 2, 3]

    def test_extract_to_file(self, raw_path: Path, tmp_path: Path):
        out = tmp_path / "records.json"
        r = _run("extract", "--domain", "location", "--input", str(raw_path), "--output", str(out))
        assert r.returncode == 0
        assert r.stdout.startswith("OK:")
        assert json.loads(out.read_text(encoding="utf-8"))["records"][0]["type"] == "interior"

    def test_missing_input_exits_1(self, tmp_path: Path):
        r = _run("extract", "--domain", "script", "--input", str(tmp_path / "absent.txt"))
        assert r.returncode == 1
        assert r.stdout.startswith("ERROR:")

    def test_settings_file_applied(self, tmp_path: Path):
        raw = _write(tmp_path / "raw.txt", "One.\n\nTwo.\n\nThree.")
        settings = _write(tmp_path / "settings.json", json.dumps({"min_chunk_length": 1}))
        r = _run("--settings", str(settings), "extract", "--domain", "storyboard", "--input", str(raw))
        assert r.returncode == 0
        assert len(json.loads(r.stdout)["records"]) == 3

    def test_invalid_settings_exact_message(self, raw_path: Path, tmp_path: Path):
        settings = _write(tmp_path / "settings.json", "{broken")
        r = _run("--settings", str(settings), "extract", "--domain", "location", "--input", str(raw_path))
        assert r.returncode == 1
        assert r.stdout.strip() == "ERROR: invalid settings input"


class TestValidate:
    def test_valid_records_exit_0(self, tmp_path: Path):
        records = _write(tmp_path / "records.json", dump_records("location", [Location(name="Loft")]))
        r = _run("validate", "--domain", "location", "--records", str(records), "--contract")
        assert r.returncode == 0
        assert r.stdout.strip() == "OK: location records are valid"

    def test_rule_failure_exit_1(self, tmp_path: Path):
        records = _write(tmp_path / "records.json", json.dumps([{"name": "", "type": "interior"}]))
        r = _run("validate", "--domain", "location", "--records", str(records))
        assert r.returncode == 1
        assert "records[0]: name must not be empty" in r.stdout

    def test_contract_failure_exit_1(self, tmp_path: Path):
        record = Location(name="Loft").model_dump(mode="json")
        record["requirements"]["accessibility"] = 5
        records = _write(tmp_path / "records.json", json.dumps([record]))
        assert _run("validate", "--domain", "location", "--records", str(records)).returncode == 0
        r = _run("validate", "--domain", "location", "--records", str(records), "--contract")
        assert r.returncode == 1
        assert r.stdout.startswith("ERROR: records violate the location contract: ")

    def test_invalid_json_exit_1(self, tmp_path: Path):
        records = _write(tmp_path / "records.json", "{nope")
        r = _run("validate", "--domain", "script", "--records", str(records))
        assert r.returncode == 1
        assert r.stdout.startswith("ERROR:")


class TestInspect:
    def test_detect_prints_signature(self, raw_path: Path):
        r = _run("detect", "--input", str(raw_path))
        assert r.returncode == 0
        signature = json.loads(r.stdout)
        assert signature["has_structured_payload"] is False
        assert len(signature) == 7

    def test_normalize_strips_preamble(self, raw_path: Path):
        r = _run("normalize", "--input", str(raw_path))
        assert r.returncode == 0
        assert r.stdout.startswith("Location 1: Coffee Shop")


class TestVerify:
    def test_verify_exit_0(self):
        r = _run("verify")
        assert r.returncode == 0
        assert r.stdout.strip() == "OK: preprod-engine verified"

    def test_no_command_exit_1(self):
        assert _run().returncode == 1

    def test_help_text_plain_punctuation(self):
        r = _run("--help")
        assert r.returncode == 0
        assert "extraction engine:" in r.stdout
        assert "—" not in r.stdout
