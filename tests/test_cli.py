import json
import logging
import sys
from pathlib import Path

import pytest

from jtc.cli import main

EXAMPLES_DIR = Path(__file__).resolve().parents[1] / "examples"


@pytest.fixture(autouse=True)
def _restore_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def run(argv):
    with pytest.raises(SystemExit) as info:
        main(argv)
    return info.value.code


def _write(path, payload):
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


@pytest.fixture
def failing_dir(tmp_path):
    _write(tmp_path / "nums.typedef.json", {"type": "list", "children": {"type": "number"}})
    _write(tmp_path / "nums.json", [1, "two"])
    return tmp_path


def test_check_examples(capsys):
    assert run(["check", str(EXAMPLES_DIR)]) == 0
    out = capsys.readouterr().out.splitlines()
    assert f"[JTC]: 📜 Validating {EXAMPLES_DIR / 'people.json'}" in out
    assert f"[JTC]: ✅ Successfully validated {EXAMPLES_DIR / 'people.json'}" in out
    assert sum(line.startswith("[JTC]: ✅") for line in out) == 3


def test_check_reports_findings(failing_dir, capsys):
    assert run(["check", str(failing_dir)]) == 1
    out = capsys.readouterr().out.splitlines()
    assert out == [
        f"[JTC]: 📜 Validating {failing_dir / 'nums.json'}",
        "[JTC]: ❌ expected number at [1]",
        f"[JTC]: 🚫 Validation failed for {failing_dir / 'nums.json'}",
    ]


def test_check_json_output(failing_dir, capsys):
    assert run(["check", str(failing_dir), "--format", "json"]) == 1
    output = json.loads(capsys.readouterr().out)
    assert output["pairs"] == 1
    assert output["failed"] == 1
    (result,) = output["results"]
    assert result["ok"] is False
    assert result["findings"] == [{"severity": "error", "path": "[1]", "message": "expected number at [1]"}]


def test_strict_fails_on_warnings(tmp_path, capsys):
    _write(tmp_path / "a.typedef.json", {"type": "object", "properties": {}})
    _write(tmp_path / "a.json", {"extra": 1})
    assert run(["check", str(tmp_path)]) == 0
    assert "[JTC]: ⚠️ unexpected field 'extra' at " in capsys.readouterr().out.splitlines()
    assert run(["check", str(tmp_path), "--strict"]) == 1


def test_config_file_supplies_directory(failing_dir, tmp_path, capsys):
    config = tmp_path / "jtc.toml"
    config.write_text(f"directory = {json.dumps(str(failing_dir))}\noutput_format = \"json\"\n", encoding="utf-8")
    assert run(["check", "--config", str(config)]) == 1
    assert json.loads(capsys.readouterr().out)["failed"] == 1


def test_check_empty_directory(tmp_path, capsys):
    assert run(["check", str(tmp_path)]) == 0
    assert "No typedef/data pairs found" in capsys.readouterr().out


def test_usage_errors_exit_with_2(tmp_path, capsys):
    assert run(["check", str(tmp_path / "missing")]) == 2
    assert "error" in capsys.readouterr().err
    assert run(["check", str(tmp_path), "--max-alias-hops", "0"]) == 2
    assert run(["check", "--config", str(tmp_path / "nope.toml")]) == 2


def test_malformed_pair_is_reported(tmp_path, capsys):
    (tmp_path / "a.typedef.json").write_text('{"type": "list"}', encoding="utf-8")
    _write(tmp_path / "a.json", [])
    assert run(["check", str(tmp_path)]) == 1
    out = capsys.readouterr().out
    assert "💥" in out
    assert "'children' is a required property" in out


def test_validate_single_pair(failing_dir, capsys):
    code = run(["validate", str(failing_dir / "nums.typedef.json"), str(failing_dir / "nums.json")])
    assert code == 1
    assert "[JTC]: ❌ expected number at [1]" in capsys.readouterr().out

    people = EXAMPLES_DIR / "people"
    assert run(["validate", f"{people}.typedef.json", f"{people}.json", "--format", "json"]) == 0


def test_schema_prints_normalised_typedef(tmp_path, capsys):
    path = tmp_path / "t.typedef.json"
    path.write_text('{"type": "list", "children": {"type": "string"}, "note": "ignored"}', encoding="utf-8")
    assert run(["schema", str(path)]) == 0
    assert json.loads(capsys.readouterr().out) == {"type": "list", "children": {"type": "string"}}

    path.write_text('{"type": "string", "optional": 1}', encoding="utf-8")
    assert run(["schema", str(path)]) == 1
    assert "💥" in capsys.readouterr().out


def test_jtc_check_program_name(failing_dir, monkeypatch, capsys):
    monkeypatch.setattr(sys, "argv", ["jtc-check", str(failing_dir)])
    assert run(None) == 1
    assert "expected number at [1]" in capsys.readouterr().out


def test_verbose_logs_skipped_typedefs(tmp_path, capsys):
    (tmp_path / "lonely.typedef.json").write_text('{"type": "string"}', encoding="utf-8")
    assert run(["-v", "check", str(tmp_path)]) == 0
    out = capsys.readouterr().out
    assert "jtc.discovery - INFO - no data file for" in out

    assert run(["check", str(tmp_path)]) == 0
    assert "no data file" not in capsys.readouterr().out
