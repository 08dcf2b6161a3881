from __future__ import annotations

import json

from app_cli.run_test import main
from tests.conftest import write_docs


def test_cli_prints_summary_and_writes_files(data_dir, tmp_path, capsys):
    html_out = tmp_path / "r.html"
    csv_out = tmp_path / "r.csv"
    answers = tmp_path / "answers.json"
    answers.write_text(json.dumps({"q1": "b"}), encoding="utf-8")

    code = main([
        "--base", str(data_dir),
        "--user", "carol",
        "--attempt", "cli-1",
        "--answers", str(answers),
        "--html", str(html_out),
        "--csv", str(csv_out),
    ])
    out = capsys.readouterr().out

    assert code == 0
    assert "User: carol" in out
    assert "Total Score: 9 -> PASS" in out
    assert html_out.exists()
    assert csv_out.read_text(encoding="utf-8").startswith("question_id,")


def test_cli_json_output(data_dir, capsys):
    assert main(["--base", str(data_dir), "--seed", "7", "--attempt", "j", "--json"]) == 0
    body = json.loads(capsys.readouterr().out)
    assert body["meta"] == {"attemptId": "j", "user": body["meta"]["user"], "seed": 7}
    assert len(body["rows"]) == 1


def test_cli_missing_bank_exits_nonzero(tmp_path, capsys):
    base = write_docs(tmp_path / "docs", weights={})
    assert main(["--base", str(base)]) == 1
    assert "error:" in capsys.readouterr().err


def test_cli_takes_defaults_from_config_file(data_dir, tmp_path, capsys, monkeypatch):
    monkeypatch.delenv("QUIZ_DATA_BASE", raising=False)
    monkeypatch.delenv("QUIZ_DEFAULT_USER", raising=False)
    monkeypatch.delenv("QUIZ_DEFAULT_SEED", raising=False)
    cfg = tmp_path / "config.json"
    cfg.write_text(json.dumps({"data_base": str(data_dir), "seed": 7, "user": "dana"}), encoding="utf-8")

    assert main(["--config", str(cfg), "--attempt", "c", "--json"]) == 0
    body = json.loads(capsys.readouterr().out)
    assert body["meta"] == {"attemptId": "c", "user": "dana", "seed": 7}
    assert [r["questionId"] for r in body["rows"]] == ["q1"]


def test_cli_flags_override_config_file(data_dir, tmp_path, capsys, monkeypatch):
    monkeypatch.delenv("QUIZ_DEFAULT_USER", raising=False)
    monkeypatch.delenv("QUIZ_DEFAULT_SEED", raising=False)
    cfg = tmp_path / "config.json"
    cfg.write_text(json.dumps({"data_base": str(tmp_path / "nowhere"), "seed": 7, "user": "dana"}), encoding="utf-8")

    code = main(["--config", str(cfg), "--base", str(data_dir), "--seed", "3", "--user", "erin", "--attempt", "o", "--json"])
    assert code == 0
    assert json.loads(capsys.readouterr().out)["meta"] == {"attemptId": "o", "user": "erin", "seed": 3}


def test_cli_rejects_non_object_answers(data_dir, tmp_path, capsys):
    answers = tmp_path / "answers.json"
    answers.write_text(json.dumps(["q1", "b"]), encoding="utf-8")
    assert main(["--base", str(data_dir), "--answers", str(answers)]) == 2
    assert "must hold a JSON object" in capsys.readouterr().err


def test_cli_reports_unreadable_answers(data_dir, tmp_path, capsys):
    assert main(["--base", str(data_dir), "--answers", str(tmp_path / "missing.json")]) == 2
    assert "error: cannot read answers file" in capsys.readouterr().err

    bad = tmp_path / "bad.json"
    bad.write_text("{nope", encoding="utf-8")
    assert main(["--base", str(data_dir), "--answers", str(bad)]) == 2
    assert "error:" in capsys.readouterr().err
