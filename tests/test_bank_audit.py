from __future__ import annotations

import json

import quiz_core.audit_bank as audit_bank
from quiz_core import config
from quiz_core.types import Option, Question
from tests.conftest import RISK_Q1, build_synthetic_bank, write_docs


def test_clean_bank_has_no_warnings(monkeypatch):
    monkeypatch.setattr(config, "BANK_EXPECT_WEIGHTED_DIMENSIONS", True, raising=False)
    bank = build_synthetic_bank(dimensions=["risk", "quality"], include_empty=False)

    summary = audit_bank.audit_questions(bank, {"risk": 1.5, "quality": 1.0})
    assert summary["warnings"] == []
    assert summary["totals"]["questions"] == 6
    # best option is worth 3; weights 1.0, 1.5, 2.0
    assert summary["dimensions"]["risk"]["max_points"] == 3 * 4.5 * 1.5
    assert summary["dimensions"]["quality"]["weighted"] is True


def test_audit_flags_problems(monkeypatch):
    monkeypatch.setattr(config, "BANK_EXPECT_WEIGHTED_DIMENSIONS", True, raising=False)
    bank = [
        Question(id="a", dimension="risk", options=[Option("x", 1.0)]),
        Question(id="a", dimension="risk", options=[Option("x", 1.0)]),
        Question(id="", options=[]),
    ]
    summary = audit_bank.audit_questions(bank, {"risk": 1.0, "legacy": 2.0})
    joined = "\n".join(summary["warnings"])

    assert "'a' appears 2 times" in joined
    assert "no id" in joined
    assert "general has 1 question(s) without options" in joined
    assert "general has no entry in the weight table" in joined
    assert "'legacy' matches no question" in joined
    assert summary["totals"]["duplicate_ids"] == 1
    assert summary["totals"]["empty_options"] == 1


def test_unweighted_dimensions_allowed_when_configured(monkeypatch):
    monkeypatch.setattr(config, "BANK_EXPECT_WEIGHTED_DIMENSIONS", False, raising=False)
    bank = build_synthetic_bank(dimensions=["risk"], include_empty=False)
    assert audit_bank.audit_questions(bank, {})["warnings"] == []


def test_main_returns_warning_exit(tmp_path, capsys):
    base = write_docs(tmp_path / "docs", bank=[RISK_Q1, RISK_Q1], weights={"risk": 1})
    out = tmp_path / "audit.json"

    exit_code = audit_bank.main(["--base", str(base), "--out", str(out)])
    captured = capsys.readouterr()

    assert exit_code == 2
    assert "risk" in captured.out
    assert json.loads(out.read_text(encoding="utf-8"))["totals"]["duplicate_ids"] == 1


def test_main_clean_exit(tmp_path, monkeypatch):
    monkeypatch.setattr(config, "BANK_EXPECT_WEIGHTED_DIMENSIONS", True, raising=False)
    base = write_docs(tmp_path, bank=[RISK_Q1], weights={"dimensions": {"risk": 1.5}})
    assert audit_bank.main(["--base", str(base)]) == 0


def test_main_reports_missing_bank(tmp_path, capsys):
    base = write_docs(tmp_path / "docs", weights={"risk": 1})
    assert audit_bank.main(["--base", str(base)]) == 1
    captured = capsys.readouterr()
    assert captured.err.startswith("error: Failed to load")
    assert "question_bank.json" in captured.err
