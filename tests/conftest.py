from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from quiz_core.types import Option, Question


def build_synthetic_bank(
    *,
    dimensions: list[str] | None = None,
    per_dimension: int = 3,
    include_empty: bool = True,
) -> list[Question]:
    """Create a deterministic synthetic bank for tests and smoke runs."""

    items: list[Question] = []
    for dim in dimensions or ["risk", "communication", "quality"]:
        for idx in range(per_dimension):
            items.append(
                Question(
                    id=f"{dim}_{idx}",
                    dimension=dim,
                    weight=1.0 + idx * 0.5,
                    options=[Option(key=k, value=float(v)) for v, k in enumerate("abcd")],
                )
            )
    if include_empty:
        items.append(Question(id="free_text", options=[]))
    return items


def write_docs(base: Path, **docs: Any) -> Path:
    """Write named JSON documents (``bank=``, ``weights=``, ...) into ``base``."""

    names = {
        "bank": "question_bank_v3.json",
        "fallback": "question_bank.json",
        "weights": "weights.json",
        "thresholds": "thresholds.json",
    }
    base.mkdir(parents=True, exist_ok=True)
    for key, payload in docs.items():
        (base / names[key]).write_text(json.dumps(payload), encoding="utf-8")
    return base


RISK_Q1 = {
    "id": "q1",
    "dimension": "risk",
    "weight": 2,
    "options": [{"key": "a", "value": 1}, {"key": "b", "value": 3}],
}


@pytest.fixture
def synthetic_bank() -> list[Question]:
    return build_synthetic_bank()


@pytest.fixture
def data_dir(tmp_path) -> Path:
    return write_docs(
        tmp_path / "docs",
        bank={"questions": [RISK_Q1]},
        weights={"dimensions": {"risk": 1.5}},
        thresholds={"total": 5},
    )
