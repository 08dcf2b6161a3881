"""Helpers to export per-question score rows in JSON/CSV formats."""
from __future__ import annotations

from dataclasses import asdict
from typing import Iterable, List, Dict, Any
import csv
import io

from .types import ScoreRow

_FIELDS: tuple[str, ...] = (
    "question_id",
    "dimension",
    "weight",
    "dim_weight",
    "selected",
    "option_value",
    "contribution",
)


def _normalize_row(row: ScoreRow) -> Dict[str, Any]:
    raw = asdict(row)
    out: Dict[str, Any] = {}
    for key in _FIELDS:
        val = raw.get(key)
        if key in {"weight", "dim_weight", "option_value", "contribution"}:
            out[key] = float(val)
        else:
            out[key] = "" if val is None else str(val)
    return out


def to_json(rows: Iterable[ScoreRow]) -> Dict[str, Any]:
    """Return a JSON-safe payload for row export."""

    normalized: List[Dict[str, Any]] = [_normalize_row(r) for r in rows]
    return {"rows": normalized}


def to_csv(rows: Iterable[ScoreRow]) -> str:
    """Render score rows as CSV with a fixed header."""

    buf = io.StringIO()
    writer = csv.DictWriter(buf, fieldnames=_FIELDS)
    writer.writeheader()
    for row in rows:
        writer.writerow(_normalize_row(row))
    return buf.getvalue()


__all__ = ["to_json", "to_csv"]
