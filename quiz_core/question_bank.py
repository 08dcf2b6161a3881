"""Shape normalization for the three loaded JSON documents.

All functions here are pure: they take whatever ``json.loads`` produced and
return the fixed internal shape the scorer expects, substituting defaults
for anything missing or malformed.
"""
from __future__ import annotations

import json
import importlib.resources as ir
import numbers
from typing import Any, Dict, List

from .config import BANK_FILE, DEFAULT_DIMENSION
from .types import DimensionWeights, Option, Question, Thresholds


def _is_number(x: Any) -> bool:
    return isinstance(x, numbers.Real) and not isinstance(x, bool)


def _to_float(x: Any, default: float) -> float:
    if _is_number(x):
        return float(x)
    if isinstance(x, str):
        try:
            return float(x.strip())
        except ValueError:
            return default
    return default


def _parse_option(raw: Any) -> Option | None:
    if isinstance(raw, dict):
        key = raw.get("key")
        if key is None:
            return None
        return Option(key=str(key), value=_to_float(raw.get("value"), 0.0))
    # bare label lists ("0".."4") carry no value
    if isinstance(raw, str):
        return Option(key=raw, value=0.0)
    return None


def parse_question(raw: Dict[str, Any]) -> Question:
    dim = raw.get("dimension")
    opts_raw = raw.get("options")
    options: List[Option] = []
    if isinstance(opts_raw, list):
        for o in opts_raw:
            opt = _parse_option(o)
            if opt is not None:
                options.append(opt)
    return Question(
        id=str(raw.get("id", "")),
        dimension=dim if isinstance(dim, str) and dim else DEFAULT_DIMENSION,
        weight=_to_float(raw.get("weight"), 1.0),
        options=options,
    )


def extract_questions(doc: Any) -> List[Question]:
    if isinstance(doc, dict):
        raw = doc.get("questions")
    else:
        raw = doc
    if not isinstance(raw, list):
        return []
    return [parse_question(q) for q in raw if isinstance(q, dict)]


def normalize_weights(doc: Any) -> DimensionWeights:
    if not isinstance(doc, dict):
        return {}
    nested = doc.get("dimensions")
    src = nested if isinstance(nested, dict) else doc
    out: DimensionWeights = {}
    for k, v in src.items():
        if _is_number(v):
            out[str(k)] = float(v)
    return out


def normalize_thresholds(doc: Any) -> Thresholds:
    if _is_number(doc):
        return float(doc)
    if isinstance(doc, dict):
        return doc
    return None


def load_bank() -> List[Question]:
    data = ir.files(__package__).joinpath(f"data/{BANK_FILE}").read_text(encoding="utf-8")
    return extract_questions(json.loads(data))
