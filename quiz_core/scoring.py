from __future__ import annotations
from typing import Any, Dict, Iterable, List, Mapping, Optional
import logging
import numbers

from . import config
from .types import AnswerMap, Question, ScoreReport, ScoreRow, Status, Thresholds

log = logging.getLogger(__name__)


def _num(x: Any) -> Optional[float]:
    if isinstance(x, numbers.Real) and not isinstance(x, bool):
        return float(x)
    return None


def _emit_trace(row: ScoreRow) -> None:
    if not config.DEBUG_TRACE:
        return
    parts = [f"{key}={getattr(row, key)}" for key in config.TRACE_FIELDS if hasattr(row, key)]
    log.info("trace %s", " ".join(parts))


def resolve_threshold(thresholds: Thresholds) -> Optional[float]:
    """
    Returns the numeric pass threshold, or None when not configured.
      - bare number
      - {"total": number}
      - {"total": {"pass": number}}
    """
    if thresholds is None:
        return None
    bare = _num(thresholds)
    if bare is not None:
        return bare
    if isinstance(thresholds, Mapping):
        total = thresholds.get("total")
        flat = _num(total)
        if flat is not None:
            return flat
        if isinstance(total, Mapping):
            return _num(total.get("pass"))
    return None


def resolve_status(total: float, thresholds: Thresholds) -> Status:
    limit = resolve_threshold(thresholds)
    if limit is None:
        return "not_configured"
    return "pass" if total >= limit else "fail"


def _dim_weight(dim_weights: Optional[Mapping[str, Any]], dimension: str) -> float:
    if not dim_weights:
        return 1.0
    w = _num(dim_weights.get(dimension))
    return 1.0 if w is None else w


def _option_value(q: Question, chosen: Optional[str]) -> float:
    # strict key match; "1" never matches 1
    for opt in q.options:
        if opt.key == chosen:
            return float(opt.value)
    return 0.0


def score(
    questions: Iterable[Question],
    dim_weights: Optional[Mapping[str, Any]],
    thresholds: Thresholds,
    answers: Optional[Mapping[str, str]],
) -> ScoreReport:
    answers_map: AnswerMap = dict(answers or {})
    total = 0.0
    per_dim: Dict[str, float] = {}
    rows: List[ScoreRow] = []

    for q in questions:
        dw = _dim_weight(dim_weights, q.dimension)
        chosen = answers_map.get(q.id)
        val = _option_value(q, chosen)
        contrib = val * q.weight * dw

        total += contrib
        per_dim[q.dimension] = per_dim.get(q.dimension, 0.0) + contrib

        row = ScoreRow(
            question_id=q.id,
            dimension=q.dimension,
            weight=q.weight,
            dim_weight=dw,
            selected=chosen,
            option_value=val,
            contribution=contrib,
        )
        _emit_trace(row)
        rows.append(row)

    return ScoreReport(
        total=total,
        per_dim=per_dim,
        status=resolve_status(total, thresholds),
        rows=rows,
        answers=answers_map,
        threshold=resolve_threshold(thresholds),
    )
