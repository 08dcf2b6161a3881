from __future__ import annotations

import argparse
import json
import sys
from collections import Counter
from pathlib import Path
from typing import Iterable, Mapping

from . import config
from .loader import LoadError, load_inputs
from .types import Question


def _blank_dimension() -> dict[str, object]:
    return {"questions": 0, "empty_options": 0, "max_points": 0.0, "weighted": False}


def audit_questions(questions: Iterable[Question], dim_weights: Mapping[str, float] | None = None) -> dict[str, object]:
    weights = dict(dim_weights or {})
    items = list(questions)
    dimensions: dict[str, dict[str, object]] = {}
    totals = {"questions": 0, "empty_options": 0, "duplicate_ids": 0, "max_points": 0.0}

    id_counts = Counter(q.id for q in items)
    for q in items:
        data = dimensions.setdefault(q.dimension, _blank_dimension())
        data["questions"] += 1  # type: ignore[operator]
        totals["questions"] += 1
        if not q.options:
            data["empty_options"] += 1  # type: ignore[operator]
            totals["empty_options"] += 1
            continue
        best = max(o.value for o in q.options)
        points = best * q.weight * float(weights.get(q.dimension, 1.0))
        data["max_points"] += points  # type: ignore[operator]
        totals["max_points"] += points

    warnings: list[str] = []
    for qid, n in sorted(id_counts.items()):
        if not qid:
            warnings.append(f"{n} question(s) have no id")
        elif n > 1:
            warnings.append(f"question id {qid!r} appears {n} times")
            totals["duplicate_ids"] += 1

    for dim in sorted(dimensions):
        data = dimensions[dim]
        data["weighted"] = dim in weights
        if data["empty_options"]:
            warnings.append(f"{dim} has {data['empty_options']} question(s) without options")
        if config.BANK_EXPECT_WEIGHTED_DIMENSIONS and dim not in weights:
            warnings.append(f"{dim} has no entry in the weight table (defaults to 1)")

    for dim in sorted(set(weights) - set(dimensions)):
        warnings.append(f"weight table entry {dim!r} matches no question")

    return {"dimensions": dimensions, "warnings": warnings, "totals": totals}


def print_report(summary: dict[str, object]) -> None:
    dimensions: dict[str, dict[str, object]] = summary["dimensions"]  # type: ignore[assignment]
    print("=== Bank Coverage ===")
    for dim in sorted(dimensions):
        data = dimensions[dim]
        mark = "" if data["weighted"] else " (unweighted)"
        print(f"  {dim}{mark}: questions={data['questions']:3d}  max_points={float(data['max_points']):g}")  # type: ignore[arg-type]

    warnings: list[str] = summary["warnings"]  # type: ignore[assignment]
    if warnings:
        print("\nWarnings:")
        for msg in warnings:
            print(f" - {msg}")
    else:
        print("\nNo warnings.")

    print("\nTotals:", summary["totals"])


def write_summary(summary: dict[str, object], path: Path) -> str:
    text = json.dumps(summary, indent=2, sort_keys=True)
    path.write_text(text + "\n", encoding="utf-8")
    return text


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Lint a question bank against its weight table.")
    ap.add_argument("--base", default=None, help="data directory or URL (default: QUIZ_DATA_BASE or packaged data)")
    ap.add_argument("--out", default=None, help="write the JSON summary here")
    args = ap.parse_args(argv)

    try:
        inputs = load_inputs(args.base)
    except LoadError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    summary = audit_questions(inputs.questions, inputs.dim_weights)
    print_report(summary)
    if args.out:
        write_summary(summary, Path(args.out))
    return 2 if summary["warnings"] else 0


if __name__ == "__main__":
    raise SystemExit(main())
