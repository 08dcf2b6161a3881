from __future__ import annotations
import json
from html import escape
from typing import Any, Dict, List, Optional

from .types import ScoreReport


def _esc(x: Any) -> str:
    return escape("" if x is None else str(x))


def _fmt(x: Any) -> str:
    try:
        return f"{float(x):g}"
    except (TypeError, ValueError):
        return _esc(x)


def _meta(report: ScoreReport) -> Dict[str, Any]:
    m = report.meta
    if m is None:
        return {"user": "", "attempt_id": "", "seed": ""}
    return {"user": m.user, "attempt_id": m.attempt_id, "seed": m.seed}


def render_summary(report: ScoreReport) -> str:
    """Plain-text block: who, which attempt, total and verdict, per-dimension JSON."""
    m = _meta(report)
    lines = [
        f"User: {m['user']}",
        f"Attempt: {m['attempt_id']}",
        f"Seed: {m['seed']}",
        f"Total Score: {_fmt(report.total)} -> {report.pass_note}",
        json.dumps(report.per_dim, indent=2),
    ]
    return "\n".join(lines)


def _row(r: Dict[str, Any]) -> str:
    return (
        f"<tr><td>{_esc(r['questionId'])}</td><td>{_esc(r['dimension'])}</td>"
        f"<td>{_fmt(r['weight'])}</td><td>{_fmt(r['dimWeight'])}</td>"
        f"<td>{_esc(r['selected']) if r['selected'] is not None else '-'}</td>"
        f"<td>{_fmt(r['optionValue'])}</td><td>{_fmt(r['contribution'])}</td></tr>"
    )


def _dim_row(dim: str, sub: float) -> str:
    return f"<tr><td>{_esc(dim)}</td><td>{_fmt(sub)}</td></tr>"


def export_report_html(report: ScoreReport, path: Optional[str] = None) -> str:
    data = report.to_dict()
    m = _meta(report)
    rows = "\n".join(_row(r) for r in data["rows"])
    dims = "\n".join(_dim_row(d, v) for d, v in report.per_dim.items())

    threshold_txt = ""
    if report.threshold is not None:
        threshold_txt = f" (threshold {_fmt(report.threshold)})"

    banner: List[str] = []
    if report.status == "not_configured":
        banner.append("<div class=\"banner warning\">No pass threshold configured for this bank.</div>")

    html = f"""<!doctype html>
<html lang="en">
<head>
<meta charset="utf-8"/>
<title>Test Report</title>
<style>
 body{{font-family:system-ui,-apple-system,Segoe UI,Roboto,Ubuntu,'Helvetica Neue',Arial}}
 .wrap{{max-width:960px;margin:40px auto;padding:0 16px}}
 h1{{margin:0 0 16px}}
 .overall{{font-size:1.1rem;margin:8px 0 16px}}
 .banner{{padding:12px 16px;border-radius:6px;margin:16px 0}}
 .banner.warning{{background:#ffe7d9;border:1px solid #f5a623;color:#7a2d00}}
 table{{border-collapse:collapse;width:100%}}
 th,td{{text-align:left}}
</style>
</head>
<body>
<div class="wrap" id="test-output">
  <h1>Test Report</h1>
  <div><b>User:</b> {_esc(m['user'])}</div>
  <div><b>Attempt:</b> {_esc(m['attempt_id'])}</div>
  <div><b>Seed:</b> {_esc(m['seed'])}</div>
  <div class="overall"><b>Total Score:</b> {_fmt(report.total)} &rarr; {report.pass_note}{threshold_txt}</div>
  {''.join(banner)}

  <h3>Dimensions</h3>
  <table border='1' cellpadding='6' cellspacing='0'>
    <thead><tr><th>Dimension</th><th>Subtotal</th></tr></thead>
    <tbody>{dims}</tbody>
  </table>

  <h3>Questions</h3>
  <table border='1' cellpadding='6' cellspacing='0'>
    <thead><tr><th>Question</th><th>Dimension</th><th>Weight</th><th>Dim weight</th><th>Selected</th><th>Value</th><th>Contribution</th></tr></thead>
    <tbody>{rows}</tbody>
  </table>
</div>
</body>
</html>"""
    if path:
        with open(path, "w", encoding="utf-8") as f:
            f.write(html)
    return html
