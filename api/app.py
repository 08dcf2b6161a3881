from __future__ import annotations
from fastapi import FastAPI, HTTPException, Response
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel
import logging, os, typing as t

from quiz_core import config
from quiz_core.audit_bank import audit_questions
from quiz_core.audit_export import to_csv as rows_to_csv
from quiz_core.loader import LoadError, LoadedInputs, load_inputs
from quiz_core.report_html import export_report_html, render_summary
from quiz_core.runner import RunConfig, score_inputs
from quiz_core.types import ScoreReport

log = logging.getLogger(__name__)

app = FastAPI(title="Quiz Scorer API")


@app.get("/")
def root():
    return {"status": "ok", "service": "quiz-scorer-api"}


ALLOWED_ORIGINS = [
    o.strip() for o in os.getenv("QUIZ_ALLOWED_ORIGINS", "http://localhost:3000").split(",") if o.strip()
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
    allow_credentials=False,
)

# ---- Schemas ----
class RunReq(BaseModel):
    seed: int | None = None
    attemptId: str | None = None
    user: str | None = None

class ScoreReq(RunReq):
    answers: dict[str, str] = {}

# ---- Helpers ----
def _run_config(req: RunReq) -> RunConfig:
    kwargs: dict[str, t.Any] = {}
    if req.seed is not None: kwargs["seed"] = req.seed
    if req.user: kwargs["user"] = req.user
    if req.attemptId: kwargs["attempt_id"] = req.attemptId
    return RunConfig(**kwargs)


def _inputs() -> LoadedInputs:
    # fresh per request; no caching across attempts
    try:
        return load_inputs(config.data_base())
    except LoadError as e:
        log.error("question bank unavailable: %s", e)
        raise HTTPException(502, str(e))


def _run(req: RunReq, answers: dict[str, str] | None = None) -> ScoreReport:
    return score_inputs(_inputs(), _run_config(req), answers)

# ---- Health ----
@app.get("/health")
def health():
    return {
        "data_base": config.data_base(),
        "default_seed": config.DEFAULT_SEED,
        "debug_trace": config.DEBUG_TRACE,
    }

# ---- Attempts ----
@app.post("/api/test/run")
def run_test(req: RunReq | None = None):
    return _run(req or RunReq()).to_dict()


@app.post("/api/test/score")
def score_answers(req: ScoreReq):
    return _run(req, answers=dict(req.answers)).to_dict()


@app.post("/api/test/run/html")
def run_test_html(req: RunReq | None = None):
    report = _run(req or RunReq())
    return {"html": export_report_html(report), "summary": render_summary(report)}


@app.post("/api/test/run/rows.csv")
def run_test_csv(req: RunReq | None = None):
    report = _run(req or RunReq())
    filename = f"{report.meta.attempt_id if report.meta else 'attempt'}_rows.csv"
    return Response(
        content=rows_to_csv(report.rows),
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename=\"{filename}\""},
    )


@app.get("/api/test/bank/audit")
def bank_audit():
    inputs = _inputs()
    return audit_questions(inputs.questions, inputs.dim_weights)
