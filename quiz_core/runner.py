from __future__ import annotations
from dataclasses import dataclass, field, replace
from datetime import datetime
from pathlib import Path
from typing import Mapping, Optional
import logging

from . import config
from .loader import LoadedInputs, Transport, load_inputs
from .scoring import score
from .simulate import simulate
from .types import RunMeta, ScoreReport

log = logging.getLogger(__name__)


def _new_attempt_id() -> str:
    return datetime.now().strftime(config.ATTEMPT_ID_FORMAT)


@dataclass(frozen=True)
class RunConfig:
    seed: int = field(default_factory=lambda: config.DEFAULT_SEED)
    user: str = field(default_factory=lambda: config.DEFAULT_USER)
    attempt_id: str = field(default_factory=_new_attempt_id)


def score_inputs(inputs: LoadedInputs, cfg: RunConfig, answers: Optional[Mapping[str, str]] = None) -> ScoreReport:
    if answers is None:
        answers = simulate(inputs.questions, cfg.seed)
    report = score(inputs.questions, inputs.dim_weights, inputs.thresholds, answers)
    report = replace(report, meta=RunMeta(attempt_id=cfg.attempt_id, user=cfg.user, seed=cfg.seed))
    log.info(
        "attempt %s user=%s seed=%s total=%s status=%s",
        cfg.attempt_id, cfg.user, cfg.seed, report.total, report.status,
    )
    return report


def run_attempt(
    cfg: RunConfig | None = None,
    *,
    base: str | Path | None = None,
    answers: Optional[Mapping[str, str]] = None,
    transport: Transport | None = None,
) -> ScoreReport:
    """
    One scoring run: load, simulate answers when none are given, score.
    A question bank LoadError propagates; nothing partial is returned.
    """
    cfg = cfg or RunConfig()
    inputs = load_inputs(base, transport=transport)
    return score_inputs(inputs, cfg, answers)
