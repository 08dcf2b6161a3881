from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Optional, Union

Status = Literal["pass", "fail", "not_configured"]
Thresholds = Union[float, int, Dict[str, Any], None]
AnswerMap = Dict[str, str]
DimensionWeights = Dict[str, float]

@dataclass(frozen=True)
class Option:
    key: str; value: float = 0.0
@dataclass(frozen=True)
class Question:
    id: str
    dimension: str = "general"
    weight: float = 1.0
    options: List[Option] = field(default_factory=list)
@dataclass(frozen=True)
class ScoreRow:
    question_id: str
    dimension: str
    weight: float
    dim_weight: float
    selected: Optional[str]
    option_value: float
    contribution: float
@dataclass(frozen=True)
class RunMeta:
    attempt_id: str; user: str; seed: int
@dataclass(frozen=True)
class ScoreReport:
    total: float
    per_dim: Dict[str, float]
    status: Status
    rows: List[ScoreRow]
    answers: AnswerMap
    threshold: Optional[float] = None
    meta: Optional[RunMeta] = None

    @property
    def pass_note(self) -> str:
        return {"pass": "PASS", "fail": "FAIL"}.get(self.status, "NOT CONFIGURED")

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "total": self.total,
            "perDim": dict(self.per_dim),
            "status": self.status,
            "passNote": self.pass_note,
            "threshold": self.threshold,
            "rows": [
                {
                    "questionId": r.question_id,
                    "dimension": r.dimension,
                    "weight": r.weight,
                    "dimWeight": r.dim_weight,
                    "selected": r.selected,
                    "optionValue": r.option_value,
                    "contribution": r.contribution,
                }
                for r in self.rows
            ],
            "answers": dict(self.answers),
        }
        if self.meta is not None:
            out["meta"] = {
                "attemptId": self.meta.attempt_id,
                "user": self.meta.user,
                "seed": self.meta.seed,
            }
        return out
