from __future__ import annotations
import os, json, pathlib


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw.strip())
    except ValueError:
        return default


def _env_str(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip()


BANK_FILE: str = "question_bank_v3.json"
BANK_FALLBACK_FILE: str = "question_bank.json"
WEIGHTS_FILE: str = "weights.json"
THRESHOLDS_FILE: str = "thresholds.json"

DEFAULT_SEED: int = 42
DEFAULT_USER: str = "test"
DEFAULT_DIMENSION: str = "general"
ATTEMPT_ID_FORMAT: str = "run_%Y%m%d_%H%M%S"

HTTP_TIMEOUT_SEC: float = 10.0

BANK_EXPECT_WEIGHTED_DIMENSIONS: bool = True

DEBUG_TRACE: bool = False
TRACE_FIELDS: tuple[str, ...] = (
    "question_id",
    "dimension",
    "weight",
    "dim_weight",
    "selected",
    "option_value",
    "contribution",
)


def packaged_data_dir() -> str:
    return str(pathlib.Path(__file__).resolve().parent / "data")


# // env overrides for staging/ops
DATA_BASE: str = _env_str("QUIZ_DATA_BASE", "")
DEFAULT_SEED = _env_int("QUIZ_DEFAULT_SEED", DEFAULT_SEED)
DEFAULT_USER = _env_str("QUIZ_DEFAULT_USER", DEFAULT_USER)
HTTP_TIMEOUT_SEC = _env_float("QUIZ_HTTP_TIMEOUT", HTTP_TIMEOUT_SEC)
DEBUG_TRACE = _env_bool("DEBUG_TRACE", False)
BANK_EXPECT_WEIGHTED_DIMENSIONS = _env_bool("BANK_EXPECT_WEIGHTED_DIMENSIONS", BANK_EXPECT_WEIGHTED_DIMENSIONS)


def data_base() -> str:
    return DATA_BASE or packaged_data_dir()


def load_config(path: str = "config.json") -> dict:
    cfg: dict = {}
    p = pathlib.Path(path)
    if p.exists():
        try:
            cfg = json.loads(p.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            cfg = {}
        if not isinstance(cfg, dict):
            cfg = {}
    e = os.environ
    if e.get("QUIZ_DATA_BASE"): cfg["data_base"] = e["QUIZ_DATA_BASE"].strip()
    if e.get("QUIZ_DEFAULT_USER"): cfg["user"] = e["QUIZ_DEFAULT_USER"].strip()
    if e.get("QUIZ_DEFAULT_SEED"):
        try:
            cfg["seed"] = int(e["QUIZ_DEFAULT_SEED"])
        except ValueError:
            pass
    cfg.setdefault("data_base", data_base())
    cfg.setdefault("seed", DEFAULT_SEED)
    cfg.setdefault("user", DEFAULT_USER)
    return cfg
