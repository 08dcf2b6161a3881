"""Retrieval of the question bank, weight table and thresholds.

A base is either a local directory or an ``http(s)://`` URL. The question
bank is required (one fallback name is tried); weights and thresholds are
best effort and degrade to ``{}`` / ``None``.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Generic, List, Optional, Protocol, TypeVar

import httpx

from . import config
from .question_bank import extract_questions, normalize_thresholds, normalize_weights
from .types import DimensionWeights, Question, Thresholds

log = logging.getLogger(__name__)

T = TypeVar("T")


class LoadError(RuntimeError):
    def __init__(self, path: str, reason: str):
        super().__init__(f"Failed to load {path}: {reason}")
        self.path = path
        self.reason = reason


class Transport(Protocol):
    def fetch_json(self, name: str) -> Any: ...


class FileTransport:
    def __init__(self, base: str | Path):
        self.base = Path(base)

    def fetch_json(self, name: str) -> Any:
        p = self.base / name
        try:
            raw = p.read_bytes()
        except OSError as e:
            raise LoadError(str(p), e.strerror or type(e).__name__) from e
        try:
            return json.loads(raw.decode("utf-8"))
        except ValueError as e:  # includes UnicodeDecodeError
            raise LoadError(str(p), f"invalid JSON ({e})") from e


class HttpTransport:
    def __init__(self, base_url: str, client: httpx.Client | None = None, timeout: float | None = None):
        self.base_url = base_url.rstrip("/")
        self._client = client
        self.timeout = config.HTTP_TIMEOUT_SEC if timeout is None else timeout

    def _get(self, url: str) -> httpx.Response:
        # no-store: always see the current document
        headers = {"Cache-Control": "no-store"}
        if self._client is not None:
            return self._client.get(url, headers=headers, timeout=self.timeout)
        return httpx.get(url, headers=headers, timeout=self.timeout)

    def fetch_json(self, name: str) -> Any:
        url = f"{self.base_url}/{name}"
        try:
            resp = self._get(url)
        except httpx.HTTPError as e:
            raise LoadError(url, str(e) or type(e).__name__) from e
        if not resp.is_success:
            raise LoadError(url, str(resp.status_code))
        try:
            return resp.json()
        except ValueError as e:
            raise LoadError(url, f"invalid JSON ({e})") from e


def transport_for(base: str | Path) -> Transport:
    s = str(base)
    if s.startswith(("http://", "https://")):
        return HttpTransport(s)
    return FileTransport(s)


@dataclass(frozen=True)
class Loaded(Generic[T]):
    """Outcome of one best-effort load: a value or the error that replaced it."""
    value: Optional[T] = None
    error: Optional[LoadError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def or_default(self, default: T) -> T:
        return self.value if self.ok else default  # type: ignore[return-value]


def try_load(transport: Transport, name: str) -> Loaded[Any]:
    try:
        return Loaded(value=transport.fetch_json(name))
    except LoadError as e:
        return Loaded(error=e)


@dataclass(frozen=True)
class LoadedInputs:
    questions: List[Question]
    dim_weights: DimensionWeights
    thresholds: Thresholds
    source: str = ""


def load_question_bank(transport: Transport) -> List[Question]:
    try:
        doc = transport.fetch_json(config.BANK_FILE)
    except LoadError as first:
        log.warning("%s; trying %s", first, config.BANK_FALLBACK_FILE)
        doc = transport.fetch_json(config.BANK_FALLBACK_FILE)
    return extract_questions(doc)


def load_inputs(base: str | Path | None = None, transport: Transport | None = None) -> LoadedInputs:
    src = str(base) if base is not None else config.data_base()
    tr = transport or transport_for(src)

    questions = load_question_bank(tr)
    weights = try_load(tr, config.WEIGHTS_FILE)
    thresholds = try_load(tr, config.THRESHOLDS_FILE)

    if not weights.ok:
        log.warning("weights unavailable, using 1.0 for every dimension: %s", weights.error)
    if not thresholds.ok:
        log.warning("thresholds unavailable, status will be not configured: %s", thresholds.error)

    inputs = LoadedInputs(
        questions=questions,
        dim_weights=normalize_weights(weights.or_default({})),
        thresholds=normalize_thresholds(thresholds.or_default(None)),
        source=src,
    )
    log.info(
        "loaded %d questions, %d dimension weights from %s",
        len(inputs.questions), len(inputs.dim_weights), src,
    )
    return inputs
