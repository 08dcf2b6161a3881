from __future__ import annotations
from typing import Callable, Iterable, Sequence, TypeVar

from .types import AnswerMap, Question

T = TypeVar("T")
_MASK = 0xFFFFFFFF


def _imul(a: int, b: int) -> int:
    return (a * b) & _MASK


def mulberry32(seed: int) -> Callable[[], float]:
    """Seeded 32-bit generator; returns floats in [0, 1)."""
    state = seed & _MASK

    def nxt() -> float:
        nonlocal state
        state = (state + 0x6D2B79F5) & _MASK
        t = state
        r = _imul(t ^ (t >> 15), 1 | t)
        r ^= (r + _imul(r ^ (r >> 7), 61 | r)) & _MASK
        return ((r ^ (r >> 14)) & _MASK) / 4294967296

    return nxt


def pick_random(seq: Sequence[T], rnd: Callable[[], float]) -> T:
    return seq[int(rnd() * len(seq))]


def simulate(questions: Iterable[Question], seed: int) -> AnswerMap:
    rnd = mulberry32(seed)
    answers: AnswerMap = {}
    for q in questions:
        if not q.options:
            continue
        answers[q.id] = pick_random(q.options, rnd).key
    return answers
