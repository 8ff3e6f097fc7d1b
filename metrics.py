from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class DiffChar:
    char: str
    matches: bool


@dataclass(frozen=True)
class Match:
    expected: str


@dataclass(frozen=True)
class Mismatch:
    expected: str
    diff: tuple[DiffChar, ...]


Evaluation = Union[Match, Mismatch]


def canonical_answer(romanized: str) -> str:
    """Primary form of a romanization: lower-cased, bracketed alternatives dropped."""
    return romanized.lower().split("(", 1)[0].strip()


def compute_diff(user_input: str, expected: str) -> tuple[DiffChar, ...]:
    diff = []
    for i, ch in enumerate(user_input):
        if i >= len(expected):
            break
        diff.append(DiffChar(ch, ch.lower() == expected[i]))
    return tuple(diff)


def evaluate(user_input: str, romanized: str) -> Evaluation:
    expected = romanized.lower()
    if user_input.lower() == canonical_answer(romanized):
        return Match(expected)
    return Mismatch(expected, compute_diff(user_input, expected))


def per_char_rate(elapsed_s: float, chars: int) -> float:
    if chars <= 0:
        raise ValueError("chars cannot be zero")
    return elapsed_s / chars


def format_round_time(elapsed_s: float, chars: int) -> list[str]:
    rate = per_char_rate(elapsed_s, chars)
    return [
        f"{elapsed_s:.2f}s",
        f"Average time per character: {rate:.2f}s",
    ]
