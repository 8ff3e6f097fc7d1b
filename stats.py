from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Sequence

from metrics import per_char_rate


@dataclass(frozen=True)
class RoundRecord:
    user_answer: str
    elapsed_seconds: float
    source_word: str

    @property
    def rate(self) -> float:
        """Seconds per typed character."""
        return per_char_rate(self.elapsed_seconds, len(self.user_answer))


class StatsRecorder:
    def __init__(self) -> None:
        self._records: list[RoundRecord] = []

    def record(self, answer: str, elapsed_seconds: float, word: str) -> RoundRecord:
        if not answer:
            raise ValueError("cannot record an empty answer")
        if elapsed_seconds < 0:
            raise ValueError(f"elapsed time must be non-negative, got {elapsed_seconds}")
        record = RoundRecord(user_answer=answer, elapsed_seconds=elapsed_seconds, source_word=word)
        self._records.append(record)
        return record

    @property
    def records(self) -> list[RoundRecord]:
        return list(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[RoundRecord]:
        return iter(self._records)


def longest_label_width(records: Sequence[RoundRecord]) -> int:
    return max((len(r.source_word) + len(r.user_answer) for r in records), default=0)


def rank_records(records: Sequence[RoundRecord]) -> list[RoundRecord]:
    """Slowest per character first; ties keep round order."""
    return sorted(records, key=lambda r: r.rate, reverse=True)


def chart_rows(records: Sequence[RoundRecord], rows: int = 15) -> list[list[bool]]:
    """Bar chart cells from the top row down, one column per record in round order."""
    return [[r.rate * rows >= row for r in records] for row in range(rows - 1, -1, -1)]


def overall_rate(records: Sequence[RoundRecord]) -> float:
    total_chars = sum(len(r.user_answer) for r in records)
    return per_char_rate(sum(r.elapsed_seconds for r in records), total_chars)
