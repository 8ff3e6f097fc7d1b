from __future__ import annotations

import json
import logging
import random
from pathlib import Path
from typing import Iterable

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator


logger = logging.getLogger(__name__)


class LoadError(Exception):
    """The word list could not be read or does not match the expected schema."""


class EmptyStoreError(LookupError):
    """Sampling was attempted on a store without entries."""


class VocabularyEntry(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    word: str = Field(min_length=1)
    romanized: str = Field(alias="romaji", min_length=1)
    meaning: str

    @field_validator("romanized")
    @classmethod
    def _has_primary_form(cls, value: str) -> str:
        if not value.lower().split("(", 1)[0].strip():
            raise ValueError("romaji has no primary form before '('")
        return value


_ENTRIES = TypeAdapter(list[VocabularyEntry])


class WordStore:
    """Fixed vocabulary with uniform sampling (with replacement)."""

    def __init__(self, entries: Iterable[VocabularyEntry], rng: random.Random | None = None) -> None:
        self._entries: tuple[VocabularyEntry, ...] = tuple(entries)
        self._rng = rng or random.Random()

    @classmethod
    def load(cls, path: str | Path, rng: random.Random | None = None) -> WordStore:
        path = Path(path)
        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as exc:
            logger.error("Failed to read word list %s: %s", path, exc)
            raise LoadError(f"cannot read word list {path}: {exc}") from exc

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            logger.error("Word list %s is not valid JSON: %s", path, exc)
            raise LoadError(f"word list {path} is not valid JSON: {exc}") from exc

        try:
            entries = _ENTRIES.validate_python(data)
        except ValidationError as exc:
            logger.error("Word list %s failed validation: %s", path, exc)
            raise LoadError(f"word list {path} is malformed: {exc}") from exc

        logger.info("Loaded %d words from %s", len(entries), path)
        return cls(entries, rng=rng)

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> tuple[VocabularyEntry, ...]:
        return self._entries

    def sample(self) -> VocabularyEntry:
        if not self._entries:
            raise EmptyStoreError("word store is empty")
        return self._rng.choice(self._entries)
