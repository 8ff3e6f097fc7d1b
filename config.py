from __future__ import annotations

from pathlib import Path


class Settings:
    PROJECT_NAME: str = "romaji-typer"
    TIMEOUT_SECONDS: float = 60
    WORDS_FILE: Path = Path(__file__).resolve().parent / "resources" / "words.json"
    CHART_ROWS: int = 15
    LOG_DIR: str = "log"
    LOG_FILE: str = "romaji_typer.log"
    LOG_LEVEL: str = "INFO"


settings = Settings()
