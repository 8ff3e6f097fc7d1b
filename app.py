from __future__ import annotations

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Callable

from rich.console import Console
from rich.text import Text

from config import Settings, settings
from metrics import Match, Mismatch, evaluate, format_round_time
from report import StatsReporter
from stats import RoundRecord, StatsRecorder
from timers import Countdown, Stopwatch
from words import EmptyStoreError, LoadError, VocabularyEntry, WordStore


logger = logging.getLogger(__name__)

RIGHT = "✅"
WRONG = "❌"


# --- Logging Setup ---
def setup_logging(config: Settings = settings) -> None:
    root = logging.getLogger()
    root.setLevel(config.LOG_LEVEL)

    if not os.path.exists(config.LOG_DIR):
        os.makedirs(config.LOG_DIR, exist_ok=True)
    log_path = os.path.join(config.LOG_DIR, config.LOG_FILE)
    if any(getattr(h, "baseFilename", None) == os.path.abspath(log_path) for h in root.handlers):
        return
    file_handler = RotatingFileHandler(log_path, maxBytes=5_000_000, backupCount=3, encoding="utf-8")
    file_handler.setFormatter(
        logging.Formatter("%(asctime)s - %(levelname)s - %(message)s")
    )
    root.addHandler(file_handler)


class QuizSession:
    """Timed quiz loop: prompt, time the answer, judge it, report when time is up."""

    def __init__(
        self,
        store: WordStore,
        console: Console | None = None,
        reader: Callable[[], str] | None = None,
        config: Settings = settings,
        countdown: Countdown | None = None,
        stopwatch: Stopwatch | None = None,
    ) -> None:
        self.store = store
        self.console = console or Console()
        self.reader = reader or self.console.input
        self.config = config
        self.countdown = countdown or Countdown(config.TIMEOUT_SECONDS)
        self.stopwatch = stopwatch or Stopwatch()
        self.recorder = StatsRecorder()
        self.reporter = StatsReporter(self.console, rows=config.CHART_ROWS)

    def run(self) -> list[RoundRecord]:
        if not len(self.store):
            raise EmptyStoreError("word store is empty")

        self.countdown.start()
        rounds = 0
        while not self.countdown.expired():
            try:
                self.play_round(self.store.sample())
            except EOFError:
                logger.info("Input closed after %d rounds", rounds)
                self.console.print()
                break
            rounds += 1
        else:
            self.console.print("\nTime is up!", style="red")

        self.reporter.report(self.recorder.records)
        self.countdown.cancel()
        logger.info("Session finished: %d rounds, %d correct", rounds, len(self.recorder))
        return self.recorder.records

    def play_round(self, entry: VocabularyEntry) -> None:
        self.console.print(f"{entry.word} ({entry.meaning})", markup=False)

        self.stopwatch.start()
        answer = self.reader().strip()
        elapsed_s = self.stopwatch.stop()

        result = evaluate(answer, entry.romanized)
        if isinstance(result, Match):
            self._show_match(result, answer, elapsed_s, entry)
        else:
            self._show_mismatch(result)
            logger.debug("Missed %r: answered %r", entry.word, answer)
        self.console.print()

    def _show_match(self, result: Match, answer: str, elapsed_s: float, entry: VocabularyEntry) -> None:
        self.console.print(f"{result.expected} {RIGHT}", markup=False)
        try:
            lines = format_round_time(elapsed_s, len(answer))
        except ValueError as exc:
            self.console.print(f"Error: {exc}", style="red")
            logger.warning("Empty answer matched %r; round not recorded", entry.word)
            return

        for line in lines:
            self.console.print(line)
        self.recorder.record(answer, elapsed_s, entry.word)
        logger.debug("Correct %r in %.3fs", entry.word, elapsed_s)

    def _show_mismatch(self, result: Mismatch) -> None:
        line = Text()
        for item in result.diff:
            line.append(item.char, style=None if item.matches else "underline")
        line.append(f"({result.expected}) {WRONG}")
        self.console.print(line)


def main() -> int:
    setup_logging(settings)
    console = Console()
    try:
        store = WordStore.load(settings.WORDS_FILE)
        if not len(store):
            raise LoadError(f"word list {settings.WORDS_FILE} has no entries")
    except LoadError as exc:
        logger.error("Startup aborted: %s", exc)
        console.print(f"Error: {exc}", style="red", markup=False)
        return 1

    QuizSession(store, console=console, config=settings).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
