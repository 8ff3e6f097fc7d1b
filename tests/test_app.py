import logging
import random
from logging.handlers import RotatingFileHandler

import pytest

import app
from app import QuizSession
from config import Settings
from timers import Countdown, Stopwatch
from words import EmptyStoreError, VocabularyEntry, WordStore


NEKO = VocabularyEntry(word="猫", romaji="neko(nyan)", meaning="cat")


class FakeClock:
    def __init__(self, step_ms):
        self.now = 0
        self.step_ms = step_ms

    def __call__(self):
        self.now += self.step_ms
        return self.now


def make_session(console, answers, countdown, expire_on_call=None, entry=NEKO):
    replies = iter(answers)
    calls = []

    def reader():
        calls.append(1)
        if len(calls) == expire_on_call:
            countdown.expire()
        reply = next(replies)
        if isinstance(reply, BaseException):
            raise reply
        return reply

    session = QuizSession(
        WordStore([entry], rng=random.Random(0)),
        console=console,
        reader=reader,
        countdown=countdown,
        stopwatch=Stopwatch(clock_ms=FakeClock(2000)),
    )
    return session, calls


def test_round_in_progress_completes_after_expiry(console, output):
    countdown = Countdown(60)
    session, calls = make_session(console, ["  Neko  "], countdown, expire_on_call=1)
    records = session.run()

    assert len(calls) == 1
    assert len(records) == 1
    assert records[0].user_answer == "Neko"
    assert records[0].source_word == "猫"
    assert records[0].elapsed_seconds == 2.0

    text = output()
    assert "猫 (cat)" in text
    assert "neko(nyan) ✅" in text
    assert "Average time per character: 0.50s" in text
    assert text.index("✅") < text.index("Time is up!")
    assert text.rstrip().endswith("Average time per character overall: 0.50")


def test_mismatch_is_not_recorded(console, output):
    countdown = Countdown(60)
    session, calls = make_session(console, ["nego", "neko"], countdown, expire_on_call=2)
    records = session.run()

    assert len(calls) == 2
    assert [r.user_answer for r in records] == ["neko"]
    assert "nego(neko(nyan)) ❌" in output()


def test_expired_before_first_round_reports_nothing(console, output):
    countdown = Countdown(60)
    countdown.expire()
    session, calls = make_session(console, [], countdown)

    assert session.run() == []
    assert calls == []
    assert "No values found!" in output()


def test_empty_store_is_rejected(console):
    session = QuizSession(WordStore([]), console=console, reader=lambda: "neko")
    with pytest.raises(EmptyStoreError):
        session.run()


def test_countdown_uses_configured_duration(console):
    class Short(Settings):
        TIMEOUT_SECONDS = 5

    session = QuizSession(WordStore([NEKO]), console=console, reader=lambda: "", config=Short())
    assert session.countdown.duration_s == 5


def test_main_aborts_on_load_failure(tmp_path, monkeypatch):
    class Broken(Settings):
        WORDS_FILE = tmp_path / "missing.json"
        LOG_DIR = str(tmp_path / "log")

    monkeypatch.setattr(app, "settings", Broken())
    monkeypatch.setattr(app, "setup_logging", lambda config: None)
    assert app.main() == 1


def test_closed_input_ends_session_with_report(console, output):
    countdown = Countdown(60)
    session, calls = make_session(console, ["neko", EOFError()], countdown)
    records = session.run()

    assert len(calls) == 2
    assert [r.user_answer for r in records] == ["neko"]
    assert not countdown.expired()
    text = output()
    assert "Time is up!" not in text
    assert text.rstrip().endswith("Average time per character overall: 0.50")


def test_empty_match_prints_error_and_keeps_playing(console, output):
    # bypasses validation to reach an entry whose primary form is empty
    blank = VocabularyEntry.model_construct(word="x", romanized="(alt)", meaning="m")
    countdown = Countdown(60)
    session, calls = make_session(console, ["", ""], countdown, expire_on_call=2, entry=blank)
    records = session.run()

    assert len(calls) == 2
    assert records == []
    text = output()
    assert text.count("(alt) ✅") == 2
    assert text.count("Error: chars cannot be zero") == 2
    assert "Average time per character:" not in text
    assert "No values found!" in text


def test_setup_logging_attaches_one_file_handler(tmp_path):
    class Local(Settings):
        LOG_DIR = str(tmp_path / "log")

    root = logging.getLogger()
    before = list(root.handlers)
    level = root.level
    try:
        app.setup_logging(Local())
        app.setup_logging(Local())
        added = [h for h in root.handlers if h not in before]
        assert len(added) == 1
        assert isinstance(added[0], RotatingFileHandler)
        assert (tmp_path / "log" / Local.LOG_FILE).exists()
    finally:
        for handler in root.handlers[:]:
            if handler not in before:
                root.removeHandler(handler)
                handler.close()
        root.setLevel(level)
