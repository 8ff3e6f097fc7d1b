import io
import json

import pytest
from rich.console import Console

from stats import RoundRecord


@pytest.fixture
def console():
    return Console(file=io.StringIO(), width=120, color_system=None)


@pytest.fixture
def output(console):
    return lambda: console.file.getvalue()


@pytest.fixture
def words_file(tmp_path):
    def _write(payload):
        path = tmp_path / "words.json"
        path.write_text(payload if isinstance(payload, str) else json.dumps(payload), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def sample_records():
    return [
        RoundRecord(user_answer="a", elapsed_seconds=1.0, source_word="あ"),
        RoundRecord(user_answer="bb", elapsed_seconds=4.0, source_word="ば"),
    ]
