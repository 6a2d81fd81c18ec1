import datetime
from pathlib import Path
from typing import Dict, List, Optional

import pytest

from flashnotes.config import ParserSettings
from flashnotes.schedule import CardScheduleInfo


# each test runs with cwd set to its temp dir
@pytest.fixture(autouse=True)
def go_to_tmpdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Run every test from inside its own temporary directory."""
    monkeypatch.chdir(tmp_path)
    yield


class FakeNote:
    """
    In-memory NoteSource that records how the pipeline uses it.
    """

    def __init__(
        self,
        text: str = "",
        tags: Optional[List[str]] = None,
        contexts: Optional[Dict[int, List[str]]] = None,
    ):
        self.text = text
        self.tags = list(tags or [])
        self.contexts = contexts or {}
        self.read_count = 0
        self.tag_requests = 0
        self.context_requests: List[int] = []

    def read(self) -> str:
        self.read_count += 1
        return self.text

    def get_all_tags(self) -> List[str]:
        self.tag_requests += 1
        return list(self.tags)

    def get_question_context(self, line_no: int) -> List[str]:
        self.context_requests.append(line_no)
        return list(self.contexts.get(line_no, []))


def _make_schedule(
    day: int, interval: int = 4, ease: int = 270
) -> CardScheduleInfo:
    """A real (non-dummy) schedule record due on the given day of Sept 2023."""
    return CardScheduleInfo(
        due_date=datetime.date(2023, 9, day), interval=interval, ease=ease
    )


@pytest.fixture
def settings() -> ParserSettings:
    return ParserSettings()


@pytest.fixture
def dummy_schedule() -> CardScheduleInfo:
    return CardScheduleInfo.dummy_for_new_card()


@pytest.fixture
def write_note(tmp_path: Path):
    """Return a helper that writes a note under tmp_path and returns its path."""

    def _write(relative: str, content: str) -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def make_schedule():
    return _make_schedule


@pytest.fixture
def fake_note():
    """The FakeNote class, for building notes inside a test."""
    return FakeNote
