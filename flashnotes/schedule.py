"""
Review-schedule annotations embedded in note text.

A reviewed question carries an HTML comment after its text holding one
``!due,interval,ease`` entry per card, in sibling order::

    What is the capital of France?::Paris
    <!--SR:!2023-09-02,4,270-->

Cards that have never been reviewed but sit before a reviewed sibling are
padded with a dummy entry dated 2000-01-01.
"""

import datetime
import re
from typing import Iterable, List

from pydantic import BaseModel, ConfigDict, Field

SCHEDULE_ANNOTATION_PATTERN = re.compile(r"<!--SR:.*?-->")
MULTI_SCHEDULING_EXTRACTOR = re.compile(r"!([\d-]+),(\d+),(\d+)")
LEGACY_SCHEDULING_EXTRACTOR = re.compile(r"<!--SR:([\d-]+),(\d+),(\d+)-->")

DUMMY_DUE_DATE_FOR_NEW_CARD = datetime.date(2000, 1, 1)
INITIAL_EASE = 250

_DUE_DATE_FORMATS = ("%Y-%m-%d", "%d-%m-%Y")


class CardScheduleInfo(BaseModel):
    """
    Prior review state of one card as persisted in the note.
    """

    model_config = ConfigDict(frozen=True)

    due_date: datetime.date = Field(
        ..., description="Date the card is next due for review."
    )
    interval: int = Field(
        ..., ge=0, description="Current review interval in days."
    )
    ease: int = Field(
        ..., ge=0, description="Ease factor, in percent (250 = 2.5x)."
    )

    @classmethod
    def dummy_for_new_card(cls) -> "CardScheduleInfo":
        return cls(
            due_date=DUMMY_DUE_DATE_FOR_NEW_CARD,
            interval=1,
            ease=INITIAL_EASE,
        )

    def is_dummy_schedule_for_new_card(self) -> bool:
        """True for a placeholder entry that carries no review history."""
        return self.due_date == DUMMY_DUE_DATE_FOR_NEW_CARD

    def format_due_date(self) -> str:
        return self.due_date.isoformat()

    def format_schedule(self) -> str:
        return f"!{self.format_due_date()},{self.interval},{self.ease}"

    def delay_before_review(self, today: datetime.date) -> int:
        """Days between ``today`` and the due date (negative when overdue)."""
        return (self.due_date - today).days


def parse_due_date(value: str) -> datetime.date:
    for fmt in _DUE_DATE_FORMATS:
        try:
            return datetime.datetime.strptime(value, fmt).date()
        except ValueError:
            continue
    raise ValueError(f"Unrecognised due date: '{value}'")


def _schedule_from_match(match: "re.Match[str]") -> CardScheduleInfo:
    due, interval, ease = match.groups()
    return CardScheduleInfo(
        due_date=parse_due_date(due),
        interval=int(interval),
        ease=int(ease),
    )


def parse_schedule_annotations(question_text: str) -> List[CardScheduleInfo]:
    """
    Extract schedule records from a question's original text.

    Parameters:
        question_text (str): Verbatim text of the question block, annotation included.

    Returns:
        List[CardScheduleInfo]: One record per entry, in the order they appear. Dummy entries are returned as-is; deciding to ignore them is up to the caller.

    Raises:
        ValueError: If an entry's due date is in neither ``YYYY-MM-DD`` nor ``DD-MM-YYYY`` format.
    """
    result: List[CardScheduleInfo] = []
    for annotation in SCHEDULE_ANNOTATION_PATTERN.findall(question_text):
        legacy = LEGACY_SCHEDULING_EXTRACTOR.fullmatch(annotation)
        if legacy:
            result.append(_schedule_from_match(legacy))
            continue
        result.extend(
            _schedule_from_match(m)
            for m in MULTI_SCHEDULING_EXTRACTOR.finditer(annotation)
        )
    return result


def strip_schedule_annotations(text: str) -> str:
    """Remove every schedule annotation and the whitespace left before it."""
    return re.sub(r"\s*<!--SR:.*?-->", "", text).rstrip()


def format_schedule_annotation(schedules: Iterable[CardScheduleInfo]) -> str:
    """Render records back into a single ``<!--SR:...-->`` comment."""
    entries = "".join(schedule.format_schedule() for schedule in schedules)
    return f"<!--SR:{entries}-->" if entries else ""
