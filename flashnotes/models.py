"""
Data model for questions parsed out of a note and the cards they expand into.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .schedule import CardScheduleInfo, format_schedule_annotation
from .topic_path import TopicPath


class CardType(IntEnum):
    """
    The card style of a located question block.
    """

    SingleLineBasic = 0
    SingleLineReversed = 1
    MultiLineBasic = 2
    MultiLineReversed = 3
    Cloze = 4


@dataclass(frozen=True)
class QuestionBlock:
    """One question located in the note text; ``line_no`` is 0-based."""

    card_type: CardType
    raw_text: str
    line_no: int


@dataclass(frozen=True)
class CardFrontBack:
    front: str
    back: str


class Card(BaseModel):
    """
    One reviewable front/back pair.

    ``card_idx`` is the card's position among the cards expanded from the
    same question and is what ties it to its schedule record.
    """

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    front: str
    back: str
    card_idx: int = Field(..., ge=0)
    schedule_info: Optional[CardScheduleInfo] = Field(
        default=None,
        description="Prior review state; None for a card never reviewed.",
    )

    @property
    def is_new(self) -> bool:
        return self.schedule_info is None


class QuestionText(BaseModel):
    model_config = ConfigDict(frozen=True)

    original: str = Field(
        ..., description="Verbatim block text, annotations included."
    )
    actual_question: str = Field(
        ..., description="Text handed to the variant expander."
    )
    block_id: Optional[str] = Field(
        default=None, description="Trailing block reference, e.g. '^abc123'."
    )


class Question(BaseModel):
    """
    A located, classified unit of note content.

    ``has_changed`` is set when stale schedule annotations were dropped
    while building the card list; the note text then needs rewriting.
    """

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    question_type: CardType
    topic_paths: List[TopicPath] = Field(..., min_length=1)
    question_text: QuestionText
    line_no: int = Field(..., ge=0)
    question_context: List[str] = Field(default_factory=list)
    card_list: List[Card] = Field(default_factory=list)
    has_changed: bool = False
    has_edit_later_tag: bool = False

    def set_card_list(self, cards: List[Card]) -> None:
        self.card_list = list(cards)

    @property
    def scheduled_card_count(self) -> int:
        return sum(1 for card in self.card_list if not card.is_new)

    def format_schedule_annotation(self) -> str:
        """
        Render the annotation this question should carry.

        Unreviewed cards that precede a reviewed sibling are padded with
        dummy entries; trailing unreviewed cards are omitted.
        """
        last_scheduled = max(
            (c.card_idx for c in self.card_list if not c.is_new), default=-1
        )
        schedules = [
            card.schedule_info or CardScheduleInfo.dummy_for_new_card()
            for card in self.card_list[: last_scheduled + 1]
        ]
        return format_schedule_annotation(schedules)
