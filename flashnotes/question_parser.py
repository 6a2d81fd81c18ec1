"""
Builds the question list for a note: locate blocks, assemble questions,
expand them into cards and reconcile the cards with their schedule records.
"""

import logging
import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .block_locator import locate_question_blocks
from .config import ParserSettings
from .expander import expand_variants
from .interfaces import (
    BlockLocator,
    NoteSource,
    ScheduleParser,
    VariantExpander,
)
from .models import Question, QuestionBlock, QuestionText
from .reconciler import reconcile_cards
from .schedule import parse_schedule_annotations, strip_schedule_annotations
from .topic_path import TopicPath, resolve_topic_paths

logger = logging.getLogger(__name__)

BLOCK_ID_PATTERN = re.compile(r"\s+(\^[\w-]+)\s*$")


@dataclass(frozen=True)
class _NoteParseContext:
    """Everything one parse of one note needs, fixed once the note is read."""

    note: NoteSource
    note_text: str
    topic_paths: Tuple[TopicPath, ...]


def split_question_text(original: str) -> QuestionText:
    """Separate the reviewable text from its schedule annotation and block id."""
    text = strip_schedule_annotations(original)
    block_id: Optional[str] = None
    match = BLOCK_ID_PATTERN.search(text)
    if match:
        block_id = match.group(1)
        text = text[: match.start()]
    return QuestionText(
        original=original, actual_question=text.strip(), block_id=block_id
    )


def has_tag(text: str, tag: str) -> bool:
    """True if ``tag`` occurs in ``text`` as a whole tag, not as a prefix."""
    return re.search(rf"(?<!\S){re.escape(tag)}(?![\w/-])", text) is not None


def assemble_question(
    block: QuestionBlock,
    topic_paths: List[TopicPath],
    note: NoteSource,
    settings: ParserSettings,
) -> Question:
    """
    Build the Question for one located block, without its cards.

    The question context is the heading trail the note reports for the
    block's line.
    """
    return Question(
        question_type=block.card_type,
        topic_paths=list(topic_paths),
        question_text=split_question_text(block.raw_text),
        line_no=block.line_no,
        question_context=note.get_question_context(block.line_no),
        has_edit_later_tag=has_tag(block.raw_text, settings.edit_later_tag),
    )


class NoteQuestionParser:
    """
    Turns a note into its list of questions and cards.

    The parser keeps no per-note state, so one instance can serve any
    number of notes, including concurrently. The block locator, variant
    expander and schedule parser default to the markdown implementations
    shipped with this package and can be replaced.
    """

    def __init__(
        self,
        settings: ParserSettings,
        locator: BlockLocator = locate_question_blocks,
        expander: VariantExpander = expand_variants,
        schedule_parser: ScheduleParser = parse_schedule_annotations,
    ):
        self.settings = settings
        self.locator = locator
        self.expander = expander
        self.schedule_parser = schedule_parser

    def create_question_list(
        self, note: NoteSource, folder_topic_path: TopicPath
    ) -> List[Question]:
        """
        Parse a note into questions, one per located block, in note order.

        Parameters:
            note (NoteSource): The note to parse; it is read exactly once.
            folder_topic_path (TopicPath): Deck derived from the note's folder, used when folder-to-deck conversion is enabled.

        Returns:
            List[Question]: Questions with their card lists attached. A question whose ``has_changed`` is True had stale schedule records dropped and its note should be rewritten.
        """
        note_text = note.read()
        if self.settings.convert_folders_to_decks:
            topic_paths = resolve_topic_paths(
                None, folder_topic_path, self.settings
            )
        else:
            topic_paths = resolve_topic_paths(
                note.get_all_tags(), folder_topic_path, self.settings
            )

        context = _NoteParseContext(
            note=note, note_text=note_text, topic_paths=tuple(topic_paths)
        )
        return self._build_questions(context)

    def _build_questions(self, context: _NoteParseContext) -> List[Question]:
        questions: List[Question] = []
        for block in self._locate_blocks(context):
            questions.append(self._build_question(block, context))

        stale = sum(1 for question in questions if question.has_changed)
        logger.info(
            "Parsed %s question(s) with %s card(s); %s need rewriting.",
            len(questions),
            sum(len(question.card_list) for question in questions),
            stale,
        )
        return questions

    def _locate_blocks(self, context: _NoteParseContext) -> List[QuestionBlock]:
        settings = self.settings
        return self.locator(
            context.note_text,
            settings.single_line_card_separator,
            settings.single_line_reversed_card_separator,
            settings.multiline_card_separator,
            settings.multiline_reversed_card_separator,
            settings.convert_highlights_to_clozes,
            settings.convert_bold_text_to_clozes,
            settings.convert_curly_brackets_to_clozes,
        )

    def _build_question(
        self, block: QuestionBlock, context: _NoteParseContext
    ) -> Question:
        question = assemble_question(
            block, list(context.topic_paths), context.note, self.settings
        )

        # One block can expand into several cards (cloze, reversed)
        variants = self.expander(
            question.question_type,
            question.question_text.actual_question,
            self.settings,
        )
        schedules = self.schedule_parser(question.question_text.original)

        reconciliation = reconcile_cards(variants, schedules)
        if reconciliation.has_changed:
            question.has_changed = True
        question.set_card_list(reconciliation.cards)

        logger.debug(
            "Line %s: %s question, %s card(s), %s schedule record(s)",
            block.line_no,
            block.card_type.name,
            len(variants),
            len(schedules),
        )
        return question
