"""Flashnotes - turn markdown notes into spaced repetition flashcards."""

from .models import Card, CardFrontBack, CardType, Question, QuestionBlock
from .config import ParserSettings, load_settings
from .note_source import MarkdownNoteFile
from .question_parser import NoteQuestionParser
from .reconciler import reconcile_cards
from .schedule import CardScheduleInfo
from .topic_path import TopicPath, resolve_topic_paths

__all__ = [
    "Card",
    "CardFrontBack",
    "CardType",
    "Question",
    "QuestionBlock",
    "ParserSettings",
    "load_settings",
    "MarkdownNoteFile",
    "NoteQuestionParser",
    "reconcile_cards",
    "CardScheduleInfo",
    "TopicPath",
    "resolve_topic_paths",
]
