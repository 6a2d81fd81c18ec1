"""
Expansion of one question into the front/back variants it is reviewed as.
"""

import re
from typing import List, Tuple

from .block_locator import enabled_cloze_patterns
from .config import ParserSettings
from .models import CardFrontBack, CardType

CLOZE_HIDDEN_HTML = "<span style='color:#2196f3'>[...]</span>"
CLOZE_REVEALED_TEMPLATE = "<span style='color:#2196f3'>{}</span>"


def _split_single_line(text: str, separator: str) -> Tuple[str, str]:
    front, _, back = text.partition(separator)
    return front.strip(), back.strip()


def _split_multi_line(text: str, separator: str) -> Tuple[str, str]:
    lines = text.split("\n")
    for idx, line in enumerate(lines):
        if line.strip() == separator:
            return (
                "\n".join(lines[:idx]).strip(),
                "\n".join(lines[idx + 1 :]).strip(),
            )
    return text.strip(), ""


def _cloze_marker_pattern(settings: ParserSettings) -> "re.Pattern[str]":
    markers: List[str] = []
    if settings.convert_highlights_to_clozes:
        markers.append("==")
    if settings.convert_bold_text_to_clozes:
        markers.append(r"\*\*")
    if settings.convert_curly_brackets_to_clozes:
        markers.extend([r"\{\{", r"\}\}"])
    return re.compile("|".join(markers))


def _expand_cloze(text: str, settings: ParserSettings) -> List[CardFrontBack]:
    patterns = enabled_cloze_patterns(
        settings.convert_highlights_to_clozes,
        settings.convert_bold_text_to_clozes,
        settings.convert_curly_brackets_to_clozes,
    )
    if not patterns:
        return []
    # one alternation, so nested markers such as ==**x**== are one deletion
    deletion_pattern = re.compile("|".join(p.pattern for p in patterns))
    unwrap = _cloze_marker_pattern(settings)

    variants: List[CardFrontBack] = []
    for match in deletion_pattern.finditer(text):
        start, end = match.span()
        before, deleted, after = text[:start], text[start:end], text[end:]
        front = before + CLOZE_HIDDEN_HTML + after
        back = before + CLOZE_REVEALED_TEMPLATE.format(deleted) + after
        variants.append(
            CardFrontBack(
                front=unwrap.sub("", front), back=unwrap.sub("", back)
            )
        )
    return variants


def expand_variants(
    question_type: CardType, actual_question: str, settings: ParserSettings
) -> List[CardFrontBack]:
    """
    Expand a question's text into its ordered card variants.

    Basic questions give one variant and reversed questions two (the second
    swaps front and back). Cloze questions give one variant per deletion,
    in text order.
    """
    if question_type == CardType.SingleLineBasic:
        front, back = _split_single_line(
            actual_question, settings.single_line_card_separator
        )
        return [CardFrontBack(front, back)]

    if question_type == CardType.SingleLineReversed:
        front, back = _split_single_line(
            actual_question, settings.single_line_reversed_card_separator
        )
        return [CardFrontBack(front, back), CardFrontBack(back, front)]

    if question_type == CardType.MultiLineBasic:
        front, back = _split_multi_line(
            actual_question, settings.multiline_card_separator
        )
        return [CardFrontBack(front, back)]

    if question_type == CardType.MultiLineReversed:
        front, back = _split_multi_line(
            actual_question, settings.multiline_reversed_card_separator
        )
        return [CardFrontBack(front, back), CardFrontBack(back, front)]

    if question_type == CardType.Cloze:
        return _expand_cloze(actual_question, settings)

    raise ValueError(f"Unsupported card type: {question_type!r}")
