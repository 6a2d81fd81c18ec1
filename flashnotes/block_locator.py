"""
Line scanner that locates question blocks in markdown note text.
"""

import logging
import re
from typing import List, Optional

from .models import CardType, QuestionBlock

logger = logging.getLogger(__name__)

HIGHLIGHT_CLOZE_PATTERN = re.compile(r"==.*?==")
BOLD_CLOZE_PATTERN = re.compile(r"\*\*.*?\*\*")
CURLY_CLOZE_PATTERN = re.compile(r"\{\{.*?\}\}")
_FENCE_PATTERN = re.compile(r"`+|~+")


def enabled_cloze_patterns(
    convert_highlights: bool, convert_bold: bool, convert_curly: bool
) -> List["re.Pattern[str]"]:
    patterns = []
    if convert_highlights:
        patterns.append(HIGHLIGHT_CLOZE_PATTERN)
    if convert_bold:
        patterns.append(BOLD_CLOZE_PATTERN)
    if convert_curly:
        patterns.append(CURLY_CLOZE_PATTERN)
    return patterns


def locate_question_blocks(
    text: str,
    single_line_sep: str,
    single_line_reversed_sep: str,
    multiline_sep: str,
    multiline_reversed_sep: str,
    convert_highlights: bool,
    convert_bold: bool,
    convert_curly: bool,
) -> List[QuestionBlock]:
    """
    Scan note text and return its question blocks in line order.

    A line holding a single-line separator is a complete question on its own
    (plus a schedule annotation on the next line, if any). Multi-line and
    cloze questions run until the next blank line. Fenced code blocks are
    copied into the current block verbatim so their blank lines and
    separators are not interpreted. HTML comments other than schedule
    annotations are skipped.

    Parameters:
        text (str): Full note text.
        single_line_sep (str): Separator for ``front::back`` questions.
        single_line_reversed_sep (str): Separator for reversed single-line questions; checked before ``single_line_sep`` since it usually contains it.
        multiline_sep (str): Line separating front and back of a multi-line question.
        multiline_reversed_sep (str): Same, for reversed multi-line questions.
        convert_highlights (bool): Treat ``==text==`` as a cloze deletion.
        convert_bold (bool): Treat ``**text**`` as a cloze deletion.
        convert_curly (bool): Treat ``{{text}}`` as a cloze deletion.

    Returns:
        List[QuestionBlock]: Located blocks; ``line_no`` is the 0-based line the block starts on.
    """
    cloze_patterns = enabled_cloze_patterns(
        convert_highlights, convert_bold, convert_curly
    )
    lines = text.replace("\r\n", "\n").split("\n")
    blocks: List[QuestionBlock] = []

    card_type: Optional[CardType] = None
    card_lines: List[str] = []
    start_line = 0

    i = 0
    while i < len(lines):
        line = lines[i]

        if not line.strip():
            if card_type is not None:
                blocks.append(
                    QuestionBlock(card_type, "\n".join(card_lines), start_line)
                )
            card_type = None
            card_lines = []
            i += 1
            continue

        if line.startswith("<!--") and not line.startswith("<!--SR:"):
            while i < len(lines) and "-->" not in lines[i]:
                i += 1
            i += 1
            continue

        if not card_lines:
            start_line = i
        card_lines.append(line.rstrip())

        if single_line_reversed_sep in line or single_line_sep in line:
            single_type = (
                CardType.SingleLineReversed
                if single_line_reversed_sep in line
                else CardType.SingleLineBasic
            )
            line_no = i
            block_lines = [line]
            if i + 1 < len(lines) and lines[i + 1].startswith("<!--SR:"):
                i += 1
                block_lines.append(lines[i])
            blocks.append(
                QuestionBlock(single_type, "\n".join(block_lines), line_no)
            )
            card_type = None
            card_lines = []
        elif card_type is None and any(
            pattern.search(line) for pattern in cloze_patterns
        ):
            card_type = CardType.Cloze
        elif line.strip() == multiline_sep:
            card_type = CardType.MultiLineBasic
        elif line.strip() == multiline_reversed_sep:
            card_type = CardType.MultiLineReversed
        elif line.startswith("```") or line.startswith("~~~"):
            fence = _FENCE_PATTERN.match(line).group(0)
            while i + 1 < len(lines) and not lines[i + 1].startswith(fence):
                i += 1
                card_lines.append(lines[i])
            if i + 1 < len(lines):
                i += 1
                card_lines.append(lines[i])

        i += 1

    if card_type is not None and card_lines:
        blocks.append(
            QuestionBlock(card_type, "\n".join(card_lines), start_line)
        )

    logger.debug("Located %s question block(s)", len(blocks))
    return blocks
