"""
Collaborator contracts consumed by the question parsing pipeline.
"""

from typing import List, Protocol

from .config import ParserSettings
from .models import CardFrontBack, CardType, QuestionBlock
from .schedule import CardScheduleInfo


class NoteSource(Protocol):
    def read(self) -> str: ...

    def get_all_tags(self) -> List[str]: ...

    def get_question_context(self, line_no: int) -> List[str]:
        """Heading trail in effect at ``line_no``, outermost first."""
        ...


class BlockLocator(Protocol):
    def __call__(
        self,
        text: str,
        single_line_sep: str,
        single_line_reversed_sep: str,
        multiline_sep: str,
        multiline_reversed_sep: str,
        convert_highlights: bool,
        convert_bold: bool,
        convert_curly: bool,
    ) -> List[QuestionBlock]: ...


class VariantExpander(Protocol):
    def __call__(
        self,
        question_type: CardType,
        actual_question: str,
        settings: ParserSettings,
    ) -> List[CardFrontBack]: ...


class ScheduleParser(Protocol):
    def __call__(self, original_text: str) -> List[CardScheduleInfo]: ...
