"""
File-backed note source for markdown notes with optional YAML front matter.
"""

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

import yaml

from .exceptions import NoteSourceError

logger = logging.getLogger(__name__)

FRONT_MATTER_PATTERN = re.compile(
    r"\A---\r?\n(.*?)\r?\n---[ \t]*(?:\r?\n|\Z)", re.DOTALL
)
INLINE_TAG_PATTERN = re.compile(r"(?:^|(?<=\s))#([\w/-]+)")
HEADING_PATTERN = re.compile(r"^(#{1,6})[ \t]+(.+?)[ \t]*$")
FOOTNOTE_REF_PATTERN = re.compile(r"\[\^\d+\]")
_FENCE_PREFIXES = ("```", "~~~")


@dataclass
class _Heading:
    line_no: int
    level: int
    text: str


@dataclass
class _NoteMetadata:
    tags: List[str] = field(default_factory=list)
    headings: List[_Heading] = field(default_factory=list)


def _normalize_tag(tag: str) -> str:
    tag = tag.strip()
    return tag if tag.startswith("#") else "#" + tag


def _front_matter_tags(raw_front_matter: str, path: Path) -> List[str]:
    try:
        front_matter = yaml.safe_load(raw_front_matter)
    except yaml.YAMLError as e:
        raise NoteSourceError(
            f"Invalid YAML front matter in {path}: {e}", e
        ) from e
    if not isinstance(front_matter, dict):
        return []

    value = front_matter.get("tags", front_matter.get("tag"))
    if value is None:
        return []
    if isinstance(value, str):
        value = re.split(r"[,\s]+", value)
    if not isinstance(value, list):
        raise NoteSourceError(
            f"Front matter 'tags' in {path} must be a list or a string."
        )
    return [_normalize_tag(str(tag)) for tag in value if str(tag).strip()]


def _scan_body(text: str, first_body_line: int) -> _NoteMetadata:
    metadata = _NoteMetadata()
    lines = text.replace("\r\n", "\n").split("\n")
    fence: Optional[str] = None

    for line_no in range(first_body_line, len(lines)):
        line = lines[line_no]
        if fence is not None:
            if line.startswith(fence):
                fence = None
            continue
        if line.startswith(_FENCE_PREFIXES):
            fence = re.match(r"`+|~+", line).group(0)
            continue

        heading = HEADING_PATTERN.match(line)
        if heading:
            metadata.headings.append(
                _Heading(line_no, len(heading.group(1)), heading.group(2))
            )
        metadata.tags.extend(
            "#" + tag
            for tag in INLINE_TAG_PATTERN.findall(line)
            if not tag.isdigit()
        )
    return metadata


class MarkdownNoteFile:
    """
    A markdown note on disk.

    Tags are the front matter ``tags`` (or ``tag``) entries followed by the
    inline ``#tags`` of the body in reading order, each with a leading
    ``#``. Tag and heading metadata reflect the text returned by the most
    recent ``read()``.
    """

    def __init__(self, path: Path):
        self.path = path
        self._metadata: Optional[_NoteMetadata] = None

    def read(self) -> str:
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            raise NoteSourceError(f"Note not found: {self.path}") from None
        except (OSError, UnicodeDecodeError) as e:
            raise NoteSourceError(
                f"Could not read note {self.path}: {e}", e
            ) from e
        self._metadata = self._extract_metadata(text)
        return text

    def _extract_metadata(self, text: str) -> _NoteMetadata:
        tags: List[str] = []
        first_body_line = 0
        match = FRONT_MATTER_PATTERN.match(text)
        if match:
            tags = _front_matter_tags(match.group(1), self.path)
            first_body_line = match.group(0).count("\n")

        metadata = _scan_body(text, first_body_line)
        metadata.tags = tags + metadata.tags
        logger.debug(
            "Note %s: %s tag(s), %s heading(s)",
            self.path,
            len(metadata.tags),
            len(metadata.headings),
        )
        return metadata

    @property
    def metadata(self) -> _NoteMetadata:
        if self._metadata is None:
            self.read()
        return self._metadata

    def get_all_tags(self) -> List[str]:
        return list(self.metadata.tags)

    def get_question_context(self, line_no: int) -> List[str]:
        """Headings enclosing ``line_no``, outermost first."""
        stack: List[_Heading] = []
        for heading in self.metadata.headings:
            if heading.line_no > line_no:
                break
            while stack and stack[-1].level >= heading.level:
                stack.pop()
            stack.append(heading)
        return [FOOTNOTE_REF_PATTERN.sub("", h.text).strip() for h in stack]
