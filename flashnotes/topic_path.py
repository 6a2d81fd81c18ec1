"""
Topic paths: the hierarchical deck classification attached to questions.
"""

from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .config import ParserSettings


class TopicPath(BaseModel):
    """
    Ordered sequence of path segments, e.g. ``("flashcards", "math")``.

    The zero-segment value returned by ``empty_path()`` stands for "no
    classification".
    """

    model_config = ConfigDict(frozen=True)

    path: Tuple[str, ...] = Field(default_factory=tuple)

    @classmethod
    def empty_path(cls) -> "TopicPath":
        return cls(path=())

    @classmethod
    def from_path_string(cls, path_string: str) -> "TopicPath":
        """Split on ``/``, dropping empty segments."""
        return cls(path=tuple(seg for seg in path_string.split("/") if seg))

    @classmethod
    def from_tag(cls, tag: str) -> "TopicPath":
        """Build a path from a tag such as ``#flashcards/math``."""
        if not tag or tag == "#":
            raise ValueError(f"Invalid tag: '{tag}'")
        return cls.from_path_string(tag[1:] if tag.startswith("#") else tag)

    @property
    def is_empty_path(self) -> bool:
        return len(self.path) == 0

    @property
    def depth(self) -> int:
        return len(self.path)

    def format_as_tag(self) -> str:
        return "#" + "/".join(self.path)

    def __str__(self) -> str:
        return "/".join(self.path)


def folder_topic_path(note_path: Path, root: Optional[Path] = None) -> TopicPath:
    """
    Derive a deck path from the folders containing a note.

    Parameters:
        note_path (Path): Path to the note file.
        root (Optional[Path]): Vault root the folders are taken relative to. When omitted, or when the note is not under it, every parent folder of ``note_path`` as given is used.

    Returns:
        TopicPath: The parent folder names in order; the empty path for a note at the root.
    """
    parent = note_path.parent
    if root is not None:
        try:
            parent = note_path.resolve().parent.relative_to(root.resolve())
        except ValueError:
            pass
    return TopicPath(
        path=tuple(part for part in parent.parts if part not in ("", ".", "/"))
    )


def _topic_paths_for_watch_tag(
    watch_tag: str, tags: Sequence[str]
) -> List[TopicPath]:
    # children match on a "/" boundary: "math/x" but not "mathematics"
    child_prefix = watch_tag + "/"
    return [
        TopicPath.from_tag(tag)
        for tag in tags
        if tag == watch_tag or tag.startswith(child_prefix)
    ]


def resolve_topic_paths(
    tags: Optional[Sequence[str]],
    folder_path: TopicPath,
    settings: ParserSettings,
) -> List[TopicPath]:
    """
    Resolve the topic paths that classify every question in a note.

    With ``convert_folders_to_decks`` enabled the folder path is the only
    classification and ``tags`` is never read. Otherwise each configured
    watch tag contributes the paths of the note tags equal to it or nested
    under it, in watch-list order. Duplicates are kept. When nothing matches
    the result is ``[TopicPath.empty_path()]``, never an empty list.
    """
    if settings.convert_folders_to_decks:
        return [folder_path]

    tags = tags or []
    result = [
        topic_path
        for watch_tag in settings.flashcard_tags
        for topic_path in _topic_paths_for_watch_tag(watch_tag, tags)
    ]
    return result or [TopicPath.empty_path()]
