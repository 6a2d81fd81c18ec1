"""
Parser settings for flashnotes and loading them from a YAML file.
"""

import logging
from pathlib import Path
from typing import List

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .exceptions import SettingsError

logger = logging.getLogger(__name__)


class ParserSettings(BaseModel):
    """Configuration consumed by the question parsing pipeline.

    Frozen, so a single instance can be shared by concurrent parses.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    flashcard_tags: List[str] = Field(
        default_factory=lambda: ["#flashcards"],
        description="Watch-list of tags; matching note tags become decks.",
    )
    convert_folders_to_decks: bool = Field(
        default=False,
        description="Use the note's folder path as its deck, ignoring tags.",
    )
    single_line_card_separator: str = Field(default="::", min_length=1)
    single_line_reversed_card_separator: str = Field(
        default=":::", min_length=1
    )
    multiline_card_separator: str = Field(default="?", min_length=1)
    multiline_reversed_card_separator: str = Field(default="??", min_length=1)
    convert_highlights_to_clozes: bool = True
    convert_bold_text_to_clozes: bool = False
    convert_curly_brackets_to_clozes: bool = False
    edit_later_tag: str = Field(
        default="#edit-later",
        min_length=1,
        description="Tag marking a question the author wants to revisit.",
    )


def load_settings(path: Path) -> ParserSettings:
    """
    Load parser settings from a YAML mapping.

    Parameters:
        path (Path): YAML file whose top level maps setting names to values. Unknown keys are rejected.

    Returns:
        ParserSettings: The validated, frozen settings.

    Raises:
        SettingsError: If the file is missing or unreadable, is not valid YAML, its top level is not a mapping, or a value fails validation (the message names the offending field).
    """
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise SettingsError(f"Settings file not found: {path}") from None
    except OSError as e:
        raise SettingsError(
            f"Could not read settings file {path}: {e}", e
        ) from e
    except yaml.YAMLError as e:
        raise SettingsError(
            f"Invalid YAML syntax in {path}: {e}", e
        ) from e

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise SettingsError(
            f"Top level of settings file {path} must be a mapping."
        )

    try:
        settings = ParserSettings.model_validate(raw)
    except ValidationError as e:
        error_details = e.errors()[0]
        field = ".".join(map(str, error_details["loc"]))
        msg = error_details["msg"]
        raise SettingsError(
            f"Validation error in field '{field}': {msg}", e
        ) from e

    logger.debug("Loaded parser settings from %s", path)
    return settings
