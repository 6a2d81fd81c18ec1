from typing import Optional


class FlashnotesError(Exception):
    """Base exception for flashnotes errors."""

    def __init__(
        self, message: str, original_exception: Optional[Exception] = None
    ):
        super().__init__(message)
        self.original_exception = original_exception


class SettingsError(FlashnotesError):
    """Raised when parser settings cannot be loaded or validated."""

    pass


class NoteSourceError(FlashnotesError):
    """Raised when a note cannot be read or its front matter is invalid."""

    pass
