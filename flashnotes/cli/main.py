"""
CLI entry point for flashnotes.
"""

# Standard library imports
import logging
from pathlib import Path
from typing import List, Optional

# Third-party imports
import typer
from rich.console import Console
from rich.table import Table

# Local application imports
from flashnotes.config import ParserSettings, load_settings
from flashnotes.exceptions import NoteSourceError, SettingsError
from flashnotes.models import Question
from flashnotes.note_source import MarkdownNoteFile
from flashnotes.question_parser import NoteQuestionParser
from flashnotes.topic_path import folder_topic_path


console = Console()

app = typer.Typer(
    name="flashnotes",
    help="Flashnotes: flashcards from markdown notes.",
    add_completion=False,
    rich_markup_mode="markdown",
)


@app.callback()
def main(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug logging."
    ),
):
    """Flashnotes: flashcards from markdown notes."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _resolve_settings(settings_path: Optional[Path]) -> ParserSettings:
    """Load settings from the given file, or fall back to the defaults."""
    if settings_path is None:
        return ParserSettings()
    try:
        return load_settings(settings_path)
    except SettingsError as e:
        console.print(f"[bold red]Error loading settings: {e}[/bold red]")
        raise typer.Exit(code=1)


def _format_decks(question: Question) -> str:
    return ", ".join(
        str(topic_path) or "(none)" for topic_path in question.topic_paths
    )


def _render_questions(note_path: Path, questions: List[Question]) -> None:
    table = Table(title=f"{note_path} ({len(questions)} questions)")
    table.add_column("Line", justify="right")
    table.add_column("Type")
    table.add_column("Decks")
    table.add_column("Cards", justify="right")
    table.add_column("Scheduled", justify="right")
    table.add_column("Stale", justify="center")

    for question in questions:
        table.add_row(
            str(question.line_no + 1),
            question.question_type.name,
            _format_decks(question),
            str(len(question.card_list)),
            str(question.scheduled_card_count),
            "[yellow]yes[/yellow]" if question.has_changed else "",
        )
    console.print(table)

    for question in questions:
        if question.has_changed:
            console.print(
                f"[yellow]Line {question.line_no + 1}: stale schedule "
                "annotation, should read "
                f"'{question.format_schedule_annotation()}'[/yellow]"
            )


@app.command()
def parse(
    notes: List[Path] = typer.Argument(  # noqa: B008
        ..., help="Markdown notes to parse."
    ),
    settings_path: Optional[Path] = typer.Option(  # noqa: B008
        None,
        "--settings",
        help="YAML file with parser settings. "
        "Falls back to FLASHNOTES_SETTINGS env var.",
        envvar="FLASHNOTES_SETTINGS",
    ),
    root: Optional[Path] = typer.Option(  # noqa: B008
        None,
        "--root",
        help="Vault root used to derive folder decks. Defaults to the "
        "current directory.",
    ),
    check: bool = typer.Option(
        False,
        "--check",
        help="Exit with 1 if any note carries stale schedule annotations.",
    ),
):
    """
    Parse notes into questions and cards and report what was found.

    With `--check`, the command exits with code 1 when any note has schedule annotations left behind by removed cards, i.e. when the note would need rewriting.
    """
    settings = _resolve_settings(settings_path)
    parser = NoteQuestionParser(settings)
    vault_root = root or Path.cwd()

    stale_notes = 0
    for note_path in notes:
        note = MarkdownNoteFile(note_path)
        try:
            questions = parser.create_question_list(
                note, folder_topic_path(note_path, vault_root)
            )
        except (NoteSourceError, ValueError) as e:
            # ValueError: malformed due date in a schedule annotation
            console.print(f"[bold red]Error in {note_path}: {e}[/bold red]")
            raise typer.Exit(code=1)

        _render_questions(note_path, questions)
        if any(question.has_changed for question in questions):
            stale_notes += 1

    if stale_notes:
        console.print(
            f"[yellow]{stale_notes} note(s) need their schedule "
            "annotations rewritten.[/yellow]"
        )
        if check:
            raise typer.Exit(code=1)
    else:
        console.print("[green]All schedule annotations are up to date.[/green]")


if __name__ == "__main__":
    app()
