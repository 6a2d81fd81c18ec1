# Standard library imports
import re

# Third-party imports
from typer.testing import CliRunner

# Local application imports
from flashnotes.cli.main import app


runner = CliRunner()


def normalize_output(text: str) -> str:
    """Strip ANSI escape codes and collapse whitespace to single spaces."""
    text = re.sub(r"\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])", "", text)
    return re.sub(r"\s+", " ", text).strip()


STALE_NOTE = """---
tags: [flashcards]
---
Capital of France::Paris
<!--SR:!2023-09-02,4,270!2023-09-05,9,250-->
"""

CLEAN_NOTE = """---
tags: [flashcards]
---
Capital of France::Paris
<!--SR:!2023-09-02,4,270-->

==Berlin== is the capital of ==Germany==
"""


class TestParseCommand:
    def test_clean_note(self, write_note):
        note = write_note("clean.md", CLEAN_NOTE)

        result = runner.invoke(app, ["parse", str(note), "--check"])

        assert result.exit_code == 0, result.output
        output = normalize_output(result.output)
        assert "SingleLineBasic" in output
        assert "Cloze" in output
        assert "All schedule annotations are up to date." in output

    def test_stale_note_reported(self, write_note):
        note = write_note("stale.md", STALE_NOTE)

        result = runner.invoke(app, ["parse", str(note)])

        assert result.exit_code == 0, result.output
        output = normalize_output(result.output)
        assert "stale schedule annotation" in output
        assert "need their schedule annotations rewritten" in output

    def test_check_fails_on_stale_note(self, write_note):
        clean = write_note("clean.md", CLEAN_NOTE)
        stale = write_note("stale.md", STALE_NOTE)

        result = runner.invoke(app, ["parse", str(clean), str(stale), "--check"])

        assert result.exit_code == 1
        assert "1 note(s) need" in normalize_output(result.output)

    def test_missing_note(self, tmp_path):
        result = runner.invoke(app, ["parse", str(tmp_path / "missing.md")])

        assert result.exit_code == 1
        assert "Note not found" in normalize_output(result.output)

    def test_bad_settings_file(self, write_note):
        note = write_note("clean.md", CLEAN_NOTE)
        settings = write_note("settings.yaml", "flashcard_tags: 5\n")

        result = runner.invoke(
            app, ["parse", str(note), "--settings", str(settings)]
        )

        assert result.exit_code == 1
        assert "Error loading settings" in normalize_output(result.output)

    def test_folder_decks_from_env_settings(self, write_note, tmp_path):
        note = write_note("biology/cells.md", "Unit of life::Cell\n")
        settings = write_note(
            "settings.yaml", "convert_folders_to_decks: true\n"
        )

        result = runner.invoke(
            app,
            ["parse", str(note), "--root", str(tmp_path)],
            env={"FLASHNOTES_SETTINGS": str(settings)},
        )

        assert result.exit_code == 0, result.output
        assert "biology" in normalize_output(result.output)

    def test_impossible_due_date(self, write_note):
        note = write_note("bad.md", "Q::A\n<!--SR:!2023-02-30,4,270-->\n")

        result = runner.invoke(app, ["parse", str(note)])

        assert result.exit_code == 1
        assert not isinstance(result.exception, ValueError)
        assert "Unrecognised due date" in normalize_output(result.output)
