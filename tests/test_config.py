import pytest
from pydantic import ValidationError

from flashnotes.config import ParserSettings, load_settings
from flashnotes.exceptions import SettingsError


class TestParserSettings:
    def test_defaults(self):
        settings = ParserSettings()
        assert settings.flashcard_tags == ["#flashcards"]
        assert settings.convert_folders_to_decks is False
        assert settings.single_line_card_separator == "::"
        assert settings.single_line_reversed_card_separator == ":::"
        assert settings.multiline_card_separator == "?"
        assert settings.multiline_reversed_card_separator == "??"
        assert settings.convert_highlights_to_clozes is True
        assert settings.convert_bold_text_to_clozes is False
        assert settings.convert_curly_brackets_to_clozes is False

    def test_is_frozen(self):
        settings = ParserSettings()
        with pytest.raises(ValidationError):
            settings.convert_folders_to_decks = True

    def test_empty_separator_rejected(self):
        with pytest.raises(ValidationError):
            ParserSettings(single_line_card_separator="")

    def test_unknown_field_rejected(self):
        with pytest.raises(ValidationError):
            ParserSettings(bogus=True)


class TestLoadSettings:
    def test_valid_file(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text(
            "flashcard_tags: ['#cards', '#review']\n"
            "convert_bold_text_to_clozes: true\n",
            encoding="utf-8",
        )

        settings = load_settings(path)

        assert settings.flashcard_tags == ["#cards", "#review"]
        assert settings.convert_bold_text_to_clozes is True
        assert settings.single_line_card_separator == "::"

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("", encoding="utf-8")
        assert load_settings(path) == ParserSettings()

    def test_missing_file(self, tmp_path):
        with pytest.raises(SettingsError, match="not found"):
            load_settings(tmp_path / "nope.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("flashcard_tags: [unclosed\n", encoding="utf-8")
        with pytest.raises(SettingsError, match="Invalid YAML syntax"):
            load_settings(path)

    def test_top_level_must_be_mapping(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(SettingsError, match="must be a mapping"):
            load_settings(path)

    def test_validation_error_names_field(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("convert_folders_to_decks: maybe\n", encoding="utf-8")
        with pytest.raises(
            SettingsError, match="field 'convert_folders_to_decks'"
        ) as exc_info:
            load_settings(path)
        assert isinstance(exc_info.value.original_exception, ValidationError)
