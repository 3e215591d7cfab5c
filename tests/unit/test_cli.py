"""
Unit tests for the command-line interface.

Tests cover:
- format with literals, JSON, stdin, flags and options files
- parse with the type table, fallbacks and --strict
- options export/show/diff
- Logging setup in the app callback
"""

from unittest.mock import patch

import pytest
import yaml
from typer.testing import CliRunner

from invariant_text import __version__
from invariant_text.cli import PARSE_TYPES, app
from invariant_text.models.enums import LogLevel

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_cli(clean_settings):
    """Keep the app callback from reconfiguring global logging and tracebacks."""
    with patch("invariant_text.cli.setup_logging") as mock_setup_logging, patch(
        "invariant_text.cli.setup_rich_logging"
    ):
        yield mock_setup_logging


class TestFormatCommand:
    """Tests for the format command."""

    def test_list(self):
        result = runner.invoke(app, ["format", "[1, 2, 3]"])

        assert result.exit_code == 0
        assert result.stdout == "[1, 2, 3] (3 items)\n"

    def test_null_string_flag(self):
        result = runner.invoke(app, ["format", "{'a': None}", "--null-string", "NULL"])

        assert result.exit_code == 0
        assert result.stdout.strip() == "{a: NULL} (1 items)"

    def test_no_count_and_separator(self):
        result = runner.invoke(
            app, ["format", "['a', 'b']", "--no-count", "--separator", " | "]
        )

        assert result.stdout.strip() == "[a | b]"

    def test_max_items_and_unlimited(self):
        truncated = runner.invoke(app, ["format", "[1, 2, 3, 4, 5]", "--max-items", "3"])
        unlimited = runner.invoke(
            app, ["format", str(list(range(150))), "--unlimited", "--no-count"]
        )

        assert truncated.stdout.strip() == "[1, 2, 3, ...] (5 items)"
        assert "..." not in unlimited.stdout
        assert unlimited.stdout.strip().endswith("149]")

    def test_max_depth(self):
        result = runner.invoke(app, ["format", "'test'", "--max-depth", "0"])

        assert result.stdout.strip() == "<max nesting depth reached>"

    def test_ndarray_with_dimensions(self):
        result = runner.invoke(app, ["format", "[[1, 2], [3, 4]]", "--ndarray", "--dimensions"])

        assert result.exit_code == 0
        assert result.stdout.strip() == "2D 2×2, 4 items: [[1, 2], [3, 4]]"

    def test_json_from_stdin(self):
        result = runner.invoke(app, ["format", "-", "--json"], input='{"k": [1.5, true]}')

        assert result.exit_code == 0
        assert result.stdout.strip() == "{k: [1.5, True] (2 items)} (1 items)"

    def test_markup_is_not_interpreted(self):
        result = runner.invoke(app, ["format", "'[bold]x[/bold] :smile:'"])

        assert result.stdout.strip() == "[bold]x[/bold] :smile:"

    def test_double_format(self):
        result = runner.invoke(
            app, ["format", "3.14159", "--double-format", ".2f"]
        )

        assert result.stdout.strip() == "3.14"

    def test_settings_from_environment(self, monkeypatch):
        monkeypatch.setenv("INVARIANT_TEXT_NULL_STRING", "nil")

        result = runner.invoke(app, ["format", "None"])

        assert result.stdout.strip() == "nil"

    def test_options_file_and_flag_precedence(self, temp_dir):
        options_file = temp_dir / "options.yaml"
        options_file.write_text("null_string: from-file\nshow_collection_count: false\n")

        from_file = runner.invoke(app, ["format", "[None]", "-f", str(options_file)])
        flag_wins = runner.invoke(
            app, ["format", "[None]", "-f", str(options_file), "--null-string", "flag"]
        )

        assert from_file.stdout.strip() == "[from-file]"
        assert flag_wins.stdout.strip() == "[flag]"

    def test_invalid_literal(self):
        result = runner.invoke(app, ["format", "[1, 2"])

        assert result.exit_code == 1

    def test_invalid_json(self):
        result = runner.invoke(app, ["format", "{oops}", "--json"])

        assert result.exit_code == 1

    def test_invalid_flag_value(self):
        result = runner.invoke(app, ["format", "1.5", "--double-format", "not a spec"])

        assert result.exit_code == 1

    def test_missing_options_file(self, temp_dir):
        result = runner.invoke(app, ["format", "1", "-f", str(temp_dir / "missing.yaml")])

        assert result.exit_code == 1


class TestParseCommand:
    """Tests for the parse command."""

    def test_int(self):
        result = runner.invoke(app, ["parse", "42", "--type", "int"])

        assert result.exit_code == 0
        assert result.stdout.strip() == "42"

    def test_invalid_text_prints_default(self):
        result = runner.invoke(app, ["parse", "not-a-guid", "-t", "uuid"])

        assert result.exit_code == 0
        assert result.stdout.strip() == "00000000-0000-0000-0000-000000000000"

    def test_strict_rejects_invalid_text(self):
        result = runner.invoke(app, ["parse", "not-a-guid", "-t", "uuid", "--strict"])

        assert result.exit_code == 1

    def test_duration_round_trip(self):
        result = runner.invoke(app, ["parse", "1.02:03:04", "-t", "timedelta"])

        assert result.stdout.strip() == "1.02:03:04"

    def test_type_name_case_insensitive(self):
        result = runner.invoke(app, ["parse", "TRUE", "-t", "Bool"])

        assert result.stdout.strip() == "True"

    def test_numpy_width_overflow(self):
        result = runner.invoke(app, ["parse", "300", "-t", "uint8"])

        assert result.stdout.strip() == "0"

    def test_unknown_type(self):
        result = runner.invoke(app, ["parse", "1", "-t", "complex"])

        assert result.exit_code == 2

    def test_stdin(self):
        result = runner.invoke(app, ["parse", "-", "-t", "date"], input="2025-01-15\n")

        assert result.stdout.strip() == "2025-01-15"


class TestTypesCommand:
    """Tests for the types command."""

    def test_lists_type_names(self):
        result = runner.invoke(app, ["types"])

        assert result.exit_code == 0
        for name in ("int", "timedelta", "float16"):
            assert name in result.stdout
        assert len(PARSE_TYPES) == 21


class TestOptionsCommands:
    """Tests for the options sub-commands."""

    def test_show(self):
        result = runner.invoke(app, ["options", "show"])

        assert result.exit_code == 0
        assert "Effective Render Options" in result.stdout
        assert "max_nesting_depth" in result.stdout

    def test_show_from_file(self, temp_dir):
        options_file = temp_dir / "options.yaml"
        options_file.write_text("max_nesting_depth: 3\n")

        result = runner.invoke(app, ["options", "show", "-f", str(options_file)])

        assert result.exit_code == 0

    def test_show_invalid_file(self, temp_dir):
        options_file = temp_dir / "options.yaml"
        options_file.write_text("max_nesting_depth: -3\n")

        result = runner.invoke(app, ["options", "show", "-f", str(options_file)])

        assert result.exit_code == 1

    def test_export(self, temp_dir, monkeypatch):
        monkeypatch.setenv("INVARIANT_TEXT_NULL_STRING", "NULL")
        output = temp_dir / "exported.yaml"

        result = runner.invoke(app, ["options", "export", "-o", str(output), "--minimal"])

        assert result.exit_code == 0
        assert "exported" in result.stdout
        assert yaml.safe_load(output.read_text()) == {"null_string": "NULL"}

    def test_diff(self, temp_dir):
        first = temp_dir / "a.yaml"
        second = temp_dir / "b.yaml"
        first.write_text("null_string: one\n")
        second.write_text("null_string: two\n")

        result = runner.invoke(app, ["options", "diff", str(first), str(second)])

        assert result.exit_code == 0
        assert "null_string" in result.stdout


class TestCallback:
    """Tests for version output and the app callback."""

    def test_version(self):
        result = runner.invoke(app, ["version"])

        assert result.exit_code == 0
        assert __version__ in result.stdout

    def test_logging_configured_from_settings(self, isolated_cli):
        runner.invoke(app, ["version"])

        isolated_cli.assert_called_once()
        settings = isolated_cli.call_args[0][0]
        assert settings.log_level is LogLevel.WARNING

    def test_verbose_switches_to_debug(self, isolated_cli):
        result = runner.invoke(app, ["--verbose", "format", "1"])

        assert result.exit_code == 0
        settings = isolated_cli.call_args[0][0]
        assert settings.log_level is LogLevel.DEBUG

    def test_invalid_settings_exit(self, monkeypatch):
        monkeypatch.setenv("INVARIANT_TEXT_MAX_NESTING_DEPTH", "-1")

        result = runner.invoke(app, ["version"])

        assert result.exit_code == 1
