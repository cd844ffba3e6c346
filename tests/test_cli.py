"""Tests for the command-line interface."""

import pytest
import sys
from click.testing import CliRunner
from ordered_object import __version__
from ordered_object.cli import main


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def document(temp_dir):
    """JSON file whose keys are deliberately unsorted."""
    path = temp_dir / "config.json"
    path.write_text('{\n  "b": 1,\n  "a": {"z": 1, "y": 2},\n  "c": [3]\n}\n', encoding="utf-8")
    return path


class TestCLI:
    """Tests for the ordered-object command group."""

    def test_version(self, runner):
        """Test the version option."""
        result = runner.invoke(main, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_format_keeps_order(self, runner, document):
        """Test that format rewrites compactly without reordering."""
        result = runner.invoke(main, ["format", str(document)])

        assert result.exit_code == 0
        assert result.output == '{"b":1,"a":{"z":1,"y":2},"c":[3]}\n'

    def test_format_indent_to_file(self, runner, document, temp_dir):
        """Test writing indented output to a file."""
        output = temp_dir / "out.json"
        result = runner.invoke(main, ["format", str(document), "--indent", "2", "-o", str(output)])

        assert result.exit_code == 0
        assert output.read_text(encoding="utf-8") == (
            '{\n  "b": 1,\n  "a": {\n    "z": 1,\n    "y": 2\n  },\n  "c": [\n    3\n  ]\n}\n'
        )

    def test_format_rejects_non_object(self, runner, temp_dir):
        """Test that a non-object document fails with an error."""
        path = temp_dir / "list.json"
        path.write_text("[1, 2]", encoding="utf-8")

        result = runner.invoke(main, ["format", str(path)])

        assert result.exit_code == 1
        assert "Error: failed to unmarshal JSON: expected object start" in result.output

    def test_format_missing_file(self, runner, temp_dir):
        """Test that a missing file is a usage error."""
        result = runner.invoke(main, ["format", str(temp_dir / "missing.json")])

        assert result.exit_code == 2

    def test_keys(self, runner, document):
        """Test listing keys in order."""
        result = runner.invoke(main, ["keys", str(document)])

        assert result.exit_code == 0
        assert result.output.splitlines() == ["b", "a", "c"]

    def test_get(self, runner, document):
        """Test printing a nested value in its own order."""
        result = runner.invoke(main, ["get", str(document), "a"])

        assert result.exit_code == 0
        assert result.output == '{"z":1,"y":2}\n'

    def test_get_missing_key(self, runner, document):
        """Test that a missing key fails."""
        result = runner.invoke(main, ["get", str(document), "nope"])

        assert result.exit_code == 1
        assert "not found" in result.output

    def test_set_new_key(self, runner, document):
        """Test that a new key is appended."""
        result = runner.invoke(main, ["set", str(document), "d", '{"q":1,"p":2}'])

        assert result.exit_code == 0
        assert result.output == '{"b":1,"a":{"z":1,"y":2},"c":[3],"d":{"q":1,"p":2}}\n'

    def test_set_existing_key_keeps_position(self, runner, document):
        """Test that updating a key keeps its position."""
        result = runner.invoke(main, ["set", str(document), "b", "true"])

        assert result.exit_code == 0
        assert result.output == '{"b":true,"a":{"z":1,"y":2},"c":[3]}\n'

    def test_set_string(self, runner, document):
        """Test storing raw text."""
        result = runner.invoke(main, ["set", str(document), "c", "plain text", "--string"])

        assert result.exit_code == 0
        assert result.output == '{"b":1,"a":{"z":1,"y":2},"c":"plain text"}\n'

    def test_set_invalid_json_value(self, runner, document):
        """Test that an unparseable value is a usage error."""
        result = runner.invoke(main, ["set", str(document), "c", "plain text"])

        assert result.exit_code == 2
        assert "use --string" in result.output

    @pytest.mark.skipif(not hasattr(sys, "get_int_max_str_digits"), reason="no integer digit limit")
    def test_set_oversized_integer_value(self, runner, document):
        """Test that an integer past the digit limit is a usage error."""
        result = runner.invoke(main, ["set", str(document), "c", "9" * (sys.get_int_max_str_digits() + 1)])

        assert result.exit_code == 2
        assert "use --string" in result.output

    def test_set_writes_output_file(self, runner, document, temp_dir):
        """Test writing the edited document to a file."""
        output = temp_dir / "edited.json"
        result = runner.invoke(main, ["set", str(document), "a", "0", "-o", str(output)])

        assert result.exit_code == 0
        assert output.read_text(encoding="utf-8") == '{"b":1,"a":0,"c":[3]}\n'

    def test_delete(self, runner, document):
        """Test removing a key."""
        result = runner.invoke(main, ["delete", str(document), "a"])

        assert result.exit_code == 0
        assert result.output == '{"b":1,"c":[3]}\n'

    def test_delete_missing_key(self, runner, document):
        """Test that deleting a missing key leaves the document unchanged."""
        result = runner.invoke(main, ["delete", str(document), "zzz"])

        assert result.exit_code == 0
        assert result.output == '{"b":1,"a":{"z":1,"y":2},"c":[3]}\n'

    def test_verbose_flag(self, runner, document):
        """Test that the verbose flag is accepted before a command."""
        result = runner.invoke(main, ["--verbose", "keys", str(document)])

        assert result.exit_code == 0
        assert "b" in result.output.splitlines()
