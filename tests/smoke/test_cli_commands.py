"""
Smoke Tests for CLI Commands.

These tests verify that CLI commands run without errors and produce output.
They don't validate correctness deeply - just that commands work.

Usage:
    pytest tests/smoke/test_cli_commands.py -v
    pytest tests/smoke/test_cli_commands.py -v -m smoke
"""

import json
import subprocess
import sys
from pathlib import Path

import pytest
from typer.testing import CliRunner

from learn_helper.delivery.cli import app

# Mark all tests in this module as smoke tests
pytestmark = pytest.mark.smoke

# Project root
PROJECT_ROOT = Path(__file__).parent.parent.parent

runner = CliRunner()


def run_cli_command(command: str, timeout: int = 30) -> tuple[int, str, str]:
    """
    Run a CLI command and return exit code, stdout, stderr.

    Args:
        command: The command to run (after 'python -m learn_helper.delivery.cli')
        timeout: Maximum time to wait

    Returns:
        Tuple of (exit_code, stdout, stderr)
    """
    full_command = f"{sys.executable} -m learn_helper.delivery.cli {command}"

    result = subprocess.run(
        full_command,
        shell=True,
        cwd=PROJECT_ROOT,
        capture_output=True,
        text=True,
        timeout=timeout,
    )

    return result.returncode, result.stdout, result.stderr


@pytest.fixture
def deck(tmp_path):
    """One straight and one reverse card."""
    path = tmp_path / "deck.json"
    path.write_text(
        json.dumps(
            [
                {
                    "card_type": "straight",
                    "word": {"name": "taberu"},
                    "meanings": [
                        {
                            "definition": "to eat",
                            "translated_definition": "comer",
                            "word_translations": ["eat", "consume"],
                        }
                    ],
                },
                {
                    "card_type": "reverse",
                    "word": {"name": "hello"},
                    "meanings": [
                        {
                            "definition": "greeting",
                            "translated_definition": "saludo",
                            "word_translations": ["hola", "buenos dias"],
                        }
                    ],
                    "streak": 5,
                },
            ]
        ),
        encoding="utf-8",
    )
    return path


class TestCLIHelp:
    """Test that help commands work."""

    def test_main_help(self):
        """Main help should display without errors."""
        code, stdout, stderr = run_cli_command("--help")

        assert code == 0, f"Help failed: {stderr}"
        assert "learn-helper" in stdout.lower() or "learn helper" in stdout.lower()
        assert "Commands" in stdout

    @pytest.mark.parametrize("command", ["learn", "test", "repeat", "check"])
    def test_command_help(self, command):
        """Each command should have help."""
        result = runner.invoke(app, [command, "--help"])

        assert result.exit_code == 0, result.output
        assert "Usage" in result.output


class TestCheckCommand:
    """Test the one-card answer check."""

    def test_complete(self, deck):
        result = runner.invoke(app, ["check", str(deck), "taberu", "consme"])

        assert result.exit_code == 0, result.output
        assert "Correct" in result.output
        assert "Complete" in result.output

    def test_incomplete(self, deck):
        result = runner.invoke(app, ["check", str(deck), "hello", "hola"])

        assert result.exit_code == 1
        assert "Incomplete" in result.output

    def test_unknown_word(self, deck):
        result = runner.invoke(app, ["check", str(deck), "nothing", "x"])

        assert result.exit_code == 1
        assert "No card named" in result.output

    def test_missing_file(self, tmp_path):
        result = runner.invoke(app, ["check", str(tmp_path / "missing.json"), "a", "b"])

        assert result.exit_code == 1
        assert "File not found" in result.output


class TestSessionCommands:
    """Test interactive sessions with scripted input."""

    def test_test_command(self, deck):
        result = runner.invoke(app, ["test", str(deck), "--method", "manual"], input="eat\n")

        assert result.exit_code == 0, result.output
        assert "SET PASSED" in result.output
        assert "Streaks" in result.output

    def test_test_command_saves(self, deck):
        result = runner.invoke(
            app, ["test", str(deck), "--method", "manual", "--save"], input="eat\n"
        )

        assert result.exit_code == 0, result.output
        saved = json.loads(deck.read_text(encoding="utf-8"))
        assert saved[0]["streak"] == 1
        assert saved[1]["streak"] == 5

    def test_repeat_self_review_miss(self, deck):
        result = runner.invoke(
            app, ["repeat", str(deck), "--method", "self_review", "--save"], input="\nn\n"
        )

        assert result.exit_code == 0, result.output
        assert "SET FAILED" in result.output
        saved = json.loads(deck.read_text(encoding="utf-8"))
        assert saved[1]["streak"] == 0

    def test_learn_command(self, deck):
        # study card, reveal, mark correct, continue past the last set
        result = runner.invoke(
            app, ["learn", str(deck), "--method", "self_review"], input="\n\ny\ny\n"
        )

        assert result.exit_code == 0, result.output
        assert "SET PASSED" in result.output
        assert "All cards completed!" in result.output

    def test_invalid_method(self, deck):
        result = runner.invoke(app, ["test", str(deck), "--method", "oral"])

        assert result.exit_code == 1
        assert "Invalid test method" in result.output

    def test_no_learned_cards(self, tmp_path):
        path = tmp_path / "deck.json"
        path.write_text(
            json.dumps([
                {
                    "word": {"name": "x"},
                    "meanings": [
                        {"definition": "d", "translated_definition": "t", "word_translations": ["y"]}
                    ],
                }
            ]),
            encoding="utf-8",
        )
        result = runner.invoke(app, ["repeat", str(path)])

        assert result.exit_code == 1
        assert "No learned cards available" in result.output
