"""Tests for ReelboxCompleter."""

import pytest
from prompt_toolkit.document import Document

from cli.completer import ReelboxCompleter
from cli.constants import COMMANDS


@pytest.fixture
def completer():
    return ReelboxCompleter()


def get_completions_list(completer, text):
    """Helper to get list of completion texts from completer."""
    doc = Document(text, len(text))
    return [c.text for c in completer.get_completions(doc, None)]


def test_empty_input_offers_all_commands(completer):
    assert get_completions_list(completer, "") == COMMANDS


def test_partial_command(completer):
    assert get_completions_list(completer, "sc") == ["scripts"]


def test_command_completion_is_case_insensitive(completer):
    assert get_completions_list(completer, "KE") == ["keys"]


def test_subcommands_after_space(completer):
    assert get_completions_list(completer, "keys ") == ["list", "create", "delete"]


def test_partial_subcommand(completer):
    assert get_completions_list(completer, "scripts p") == ["push", "pull"]


def test_no_completion_for_arguments(completer):
    assert get_completions_list(completer, "keys create ") == []
    assert get_completions_list(completer, "keys create 3") == []


def test_no_subcommands_for_unknown_group(completer):
    assert get_completions_list(completer, "help ") == []
