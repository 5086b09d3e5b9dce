"""Tests for CLI command parsing."""

import pytest

from cli.models import (
    CreateKeyCommand,
    DeleteKeyCommand,
    DeleteMovieCommand,
    DeleteScriptCommand,
    ListKeysCommand,
    ListMoviesCommand,
    ListScriptsCommand,
    PullScriptCommand,
    PushScriptCommand,
    SetTokenCommand,
    ShowConfigCommand,
)
from cli.parser import ParseError, parse_command


@pytest.mark.parametrize("line,expected", [
    ("keys list", ListKeysCommand()),
    ("keys create 30 alice", CreateKeyCommand(duration_days=30, owner="alice")),
    ("keys create 7 'Alice Smith'", CreateKeyCommand(duration_days=7, owner="Alice Smith")),
    ("keys delete PREM-abc", DeleteKeyCommand(key="PREM-abc")),
    ("scripts list", ListScriptsCommand()),
    ("scripts push player.js ./player.js", PushScriptCommand(name="player.js", file_path="./player.js")),
    ("scripts pull player.js", PullScriptCommand(name="player.js")),
    ("scripts pull player.js out.js", PullScriptCommand(name="player.js", output_path="out.js")),
    ("scripts delete player.js", DeleteScriptCommand(name="player.js")),
    ("movies list", ListMoviesCommand()),
    ("movies list 3", ListMoviesCommand(page=3)),
    ("movies delete heat", DeleteMovieCommand(slug="heat")),
    ("config set-token s3cret", SetTokenCommand(token="s3cret")),
    ("config show", ShowConfigCommand()),
])
def test_parse_valid_commands(line, expected):
    assert parse_command(line) == expected


def test_parse_accepts_argv_list():
    assert parse_command(["keys", "create", "30", "alice"]) == CreateKeyCommand(duration_days=30, owner="alice")


@pytest.mark.parametrize("line", [
    "",
    "   ",
    "upload x",
    "keys",
    "keys rotate",
    "keys create thirty alice",
    "keys create 0 alice",
    "keys create 30",
    "keys delete",
    "scripts push onlyname",
    "scripts pull a b c",
    "movies list two",
    "movies list 0",
    "config set-token",
    "keys create 30 'unterminated",
])
def test_parse_errors(line):
    with pytest.raises(ParseError):
        parse_command(line)


def test_parse_error_shows_usage():
    with pytest.raises(ParseError, match="usage: keys create <days> <owner>"):
        parse_command("keys create 30")
