"""Command parser for CLI input."""

import shlex
from typing import List, Sequence, Union

from cli.models import (
    CommandRequest,
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


class ParseError(Exception):
    """Raised when command parsing fails."""

    pass


def parse_command(command_input: Union[str, Sequence[str]]) -> CommandRequest:
    """Parse user input into a CommandRequest object.

    Args:
        command_input: A raw REPL line, or an already tokenized argv list

    Returns:
        CommandRequest object

    Raises:
        ParseError: If command syntax is invalid
    """
    if isinstance(command_input, str):
        if not command_input.strip():
            raise ParseError("Empty command")
        try:
            tokens = shlex.split(command_input)
        except ValueError as e:
            raise ParseError(f"Invalid syntax: {e}")
    else:
        tokens = list(command_input)

    if not tokens:
        raise ParseError("Empty command")

    group = tokens[0]
    if group == "keys":
        return _parse_keys(tokens[1:])
    elif group == "scripts":
        return _parse_scripts(tokens[1:])
    elif group == "movies":
        return _parse_movies(tokens[1:])
    elif group == "config":
        return _parse_config(tokens[1:])
    else:
        raise ParseError(f"Unknown command: {group}")


def _split_action(group: str, args: List[str]) -> tuple:
    if not args:
        raise ParseError(f"{group} requires a subcommand")
    return args[0], args[1:]


def _expect(usage: str, args: List[str], minimum: int, maximum: int) -> None:
    if not minimum <= len(args) <= maximum:
        raise ParseError(f"usage: {usage}")


def _parse_keys(args: List[str]) -> CommandRequest:
    """Parse 'keys list|create|delete'."""
    action, rest = _split_action("keys", args)

    if action == "list":
        _expect("keys list", rest, 0, 0)
        return ListKeysCommand()
    elif action == "create":
        _expect("keys create <days> <owner>", rest, 2, 2)
        try:
            days = int(rest[0])
        except ValueError:
            raise ParseError(f"days must be an integer, got '{rest[0]}'")
        if days <= 0:
            raise ParseError("days must be positive")
        return CreateKeyCommand(duration_days=days, owner=rest[1])
    elif action == "delete":
        _expect("keys delete <key>", rest, 1, 1)
        return DeleteKeyCommand(key=rest[0])
    raise ParseError(f"Unknown keys subcommand: {action}")


def _parse_scripts(args: List[str]) -> CommandRequest:
    """Parse 'scripts list|push|pull|delete'."""
    action, rest = _split_action("scripts", args)

    if action == "list":
        _expect("scripts list", rest, 0, 0)
        return ListScriptsCommand()
    elif action == "push":
        _expect("scripts push <name> <file>", rest, 2, 2)
        return PushScriptCommand(name=rest[0], file_path=rest[1])
    elif action == "pull":
        _expect("scripts pull <name> [output_file]", rest, 1, 2)
        return PullScriptCommand(name=rest[0], output_path=rest[1] if len(rest) > 1 else None)
    elif action == "delete":
        _expect("scripts delete <name>", rest, 1, 1)
        return DeleteScriptCommand(name=rest[0])
    raise ParseError(f"Unknown scripts subcommand: {action}")


def _parse_movies(args: List[str]) -> CommandRequest:
    """Parse 'movies list [page]|delete <slug>'."""
    action, rest = _split_action("movies", args)

    if action == "list":
        _expect("movies list [page]", rest, 0, 1)
        if not rest:
            return ListMoviesCommand()
        try:
            page = int(rest[0])
        except ValueError:
            raise ParseError(f"page must be an integer, got '{rest[0]}'")
        if page < 1:
            raise ParseError("page must be at least 1")
        return ListMoviesCommand(page=page)
    elif action == "delete":
        _expect("movies delete <slug>", rest, 1, 1)
        return DeleteMovieCommand(slug=rest[0])
    raise ParseError(f"Unknown movies subcommand: {action}")


def _parse_config(args: List[str]) -> CommandRequest:
    """Parse 'config set-token <token>|show'."""
    action, rest = _split_action("config", args)

    if action == "set-token":
        _expect("config set-token <token>", rest, 1, 1)
        return SetTokenCommand(token=rest[0])
    elif action == "show":
        _expect("config show", rest, 0, 0)
        return ShowConfigCommand()
    raise ParseError(f"Unknown config subcommand: {action}")
