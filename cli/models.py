"""Command request data types for CLI."""

from dataclasses import dataclass
from typing import Literal, Optional, Union


@dataclass(frozen=True)
class ListKeysCommand:
    """List premium keys."""

    command: Literal["keys list"] = "keys list"


@dataclass(frozen=True)
class CreateKeyCommand:
    """Issue a premium key."""

    duration_days: int
    owner: str
    command: Literal["keys create"] = "keys create"


@dataclass(frozen=True)
class DeleteKeyCommand:
    """Delete a premium key."""

    key: str
    command: Literal["keys delete"] = "keys delete"


@dataclass(frozen=True)
class ListScriptsCommand:
    """List stored scripts."""

    command: Literal["scripts list"] = "scripts list"


@dataclass(frozen=True)
class PushScriptCommand:
    """Upload a local file as a script."""

    name: str
    file_path: str
    command: Literal["scripts push"] = "scripts push"


@dataclass(frozen=True)
class PullScriptCommand:
    """Fetch a script."""

    name: str
    output_path: Optional[str] = None
    command: Literal["scripts pull"] = "scripts pull"


@dataclass(frozen=True)
class DeleteScriptCommand:
    """Delete a script."""

    name: str
    command: Literal["scripts delete"] = "scripts delete"


@dataclass(frozen=True)
class ListMoviesCommand:
    """Show one catalog page."""

    page: int = 1
    command: Literal["movies list"] = "movies list"


@dataclass(frozen=True)
class DeleteMovieCommand:
    """Delete a movie."""

    slug: str
    command: Literal["movies delete"] = "movies delete"


@dataclass(frozen=True)
class SetTokenCommand:
    """Store the admin token in the CLI config."""

    token: str
    command: Literal["config set-token"] = "config set-token"


@dataclass(frozen=True)
class ShowConfigCommand:
    """Show the configured portal address."""

    command: Literal["config show"] = "config show"


CommandRequest = Union[
    ListKeysCommand,
    CreateKeyCommand,
    DeleteKeyCommand,
    ListScriptsCommand,
    PushScriptCommand,
    PullScriptCommand,
    DeleteScriptCommand,
    ListMoviesCommand,
    DeleteMovieCommand,
    SetTokenCommand,
    ShowConfigCommand,
]
