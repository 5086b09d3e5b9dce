"""Command handler functions for CLI operations."""

from typing import Optional

from common.logging_config import get_logger
from cli.config import Config, default_config_path
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
from cli.portal_client import PortalClient

logger = get_logger(__name__)


_config: Optional[Config] = None
_client: Optional[PortalClient] = None


def get_config() -> Config:
    global _config
    if _config is None:
        _config = Config(default_config_path())
    return _config


def get_client() -> PortalClient:
    """
    Get or create global PortalClient instance.

    Returns:
        PortalClient instance
    """
    global _client
    if _client is None:
        logger.debug("Creating new PortalClient instance")
        _client = PortalClient(get_config())
    return _client


def handle_list_keys(cmd: ListKeysCommand, client: Optional[PortalClient] = None) -> str:
    if client is None:
        client = get_client()
    return client.list_keys()


def handle_create_key(cmd: CreateKeyCommand, client: Optional[PortalClient] = None) -> str:
    """
    Handle 'keys create' command.

    Args:
        cmd: CreateKeyCommand with duration_days and owner
        client: Optional PortalClient for dependency injection (testing)

    Returns:
        The issued key or an error message
    """
    logger.info(f"Executing keys create: owner={cmd.owner} days={cmd.duration_days}")
    if client is None:
        client = get_client()
    return client.create_key(cmd.duration_days, cmd.owner)


def handle_delete_key(cmd: DeleteKeyCommand, client: Optional[PortalClient] = None) -> str:
    if client is None:
        client = get_client()
    return client.delete_key(cmd.key)


def handle_list_scripts(cmd: ListScriptsCommand, client: Optional[PortalClient] = None) -> str:
    if client is None:
        client = get_client()
    return client.list_scripts()


def handle_push_script(cmd: PushScriptCommand, client: Optional[PortalClient] = None) -> str:
    """
    Handle 'scripts push' command.

    Args:
        cmd: PushScriptCommand with name and local file path
        client: Optional PortalClient for dependency injection (testing)

    Returns:
        Upload summary or error message
    """
    logger.info(f"Executing scripts push: name={cmd.name} file={cmd.file_path}")
    if client is None:
        client = get_client()
    result = client.push_script(cmd.name, cmd.file_path)
    logger.debug("Push command completed")
    return result


def handle_pull_script(cmd: PullScriptCommand, client: Optional[PortalClient] = None) -> str:
    if client is None:
        client = get_client()
    return client.pull_script(cmd.name, cmd.output_path)


def handle_delete_script(cmd: DeleteScriptCommand, client: Optional[PortalClient] = None) -> str:
    if client is None:
        client = get_client()
    return client.delete_script(cmd.name)


def handle_list_movies(cmd: ListMoviesCommand, client: Optional[PortalClient] = None) -> str:
    if client is None:
        client = get_client()
    return client.list_movies(cmd.page)


def handle_delete_movie(cmd: DeleteMovieCommand, client: Optional[PortalClient] = None) -> str:
    if client is None:
        client = get_client()
    return client.delete_movie(cmd.slug)


def handle_set_token(cmd: SetTokenCommand, config: Optional[Config] = None) -> str:
    """
    Handle 'config set-token' command.

    Args:
        cmd: SetTokenCommand with the admin token
        config: Optional Config for dependency injection (testing)

    Returns:
        Confirmation message
    """
    if config is None:
        config = get_config()
    config.set_admin_token(cmd.token)
    logger.info("Admin token updated")
    return f"Admin token saved to {config.config_path}"


def handle_show_config(cmd: ShowConfigCommand, config: Optional[Config] = None) -> str:
    if config is None:
        config = get_config()
    token_state = "set" if config.get_admin_token() else "not set"
    return f"Portal: {config.get_base_url()}\nAdmin token: {token_state}\nConfig file: {config.config_path}"


def dispatch_command(cmd_obj: CommandRequest) -> str:
    """Dispatch parsed command to appropriate handler."""
    if isinstance(cmd_obj, ListKeysCommand):
        return handle_list_keys(cmd_obj)
    elif isinstance(cmd_obj, CreateKeyCommand):
        return handle_create_key(cmd_obj)
    elif isinstance(cmd_obj, DeleteKeyCommand):
        return handle_delete_key(cmd_obj)
    elif isinstance(cmd_obj, ListScriptsCommand):
        return handle_list_scripts(cmd_obj)
    elif isinstance(cmd_obj, PushScriptCommand):
        return handle_push_script(cmd_obj)
    elif isinstance(cmd_obj, PullScriptCommand):
        return handle_pull_script(cmd_obj)
    elif isinstance(cmd_obj, DeleteScriptCommand):
        return handle_delete_script(cmd_obj)
    elif isinstance(cmd_obj, ListMoviesCommand):
        return handle_list_movies(cmd_obj)
    elif isinstance(cmd_obj, DeleteMovieCommand):
        return handle_delete_movie(cmd_obj)
    elif isinstance(cmd_obj, SetTokenCommand):
        return handle_set_token(cmd_obj)
    elif isinstance(cmd_obj, ShowConfigCommand):
        return handle_show_config(cmd_obj)
    else:
        return f"Unknown command type: {type(cmd_obj)}"
