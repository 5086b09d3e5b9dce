"""CLI constants and configuration."""

from prompt_toolkit.styles import Style

COMMANDS = ["keys", "scripts", "movies", "config", "clear", "exit", "help"]

SUBCOMMANDS = {
    "keys": ["list", "create", "delete"],
    "scripts": ["list", "push", "pull", "delete"],
    "movies": ["list", "delete"],
    "config": ["set-token", "show"],
}

STYLE = Style.from_dict(
    {
        "prompt": "#E50914 bold",
        "command": "#0088ff bold",
    }
)

REEL_RED = "\033[38;2;229;9;20m"
GREEN = "\033[32m"
RESET = "\033[0m"

LOGO = f"""{REEL_RED}
 ██████╗ ███████╗███████╗██╗     ██████╗  ██████╗ ██╗  ██╗
 ██╔══██╗██╔════╝██╔════╝██║     ██╔══██╗██╔═══██╗╚██╗██╔╝
 ██████╔╝█████╗  █████╗  ██║     ██████╔╝██║   ██║ ╚███╔╝
 ██╔══██╗██╔══╝  ██╔══╝  ██║     ██╔══██╗██║   ██║ ██╔██╗
 ██║  ██║███████╗███████╗███████╗██████╔╝╚██████╔╝██╔╝ ██╗
 ╚═╝  ╚═╝╚══════╝╚══════╝╚══════╝╚═════╝  ╚═════╝ ╚═╝  ╚═╝
{RESET}"""

WELCOME_TITLE = "Reelbox Admin CLI"
WELCOME_HELP = "Type 'help' for commands or 'exit' to quit.\n"

PROMPT_TEXT = "reelbox> "

HELP_TEXT = """Available commands:
  keys list                           List premium keys
  keys create <days> <owner>          Issue a premium key valid for <days>
  keys delete <key>                   Delete a premium key (revokes its sessions)
  scripts list                        List stored scripts
  scripts push <name> <file>          Upload a local text file as script <name>
  scripts pull <name> [output_file]   Print a script, or save it to output_file
  scripts delete <name>               Delete a script
  movies list [page]                  Show a page of the catalog
  movies delete <slug>                Delete a movie
  config set-token <token>            Store the portal admin token
  config show                         Show the portal address in use
  clear                               Clear screen and redisplay welcome message
  help                                Show this help
  exit                                Exit REPL

Examples:
  config set-token s3cret
  keys create 30 alice
  scripts push player.js ./player.js
  movies list 2"""
