"""CLI entry point."""

import os
import sys
from typing import List, Optional

from common.logging_config import setup_logging
from cli.commands import dispatch_command
from cli.constants import HELP_TEXT
from cli.parser import ParseError, parse_command
from cli.repl import repl_loop


def run_once(argv: List[str]) -> int:
    """
    Execute a single command given as argv tokens.

    Returns:
        Process exit code: 0 on success, 1 on an error result, 2 on bad usage
    """
    try:
        cmd_obj = parse_command(argv)
    except ParseError as e:
        print(f"Error: {e}", file=sys.stderr)
        print(HELP_TEXT, file=sys.stderr)
        return 2

    result = dispatch_command(cmd_obj)
    print(result)
    return 1 if result.startswith("Error") else 0


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for CLI."""
    args = list(sys.argv[1:] if argv is None else argv)
    log_level = 'DEBUG' if '--debug' in args else os.getenv('LOG_LEVEL', 'WARNING')

    logger = setup_logging('cli', log_level=log_level)

    if '--debug' in args:
        logger.info("Debug logging enabled")
        args.remove('--debug')

    if args in (['help'], ['--help'], ['-h']):
        print(HELP_TEXT)
        return 0

    if args:
        return run_once(args)

    logger.info("CLI starting...")
    try:
        repl_loop()
    except Exception as e:
        logger.error(f"CLI error: {e}", exc_info=True)
        raise
    finally:
        logger.info("CLI exiting")
    return 0


if __name__ == "__main__":
    sys.exit(main())
