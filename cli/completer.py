"""Custom completer for the Reelbox CLI."""

from typing import Iterable

from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.document import Document

from cli.constants import COMMANDS, SUBCOMMANDS


class ReelboxCompleter(Completer):
    """
    Completes the command group for the first token and the subcommand
    for the second. Arguments are free text and get no completion.
    """

    def get_completions(
        self, document: Document, complete_event
    ) -> Iterable[Completion]:
        text = document.text_before_cursor
        tokens = text.split()

        is_typing_new_token = text.endswith(" ") or not tokens

        if not tokens or (len(tokens) == 1 and not is_typing_new_token):
            yield from self._complete(COMMANDS, tokens[0] if tokens else "")
            return

        group = tokens[0].lower()
        if group not in SUBCOMMANDS:
            return

        if len(tokens) == 1 and is_typing_new_token:
            yield from self._complete(SUBCOMMANDS[group], "")
        elif len(tokens) == 2 and not is_typing_new_token:
            yield from self._complete(SUBCOMMANDS[group], tokens[1])

    def _complete(self, candidates, partial: str) -> Iterable[Completion]:
        """Complete words from candidates matching the partial input."""
        partial_lower = partial.lower()
        for word in candidates:
            if word.startswith(partial_lower):
                yield Completion(word, start_position=-len(partial))
