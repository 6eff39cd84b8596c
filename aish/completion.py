#!/usr/bin/env python3
import os
from typing import Dict, Iterable, List, Optional, Tuple

from prompt_toolkit.completion import (
    CompleteEvent,
    Completer,
    Completion,
    FuzzyWordCompleter,
    PathCompleter,
)
from prompt_toolkit.document import Document

from .commands.builtins import BUILTINS, DESCRIPTIONS
from .core.state import ShellState


class ShellCompleter(Completer):
    """Command names in the first word, file paths everywhere else."""

    def __init__(self, state: ShellState) -> None:
        self.state = state
        self.path_completer = PathCompleter(expanduser=True)
        self._commands_cache: Optional[Tuple[str, List[str]]] = None

    def get_completions(
        self, document: Document, complete_event: CompleteEvent
    ) -> Iterable[Completion]:
        text = document.text_before_cursor
        words = text.split()
        completing_command = not words or (len(words) == 1 and not text.endswith(" "))

        if completing_command:
            completer = FuzzyWordCompleter(
                words=self._load_commands(), meta_dict=self._command_meta()
            )
            yield from completer.get_completions(document, complete_event)
            return

        current_arg = "" if text.endswith(" ") else words[-1]
        arg_document = Document(current_arg, len(current_arg))
        yield from self.path_completer.get_completions(arg_document, complete_event)

    @staticmethod
    def _command_meta() -> Dict[str, str]:
        return {name: description for name, (_, description) in DESCRIPTIONS.items()}

    def _load_commands(self) -> List[str]:
        search_path = self.state.env.get("PATH", "")
        if self._commands_cache and self._commands_cache[0] == search_path:
            return self._commands_cache[1]

        commands = set(BUILTINS)
        for directory in search_path.split(os.pathsep):
            if not directory:
                continue
            try:
                for entry in os.scandir(directory):
                    try:
                        if entry.is_file() and os.access(entry.path, os.X_OK):
                            commands.add(entry.name)
                    except OSError:
                        continue
            except OSError:
                continue

        result = sorted(commands)
        self._commands_cache = (search_path, result)
        return result
