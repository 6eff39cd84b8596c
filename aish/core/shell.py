#!/usr/bin/env python3
from typing import Iterable, Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.history import FileHistory, History, InMemoryHistory
from prompt_toolkit.lexers import PygmentsLexer
from pygments.lexers import find_lexer_class_by_name

from ..commands.executor import ShellCommandExecutor
from ..completion import ShellCompleter
from ..config import Config
from ..exceptions import ExecutionError, ParseError
from ..logger import get_logger
from ..ui.highlighter import create_console
from ..ui.manager import UIManager
from .parser import parse
from .state import ShellState

logger = get_logger(__name__)


class Shell:
    def __init__(
        self, state: Optional[ShellState] = None, ui: Optional[UIManager] = None
    ) -> None:
        self.state = state if state is not None else ShellState.from_environment()
        self.ui = ui or UIManager(create_console(), create_console(stderr=True))
        self.command_executor = ShellCommandExecutor(self.ui)
        self.session: Optional[PromptSession] = None

    def execute_line(self, line: str) -> None:
        command_line = parse(line, self.state.env)
        self.command_executor.execute(command_line, self.state)

    def run_line(self, line: str, context: Optional[str] = None) -> bool:
        try:
            self.execute_line(line)
        except ParseError as error:
            self.ui.display_error(f"Parse error: {error}", context)
            return False
        except ExecutionError as error:
            self.ui.display_error(str(error), context)
            return False
        return True

    def run_lines(self, lines: Iterable[str], source: str) -> int:
        """Run script lines best-effort. Returns the number of failed lines."""
        failures = 0

        for line_number, raw_line in enumerate(lines, start=1):
            if self.state.exit_requested:
                break

            self.state.jobs.poll(self.ui)

            line = raw_line.strip()
            if not line or line.startswith("#"):
                continue

            if not self.run_line(line, context=f"{source}:{line_number}"):
                failures += 1

        return failures

    def run_command(self, command: str) -> int:
        try:
            succeeded = self.run_line(command)
        finally:
            self.shutdown()
        return 0 if succeeded else 1

    def run_file(self, filename: str) -> int:
        try:
            with open(filename, "r", encoding="utf-8") as script:
                lines = script.read().splitlines()
        except OSError as error:
            self.ui.display_error(f"{filename}: {error.strerror or error}")
            return 1
        except UnicodeDecodeError as error:
            self.ui.display_error(
                f"{filename}: not a UTF-8 text file (byte {error.start})"
            )
            return 1

        try:
            self.run_lines(lines, filename)
        finally:
            self.shutdown()
        return 0

    def run_interactive(self) -> int:
        self.ui.show_welcome()
        self.session = self._create_session()

        try:
            while not self.state.exit_requested:
                self.state.jobs.poll(self.ui)

                try:
                    user_input = self.session.prompt(self.state.prompt)
                except KeyboardInterrupt:
                    self.ui.display_interrupt()
                    continue
                except EOFError:
                    self.ui.display_goodbye()
                    break

                line = user_input.strip()
                if not line:
                    continue

                self.state.history.append(line)
                self.run_line(line)
        finally:
            self.shutdown()

        return 0

    def shutdown(self) -> None:
        drained = self.state.jobs.shutdown()
        if drained:
            logger.debug("terminated %d background job(s)", drained)

    def _create_history(self) -> History:
        if not Config.HISTORY_ENABLED:
            return InMemoryHistory()

        Config.ensure_directories()
        history = FileHistory(str(Config.HISTORY_FILE))
        try:
            # load_history_strings() yields newest first
            self.state.history[:0] = list(reversed(list(history.load_history_strings())))
        except OSError as error:
            logger.debug("could not read history %s: %s", Config.HISTORY_FILE, error)
        return history

    def _create_session(self) -> PromptSession:
        return PromptSession(
            history=self._create_history(),
            completer=ShellCompleter(self.state),
            complete_while_typing=Config.COMPLETION_AUTO_POPUP,
            lexer=self._create_prompt_lexer(),
        )

    def _create_prompt_lexer(self) -> Optional[PygmentsLexer]:
        choice = Config.get_prompt_lexer_choice().strip()
        if not choice or choice.lower() == "auto":
            return None

        try:
            lexer_cls = find_lexer_class_by_name(choice)
        except ValueError:
            logger.debug("unknown prompt lexer %r", choice)
            return None

        return PygmentsLexer(lexer_cls)
