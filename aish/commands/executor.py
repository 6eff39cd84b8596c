#!/usr/bin/env python3
import subprocess
from contextlib import ExitStack, redirect_stdout
from typing import IO, List, Optional, Sequence, Tuple

from ..core.parser import (
    Background,
    CommandLine,
    Pipeline,
    Redirection,
    RedirectionKind,
    Simple,
    SimpleCommand,
)
from ..core.state import ShellState
from ..exceptions import CommandNotFound, ExecutionError, RedirectionError
from ..logger import get_logger
from ..ui.manager import UIManager
from . import builtins

logger = get_logger(__name__)

OPEN_MODES = {
    RedirectionKind.INPUT: "rb",
    RedirectionKind.OUTPUT: "wb",
    RedirectionKind.APPEND: "ab",
}


class ShellCommandExecutor:
    """Runs parsed command lines against a ShellState."""

    def __init__(self, ui: UIManager) -> None:
        self.ui = ui

    def execute(self, command_line: CommandLine, state: ShellState) -> None:
        if isinstance(command_line, Pipeline):
            self._execute_pipeline(command_line.commands, state)
        elif isinstance(command_line, Background):
            self._execute_simple(command_line.command, state, background=True)
        elif isinstance(command_line, Simple):
            self._execute_simple(command_line.command, state, background=False)
        else:
            raise TypeError(f"not a command line: {command_line!r}")

    def _execute_simple(
        self, command: SimpleCommand, state: ShellState, background: bool
    ) -> None:
        handler = builtins.lookup(command.name, command.args[1:])
        if handler is not None:
            self._run_builtin(handler, command, state)
            return

        self._execute_external(command, state, background)

    def _run_builtin(
        self, handler: builtins.Handler, command: SimpleCommand, state: ShellState
    ) -> None:
        with ExitStack() as stack:
            output = None
            for redirection in command.redirections:
                if redirection.kind.is_output:
                    output = self._open_redirection(
                        redirection, stack, text=True
                    )
            if output is not None:
                stack.enter_context(redirect_stdout(output))

            try:
                handler(state)
            except OSError as error:
                raise ExecutionError.from_os_error(command.name, error) from error
            except ValueError as error:
                raise ExecutionError(f"{command.name}: {error}") from error

    def _execute_external(
        self, command: SimpleCommand, state: ShellState, background: bool
    ) -> None:
        with ExitStack() as stack:
            stdin, stdout = self._open_redirections(command.redirections, stack)
            if background:
                stdin = subprocess.DEVNULL
            process = self._spawn(command, state, stdin=stdin, stdout=stdout)

        if background:
            job = state.jobs.add(process, " ".join(command.args))
            self.ui.display_job_started(job)
            return

        returncode = self._wait(process)
        if returncode != 0:
            self.ui.display_exit_status(returncode)

    def _execute_pipeline(
        self, commands: Sequence[SimpleCommand], state: ShellState
    ) -> None:
        processes: List[subprocess.Popen] = []
        previous_stdout: Optional[IO[bytes]] = None
        last = len(commands) - 1

        try:
            for index, command in enumerate(commands):
                stdout = subprocess.PIPE if index < last else None
                try:
                    process = self._spawn(
                        command, state, stdin=previous_stdout, stdout=stdout
                    )
                finally:
                    # the read end now belongs to the child
                    if previous_stdout is not None:
                        previous_stdout.close()
                        previous_stdout = None

                logger.debug("pipeline stage %d: %s (pid %d)", index, command.name, process.pid)
                previous_stdout = process.stdout
                processes.append(process)
        except ExecutionError:
            self._abort_pipeline(processes)
            raise

        for process in processes:
            returncode = self._wait(process)
            logger.debug("pipeline stage pid %d exited with %d", process.pid, returncode)

    def _abort_pipeline(self, processes: Sequence[subprocess.Popen]) -> None:
        for process in processes:
            if process.stdout is not None:
                process.stdout.close()
            if process.poll() is None:
                process.kill()
            process.wait()

    def _spawn(
        self,
        command: SimpleCommand,
        state: ShellState,
        stdin=None,
        stdout=None,
    ) -> subprocess.Popen:
        try:
            process = subprocess.Popen(
                list(command.args),
                env=dict(state.env),
                stdin=stdin,
                stdout=stdout,
            )
        except FileNotFoundError as error:
            raise CommandNotFound(command.name) from error
        except OSError as error:
            raise ExecutionError.from_os_error(command.name, error) from error
        except ValueError as error:
            # e.g. a NUL byte in an argument or in the environment
            raise ExecutionError(f"{command.name}: {error}") from error

        logger.debug("spawned %s (pid %d)", command.name, process.pid)
        return process

    def _wait(self, process: subprocess.Popen) -> int:
        # SIGINT reaches the child directly; keep waiting until it is reaped
        while True:
            try:
                return process.wait()
            except KeyboardInterrupt:
                self.ui.display_interrupt()

    def _open_redirections(
        self, redirections: Sequence[Redirection], stack: ExitStack
    ) -> Tuple[Optional[IO], Optional[IO]]:
        stdin = None
        stdout = None

        for redirection in redirections:
            handle = self._open_redirection(redirection, stack)
            if redirection.kind.is_output:
                stdout = handle
            else:
                stdin = handle

        return stdin, stdout

    @staticmethod
    def _open_redirection(
        redirection: Redirection, stack: ExitStack, text: bool = False
    ) -> IO:
        mode = OPEN_MODES[redirection.kind]
        if text:
            mode = mode.replace("b", "")

        try:
            if text:
                handle = open(redirection.filename, mode, encoding="utf-8")
            else:
                handle = open(redirection.filename, mode)
        except OSError as error:
            raise RedirectionError(redirection.filename, error) from error
        except ValueError as error:
            raise ExecutionError(f"{redirection.filename}: {error}") from error

        return stack.enter_context(handle)
