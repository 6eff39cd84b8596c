#!/usr/bin/env python3
import signal
from typing import Optional

from rich.console import Console
from rich.text import Text
from rich.tree import Tree

from ..config import Config
from .theme import PanelTheme


class UIManager:
    """
    Everything the shell itself says to the user.

    Job notices go to ``console`` (stdout); errors, warnings and interrupt
    notices go to ``error_console`` (stderr). Messages are rendered as
    ``Text`` so command text and file names are never read as rich markup.
    """

    def __init__(self, console: Console, error_console: Optional[Console] = None) -> None:
        self.console = console
        self.error_console = error_console or Console(stderr=True)

    def show_welcome(self) -> None:
        if not Config.SHOW_STARTUP_BANNER:
            return

        self.console.print(
            PanelTheme.build(Text(Config.WELCOME_MESSAGE), title="aish", style="info")
        )

    def display_error(self, error_msg: str, context: Optional[str] = None) -> None:
        location = f"{context}: " if context else ""

        if Config.ERROR_PANELS:
            tree = Tree(Text("Error", style="bold red"))
            if context:
                tree.add(Text(f"Location: {context}", style="cyan"))
            tree.add(Text(f"Message: {error_msg}", style="red"))
            self.error_console.print(PanelTheme.build(tree, title="aish", style="error"))
            return

        self._emit(self.error_console, f"aish: {location}{error_msg}", "red")

    def display_warning(self, message: str) -> None:
        self._emit(self.error_console, message, "yellow")

    def display_exit_status(self, returncode: int) -> None:
        if returncode > 0:
            self.display_warning(f"Command exited with code {returncode}")
            return

        try:
            signal_name = signal.Signals(-returncode).name
        except ValueError:
            signal_name = str(-returncode)
        self.display_warning(f"Command terminated by signal {signal_name}")

    def display_job_started(self, job) -> None:
        self._emit(self.console, f"[{job.display_id}] {job.pid}", "green")

    def display_job_done(self, job) -> None:
        self._emit(self.console, f"[{job.pid}] Done", "green")

    def display_interrupt(self) -> None:
        self._emit(self.error_console, "^C", "yellow")

    def display_goodbye(self) -> None:
        self._emit(self.console, "exit", "dim")

    @staticmethod
    def _emit(console: Console, message: str, style: str) -> None:
        console.print(console.highlighter(Text(message, style=style)))
