#!/usr/bin/env python3
import os
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional

from ..config import Config
from .jobs import JobTable


@dataclass
class ShellState:
    env: Dict[str, str] = field(default_factory=dict)
    jobs: JobTable = field(default_factory=JobTable)
    exit_requested: bool = False
    prompt_template: str = Config.DEFAULT_PROMPT
    history: List[str] = field(default_factory=list)

    @classmethod
    def from_environment(cls, environ: Optional[Mapping[str, str]] = None) -> "ShellState":
        env = dict(os.environ if environ is None else environ)
        env.setdefault("PATH", Config.DEFAULT_PATH)
        env.setdefault("PS1", Config.DEFAULT_PROMPT)
        return cls(env=env, prompt_template=env["PS1"])

    @property
    def prompt(self) -> str:
        return self.env.get("PS1", self.prompt_template)

    def get_var(self, name: str) -> Optional[str]:
        return self.env.get(name)

    def set_var(self, name: str, value: str, export: bool = False) -> None:
        self.env[name] = value
        if export:
            os.environ[name] = value

    def export_var(self, name: str) -> bool:
        """Copy a known shell variable into the process environment."""
        if name not in self.env:
            return False
        os.environ[name] = self.env[name]
        return True

    def unset_var(self, name: str) -> None:
        self.env.pop(name, None)
        os.environ.pop(name, None)

    def request_exit(self) -> None:
        self.exit_requested = True
