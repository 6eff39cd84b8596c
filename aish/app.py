#!/usr/bin/env python3
from typing import Optional

from .core.shell import Shell


def main(command: Optional[str] = None, script: Optional[str] = None) -> int:
    shell = Shell()

    if command is not None:
        return shell.run_command(command)

    if script is not None:
        return shell.run_file(script)

    return shell.run_interactive()
