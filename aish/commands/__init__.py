#!/usr/bin/env python3
from .builtins import BUILTINS, Handler, is_builtin, lookup
from .executor import ShellCommandExecutor

__all__ = ["BUILTINS", "Handler", "ShellCommandExecutor", "is_builtin", "lookup"]
