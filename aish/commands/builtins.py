#!/usr/bin/env python3
import os
import re
import shutil
import sys
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from rich.console import Console
from rich.table import Table

from ..core.state import ShellState
from ..logger import get_logger
from ..ui.theme import PanelTheme

logger = get_logger(__name__)

VAR_NAME_RX = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

BuiltinFunc = Callable[[List[str], ShellState], None]

BUILTINS: Dict[str, BuiltinFunc] = {}
DESCRIPTIONS: Dict[str, Tuple[str, str]] = {}

FEATURES = [
    "I/O redirection (>, <, >>)",
    "Pipes (|)",
    "Background processes (&)",
    "Variable expansion ($VAR, ${VAR})",
    "Command history (arrow keys)",
    "Tab completion",
]

ECHO_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "\\": "\\",
    '"': '"',
    "'": "'",
}


def builtin(name: str, usage: str = "", description: str = ""):
    """Decorator to register builtins"""

    def wrapper(func: BuiltinFunc) -> BuiltinFunc:
        BUILTINS[name] = func
        DESCRIPTIONS[name] = (usage or name, description)
        return func

    return wrapper


class Handler:
    """A builtin bound to its arguments, run later against a ShellState."""

    def __init__(self, name: str, func: BuiltinFunc, args: Sequence[str]) -> None:
        self.name = name
        self.func = func
        self.args = list(args)

    def __call__(self, state: ShellState) -> None:
        logger.debug("builtin %s %s", self.name, self.args)
        self.func(list(self.args), state)

    def __repr__(self) -> str:
        return f"Handler({self.name!r}, {self.args!r})"


def is_builtin(name: str) -> bool:
    return name in BUILTINS


def lookup(name: str, args: Sequence[str] = ()) -> Optional[Handler]:
    func = BUILTINS.get(name)
    if func is None:
        return None
    return Handler(name, func, args)


def _home(state: ShellState) -> str:
    return state.env.get("HOME") or "/"


def resolve_cd_target(path: str, state: ShellState) -> str:
    if not path or path == "~":
        return _home(state)
    if path.startswith("~/"):
        return os.path.join(_home(state), path[2:])
    return path


@builtin("exit", "exit [n]", "Exit the shell with optional exit code")
def builtin_exit(args, state):
    if not args:
        status = 0
    else:
        try:
            status = int(args[0])
        except ValueError:
            status = 1

    state.request_exit()

    if status != 0:
        # a non-zero exit leaves immediately, without reaping jobs
        sys.stdout.flush()
        sys.stderr.flush()
        os._exit(status)


@builtin("cd", "cd [dir]", "Change directory to dir (or home if no dir)")
def builtin_cd(args, state):
    path = args[0] if args else ""
    announce = False

    if path == "-":
        previous = state.env.get("OLDPWD")
        if not previous:
            print("cd: OLDPWD not set", file=sys.stderr)
            return
        target = previous
        announce = True
    else:
        target = resolve_cd_target(path, state)

    try:
        old_dir = os.getcwd()
    except OSError:
        old_dir = state.env.get("PWD", "")

    os.chdir(target)

    new_dir = os.getcwd()
    if old_dir:
        state.set_var("OLDPWD", old_dir)
    state.set_var("PWD", new_dir)

    if announce:
        print(new_dir)


@builtin("pwd", "pwd", "Print current working directory")
def builtin_pwd(args, state):
    print(os.getcwd())


def interpret_escapes(text: str) -> str:
    result = []
    index = 0
    length = len(text)

    while index < length:
        char = text[index]
        if char != "\\":
            result.append(char)
            index += 1
            continue

        if index + 1 >= length:
            result.append("\\")
            break

        following = text[index + 1]
        result.append(ECHO_ESCAPES.get(following, "\\" + following))
        index += 2

    return "".join(result)


@builtin("echo", "echo [args]", "Display arguments")
def builtin_echo(args, state):
    newline = True
    escapes = False

    index = 0
    while index < len(args) and args[index] in ("-n", "-e", "-E"):
        flag = args[index]
        if flag == "-n":
            newline = False
        else:
            escapes = flag == "-e"
        index += 1

    words = args[index:]
    if escapes:
        words = [interpret_escapes(word) for word in words]

    sys.stdout.write(" ".join(words) + ("\n" if newline else ""))
    sys.stdout.flush()


@builtin("export", "export VAR=value", "Set environment variable")
def builtin_export(args, state):
    if not args:
        builtin_env(args, state)
        return

    for arg in args:
        if "=" in arg:
            name, value = arg.split("=", 1)
            if not VAR_NAME_RX.match(name):
                print(f"export: `{arg}': not a valid identifier", file=sys.stderr)
                continue
            state.set_var(name, value, export=True)
        elif not state.export_var(arg):
            print(f"export: {arg}: not found", file=sys.stderr)


@builtin("unset", "unset VAR", "Unset environment variable")
def builtin_unset(args, state):
    for name in args:
        state.unset_var(name)


@builtin("env", "env", "Display environment variables")
def builtin_env(args, state):
    for name in sorted(state.env):
        print(f"{name}={state.env[name]}")


@builtin("type", "type command", "Display information about command type")
def builtin_type(args, state):
    if not args:
        print("type: usage: type name [name ...]", file=sys.stderr)
        return

    search_path = state.env.get("PATH", "")
    for name in args:
        if is_builtin(name):
            print(f"{name} is a shell builtin")
            continue

        location = shutil.which(name, path=search_path)
        if location:
            print(f"{name} is {location}")
        else:
            print(f"{name}: not found")


@builtin("help", "help", "Display this help message")
def builtin_help(args, state):
    table = Table(show_header=True, box=None, padding=(0, 2))
    table.add_column("Command", style="cyan", no_wrap=True)
    table.add_column("Description")
    for name in BUILTINS:
        usage, description = DESCRIPTIONS[name]
        table.add_row(usage, description)

    features = Table(show_header=False, box=None, padding=(0, 2))
    features.add_column("Feature")
    for feature in FEATURES:
        features.add_row(f"- {feature}")

    console = Console()
    console.print(PanelTheme.build(table, title="Built-in commands", style="info"))
    console.print(PanelTheme.build(features, title="Features", style="default"))


@builtin("history", "history [n]", "Display command history")
def builtin_history(args, state):
    entries = list(enumerate(state.history, start=1))
    if args:
        try:
            count = int(args[0])
        except ValueError:
            print(f"history: {args[0]}: numeric argument required", file=sys.stderr)
            return
        entries = entries[-count:] if count > 0 else []

    width = len(str(len(state.history))) if state.history else 1
    for number, line in entries:
        print(f"{number:>{width}}  {line}")
