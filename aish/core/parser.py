#!/usr/bin/env python3
import os
from dataclasses import dataclass
from enum import Enum
from typing import List, Mapping, Optional, Sequence, Tuple, Union

from ..exceptions import EmptyCommand, InvalidSyntax, MissingFilename, UnexpectedToken
from .expander import expand
from .tokenizer import is_operator, tokenize


class RedirectionKind(Enum):
    INPUT = "<"
    OUTPUT = ">"
    APPEND = ">>"

    @property
    def is_output(self) -> bool:
        return self is not RedirectionKind.INPUT


REDIRECTION_OPERATORS = {kind.value: kind for kind in RedirectionKind}


@dataclass(frozen=True)
class Redirection:
    kind: RedirectionKind
    filename: str


@dataclass(frozen=True)
class SimpleCommand:
    args: Tuple[str, ...]
    redirections: Tuple[Redirection, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "args", tuple(self.args))
        object.__setattr__(self, "redirections", tuple(self.redirections))

    @property
    def name(self) -> str:
        return self.args[0]


@dataclass(frozen=True)
class Simple:
    command: SimpleCommand


@dataclass(frozen=True)
class Background:
    command: SimpleCommand


@dataclass(frozen=True)
class Pipeline:
    commands: Tuple[SimpleCommand, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "commands", tuple(self.commands))
        if len(self.commands) < 2:
            raise ValueError("a pipeline needs at least two commands")


CommandLine = Union[Simple, Pipeline, Background]


def parse(line: str, env: Optional[Mapping[str, str]] = None) -> CommandLine:
    """
    Parse one line of input.

    ``env`` supplies the values for variable expansion; it defaults to the
    process environment. Raises a :class:`~aish.exceptions.ParseError`
    subclass on malformed input.
    """
    if env is None:
        env = os.environ

    tokens = tokenize(line)
    if not tokens:
        raise EmptyCommand()

    is_background = tokens[-1] == "&"
    if is_background:
        tokens = tokens[:-1]

    if "|" in tokens:
        if is_background:
            raise InvalidSyntax("background pipelines not supported")
        return Pipeline(parse_pipeline(tokens, env))

    command = parse_simple_command(tokens, env)
    if is_background:
        return Background(command)
    return Simple(command)


def parse_pipeline(tokens: Sequence[str], env: Mapping[str, str]) -> List[SimpleCommand]:
    commands: List[SimpleCommand] = []
    current: List[str] = []

    for token in tokens:
        if token == "|":
            if not current:
                raise InvalidSyntax("empty command in pipeline")
            commands.append(SimpleCommand(current))
            current = []
        else:
            # stage redirections are not parsed; '<', '>' and '&' stay arguments
            current.append(expand(token, env))

    if not current:
        raise InvalidSyntax("pipeline ends with |")

    commands.append(SimpleCommand(current))
    return commands


def parse_simple_command(tokens: Sequence[str], env: Mapping[str, str]) -> SimpleCommand:
    args: List[str] = []
    redirections: List[Redirection] = []

    position = 0
    while position < len(tokens):
        token = tokens[position]

        if token in REDIRECTION_OPERATORS:
            position += 1
            if position >= len(tokens):
                raise MissingFilename()
            filename = tokens[position]
            if is_operator(filename):
                raise UnexpectedToken(filename)
            redirections.append(
                Redirection(REDIRECTION_OPERATORS[token], expand(filename, env))
            )
        else:
            args.append(expand(token, env))

        position += 1

    if not args:
        raise EmptyCommand()

    return SimpleCommand(args, redirections)
