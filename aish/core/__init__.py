#!/usr/bin/env python3
from .expander import expand
from .jobs import Job, JobTable
from .parser import (
    Background,
    CommandLine,
    Pipeline,
    Redirection,
    RedirectionKind,
    Simple,
    SimpleCommand,
    parse,
)
from .state import ShellState
from .tokenizer import tokenize

__all__ = [
    "Background",
    "CommandLine",
    "Job",
    "JobTable",
    "Pipeline",
    "Redirection",
    "RedirectionKind",
    "ShellState",
    "Simple",
    "SimpleCommand",
    "expand",
    "parse",
    "tokenize",
]
