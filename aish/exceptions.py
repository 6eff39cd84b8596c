#!/usr/bin/env python3


class AishError(Exception):
    """Base class for errors reported to the user for a single line."""


class ParseError(AishError):
    pass


class UnexpectedToken(ParseError):
    def __init__(self, token: str) -> None:
        self.token = token
        super().__init__(f"Unexpected token: {token}")


class MissingFilename(ParseError):
    def __init__(self) -> None:
        super().__init__("Missing filename for redirection")


class EmptyCommand(ParseError):
    def __init__(self) -> None:
        super().__init__("Empty command")


class InvalidSyntax(ParseError):
    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"Invalid syntax: {message}")


class ExecutionError(AishError):
    @classmethod
    def from_os_error(cls, name: str, error: OSError) -> "ExecutionError":
        reason = error.strerror or str(error)
        if error.filename:
            return cls(f"{name}: {error.filename}: {reason}")
        return cls(f"{name}: {reason}")


class CommandNotFound(ExecutionError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"{name}: command not found")


class RedirectionError(ExecutionError):
    def __init__(self, filename: str, error: OSError) -> None:
        self.filename = filename
        super().__init__(f"{filename}: {error.strerror or error}")
