#!/usr/bin/env python3
from typing import List, Optional

OPERATORS = frozenset({"|", "&", "<", ">", ">>"})

OPERATOR_CHARS = "|&<>"
QUOTE_CHARS = "\"'"
WHITESPACE = " \t"


def is_operator(token: str) -> bool:
    return token in OPERATORS


def tokenize(line: str) -> List[str]:
    """
    Split ``line`` into word and operator tokens.

    Quotes group text and are dropped from the output; inside a quoted region
    the other quote character and backslashes are literal. Outside quotes a
    backslash copies the next character literally. An unterminated quote runs
    to the end of the input.
    """
    tokens: List[str] = []
    current: List[str] = []
    quote_char: Optional[str] = None

    def flush() -> None:
        if current:
            tokens.append("".join(current))
            current.clear()

    index = 0
    length = len(line)
    while index < length:
        char = line[index]

        if quote_char is not None:
            if char == quote_char:
                quote_char = None
            else:
                current.append(char)
        elif char in QUOTE_CHARS:
            quote_char = char
        elif char in WHITESPACE:
            flush()
        elif char in OPERATOR_CHARS:
            flush()
            if char == ">" and index + 1 < length and line[index + 1] == ">":
                tokens.append(">>")
                index += 1
            else:
                tokens.append(char)
        elif char == "\\":
            if index + 1 < length:
                current.append(line[index + 1])
                index += 1
        else:
            current.append(char)

        index += 1

    flush()
    return tokens
