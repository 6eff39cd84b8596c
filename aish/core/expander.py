#!/usr/bin/env python3
from typing import Mapping


def _is_name_char(char: str) -> bool:
    return char.isalnum() or char == "_"


def expand(token: str, env: Mapping[str, str]) -> str:
    """
    Replace ``$NAME`` and ``${NAME}`` references with values from ``env``.

    Unset names expand to the empty string. A ``$`` that is not followed by a
    name character or ``{`` is kept as is. ``${`` without a closing brace
    reads the name to the end of the token.
    """
    result = []
    index = 0
    length = len(token)

    while index < length:
        char = token[index]
        if char != "$":
            result.append(char)
            index += 1
            continue

        index += 1

        if index < length and token[index] == "{":
            end = token.find("}", index + 1)
            if end == -1:
                name = token[index + 1 :]
                index = length
            else:
                name = token[index + 1 : end]
                index = end + 1
            result.append(env.get(name, ""))
            continue

        start = index
        while index < length and _is_name_char(token[index]):
            index += 1

        name = token[start:index]
        if name:
            result.append(env.get(name, ""))
        else:
            result.append("$")

    return "".join(result)
