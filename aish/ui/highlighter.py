#!/usr/bin/env python3
import re
from typing import Dict, Iterable, List, Optional

from rich.console import Console
from rich.errors import StyleSyntaxError
from rich.highlighter import RegexHighlighter
from rich.style import Style
from rich.theme import Theme

from ..config import Config
from ..logger import get_logger

logger = get_logger(__name__)


class OutputHighlighter(RegexHighlighter):
    """
    Colours job notices and absolute paths in shell messages.

    Each pattern names its matches with a group; group ``job`` is drawn with
    the theme style ``aish.job``.
    """

    base_style = "aish."
    highlights = [
        r"(?P<job>^\[\d+\])",
        r"(?P<path>(?<![\w.])/[\w./-]+)",
    ]

    def __init__(self, patterns: Optional[Iterable[str]] = None) -> None:
        if patterns is not None:
            self.highlights = self._compilable(patterns)

    @staticmethod
    def _compilable(patterns: Iterable[str]) -> List[str]:
        valid = []
        for pattern in patterns:
            try:
                re.compile(pattern)
            except (re.error, TypeError):
                logger.debug("skipping highlight pattern %r", pattern)
                continue
            valid.append(pattern)
        return valid


def build_theme(styles: Dict[str, str]) -> Theme:
    parsed = {}
    for name, definition in styles.items():
        try:
            parsed[name] = Style.parse(definition)
        except (StyleSyntaxError, TypeError):
            logger.debug("skipping highlight style %s=%r", name, definition)
    return Theme(parsed)


def create_console(stderr: bool = False) -> Console:
    if not Config.is_highlighter_enabled():
        return Console(stderr=stderr)

    return Console(
        stderr=stderr,
        highlighter=OutputHighlighter(Config.HIGHLIGHTER_PATTERNS),
        theme=build_theme(Config.HIGHLIGHTER_STYLES),
    )
