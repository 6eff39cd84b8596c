#!/usr/bin/env python3
from dataclasses import dataclass
from typing import Any, Tuple, Union

from rich.panel import Panel
from rich.text import Text

from ..config import Config

FALLBACK_STYLE = {"border_style": "#888888", "padding": (0, 1), "title_align": "left"}


@dataclass(frozen=True)
class PanelStyle:
    border_style: str
    padding: Union[int, Tuple[int, ...]] = (0, 1)
    title_align: str = "left"


class PanelTheme:
    """Panels styled from ``Config.PANEL_STYLES``; unknown keys fall back to "default"."""

    @staticmethod
    def get_style(name: str) -> PanelStyle:
        settings = dict(FALLBACK_STYLE)
        settings.update(Config.PANEL_STYLES.get("default", {}))
        settings.update(Config.PANEL_STYLES.get(name, {}))
        padding = settings["padding"]
        if isinstance(padding, list):
            padding = tuple(padding)

        return PanelStyle(
            border_style=settings["border_style"],
            padding=padding,
            title_align=settings["title_align"],
        )

    @staticmethod
    def build(
        renderable: Any,
        title: Union[str, Text] = "",
        style: str = "default",
        **overrides: Any,
    ) -> Panel:
        panel_style = PanelTheme.get_style(style)
        options = {
            "border_style": panel_style.border_style,
            "padding": panel_style.padding,
            "title_align": panel_style.title_align,
        }
        options.update(overrides)
        return Panel.fit(renderable, title=title or None, **options)
