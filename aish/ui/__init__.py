#!/usr/bin/env python3
from .highlighter import create_console
from .manager import UIManager
from .theme import PanelTheme

__all__ = ["UIManager", "PanelTheme", "create_console"]
