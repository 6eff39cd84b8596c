#!/usr/bin/env python3
import json
import os
from pathlib import Path


class Config:
    CONFIG_DIR = Path(os.getenv("AISH_CONFIG_DIR") or Path.home() / ".aish")
    CONFIG_JSON_FILE = CONFIG_DIR / "config.json"
    HISTORY_FILE = CONFIG_DIR / "history"

    WELCOME_MESSAGE = "Welcome to aish\nType 'exit' or use Ctrl+D to quit"
    SHOW_STARTUP_BANNER = True
    LOG_LEVEL = "WARNING"

    # Shell
    DEFAULT_PROMPT = "aish$ "
    DEFAULT_PATH = "/usr/local/bin:/usr/bin:/bin"
    JOB_TERMINATE_TIMEOUT = 1.0
    HISTORY_ENABLED = True

    # Prompt and output
    COMPLETION_AUTO_POPUP = False
    CHOICE_PROMPT_LEXER = "bash"
    ERROR_PANELS = False

    PANEL_STYLES = {
        "default": {"border_style": "#888888", "padding": (0, 1), "title_align": "left"},
        "info": {"border_style": "#8caaee", "padding": (0, 1), "title_align": "left"},
        "error": {"border_style": "#e78284", "padding": (0, 1), "title_align": "left"},
        "warning": {"border_style": "#e5c890", "padding": (0, 1), "title_align": "left"},
    }

    HIGHLIGHTER_ENABLED = True
    # named groups map to the "aish.<group>" styles below
    HIGHLIGHTER_PATTERNS = [
        r"(?P<job>^\[\d+\])",
        r"(?P<path>(?<![\w.])/[\w./-]+)",
    ]
    HIGHLIGHTER_STYLES = {
        "aish.job": "bold cyan",
        "aish.path": "magenta",
    }

    # (section, key) in config.json -> attribute
    JSON_SETTINGS = {
        ("general", "welcome_message"): "WELCOME_MESSAGE",
        ("general", "show_startup_banner"): "SHOW_STARTUP_BANNER",
        ("general", "log_level"): "LOG_LEVEL",
        ("shell", "default_prompt"): "DEFAULT_PROMPT",
        ("shell", "default_path"): "DEFAULT_PATH",
        ("shell", "job_terminate_timeout"): "JOB_TERMINATE_TIMEOUT",
        ("shell", "history_enabled"): "HISTORY_ENABLED",
        ("ui", "completion_auto_popup"): "COMPLETION_AUTO_POPUP",
        ("ui", "choice_prompt_lexer"): "CHOICE_PROMPT_LEXER",
        ("ui", "error_panels"): "ERROR_PANELS",
        ("ui", "highlighter_enabled"): "HIGHLIGHTER_ENABLED",
        ("ui", "highlighter_patterns"): "HIGHLIGHTER_PATTERNS",
    }
    # merged into the defaults instead of replacing them
    JSON_MERGED_SETTINGS = {
        ("ui", "panel_styles"): "PANEL_STYLES",
        ("ui", "highlighter_styles"): "HIGHLIGHTER_STYLES",
    }

    @classmethod
    def ensure_directories(cls) -> None:
        try:
            cls.CONFIG_DIR.mkdir(parents=True, exist_ok=True)
        except OSError:
            return

        if not cls.CONFIG_JSON_FILE.exists():
            cls._write_default_json_config()

    @staticmethod
    def _env_flag(name: str):
        value = os.getenv(name)
        if value is None:
            return None
        value = value.strip().lower()
        if value in {"1", "true", "yes", "on"}:
            return True
        if value in {"0", "false", "no", "off"}:
            return False
        return None

    @classmethod
    def get_prompt_lexer_choice(cls) -> str:
        env_value = os.getenv("AISH_PROMPT_LEXER")
        if env_value is not None:
            return env_value.strip()
        return cls.CHOICE_PROMPT_LEXER or ""

    @classmethod
    def is_highlighter_enabled(cls) -> bool:
        flag = cls._env_flag("AISH_HIGHLIGHTER")
        if flag is not None:
            return flag
        return bool(cls.HIGHLIGHTER_ENABLED)

    @classmethod
    def get_log_level(cls) -> str:
        env_value = os.getenv("AISH_LOG_LEVEL")
        if env_value and env_value.strip():
            return env_value.strip().upper()
        return str(cls.LOG_LEVEL).upper()

    # ------------------------------------------------------------------
    # config.json
    # ------------------------------------------------------------------

    @classmethod
    def _as_json(cls) -> dict:
        data: dict = {}
        for settings in (cls.JSON_SETTINGS, cls.JSON_MERGED_SETTINGS):
            for (section, key), attribute in settings.items():
                data.setdefault(section, {})[key] = getattr(cls, attribute)
        return data

    @classmethod
    def _write_default_json_config(cls) -> None:
        try:
            with cls.CONFIG_JSON_FILE.open("w", encoding="utf-8") as f:
                json.dump(cls._as_json(), f, indent=2, ensure_ascii=False)
        except OSError:
            pass

    @classmethod
    def _load_json_config(cls) -> bool:
        if not cls.CONFIG_JSON_FILE.exists():
            return False

        try:
            with cls.CONFIG_JSON_FILE.open("r", encoding="utf-8") as f:
                config_data = json.load(f)
        except (ValueError, OSError):
            return False

        if not isinstance(config_data, dict):
            return False

        missing = object()

        def get_nested(data, *keys, default=None):
            current = data
            for key in keys:
                if isinstance(current, dict) and key in current:
                    current = current[key]
                else:
                    return default
            return current

        for path, attribute in cls.JSON_SETTINGS.items():
            value = get_nested(config_data, *path, default=missing)
            if value is not missing:
                setattr(cls, attribute, value)

        for path, attribute in cls.JSON_MERGED_SETTINGS.items():
            value = get_nested(config_data, *path)
            if isinstance(value, dict):
                getattr(cls, attribute).update(value)

        try:
            cls.JOB_TERMINATE_TIMEOUT = float(cls.JOB_TERMINATE_TIMEOUT)
        except (TypeError, ValueError):
            cls.JOB_TERMINATE_TIMEOUT = 1.0
        if not isinstance(cls.HIGHLIGHTER_PATTERNS, list):
            cls.HIGHLIGHTER_PATTERNS = []

        return True

    @classmethod
    def reload(cls) -> bool:
        try:
            cls.ensure_directories()
            return cls._load_json_config()
        except (OSError, ValueError, TypeError):
            return False


Config._load_json_config()
