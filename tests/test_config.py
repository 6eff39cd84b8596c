import json
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from aish.config import Config

SAVED = (
    "WELCOME_MESSAGE",
    "SHOW_STARTUP_BANNER",
    "LOG_LEVEL",
    "DEFAULT_PROMPT",
    "DEFAULT_PATH",
    "JOB_TERMINATE_TIMEOUT",
    "HISTORY_ENABLED",
    "COMPLETION_AUTO_POPUP",
    "CHOICE_PROMPT_LEXER",
    "ERROR_PANELS",
    "HIGHLIGHTER_ENABLED",
    "HIGHLIGHTER_PATTERNS",
)


class TestConfig(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmpdir.cleanup)
        self.config_dir = Path(self.tmpdir.name) / "aish"
        self.config_file = self.config_dir / "config.json"

        saved = {name: getattr(Config, name) for name in SAVED}
        saved["PANEL_STYLES"] = dict(Config.PANEL_STYLES)
        saved["HIGHLIGHTER_STYLES"] = dict(Config.HIGHLIGHTER_STYLES)

        def restore():
            for name, value in saved.items():
                setattr(Config, name, value)

        self.addCleanup(restore)

        for name, value in (
            ("CONFIG_DIR", self.config_dir),
            ("CONFIG_JSON_FILE", self.config_file),
            ("HISTORY_FILE", self.config_dir / "history"),
        ):
            patcher = mock.patch.object(Config, name, value)
            patcher.start()
            self.addCleanup(patcher.stop)

    def write_config(self, data):
        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.config_file.write_text(json.dumps(data), encoding="utf-8")

    def test_missing_file_is_not_loaded(self):
        self.assertFalse(Config._load_json_config())

    def test_ensure_directories_writes_defaults(self):
        Config.ensure_directories()
        self.assertTrue(self.config_dir.is_dir())
        data = json.loads(self.config_file.read_text(encoding="utf-8"))
        self.assertEqual(Config.DEFAULT_PROMPT, data["shell"]["default_prompt"])
        self.assertIn("panel_styles", data["ui"])

    def test_json_overrides(self):
        self.write_config(
            {
                "general": {"show_startup_banner": False, "log_level": "debug"},
                "shell": {"default_prompt": "> ", "job_terminate_timeout": "2.5"},
                "ui": {
                    "error_panels": True,
                    "panel_styles": {"info": {"border_style": "blue"}},
                },
            }
        )
        self.assertTrue(Config._load_json_config())
        self.assertFalse(Config.SHOW_STARTUP_BANNER)
        self.assertEqual("> ", Config.DEFAULT_PROMPT)
        self.assertEqual(2.5, Config.JOB_TERMINATE_TIMEOUT)
        self.assertTrue(Config.ERROR_PANELS)
        self.assertEqual({"border_style": "blue"}, Config.PANEL_STYLES["info"])
        self.assertIn("default", Config.PANEL_STYLES)

    def test_partial_config_keeps_defaults(self):
        before = Config.DEFAULT_PATH
        self.write_config({"shell": {"history_enabled": False}})
        self.assertTrue(Config._load_json_config())
        self.assertFalse(Config.HISTORY_ENABLED)
        self.assertEqual(before, Config.DEFAULT_PATH)

    def test_bad_values_fall_back(self):
        self.write_config(
            {
                "shell": {"job_terminate_timeout": "soon"},
                "ui": {"highlighter_patterns": "not-a-list"},
            }
        )
        self.assertTrue(Config._load_json_config())
        self.assertEqual(1.0, Config.JOB_TERMINATE_TIMEOUT)
        self.assertEqual([], Config.HIGHLIGHTER_PATTERNS)

    def test_invalid_json_is_ignored(self):
        self.config_dir.mkdir(parents=True)
        self.config_file.write_text("{not json", encoding="utf-8")
        prompt = Config.DEFAULT_PROMPT
        self.assertFalse(Config._load_json_config())
        self.assertEqual(prompt, Config.DEFAULT_PROMPT)

    def test_non_object_json_is_ignored(self):
        self.write_config(["a", "b"])
        self.assertFalse(Config._load_json_config())

    def test_non_utf8_file_is_ignored(self):
        self.config_dir.mkdir(parents=True)
        self.config_file.write_bytes(b'{"general": {"log_level": "\xff"}}')
        level = Config.LOG_LEVEL
        self.assertFalse(Config._load_json_config())
        self.assertEqual(level, Config.LOG_LEVEL)

    def test_reload(self):
        self.write_config({"general": {"welcome_message": "hello"}})
        self.assertTrue(Config.reload())
        self.assertEqual("hello", Config.WELCOME_MESSAGE)

    def test_prompt_lexer_env_override(self):
        with mock.patch.dict(os.environ, {"AISH_PROMPT_LEXER": " python "}):
            self.assertEqual("python", Config.get_prompt_lexer_choice())
        with mock.patch.dict(os.environ, {}, clear=True), \
                mock.patch.object(Config, "CHOICE_PROMPT_LEXER", "bash"):
            self.assertEqual("bash", Config.get_prompt_lexer_choice())

    def test_highlighter_env_override(self):
        with mock.patch.object(Config, "HIGHLIGHTER_ENABLED", True):
            with mock.patch.dict(os.environ, {"AISH_HIGHLIGHTER": "off"}):
                self.assertFalse(Config.is_highlighter_enabled())
            with mock.patch.dict(os.environ, {"AISH_HIGHLIGHTER": "maybe"}):
                self.assertTrue(Config.is_highlighter_enabled())

    def test_log_level(self):
        with mock.patch.dict(os.environ, {"AISH_LOG_LEVEL": "debug"}):
            self.assertEqual("DEBUG", Config.get_log_level())
        with mock.patch.dict(os.environ, {}, clear=True), \
                mock.patch.object(Config, "LOG_LEVEL", "info"):
            self.assertEqual("INFO", Config.get_log_level())


if __name__ == "__main__":
    unittest.main()
