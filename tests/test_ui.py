import io
import signal
import unittest
from unittest import mock

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from aish.config import Config
from aish.core.jobs import Job
from aish.ui import PanelTheme, UIManager
from aish.ui.highlighter import OutputHighlighter, build_theme, create_console


class TestUIManager(unittest.TestCase):
    def setUp(self):
        self.out = io.StringIO()
        self.err = io.StringIO()
        self.ui = UIManager(
            Console(file=self.out, width=200), Console(file=self.err, width=200)
        )
        self.job = Job(display_id=2, process=mock.Mock(pid=4321), command="sleep 9")

    def test_plain_error(self):
        with mock.patch.object(Config, "ERROR_PANELS", False):
            self.ui.display_error("boom [bold]x[/bold]", "script.aish:4")
        self.assertEqual("aish: script.aish:4: boom [bold]x[/bold]\n", self.err.getvalue())
        self.assertEqual("", self.out.getvalue())

    def test_panel_error(self):
        with mock.patch.object(Config, "ERROR_PANELS", True):
            self.ui.display_error("boom", "script.aish:4")
        rendered = self.err.getvalue()
        self.assertIn("Location: script.aish:4", rendered)
        self.assertIn("Message: boom", rendered)

    def test_exit_status(self):
        self.ui.display_exit_status(2)
        self.ui.display_exit_status(-signal.SIGTERM)
        lines = self.err.getvalue().splitlines()
        self.assertEqual(
            ["Command exited with code 2", "Command terminated by signal SIGTERM"],
            lines,
        )

    def test_job_notices(self):
        self.ui.display_job_started(self.job)
        self.ui.display_job_done(self.job)
        self.assertEqual("[2] 4321\n[4321] Done\n", self.out.getvalue())

    def test_interrupt_and_goodbye(self):
        self.ui.display_interrupt()
        self.ui.display_goodbye()
        self.assertEqual("^C\n", self.err.getvalue())
        self.assertEqual("exit\n", self.out.getvalue())

    def test_welcome_respects_banner_setting(self):
        with mock.patch.object(Config, "SHOW_STARTUP_BANNER", False):
            self.ui.show_welcome()
        self.assertEqual("", self.out.getvalue())

        with mock.patch.object(Config, "SHOW_STARTUP_BANNER", True), \
                mock.patch.object(Config, "WELCOME_MESSAGE", "hello there"):
            self.ui.show_welcome()
        self.assertIn("hello there", self.out.getvalue())


class TestPanelTheme(unittest.TestCase):
    def test_unknown_style_falls_back_to_default(self):
        default = PanelTheme.get_style("default")
        self.assertEqual(default, PanelTheme.get_style("no-such-style"))

    def test_list_padding_becomes_tuple(self):
        styles = {"default": {"border_style": "red", "padding": [1, 2]}}
        with mock.patch.object(Config, "PANEL_STYLES", styles):
            style = PanelTheme.get_style("default")
        self.assertEqual((1, 2), style.padding)
        self.assertEqual("red", style.border_style)
        self.assertEqual("left", style.title_align)

    def test_build_applies_overrides(self):
        panel = PanelTheme.build(Text("x"), title="t", style="error", border_style="green")
        self.assertIsInstance(panel, Panel)
        self.assertEqual("green", panel.border_style)


class TestHighlighter(unittest.TestCase):
    def spans(self, highlighter, message):
        text = Text(message)
        highlighter.highlight(text)
        return [(span.start, span.end, span.style) for span in text.spans]

    def test_job_notice(self):
        self.assertEqual(
            [(0, 3, "aish.job")], self.spans(OutputHighlighter(), "[1] 4321")
        )

    def test_absolute_path(self):
        self.assertEqual(
            [(3, 9, "aish.path")], self.spans(OutputHighlighter(), "cd /tmp/x")
        )

    def test_invalid_patterns_are_skipped(self):
        highlighter = OutputHighlighter(["(", r"(?P<num>\d+)"])
        self.assertEqual([r"(?P<num>\d+)"], highlighter.highlights)
        self.assertEqual([(4, 8, "aish.num")], self.spans(highlighter, "[1] 4321")[1:])

    def test_theme_skips_bad_styles(self):
        theme = build_theme({"aish.job": "bold cyan", "aish.bad": "no-such-colour"})
        self.assertIn("aish.job", theme.styles)
        self.assertNotIn("aish.bad", theme.styles)

    def test_console_uses_highlighter_when_enabled(self):
        with mock.patch.object(Config, "is_highlighter_enabled", return_value=True):
            console = create_console()
        self.assertIsInstance(console.highlighter, OutputHighlighter)
        self.assertEqual("bold cyan", str(console.get_style("aish.job")))

        with mock.patch.object(Config, "is_highlighter_enabled", return_value=False):
            console = create_console(stderr=True)
        self.assertNotIsInstance(console.highlighter, OutputHighlighter)
        self.assertTrue(console.stderr)


if __name__ == "__main__":
    unittest.main()
