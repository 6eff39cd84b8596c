import os
import stat
import tempfile
import unittest

from prompt_toolkit.completion import CompleteEvent
from prompt_toolkit.document import Document

from aish.completion import ShellCompleter
from aish.core.state import ShellState


class TestShellCompleter(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmpdir.cleanup)
        self.bin_dir = os.path.join(self.tmpdir.name, "bin")
        os.mkdir(self.bin_dir)
        self.make_executable("aish-frobnicate")

        with open(os.path.join(self.bin_dir, "not-executable"), "w") as f:
            f.write("")

        self.state = ShellState(env={"PATH": self.bin_dir})
        self.completer = ShellCompleter(self.state)

    def make_executable(self, name):
        path = os.path.join(self.bin_dir, name)
        with open(path, "w") as f:
            f.write("#!/bin/sh\n")
        os.chmod(path, os.stat(path).st_mode | stat.S_IXUSR)
        return path

    def complete(self, text):
        document = Document(text, len(text))
        return [c.text for c in self.completer.get_completions(document, CompleteEvent())]

    def test_first_word_offers_builtins(self):
        self.assertIn("export", self.complete("expo"))

    def test_first_word_offers_path_executables(self):
        found = self.complete("aish-fro")
        self.assertIn("aish-frobnicate", found)
        self.assertNotIn("not-executable", self.complete("not-exe"))

    def test_command_list_follows_path_changes(self):
        self.assertNotIn("aish-other", self.complete("aish-oth"))
        other_dir = os.path.join(self.tmpdir.name, "other")
        os.mkdir(other_dir)
        path = os.path.join(other_dir, "aish-other")
        with open(path, "w") as f:
            f.write("#!/bin/sh\n")
        os.chmod(path, os.stat(path).st_mode | stat.S_IXUSR)

        self.state.env["PATH"] = os.pathsep.join([self.bin_dir, other_dir])
        self.assertIn("aish-other", self.complete("aish-oth"))

    def test_later_words_complete_paths(self):
        prefix = os.path.join(self.bin_dir, "aish-fr")
        found = self.complete(f"cat {prefix}")
        self.assertIn("obnicate", found)

    def test_missing_path_entries_are_skipped(self):
        self.state.env["PATH"] = os.pathsep.join(["", "/nonexistent-aish-dir", self.bin_dir])
        self.assertIn("aish-frobnicate", self.complete("aish-fro"))


if __name__ == "__main__":
    unittest.main()
