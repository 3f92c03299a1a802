#!/usr/bin/env python

import tempfile
import unittest
from pathlib import Path

from demo_setup.profile import ShellProfile, format_export, parse_export


class TestParseExport(unittest.TestCase):
    """Test cases for parse_export."""

    def test_quoting_variants(self):
        self.assertEqual(parse_export('export A="x y"'), ("A", "x y"))
        self.assertEqual(parse_export("export A='x'"), ("A", "x"))
        self.assertEqual(parse_export("export A=x # comment"), ("A", "x"))
        self.assertEqual(parse_export("export A="), ("A", ""))

    def test_non_export_lines(self):
        self.assertIsNone(parse_export("A=x"))
        self.assertIsNone(parse_export("# export A=x"))
        self.assertIsNone(parse_export(""))

    def test_format_escapes_quotes(self):
        self.assertEqual(format_export("A", 'say "hi"'), 'export A="say \\"hi\\""')

    def test_format_escapes_shell_expansion(self):
        self.assertEqual(format_export("A", "$HOME`id`\\"), 'export A="\\$HOME\\`id\\`\\\\"')

    def test_double_quoted_escapes_are_unescaped(self):
        self.assertEqual(parse_export(r'export A="pa\"ss\$x"'), ("A", 'pa"ss$x'))
        self.assertEqual(parse_export(r"export A='pa\ss'"), ("A", r"pa\ss"))


class TestShellProfile(unittest.TestCase):
    """Test cases for ShellProfile."""

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.path = Path(self.tmp.name) / ".bashrc"
        self.profile = ShellProfile(self.path)

    def test_missing_file_reads_empty(self):
        self.assertIsNone(self.profile.get_export("TUTORIAL_HOME"))

    def test_upsert_replaces_existing_line(self):
        """Verify an old export line is removed before the new one is appended."""
        self.path.write_text('alias ll="ls -l"\nexport TUTORIAL_HOME="/old"\nexport OTHER=1\n')

        self.profile.upsert_exports({"TUTORIAL_HOME": "/new"})

        lines = self.path.read_text().splitlines()
        self.assertEqual([l for l in lines if "TUTORIAL_HOME" in l], ['export TUTORIAL_HOME="/new"'])
        self.assertIn('alias ll="ls -l"', lines)
        self.assertIn("export OTHER=1", lines)
        self.assertEqual(self.profile.get_export("TUTORIAL_HOME"), "/new")

    def test_upsert_is_idempotent(self):
        self.path.write_text("export PATH=$PATH:/opt/bin\n")
        exports = {"ROX_CENTRAL_ADDRESS": "https://central", "GRPC_ENFORCE_ALPN_ENABLED": "false"}

        self.profile.upsert_exports(exports, header="RHACS Environment Variables")
        first = self.path.read_text()
        self.profile.upsert_exports(exports, header="RHACS Environment Variables")

        self.assertEqual(self.path.read_text(), first)
        self.assertEqual(first.count("# RHACS Environment Variables"), 1)

    def test_special_characters_round_trip(self):
        """Verify values written to the profile read back unchanged."""
        for value in ('pa"ss', "back\\slash", "dollar$HOME", "tick`id`", 'mix\\"$`'):
            self.profile.upsert_exports({"ACS_PORTAL_PASSWORD": value})
            self.assertEqual(self.profile.get_export("ACS_PORTAL_PASSWORD"), value)

    def test_user_blank_lines_are_kept(self):
        self.path.write_text("alias ll='ls -l'\n\n\n")
        self.profile.upsert_exports({"A": "1"})
        self.assertEqual(self.path.read_text(), "alias ll='ls -l'\n\n\nexport A=\"1\"\n")

    def test_separate_blocks_are_idempotent(self):
        """Verify an unheaded export and a headed block stay stable across runs."""
        self.path.write_text("export PATH=$PATH:/opt/bin\n")
        rhacs = {"ROX_CENTRAL_ADDRESS": "https://central"}

        for _ in range(2):
            self.profile.upsert_exports({"TUTORIAL_HOME": "/home/u/demo-apps"})
            self.profile.upsert_exports(rhacs, header="RHACS Environment Variables")
            text = self.path.read_text()

        self.assertEqual(
            text,
            "export PATH=$PATH:/opt/bin\n"
            "\n"
            'export TUTORIAL_HOME="/home/u/demo-apps"\n'
            "\n"
            "# RHACS Environment Variables\n"
            'export ROX_CENTRAL_ADDRESS="https://central"\n',
        )

    def test_upsert_creates_file(self):
        self.profile.upsert_exports({"A": "1"})
        self.assertEqual(self.path.read_text(), 'export A="1"\n')


if __name__ == '__main__':
    unittest.main()
