"""
Test suite for the interactive calculator.

Tests cover:
- Line handling (results, empty lines, errors, `?quit`)
- The prompt loop
- The `calc` command line

Author: xwest
"""

import io
import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from click.testing import CliRunner
from colorama import Fore

from calculator.repl import Repl, ReplConfig, main

PROMPT = "calc❯ "


class TestRepl(unittest.TestCase):
    """Test cases for the read-evaluate-print loop."""

    def setUp(self):
        self.repl = Repl(ReplConfig(color=False))

    def test_handle_expression(self):
        self.assertEqual(self.repl.handle_line("1+2*3\n"), (True, "7"))

    def test_handle_empty_line(self):
        self.assertEqual(self.repl.handle_line("\n"), (True, None))

    def test_handle_quit(self):
        self.assertEqual(self.repl.handle_line("?quit\n"), (False, None))

    def test_handle_error(self):
        keep_going, output = self.repl.handle_line("(1+2\n")
        self.assertTrue(keep_going)
        self.assertTrue(output.startswith("error: expected `)`, found `<EOL>`"))
        self.assertEqual(self.repl.error_count, 1)

    def test_deep_nesting_is_an_error(self):
        for line in ("-" * 5000 + "1", "(" * 5000 + "1" + ")" * 5000):
            keep_going, output = self.repl.handle_line(line)
            self.assertTrue(keep_going)
            self.assertTrue(output.startswith("error: expected at most 200 nested sub-expressions"))

    def test_long_chain(self):
        self.assertEqual(self.repl.handle_line("1+" * 4999 + "1"), (True, "5000"))

    def test_run_until_quit(self):
        stdin = io.StringIO("1+1\n\n?quit\n3\n")
        stdout = io.StringIO()
        self.repl.run(stdin, stdout)
        self.assertEqual(stdout.getvalue(), f"{PROMPT}2\n{PROMPT}{PROMPT}")

    def test_run_until_end_of_input(self):
        stdin = io.StringIO("8/4/2\n")
        stdout = io.StringIO()
        self.repl.run(stdin, stdout)
        self.assertEqual(stdout.getvalue(), f"{PROMPT}1\n{PROMPT}\n")

    def test_errors_do_not_stop_the_loop(self):
        stdin = io.StringIO("1 2\n-(2+3)\n")
        stdout = io.StringIO()
        failures = self.repl.run(stdin, stdout)
        self.assertEqual(failures, 1)
        self.assertIn("found `2`", stdout.getvalue())
        self.assertIn("-5\n", stdout.getvalue())

    def test_colored_prompt(self):
        repl = Repl(ReplConfig(prompt="> ", color=True))
        self.assertIn(Fore.GREEN, repl.prompt_indicator())
        self.assertEqual(Repl(ReplConfig(prompt="> ", color=False)).prompt_indicator(), "> ")


class TestCommandLine(unittest.TestCase):
    """Test cases for the `calc` command."""

    def setUp(self):
        self.runner = CliRunner()

    def test_interactive(self):
        result = self.runner.invoke(main, ["--no-color"], input="1+2*3\n?quit\n")
        self.assertEqual(result.exit_code, 0)
        self.assertEqual(result.output, f"{PROMPT}7\n{PROMPT}")

    def test_custom_prompt(self):
        result = self.runner.invoke(main, ["--no-color", "--prompt", ">>> "], input="2\n")
        self.assertEqual(result.output, ">>> 2\n>>> \n")

    def test_eval(self):
        result = self.runner.invoke(main, ["-e", "8/4/2", "--eval=-(2+3)"])
        self.assertEqual(result.exit_code, 0)
        self.assertEqual(result.output, "1\n-5\n")

    def test_eval_failure(self):
        result = self.runner.invoke(main, ["--no-color", "-e", "(1+2", "-e", "4"])
        self.assertEqual(result.exit_code, 1)
        self.assertIn("error: expected `)`, found `<EOL>`", result.output)
        self.assertTrue(result.output.endswith("4\n"))

    def test_eval_stops_at_quit(self):
        result = self.runner.invoke(main, ["-e", "1", "-e", "?quit", "-e", "2"])
        self.assertEqual(result.output, "1\n")

    def test_version(self):
        result = self.runner.invoke(main, ["--version"])
        self.assertEqual(result.exit_code, 0)
        self.assertIn("calc", result.output)


if __name__ == "__main__":
    unittest.main()
