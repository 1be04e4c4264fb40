"""
Interactive calculator prompt.

Reads lines, evaluates them and prints either the result or an error
message pointing at the problem. `?quit` or end of input leaves the loop.

Author: xwest
"""

import logging
import sys
from dataclasses import dataclass
from typing import Iterable, Optional, TextIO, Tuple

import click
import colorama
from colorama import Fore, Style

from . import __version__
from .parser.errors import ParseError, format_error
from .runtime.evaluator import QuitRequested, evaluate_string, format_result

logger = logging.getLogger(__name__)

DEFAULT_PROMPT = "calc❯ "


@dataclass
class ReplConfig:
    """Settings of an interactive session."""
    prompt: str = DEFAULT_PROMPT
    color: bool = True


class Repl:
    """
    The read-evaluate-print loop.

    Every line is handled on its own; nothing is kept between lines.
    """

    def __init__(self, config: Optional[ReplConfig] = None):
        self.config = config or ReplConfig()
        self.error_count = 0

    def prompt_indicator(self) -> str:
        """The prompt shown before each line of input."""
        if self.config.color:
            return f"{Style.BRIGHT}{Fore.GREEN}{self.config.prompt}{Style.RESET_ALL}"
        return self.config.prompt

    def handle_line(self, line: str) -> Tuple[bool, Optional[str]]:
        """
        Evaluate one line of input.

        Returns:
            Whether to keep reading, and the text to print (None if nothing)
        """
        try:
            value = evaluate_string(line)
        except QuitRequested:
            return False, None
        except ParseError as e:
            logger.debug("rejected %r: %s", line, e.diagnostic(line))
            self.error_count += 1
            return True, format_error(e, line, color=self.config.color)

        if value is None:
            return True, None
        return True, format_result(value)

    def run(self, stdin: TextIO, stdout: TextIO) -> int:
        """
        Run the loop until `?quit` or end of input.

        Returns:
            The number of lines that failed to parse
        """
        while True:
            click.echo(self.prompt_indicator(), nl=False, file=stdout)
            line = stdin.readline()
            if not line:
                # End of input: finish the prompt line
                click.echo(file=stdout)
                break

            keep_going, output = self.handle_line(line)
            if output is not None:
                click.echo(output, file=stdout)
            if not keep_going:
                break

        return self.error_count

    def run_lines(self, lines: Iterable[str], stdout: TextIO) -> int:
        """Evaluate `lines` without prompting. Returns the number of failures."""
        for line in lines:
            keep_going, output = self.handle_line(line)
            if output is not None:
                click.echo(output, file=stdout)
            if not keep_going:
                break
        return self.error_count


@click.command()
@click.option("-e", "--eval", "expressions", multiple=True, metavar="EXPR",
              help="Evaluate EXPR and exit instead of prompting. Can be repeated.")
@click.option("--prompt", default=DEFAULT_PROMPT, show_default=True,
              help="Prompt shown before each input line.")
@click.option("--no-color", is_flag=True, help="Disable colored output.")
@click.option("-v", "--verbose", is_flag=True, help="Log debugging information.")
@click.version_option(__version__, prog_name="calc")
def main(expressions, prompt, no_color, verbose):
    """Interactive calculator for arithmetic expressions."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    colorama.just_fix_windows_console()

    repl = Repl(ReplConfig(prompt=prompt, color=not no_color))
    stdout = click.get_text_stream("stdout")

    if expressions:
        failures = repl.run_lines(expressions, stdout)
    else:
        repl.run(click.get_text_stream("stdin"), stdout)
        failures = 0

    sys.exit(1 if failures else 0)


if __name__ == "__main__":
    main()
