"""Interactive read-eval-print loop."""

from __future__ import annotations

import logging
import sys
from typing import TextIO

from kappa import config
from kappa.errors import KappaError, KappaSyntaxError
from kappa.evaluation.evaluator import evaluate
from kappa.interpreter import Interpreter
from kappa.printer import to_string
from kappa.reader.parser import Reader

logger = logging.getLogger(__name__)


def repl(
    interpreter: Interpreter | None = None,
    stdin: TextIO = sys.stdin,
    stdout: TextIO = sys.stdout,
    prompt: str | None = None,
) -> None:
    """Read forms from `stdin` until end of input, printing each result.

    Errors are reported and the loop resumes with the next form; after an
    error while reading, the rest of the offending line is dropped.
    """
    interpreter = interpreter or Interpreter()
    if prompt is None:
        prompt = config.get_prompt() if stdin.isatty() else ""
    reader = Reader(stdin)

    def show_prompt() -> None:
        if prompt:
            stdout.write(prompt)
            stdout.flush()

    show_prompt()
    while True:
        try:
            expr = reader.read()
        except KappaError as ex:
            # The rest of a malformed or overly deep form is unusable
            logger.info("read error: %s", ex)
            label = "Syntax error" if isinstance(ex, KappaSyntaxError) else "Error"
            stdout.write(f"{label}: {ex}\n")
            reader.discard_line()
            show_prompt()
            continue
        if expr is None:
            break

        try:
            logger.debug("parsed: %s", to_string(expr))
            value = evaluate(expr, interpreter.env)
            text = to_string(value)
            logger.debug("evaluated: %s", text)
        except KappaError as ex:
            logger.info("evaluation error: %s", ex)
            stdout.write(f"Error: {ex}\n")
            show_prompt()
            continue

        stdout.write(text + "\n")
        if reader.stream.peek() in ("\n", "\r"):
            show_prompt()
    stdout.flush()


def main() -> None:
    logging.basicConfig(level=config.get_log_level())
    limit = config.get_recursion_limit()
    if limit is not None:
        sys.setrecursionlimit(limit)
    try:
        repl()
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
