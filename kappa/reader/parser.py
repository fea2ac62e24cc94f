"""
  Kappa Reader

- Character-level, streaming: one form per `read()` call, None at end of input
- Emits Python values directly:

    - nil -> Nil
    - true / false -> bool
    - integers / floats -> int / float
    - strings -> str
    - \\c, \\newline, ... -> Char
    - :name -> Keyword
    - other tokens -> Symbol
    - ( ... ) -> list
    - [ ... ] -> Vector
    - { ... } -> Map

Delimiters, strings, comments and characters are dispatched through the
reader macro table in kappa.reader.reader_macros.
"""

from __future__ import annotations

import io
import re
from typing import Iterator, TextIO

from kappa import SExpression
from kappa.errors import KappaRecursionError, KappaSyntaxError
from kappa.types.nil import Nil
from kappa.types.symbol import Symbol, Keyword
from kappa.reader.reader_macros import reader_macros, ReaderMacros

INT_RE = re.compile(r"[+-]?[0-9]+")
FLOAT_RE = re.compile(r"[+-]?[0-9]+(\.[0-9]*)?([eE][+-]?[0-9]+)?")

# Characters reserved for syntax this reader does not support
NON_CONSTITUENT = frozenset("@`~")


def is_whitespace(ch: str) -> bool:
    return ch.isspace() or ch == ","


def is_digit(ch: str | None) -> bool:
    return ch is not None and "0" <= ch <= "9"


class CharStream:
    """Peekable character source over a string or text file, tracking line/column."""

    def __init__(self, source: str | TextIO):
        self.source: TextIO = io.StringIO(source) if isinstance(source, str) else source
        self.buffer: list[str] = []
        self.line = 1
        self.column = 0

    def peek(self) -> str | None:
        if not self.buffer:
            ch = self.source.read(1)
            if not ch:
                return None
            self.buffer.append(ch)
        return self.buffer[0]

    def advance(self) -> str | None:
        ch = self.buffer.pop(0) if self.buffer else self.source.read(1)
        if not ch:
            return None
        if ch == "\n":
            self.line += 1
            self.column = 0
        else:
            self.column += 1
        return ch

    def skip_line(self) -> None:
        """Discard input up to and including the next newline."""
        while True:
            ch = self.advance()
            if ch is None or ch == "\n":
                return


class Reader:
    def __init__(self, source: str | TextIO | CharStream, macros: ReaderMacros = reader_macros):
        self.stream = source if isinstance(source, CharStream) else CharStream(source)
        self.macros = macros

    def error(self, message: str, line: int | None = None, column: int | None = None) -> KappaSyntaxError:
        if line is None:
            line, column = self.stream.line, self.stream.column
        return KappaSyntaxError(message, line, column)

    def skip_whitespace(self) -> None:
        """Skip whitespace (commas included) and comments."""
        stream = self.stream
        while True:
            ch = stream.peek()
            if ch is None:
                return
            if is_whitespace(ch):
                stream.advance()
            elif self.macros.is_skipped(ch):
                stream.advance()
                self.macros.dispatch(ch, self)
            else:
                return

    def read(self) -> SExpression | None:
        """Read the next form, or return None at end of input.

        Collections are read recursively, so input nested deeper than the
        host stack allows raises KappaRecursionError.
        """
        try:
            return self.read0()
        except RecursionError as ex:
            raise KappaRecursionError(
                f"Stack exhausted: form nested too deeply (line {self.stream.line}, column {self.stream.column})"
            ) from ex

    def read0(self) -> SExpression | None:
        self.skip_whitespace()
        ch = self.stream.advance()
        if ch is None:
            return None

        if is_digit(ch) or (ch in "+-" and is_digit(self.stream.peek())):
            return self.read_number(ch)

        if self.macros.is_macro(ch):
            return self.macros.dispatch(ch, self)

        if ch in NON_CONSTITUENT:
            raise self.error(f"Invalid leading character: {ch!r}")

        return self.interpret_token(self.read_token(ch))

    def read_all(self) -> Iterator[SExpression]:
        while True:
            expr = self.read()
            if expr is None:
                return
            yield expr

    def read_token(self, initch: str) -> str:
        """Accumulate a token until whitespace or a macro character."""
        chars = [initch]
        stream = self.stream
        while True:
            ch = stream.peek()
            if ch is None or is_whitespace(ch) or self.macros.is_macro(ch):
                return "".join(chars)
            if ch in NON_CONSTITUENT:
                raise self.error(f"Invalid constituent character: {ch!r}")
            chars.append(stream.advance())

    def read_number(self, initch: str) -> int | float:
        chars = [initch]
        stream = self.stream
        while True:
            ch = stream.peek()
            if ch is None or is_whitespace(ch) or self.macros.is_macro(ch):
                break
            chars.append(stream.advance())
        token = "".join(chars)
        if INT_RE.fullmatch(token):
            try:
                return int(token)
            except ValueError:
                # Longer than sys.get_int_max_str_digits() allows
                raise self.error(f"Invalid number: integer literal of {len(token)} characters is too long") from None
        if FLOAT_RE.fullmatch(token):
            return float(token)
        raise self.error(f"Invalid number: {token}")

    def interpret_token(self, token: str) -> SExpression:
        if token == "nil":
            return Nil
        if token == "true":
            return True
        if token == "false":
            return False
        if token.startswith(":"):
            if len(token) == 1:
                raise self.error("Invalid keyword: :")
            return Keyword(token[1:])
        return Symbol(token)

    def discard_line(self) -> None:
        """Drop the rest of the current input line, used to recover after an error."""
        self.stream.skip_line()


def read_str(source: str) -> SExpression | None:
    """Read the first form from `source`."""
    return Reader(source).read()


def read_all(source: str) -> list[SExpression]:
    """Read every form from `source`."""
    return list(Reader(source).read_all())
