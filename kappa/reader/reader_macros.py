from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from kappa import SExpression
from kappa.types.char import Char
from kappa.types.vector import Vector
from kappa.types.hash_map import Map

if TYPE_CHECKING:
    from kappa.reader.parser import Reader

MacroFn = Callable[["Reader"], SExpression]

STRING_ESCAPES: dict[str, str] = {
    "t": "\t",
    "r": "\r",
    "n": "\n",
    "b": "\b",
    "f": "\f",
    "\\": "\\",
    '"': '"',
}

NAMED_CHARS: dict[str, str] = {
    "newline": "\n",
    "space": " ",
    "tab": "\t",
    "backspace": "\b",
    "formfeed": "\f",
    "return": "\r",
}


class ReaderMacros:
    """
    Registry of reader macros keyed by their dispatch character.
    Each macro is called after its character has been consumed and reads the
    rest of its form from the Reader. Skipped macros (comments) produce no
    form; the Reader runs them while skipping whitespace.
    """

    def __init__(self):
        self.macros: dict[str, MacroFn] = {}
        self.skipped: set[str] = set()

    def define(self, char: str, fn: MacroFn, skip: bool = False) -> None:
        """Register a reader macro for a given character."""
        self.macros[char] = fn
        if skip:
            self.skipped.add(char)

    def is_macro(self, char: str | None) -> bool:
        return char in self.macros

    def is_skipped(self, char: str | None) -> bool:
        return char in self.skipped

    def dispatch(self, char: str, reader: Reader) -> SExpression:
        if char not in self.macros:
            raise ValueError(f"No reader macro defined for {char!r}")
        return self.macros[char](reader)


def read_string(reader: Reader) -> str:
    stream = reader.stream
    chars: list[str] = []
    while True:
        ch = stream.advance()
        if ch is None:
            raise reader.error("Unterminated string")
        if ch == '"':
            return "".join(chars)
        if ch == "\\":
            esc = stream.advance()
            if esc is None:
                raise reader.error("Unterminated string")
            if esc not in STRING_ESCAPES:
                raise reader.error(f"Unsupported escape character: \\{esc}")
            ch = STRING_ESCAPES[esc]
        chars.append(ch)


def read_comment(reader: Reader) -> None:
    reader.stream.skip_line()


def read_character(reader: Reader) -> Char:
    ch = reader.stream.advance()
    if ch is None:
        raise reader.error("Unexpected end of input after \\")
    token = reader.read_token(ch)
    if len(token) == 1:
        return Char(token)
    if token in NAMED_CHARS:
        return Char(NAMED_CHARS[token])
    raise reader.error(f"Unsupported character: \\{token}")


def read_delimited(reader: Reader, close: str, what: str) -> list[SExpression]:
    """Read forms until the `close` delimiter, which is consumed."""
    stream = reader.stream
    line, column = stream.line, stream.column
    items: list[SExpression] = []
    while True:
        reader.skip_whitespace()
        ch = stream.peek()
        if ch is None:
            raise reader.error(f"Unexpected end of input while reading {what} started", line, column)
        if ch == close:
            stream.advance()
            return items
        items.append(reader.read())


def read_list(reader: Reader) -> list[SExpression]:
    return read_delimited(reader, ")", "list")


def read_vector(reader: Reader) -> Vector:
    return Vector(read_delimited(reader, "]", "vector"))


def read_map(reader: Reader) -> Map:
    line, column = reader.stream.line, reader.stream.column
    items = read_delimited(reader, "}", "map")
    if len(items) % 2:
        raise reader.error("Map literal must contain an even number of forms", line, column)
    return Map(zip(items[::2], items[1::2]))


def unmatched_delimiter(reader: Reader) -> SExpression:
    raise reader.error("Unmatched delimiter")


# -------------------------
# Single global instance
# -------------------------
reader_macros: ReaderMacros = ReaderMacros()

reader_macros.define('"', read_string)
reader_macros.define(";", read_comment, skip=True)
reader_macros.define("(", read_list)
reader_macros.define(")", unmatched_delimiter)
reader_macros.define("[", read_vector)
reader_macros.define("]", unmatched_delimiter)
reader_macros.define("{", read_map)
reader_macros.define("}", unmatched_delimiter)
reader_macros.define("\\", read_character)
