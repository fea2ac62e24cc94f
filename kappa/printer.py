"""Render Kappa values as text.

Literal data prints in reader syntax, so reading the printed form of a value
built from numbers, strings, characters, booleans, nil, symbols, keywords,
lists, vectors and maps gives back an equal value. Integers longer than the
reader accepts are the exception: they print in full but do not read back.
"""

from __future__ import annotations

from kappa import LispValue
from kappa.errors import KappaRecursionError
from kappa.types.char import Char
from kappa.types.hash_map import Map
from kappa.types.nil import Nil
from kappa.types.vector import Vector
from kappa.reader.reader_macros import NAMED_CHARS, STRING_ESCAPES

_STRING_ESCAPES = {v: f"\\{k}" for k, v in STRING_ESCAPES.items()}
_CHAR_NAMES = {v: k for k, v in NAMED_CHARS.items()}

# Ints too long for str() are rendered in fixed-width chunks of this many digits
_CHUNK_DIGITS = 1000
_CHUNK = 10 ** _CHUNK_DIGITS


def quote_string(s: str) -> str:
    return '"' + "".join(_STRING_ESCAPES.get(ch, ch) for ch in s) + '"'


def int_to_string(n: int) -> str:
    try:
        return str(n)
    except ValueError:
        # Beyond sys.get_int_max_str_digits()
        sign, n = ("-", -n) if n < 0 else ("", n)
        chunks = []
        while n:
            n, chunk = divmod(n, _CHUNK)
            chunks.append(chunk)
        head, *tail = reversed(chunks)
        return sign + str(head) + "".join(f"{c:0{_CHUNK_DIGITS}d}" for c in tail)


def to_string(value: LispValue) -> str:
    """Reader syntax for `value`.

    Raises KappaRecursionError when the value is nested too deeply to print.
    """
    try:
        return _render(value)
    except RecursionError as ex:
        raise KappaRecursionError("Stack exhausted: value nested too deeply to print") from ex


def _render(value: LispValue) -> str:
    if value is Nil:
        return "nil"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return int_to_string(value)
    if isinstance(value, str):
        return quote_string(value)
    if isinstance(value, Char):
        return "\\" + _CHAR_NAMES.get(value.value, value.value)
    if isinstance(value, list):
        return "(" + " ".join(_render(v) for v in value) + ")"
    if isinstance(value, Vector):
        return "[" + " ".join(_render(v) for v in value) + "]"
    if isinstance(value, Map):
        return "{" + ", ".join(f"{_render(k)} {_render(v)}" for k, v in value.items()) + "}"
    if isinstance(value, float):
        return repr(value)
    # Symbols, keywords and callables know their own textual form
    return str(value)


def display(value: LispValue) -> str:
    """Human-facing form: strings and characters unquoted, everything else as `to_string`."""
    if isinstance(value, str):
        return value
    if isinstance(value, Char):
        return value.value
    return to_string(value)
