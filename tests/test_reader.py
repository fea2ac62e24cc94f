import io

import pytest
from hypothesis import given, strategies as st

from kappa.comparer import equals
from kappa.errors import KappaRecursionError, KappaSyntaxError
from kappa.printer import to_string
from kappa.reader.parser import Reader, read_str, read_all
from kappa.types.char import Char
from kappa.types.hash_map import Map
from kappa.types.nil import Nil
from kappa.types.symbol import Symbol, Keyword
from kappa.types.vector import Vector


@pytest.mark.parametrize(
    "source, expected",
    [
        # numbers
        ("1", 1),
        ("7", 7),
        ("  7   ", 7),
        ("-123", -123),
        ("+5", 5),
        ("3.14", 3.14),
        ("-2.5", -2.5),
        ("1e3", 1000.0),
        # symbols
        ("+", Symbol("+")),
        ("abc", Symbol("abc")),
        ("   abc   ", Symbol("abc")),
        ("abc5", Symbol("abc5")),
        ("abc-def", Symbol("abc-def")),
        ("-", Symbol("-")),
        ("-abc", Symbol("-abc")),
        ("->>", Symbol("->>")),
        # nil / booleans / keywords
        ("nil", Nil),
        ("true", True),
        ("false", False),
        (":kw", Keyword("kw")),
        # lists
        ("(+ 1 2)", [Symbol("+"), 1, 2]),
        ("()", []),
        ("( )", []),
        ("(nil)", [Nil]),
        ("((3 4))", [[3, 4]]),
        ("(+ 1 (+ 2 3))", [Symbol("+"), 1, [Symbol("+"), 2, 3]]),
        ("  ( +   1   (+   2 3   )   )  ", [Symbol("+"), 1, [Symbol("+"), 2, 3]]),
        ("(** 1 2)", [Symbol("**"), 1, 2]),
        ("(* -3 6)", [Symbol("*"), -3, 6]),
        ("(()())", [[], []]),
        ("(1 2, 3,,,,),,", [1, 2, 3]),
        ("(:kw1 :kw2 :kw3)", [Keyword("kw1"), Keyword("kw2"), Keyword("kw3")]),
        # vectors
        ("[+ 1 2]", Vector([Symbol("+"), 1, 2])),
        ("[]", Vector()),
        ("[ ]", Vector()),
        ("[[3 4]]", Vector([Vector([3, 4])])),
        ("([])", [Vector()]),
        # maps
        ("{}", Map()),
        ('{"abc" 1}', Map([("abc", 1)])),
        ('{"a" {"b" 2}}', Map([("a", Map([("b", 2)]))])),
        ("{  :a  {:b   {  :cde     3   }  }}", Map([(Keyword("a"), Map([(Keyword("b"), Map([(Keyword("cde"), 3)]))]))])),
        ("({})", [Map()]),
        ("{[1 2] (3)}", Map([(Vector([1, 2]), [3])])),
    ],
)
def test_read(source, expected):
    assert equals(read_str(source), expected)


@pytest.mark.parametrize(
    "source, expected",
    [
        ('"abc"', "abc"),
        ('   "abc"   ', "abc"),
        ('"abc (with parens)"', "abc (with parens)"),
        (r'"abc\"def"', 'abc"def'),
        ('""', ""),
        (r'"\\"', "\\"),
        (r'"\t\r\n\b\f"', "\t\r\n\b\f"),
        ('";"', ";"),
        ('"[{("', "[{("),
        ('","', ","),
    ],
)
def test_read_strings(source, expected):
    assert read_str(source) == expected


@pytest.mark.parametrize(
    "source, expected",
    [
        (r"\a", Char("a")),
        (r"\8", Char("8")),
        (r"\newline", Char("\n")),
        (r"\tab", Char("\t")),
        (r"\space", Char(" ")),
        (r"\backspace", Char("\b")),
        (r"\formfeed", Char("\f")),
        (r"\return", Char("\r")),
        (r"\(", Char("(")),
    ],
)
def test_read_characters(source, expected):
    assert read_str(source) == expected


def test_character_is_not_a_string():
    assert not equals(read_str(r"\a"), "a")


@pytest.mark.parametrize(
    "source",
    [
        "1 ; comment after expression",
        "1; comment after expression",
        "1;!",
        '1;"',
        "1;\\",
        "; leading comment\n1",
        ";; two\n;; comment lines\n  1",
    ],
)
def test_comments_are_skipped(source):
    assert read_all(source) == [1]


def test_comment_inside_collection():
    assert read_str("(1 ; one\n 2 ; two\n)") == [1, 2]


@pytest.mark.parametrize(
    "source",
    [
        "[1 2",
        '"abc',
        '"',
        r'"\"',
        '(1 "abc',
        '(1 "abc"',
        ")",
        "]",
        "}",
        "(1 2))",
        "{:a}",
        "{:a 1 :b}",
        r'"\q"',
        r"\nope",
        "\\",
        "12abc",
        "1.2.3",
        "@foo",
        "foo~bar",
        ":",
    ],
)
def test_read_errors(source):
    with pytest.raises(KappaSyntaxError):
        read_all(source)


def test_syntax_error_reports_location():
    with pytest.raises(KappaSyntaxError) as exc_info:
        read_all("(+ 1 2)\n  )")
    assert exc_info.value.line == 2
    assert exc_info.value.column == 3


def test_read_returns_none_at_end_of_input():
    reader = Reader("1 2 ; trailing comment")
    assert reader.read() == 1
    assert reader.read() == 2
    assert reader.read() is None
    assert reader.read() is None


def test_reader_over_text_stream():
    reader = Reader(io.StringIO("(def x 1)\nx\n"))
    assert list(reader.read_all()) == [[Symbol("def"), Symbol("x"), 1], Symbol("x")]


def test_discard_line_recovers_after_error():
    reader = Reader("(1 2)) junk junk\n3")
    assert reader.read() == [1, 2]
    with pytest.raises(KappaSyntaxError):
        reader.read()
    reader.discard_line()
    assert reader.read() == 3


# -------------------------------
# Printer/reader round trip
# -------------------------------
_names = st.from_regex(r"[a-z][a-z0-9\-?!*]{0,8}", fullmatch=True).filter(
    lambda s: s not in ("nil", "true", "false")
)

_atoms = st.one_of(
    st.integers(min_value=-(10**12), max_value=10**12),
    st.floats(allow_nan=False, allow_infinity=False),
    st.text(max_size=10),
    st.characters().map(Char),
    st.booleans(),
    st.just(Nil),
    _names.map(Symbol),
    _names.map(Keyword),
)

_values = st.recursive(
    _atoms,
    lambda children: st.one_of(
        st.lists(children, max_size=4),
        st.lists(children, max_size=4).map(Vector),
        st.lists(st.tuples(children, children), max_size=3).map(Map),
    ),
    max_leaves=20,
)


@given(_values)
def test_printed_literals_read_back_equal(value):
    assert equals(read_str(to_string(value)), value)


# -------------------------------
# Resource limits
# -------------------------------
def test_deeply_nested_input_reports_stack_exhaustion():
    with pytest.raises(KappaRecursionError, match="nested too deeply"):
        read_all("(" * 5000 + ")" * 5000)


def test_deeply_nested_quote_is_a_kappa_error(interp):
    with pytest.raises(KappaRecursionError) as exc_info:
        interp.eval("(quote " + "(" * 5000 + ")" * 5000 + ")")
    assert isinstance(exc_info.value.__cause__, RecursionError)
    # Reading still works afterwards
    assert interp.eval("(quote ((1)))") == [[1]]


def test_moderate_nesting_reads():
    depth = 50
    value = read_str("[" * depth + "]" * depth)
    for _ in range(depth - 1):
        assert len(value) == 1
        value = value[0]
    assert value == Vector()


def test_overlong_integer_literal_is_a_syntax_error(int_digit_limit):
    with pytest.raises(KappaSyntaxError, match="too long") as exc_info:
        read_all("(+ 1\n " + "1" * (int_digit_limit + 1) + ")")
    assert exc_info.value.line == 2


def test_long_integer_literal_within_limit(int_digit_limit):
    assert read_str("9" * int_digit_limit) == int("9" * int_digit_limit)
