import io
import logging

from kappa.interpreter import Interpreter
from kappa.repl import repl


def run(source, **kwargs):
    out = io.StringIO()
    repl(stdin=io.StringIO(source), stdout=out, **kwargs)
    return out.getvalue()


def test_prints_each_result():
    assert run("(+ 1 2)\n(str \"a\" \"b\")\n") == '3\n"ab"\n'


def test_recovers_from_errors():
    output = run("(+ 1 2)\n(abc)\n)\n(def x 5) x\n").splitlines()
    assert output[0] == "3"
    assert output[1] == "Error: Unable to resolve symbol: abc in this context"
    assert output[2].startswith("Syntax error: Unmatched delimiter")
    assert output[3:] == ["x", "5"]


def test_syntax_error_drops_rest_of_line():
    output = run("(list 1 2)) (+ 1 1)\n(+ 2 2)\n").splitlines()
    assert output[0] == "(1 2)"
    assert output[1].startswith("Syntax error:")
    assert output[2:] == ["4"]


def test_unterminated_form_at_end_of_input():
    output = run("(+ 1").splitlines()
    assert len(output) == 1
    assert output[0].startswith("Syntax error:")


def test_empty_input_prints_nothing():
    assert run("") == ""


def test_prompt_after_each_line():
    assert run("(+ 1 2)\n", prompt="> ") == "> 3\n> "
    assert run("1 2\n3\n", prompt="> ") == "> 1\n2\n> 3\n> "


def test_prompt_after_errors():
    assert run("(nope)\n", prompt="> ") == "> Error: Unable to resolve symbol: nope in this context\n> "


def test_no_prompt_when_input_is_not_a_terminal(monkeypatch):
    monkeypatch.setenv("KAPPA_PROMPT", "kappa> ")
    assert run("1\n") == "1\n"


def test_shares_interpreter_state():
    interp = Interpreter()
    run("(def shared 7)\n", interpreter=interp)
    assert interp.eval("shared") == 7


def test_logs_forms_at_debug(caplog):
    with caplog.at_level(logging.DEBUG, logger="kappa"):
        run("(+ 1 2)\n")
    assert "parsed: (+ 1 2)" in caplog.text
    assert "evaluated: 3" in caplog.text


def test_recovers_from_deeply_nested_input():
    source = "(" * 5000 + ")" * 5000 + " trailing\n(+ 1 2)\n"
    output = run(source).splitlines()
    assert output[0].startswith("Error: Stack exhausted: form nested too deeply")
    assert output[1:] == ["3"]


def test_recovers_from_result_too_deep_to_print():
    source = (
        "(defn nest [n acc] (if (= n 0) acc (nest (- n 1) (list acc))))\n"
        "(nest 5000 ())\n"
        "(count (nest 5000 ()))\n"
    )
    output = run(source).splitlines()
    assert output[0] == "nest"
    assert output[1] == "Error: Stack exhausted: value nested too deeply to print"
    assert output[2] == "1"


def test_recovers_from_overlong_integer_literal(int_digit_limit):
    output = run("1" * (int_digit_limit + 1) + " 2\n(+ 1 2)\n").splitlines()
    assert output[0].startswith("Syntax error: Invalid number")
    assert output[1:] == ["3"]


def test_recovers_from_float_promotion_overflow():
    output = run("(+ 0.5 1" + "0" * 400 + ")\n(+ 1 2)\n").splitlines()
    assert output[0].startswith("Error: Integer operand to + is too large")
    assert output[1:] == ["3"]


def test_prints_integers_beyond_the_str_limit(int_digit_limit):
    output = run("(* 1" + "0" * 3000 + " 1" + "0" * 3000 + ")\n").splitlines()
    assert output == ["1" + "0" * 6000]
