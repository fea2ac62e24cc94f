import pytest

from kappa.errors import KappaInvalidSymbol, KappaUnboundSymbol
from kappa.types.environment import Environment
from kappa.types.symbol import Symbol

a = Symbol("a")
b = Symbol("b")


def test_define_and_lookup():
    env = Environment()
    env.define(a, 1)
    assert env.lookup(a) == 1
    env.define(a, 2)
    assert env.lookup(a) == 2


def test_lookup_walks_outward():
    root = Environment()
    root.define(a, 1)
    inner = root.child().child()
    assert inner.lookup(a) == 1
    assert inner.find(a) is root


def test_inner_definitions_shadow_without_mutating_outer():
    root = Environment()
    root.define(a, 1)
    inner = Environment(outer=root)
    inner.define(a, 2)
    assert inner.lookup(a) == 2
    assert root.lookup(a) == 1


def test_unbound_lookup():
    env = Environment()
    assert env.find(b) is None
    with pytest.raises(KappaUnboundSymbol, match="Unable to resolve symbol: b"):
        env.lookup(b)


@pytest.mark.parametrize("name", ["a", 1, None])
def test_define_requires_symbol(name):
    with pytest.raises(KappaInvalidSymbol):
        Environment().define(name, 1)


def test_update_defines_in_current_frame():
    root = Environment()
    inner = root.child()
    inner.update({a: 1, b: 2})
    assert inner.vars == {a: 1, b: 2}
    assert root.vars == {}


def test_equal_symbols_share_bindings():
    assert Symbol("a") == a
    env = Environment()
    env.define(Symbol("a"), 3)
    assert env.lookup(a) == 3


def test_string_forms():
    root = Environment()
    root.define(a, 1)
    inner = root.child()
    inner.define(b, 2)
    assert str(inner) == "{b: 2} -> ..."
    assert repr(inner) == "<Environment chain: {b: 2} -> {a: 1}>"


def test_procedure_call_scope_is_a_child_of_the_closure(interp):
    proc = interp.eval("(fn [x & more] x)")
    local = proc.bind([1, 2, 3])
    assert local.outer is interp.env
    assert local.vars == {Symbol("x"): 1, Symbol("more"): [2, 3]}
    assert interp.env.find(Symbol("x")) is None
