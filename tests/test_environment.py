from types import MappingProxyType

import pytest

from mal.errors import ArityMismatch, SymbolNotFound, TypeMismatch
from mal.types.environment import Environment
from mal.types.nil import Nil
from mal.types.symbol import Symbol
from mal.types.values import List

a, b, x, y = Symbol("a"), Symbol("b"), Symbol("x"), Symbol("y")


def params(*names):
    return List(Symbol(n) for n in names)


def test_set_and_get_in_root():
    env = Environment()
    env.set(x, 1)
    assert env.get(x) == 1
    assert env.lookup(x) == 1


def test_get_missing_returns_none_and_lookup_raises():
    env = Environment()
    assert env.get(x) is None
    with pytest.raises(SymbolNotFound) as info:
        env.lookup(x)
    assert info.value.name == "x"


def test_falsy_values_are_still_bound():
    env = Environment()
    env.set(x, False)
    env.set(y, Nil)
    assert env.get(x) is False
    assert env.get(y) is Nil


def test_set_requires_symbol():
    with pytest.raises(TypeMismatch):
        Environment().set("x", 1)


def test_enter_shadows_and_exit_restores():
    env = Environment()
    env.set(x, 1)
    env.enter()
    assert env.get(x) == 1  # visible through the parent link
    env.set(x, 2)
    assert env.get(x) == 2
    env.exit()
    assert env.get(x) == 1


def test_set_never_reaches_outward():
    env = Environment()
    env.enter()
    env.set(y, 5)
    env.exit()
    assert env.get(y) is None


def test_exit_at_root_is_noop():
    env = Environment()
    env.set(x, 1)
    env.exit()
    env.exit()
    assert env.depth() == 0
    assert env.get(x) == 1


def test_nested_exits_on_error():
    env = Environment()
    with pytest.raises(RuntimeError):
        with env.nested():
            assert env.depth() == 1
            raise RuntimeError("boom")
    assert env.depth() == 0


def test_default_namespace_is_consulted_first():
    env = Environment(MappingProxyType({x: "library"}))
    env.set(x, "user")
    assert env.get(x) == "library"
    env.enter()
    env.set(x, "inner")
    assert env.get(x) == "library"


def test_clone_shares_scope_state():
    env = Environment()
    other = env.clone()
    other.set(x, 1)
    assert env.get(x) == 1
    env.set(y, 2)
    assert other.get(y) == 2


def test_enter_on_clone_leaves_original_handle_alone():
    env = Environment()
    other = env.clone()
    other.enter()
    other.set(x, 1)
    assert env.get(x) is None
    assert env.depth() == 0


def test_derive_binds_positionally():
    outer = Environment()
    outer.set(y, 10)
    env = Environment.derive(outer, params("a", "b"), [1, 2])
    assert env.get(a) == 1
    assert env.get(b) == 2
    assert env.get(y) == 10
    assert outer.get(a) is None


def test_derive_rest_parameter_collects_remaining_args():
    env = Environment.derive(Environment(), params("a", "&", "b"), [1, 2, 3])
    assert env.get(a) == 1
    assert env.get(b) == List([2, 3])


def test_derive_rest_parameter_may_be_empty():
    env = Environment.derive(Environment(), params("a", "&", "b"), [1])
    assert env.get(b) == List()


def test_derive_ignores_surplus_args():
    env = Environment.derive(Environment(), params("a"), [1, 2, 3])
    assert env.get(a) == 1


def test_derive_too_few_args():
    with pytest.raises(ArityMismatch):
        Environment.derive(Environment(), params("a", "b"), [1])
    with pytest.raises(ArityMismatch):
        Environment.derive(Environment(), params("a", "&", "b"), [])


@pytest.mark.parametrize("pattern", [params("&"), params("a", "&", "b", "c")])
def test_derive_rejects_malformed_rest(pattern):
    with pytest.raises(TypeMismatch):
        Environment.derive(Environment(), pattern, [1, 2, 3])


def test_derive_keeps_default_namespace():
    outer = Environment(MappingProxyType({x: 1}))
    assert Environment.derive(outer, (), []).get(x) == 1


def test_new_includes_library():
    env = Environment.new()
    assert env.get(Symbol("+")) is not None
    assert env.get(Symbol("def!")) is not None
