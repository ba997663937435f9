import pytest

from mal import errors
from mal.builtin.core import arithmetic_namespace, default_namespace
from mal.types.functions import NativeFunction, SpecialForm
from mal.types.nil import Nil
from mal.types.symbol import Symbol
from mal.types.values import List


@pytest.mark.parametrize(
    "source,expected",
    [
        ("(+ 1 2)", 3),
        ("(- 10 3)", 7),
        ("(* 2 3)", 6),
        ("(/ 12 3)", 4),
        ("(/ 7 2)", 3),
        ("(/ -7 2)", -3),
        ("(/ 7 -2)", -3),
        ("(/ -7 -2)", 3),
        ("(+ -1 5)", 4),
        ("(- -10 -5)", -5),
        ("(+ 1 2 3)", 3),  # extra arguments are ignored
        ("(* 2 3 100)", 6),
        ("(+ 1 (* 2 (+ 3 4)))", 15),
    ]
)
def test_arithmetic(run, source, expected):
    assert run(source) == expected


@pytest.mark.parametrize(
    "source,error",
    [
        ("(/ 1 0)", errors.DivisionByZero),
        ("(+ 1)", errors.ArityMismatch),
        ("(+)", errors.ArityMismatch),
        ("(+ 1 \"a\")", errors.TypeMismatch),
        ("(- true 1)", errors.TypeMismatch),
        ("(* nil 2)", errors.TypeMismatch),
        ("(* 9223372036854775807 2)", errors.NumberOverflow),
        ("(- -9223372036854775808 1)", errors.NumberOverflow),
        ("(/ -9223372036854775808 -1)", errors.NumberOverflow),
    ]
)
def test_arithmetic_errors(run, source, error):
    with pytest.raises(error):
        run(source)


@pytest.mark.parametrize(
    "source,expected",
    [
        ("(< 1 2)", True),
        ("(< 2 1)", False),
        ("(<= 2 2)", True),
        ("(> 3 2)", True),
        ("(>= 1 2)", False),
        ("(= 1 1)", True),
        ("(= 1 2)", False),
        ("(= \"a\" \"a\")", True),
        ("(= (list 1 2) (list 1 2))", True),
        ("(= (list 1 2) [1 2])", False),
        ("(= [1 2] [1 2])", True),
        ("(= nil nil)", True),
        ("(= nil false)", False),
        ("(= 1 true)", False),
        ("(= + +)", True),
        ("(= (fn* () 1) (fn* () 1))", False),
    ]
)
def test_comparisons(run, source, expected):
    assert run(source) is expected


@pytest.mark.parametrize("source", ["(< 1 \"2\")", "(>= nil 1)", "(> (list) 1)"])
def test_ordering_requires_numbers(run, source):
    with pytest.raises(errors.TypeMismatch):
        run(source)


@pytest.mark.parametrize(
    "source,expected",
    [
        ("(list)", List()),
        ("(list 1 (+ 1 1) \"x\")", List([1, 2, "x"])),
        ("(list? (list))", True),
        ("(list? [1])", False),
        ("(list? {})", False),
        ("(list? 1)", False),
        ("(empty? (list))", True),
        ("(empty? (list 1))", False),
        ("(count (list 1 2 3))", 3),
        ("(count nil)", 0),
        ("(count (list))", 0),
    ]
)
def test_list_functions(run, source, expected):
    assert run(source) == expected


@pytest.mark.parametrize(
    "source,error",
    [
        ("(empty? nil)", errors.TypeMismatch),
        ("(empty? [1])", errors.TypeMismatch),
        ("(count 1)", errors.TypeMismatch),
        ("(count [1])", errors.TypeMismatch),
        ("(count)", errors.ArityMismatch),
    ]
)
def test_list_function_errors(run, source, error):
    with pytest.raises(error):
        run(source)


@pytest.mark.parametrize(
    "source,expected",
    [
        ("(pr-str)", ""),
        ("(pr-str \"a\" 1 nil)", '"a" 1 nil'),
        ("(pr-str (list \"a\" [true]))", '("a" [true])'),
        ("(pr-str \"q\\\"x\")", '"q\\"x"'),
        ("(str)", ""),
        ("(str \"a\" 1 \"b\")", "a1b"),
        ("(str (list \"a\" 2))", "(a 2)"),
    ]
)
def test_string_functions(run, source, expected):
    assert run(source) == expected


def test_prn_writes_readable_first_argument(run, capsys):
    assert run("(prn \"hi\" 2)") is Nil
    assert capsys.readouterr().out == '"hi"\n'
    run("(prn)")
    assert capsys.readouterr().out == "\n"


def test_println_writes_display_of_all_arguments(run, capsys):
    assert run("(println \"hi\" 2 (list \"x\"))") is Nil
    assert capsys.readouterr().out == "hi 2 (x)\n"


def test_default_namespace_is_read_only_and_shared():
    ns = default_namespace()
    assert ns is default_namespace()
    with pytest.raises(TypeError):
        ns[Symbol("new")] = 1
    assert isinstance(ns[Symbol("if")], SpecialForm)
    assert isinstance(ns[Symbol("count")], NativeFunction)


def test_arithmetic_namespace_has_only_operators():
    assert sorted(str(k) for k in arithmetic_namespace()) == ["*", "+", "-", "/"]
