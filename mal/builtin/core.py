"""Built-in functions for the mal runtime environment.

This module defines the arithmetic, comparison, list, and printing functions
exposed to Lisp code, and assembles them, together with the special forms,
into the immutable default namespace every Environment consults first.
"""
from __future__ import annotations

import logging
import operator
from functools import lru_cache
from types import MappingProxyType
from typing import Callable, Mapping

from mal import LispValue
from mal.errors import ArityMismatch, DivisionByZero, NumberOverflow, TypeMismatch
from mal.evaluation.special_forms import SPECIAL_FORMS
from mal.printer import pr_str
from mal.types.environment import Environment
from mal.types.functions import NativeFunction, NativeHandler, SpecialForm
from mal.types.nil import Nil, NilType
from mal.types.symbol import Symbol
from mal.types.values import List, in_range, is_number, values_equal

log = logging.getLogger(__name__)


def _binary(name: str, args: list[LispValue]) -> tuple[LispValue, LispValue]:
    # Strictly binary: anything past the second argument is ignored
    if len(args) < 2:
        raise ArityMismatch(f"{name} requires 2 arguments, got {len(args)}")
    return args[0], args[1]


def _numbers(name: str, args: list[LispValue]) -> tuple[int, int]:
    a, b = _binary(name, args)
    if not (is_number(a) and is_number(b)):
        raise TypeMismatch(name, [a, b], "expected numbers")
    return a, b


def _checked(name: str, n: int) -> int:
    if not in_range(n):
        raise NumberOverflow(f"{name}: result {n} does not fit in 64 bits")
    return n


# -------------------------------
# Arithmetic
# -------------------------------
def arithmetic(name: str, op: Callable[[int, int], int]) -> NativeHandler:
    """Build a binary integer operator with range checking."""
    def handler(env: Environment, args: list[LispValue]) -> int:
        a, b = _numbers(name, args)
        return _checked(name, op(a, b))
    handler.__doc__ = f"({name} a b) over two numbers."
    return handler


def div(env: Environment, args: list[LispValue]) -> int:
    """Integer division truncating toward zero; zero divisor is an error."""
    a, b = _numbers("/", args)
    if b == 0:
        raise DivisionByZero("Division by zero")
    q = abs(a) // abs(b)
    return _checked("/", q if (a < 0) == (b < 0) else -q)


# -------------------------------
# Comparison
# -------------------------------
def equals(env: Environment, args: list[LispValue]) -> bool:
    """Structural equality across every kind of value."""
    a, b = _binary("=", args)
    return values_equal(a, b)


def comparison(name: str, op: Callable[[int, int], bool]) -> NativeHandler:
    def handler(env: Environment, args: list[LispValue]) -> bool:
        a, b = _numbers(name, args)
        return op(a, b)
    handler.__doc__ = f"({name} a b) over two numbers."
    return handler


# -------------------------------
# Lists
# -------------------------------
def _single(name: str, args: list[LispValue]) -> LispValue:
    if not args:
        raise ArityMismatch(f"{name} requires 1 argument")
    return args[0]


def list_builtin(env: Environment, args: list[LispValue]) -> List:
    """Construct a list from the provided arguments (identity)."""
    return List(args)


def is_list(env: Environment, args: list[LispValue]) -> bool:
    return isinstance(_single("list?", args), List)


def is_empty(env: Environment, args: list[LispValue]) -> bool:
    xs = _single("empty?", args)
    if not isinstance(xs, List):
        raise TypeMismatch("empty?", xs, "expected a list")
    return len(xs) == 0


def count(env: Environment, args: list[LispValue]) -> int:
    """Number of elements of a list; nil counts as empty."""
    xs = _single("count", args)
    match xs:
        case List():
            return len(xs)
        case NilType():
            return 0
    raise TypeMismatch("count", xs, "expected a list or nil")


# -------------------------------
# Strings and printing
# -------------------------------
def pr_str_builtin(env: Environment, args: list[LispValue]) -> str:
    return " ".join(pr_str(a, readable=True) for a in args)


def str_builtin(env: Environment, args: list[LispValue]) -> str:
    return "".join(pr_str(a, readable=False) for a in args)


def prn(env: Environment, args: list[LispValue]) -> LispValue:
    """Print the readable form of the first argument followed by newline; returns Nil."""
    print(pr_str(args[0], readable=True) if args else "")
    return Nil


def println(env: Environment, args: list[LispValue]) -> LispValue:
    """Print space-separated display forms of args followed by newline; returns Nil."""
    print(" ".join(pr_str(a, readable=False) for a in args))
    return Nil


# -------------------------------
# Registration
# -------------------------------
ARITHMETIC: dict[str, NativeHandler] = {
    "+": arithmetic("+", operator.add),
    "-": arithmetic("-", operator.sub),
    "*": arithmetic("*", operator.mul),
    "/": div,
}

FUNCTIONS: dict[str, NativeHandler] = {
    **ARITHMETIC,
    "=": equals,
    "<": comparison("<", operator.lt),
    "<=": comparison("<=", operator.le),
    ">": comparison(">", operator.gt),
    ">=": comparison(">=", operator.ge),
    "list": list_builtin,
    "list?": is_list,
    "empty?": is_empty,
    "count": count,
    "pr-str": pr_str_builtin,
    "str": str_builtin,
    "prn": prn,
    "println": println,
}


def build_namespace(
    functions: Mapping[str, NativeHandler],
    special_forms: Mapping[str, Callable] | None = None,
) -> Mapping[Symbol, LispValue]:
    """Wrap handlers as mal values in a read-only Symbol -> value table."""
    table: dict[Symbol, LispValue] = {}
    for name, handler in (special_forms or {}).items():
        table[Symbol(name)] = SpecialForm(name, handler)
    for name, handler in functions.items():
        table[Symbol(name)] = NativeFunction(name, handler)
    log.debug("namespace built with %d entries", len(table))
    return MappingProxyType(table)


@lru_cache(maxsize=None)
def default_namespace() -> Mapping[Symbol, LispValue]:
    """The full library, built once per process."""
    return build_namespace(FUNCTIONS, SPECIAL_FORMS)


@lru_cache(maxsize=None)
def arithmetic_namespace() -> Mapping[Symbol, LispValue]:
    """Only the four arithmetic operators, as the early interpreter stages expose."""
    return build_namespace(ARITHMETIC)

