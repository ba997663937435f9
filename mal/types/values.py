"""Collection values and the value-model equality relation.

Numbers, strings and booleans are plain Python `int`, `str` and `bool`.
The three collection kinds are tuple subclasses so that they are immutable
and keep distinct tags: a List is never equal to a Vector, even when both
hold the same elements.
"""

from __future__ import annotations

from typing import Iterable

from mal import LispValue
from mal.errors import TypeMismatch
from mal.types.functions import Closure, NativeFunction, SpecialForm
from mal.types.nil import NilType
from mal.types.symbol import Symbol

INT_MIN = -(2**63)
INT_MAX = 2**63 - 1


class _Sequence(tuple):
    """Shared behaviour for List, Vector and HashMap."""

    __slots__ = ()

    def __new__(cls, items: Iterable[LispValue] = ()):
        return super().__new__(cls, items)

    def __eq__(self, other):
        return values_equal(self, other)

    def __ne__(self, other):
        return not values_equal(self, other)

    __hash__ = tuple.__hash__

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self)!r})"


class List(_Sequence):
    __slots__ = ()


class Vector(_Sequence):
    __slots__ = ()


class HashMap(_Sequence):
    """Flat sequence of alternating key, value elements."""

    __slots__ = ()

    def __new__(cls, items: Iterable[LispValue] = ()):
        self = super().__new__(cls, items)
        if len(self) % 2:
            raise TypeMismatch("hash-map", list(self), "odd number of elements")
        return self

    def pairs(self) -> Iterable[tuple[LispValue, LispValue]]:
        return zip(self[::2], self[1::2])


def is_number(x: LispValue) -> bool:
    # bool is an int subclass, but true/false are not numbers
    return isinstance(x, int) and not isinstance(x, bool)


def in_range(n: int) -> bool:
    return INT_MIN <= n <= INT_MAX


def values_equal(a: LispValue, b: LispValue) -> bool:
    """Structural equality over the closed set of mal values."""
    if a is b:
        return True
    match a, b:
        case (List(), List()) | (Vector(), Vector()) | (HashMap(), HashMap()):
            if type(a) is not type(b) or len(a) != len(b):
                return False
            return all(values_equal(x, y) for x, y in zip(a, b))
        case (bool(), bool()):
            return a == b
        case (int(), int()):
            return is_number(a) and is_number(b) and a == b
        case (str(), str()) | (Symbol(), Symbol()):
            return a == b
        case (NilType(), NilType()):
            return True
        case (SpecialForm() | NativeFunction() | Closure(), _):
            # Functions compare by identity only
            return False
    return False
