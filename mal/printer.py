"""Rendering of mal values back to text.

Two modes:
- readable: strings are double-quoted with `"`, `\\` and newline escaped, so
  the output can be read back by the reader.
- display: strings are written raw, for human consumption.

Collections render with the same mode all the way down. Functions render as an
opaque tag naming their kind and symbol; those tags do not read back.
"""

from __future__ import annotations

from io import StringIO

from mal import LispValue
from mal.types.functions import Closure, NativeFunction, SpecialForm
from mal.types.nil import NilType
from mal.types.symbol import Symbol
from mal.types.values import HashMap, List, Vector

_ESCAPES = {'"': '\\"', "\\": "\\\\", "\n": "\\n"}

_DELIMITERS = {
    List: ("(", ")"),
    Vector: ("[", "]"),
    HashMap: ("{", "}"),
}


def escape_string(s: str) -> str:
    return "".join(_ESCAPES.get(c, c) for c in s)


def pr_str(value: LispValue, readable: bool = True) -> str:
    with StringIO() as buffer:
        _write(value, buffer, readable)
        return buffer.getvalue()


def _write(value: LispValue, buffer: StringIO, readable: bool) -> None:
    match value:
        case List() | Vector() | HashMap():
            start, end = _DELIMITERS[type(value)]
            buffer.write(start)
            for i, item in enumerate(value):
                if i:
                    buffer.write(" ")
                _write(item, buffer, readable)
            buffer.write(end)
        case str():
            if readable:
                buffer.write(f'"{escape_string(value)}"')
            else:
                buffer.write(value)
        case bool():
            buffer.write("true" if value else "false")
        case int():
            buffer.write(str(value))
        case NilType():
            buffer.write("nil")
        case Symbol():
            buffer.write(value.id)
        case SpecialForm() | NativeFunction() | Closure():
            buffer.write(repr(value))
        case _:
            # Host objects leaking in from native code
            buffer.write(f"#<{type(value).__name__} {value!r}>")
