"""Callable values: special forms, native functions and closures."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from mal import SExpression, LispValue

if TYPE_CHECKING:
    from mal.types.environment import Environment

# handler(operands, env, evaluate_fn) -> value, operands unevaluated
SpecialFormHandler = Callable[..., LispValue]
# handler(env, args) -> value, args already evaluated
NativeHandler = Callable[["Environment", list], LispValue]


class SpecialForm:
    """An operation that receives its operands unevaluated."""

    __slots__ = ("name", "handler")

    def __init__(self, name: str, handler: SpecialFormHandler):
        self.name = name
        self.handler = handler

    def __repr__(self) -> str:
        return f"#<special-form {self.name}>"


class NativeFunction:
    """A library function implemented in Python."""

    __slots__ = ("name", "handler")

    def __init__(self, name: str, handler: NativeHandler):
        self.name = name
        self.handler = handler

    def __call__(self, env: Environment, args: list[LispValue]) -> LispValue:
        return self.handler(env, args)

    def __repr__(self) -> str:
        return f"#<native-function {self.name}>"


class Closure:
    """A first-class function with a parameter pattern, body, and captured env."""

    __slots__ = ("params", "body", "env")

    def __init__(self, params: SExpression, body: SExpression, env: Environment):
        self.params = params
        self.body: SExpression = body
        # Shared handle: later definitions in env stay visible here
        self.env: Environment = env

    def __repr__(self) -> str:
        from mal.printer import pr_str

        return f"#<closure {pr_str(self.params)}>"
