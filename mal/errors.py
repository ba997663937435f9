from __future__ import annotations

from typing import Any


class MalError(Exception):
    """ Base class for all mal errors"""
    pass


# -------------------------------
# Reader errors
# -------------------------------
class ParseError(MalError):
    """ Raised when text cannot be read into forms"""


class UnexpectedEof(ParseError):
    """ Raised when the tokens run out before a collection is closed"""


class UnbalancedCollection(ParseError):
    """ Raised on a closing delimiter that does not match its opener"""


class UnterminatedString(ParseError):
    """ Raised when a string literal has no closing quote"""


class NumberParseError(ParseError):
    """ Raised when an integer literal does not fit in 64 bits"""


# -------------------------------
# Evaluation errors
# -------------------------------
class EvalError(MalError):
    """ Base class for errors raised while evaluating a form"""


class SymbolNotFound(EvalError):
    """ Raised when a symbol is not bound anywhere in the environment chain"""

    def __init__(self, name: Any):
        super().__init__(f"'{name}' not found")
        self.name = str(name)


class NotCallable(EvalError):
    """ Raised when the head of an application is not a function"""

    def __init__(self, value: Any):
        super().__init__(f"Cannot apply non-function {value}")
        self.value = value


class ArityMismatch(EvalError):
    """ Raised when the number of arguments passed to a function is incorrect"""


class TypeMismatch(EvalError):
    """ Raised when the operands of an operation have the wrong shape or type"""

    def __init__(self, operation: str, operands: Any, detail: str | None = None):
        from mal.printer import pr_str

        # A plain list is an argument list; anything else is a single value
        if isinstance(operands, list):
            shown = " ".join(pr_str(o) for o in operands)
        else:
            shown = pr_str(operands)
        message = f"{operation}: unexpected operands {shown}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)
        self.operation = operation
        self.operands = operands


class DivisionByZero(EvalError):
    """ Raised when dividing by zero"""


class NumberOverflow(EvalError):
    """ Raised when an arithmetic result leaves the 64-bit signed range"""
