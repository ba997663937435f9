# Core type aliases for mal's data model.
# Runtime values are plain Python types where one fits (int, bool, str) and
# small tuple subclasses where the language needs a distinct tag (List, Vector,
# HashMap). Symbols and Nil have their own classes.
#
# Naming guidance:
# - SExpression: Use in reader/parser code to denote syntactic forms (code-as-data).
# - LispValue:  Use in evaluator/runtime code to denote evaluated values.
# Both aliases resolve to `Any` and are interchangeable: forms are values.

from typing import Any, Callable

# Runtime value alias
LispValue = Any
# Forms and values share one representation
SExpression = LispValue

# Evaluator function type: passed into special forms and apply
EvaluatorFn = Callable[..., LispValue]

__version__ = "0.4.0"
