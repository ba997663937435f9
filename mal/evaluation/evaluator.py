"""Core evaluator for the mal interpreter.

`evaluate` dispatches a form either to a special-form handler (operands passed
unevaluated) or to ordinary application (every element evaluated first).
`eval_ast` performs the structural evaluation of non-application forms.
"""

from __future__ import annotations

import logging

from mal import SExpression, LispValue
from mal.evaluation.apply import apply
from mal.types.environment import Environment
from mal.types.functions import SpecialForm
from mal.types.symbol import Symbol
from mal.types.values import HashMap, List, Vector

log = logging.getLogger(__name__)


def evaluate(expr: SExpression, env: Environment) -> LispValue:
    """Evaluate one form in `env`."""
    log.debug("eval %r", expr)

    if not isinstance(expr, List):
        return eval_ast(expr, env)

    # Empty list self-evaluates
    if not expr:
        return expr

    head, *tail = expr
    if isinstance(head, Symbol):
        bound = env.get(head)
        if isinstance(bound, SpecialForm):
            return bound.handler(tail, env, evaluate)

    fn, *args = eval_ast(expr, env)
    return apply(fn, args, env, evaluate)


def eval_ast(expr: SExpression, env: Environment) -> LispValue:
    """Structural evaluation: rebuild collections, resolve symbols."""
    match expr:
        case List():
            return List(evaluate(item, env) for item in expr)
        case Vector():
            return Vector(evaluate(item, env) for item in expr)
        case HashMap():
            # Keys stay literal; only the value slots are evaluated
            items = []
            for key, value in expr.pairs():
                items.append(key)
                items.append(evaluate(value, env))
            return HashMap(items)
        case Symbol():
            return env.lookup(expr)
    # --- Atoms return as-is ---
    return expr
