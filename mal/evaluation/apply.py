"""Application engine for mal.

This module centralizes function application semantics for the interpreter:
- Closures run their body in a child of the environment they captured.
- Native functions run in a child of the *caller's* environment and receive
  the already-evaluated arguments.
- Anything else in head position, special forms included, is not callable.

There is no tail-call optimization: every closure call is one Python frame.
"""

from __future__ import annotations

import logging

from mal import LispValue, EvaluatorFn
from mal.errors import NotCallable
from mal.types.environment import Environment
from mal.types.functions import Closure, NativeFunction

log = logging.getLogger(__name__)


def apply_closure(
    fn: Closure,
    args: list[LispValue],
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """Bind `args` against the closure's parameters and evaluate its body."""
    new_env = Environment.derive(fn.env, fn.params, args)
    return evaluate_fn(fn.body, new_env)


def apply(
    head: LispValue,
    args: list[LispValue],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """Apply either a Closure or a NativeFunction; raise NotCallable otherwise."""
    match head:
        case Closure():
            return apply_closure(head, args, evaluate_fn)
        case NativeFunction():
            log.debug("native %s %d arg(s)", head.name, len(args))
            return head(Environment.derive(env, (), args), args)
        case _:
            raise NotCallable(head)
