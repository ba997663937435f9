from mal import EvaluatorFn
from mal import SExpression, LispValue
from mal.errors import ArityMismatch
from mal.types.nil import Nil
from mal.types.environment import Environment


def is_truthy(value: LispValue) -> bool:
    # Only nil and false are falsy; 0, "" and () are true
    return value is not Nil and value is not False


def if_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    if len(tail) not in (2, 3):
        raise ArityMismatch("if requires a condition, a then-expression and an optional else")

    cond = evaluate_fn(tail[0], env)
    if is_truthy(cond):
        return evaluate_fn(tail[1], env)
    elif len(tail) > 2:
        return evaluate_fn(tail[2], env)
    else:
        return Nil
