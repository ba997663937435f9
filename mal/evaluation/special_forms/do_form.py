from mal import EvaluatorFn
from mal import SExpression, LispValue
from mal.errors import ArityMismatch
from mal.types.environment import Environment


def do_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    if not tail:
        raise ArityMismatch("do requires at least 1 argument")
    for e in tail[:-1]:
        evaluate_fn(e, env)
    return evaluate_fn(tail[-1], env)
