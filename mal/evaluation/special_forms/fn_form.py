from mal import EvaluatorFn
from mal import SExpression, LispValue
from mal.errors import ArityMismatch, TypeMismatch
from mal.types.environment import Environment
from mal.types.functions import Closure
from mal.types.symbol import Symbol, REST_MARKER
from mal.types.values import List, Vector


def check_params(params: SExpression) -> List:
    """Validate a parameter pattern: symbols, at most one '&' followed by one symbol."""
    if not isinstance(params, (List, Vector)):
        raise TypeMismatch("fn*", params, "parameters must be a list")
    if not all(isinstance(p, Symbol) for p in params):
        raise TypeMismatch("fn*", params, "parameters must be symbols")
    if REST_MARKER in params:
        i = params.index(REST_MARKER)
        if len(params) != i + 2 or params[i + 1] == REST_MARKER:
            raise TypeMismatch("fn*", params, "'&' must be followed by exactly one symbol")
    return List(params)


def fn_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """
    (fn* (params...) body)
    The closure shares the current scope, so later definitions there are visible.
    """
    if len(tail) != 2:
        raise ArityMismatch("fn* requires a parameter list and a body")

    params, body = tail
    return Closure(check_params(params), body, env.clone())
