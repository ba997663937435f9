from mal import EvaluatorFn
from mal import SExpression, LispValue
from mal.errors import ArityMismatch, TypeMismatch
from mal.types.environment import Environment
from mal.types.symbol import Symbol


def def_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """
    (def! name value)
    Binds in the innermost scope of `env` and returns the value.
    """
    if len(tail) != 2:
        raise ArityMismatch("def! requires exactly 2 arguments")

    name, val_expr = tail
    if not isinstance(name, Symbol):
        raise TypeMismatch("def!", name, "name must be a symbol")
    value = evaluate_fn(val_expr, env)
    env.set(name, value)
    return value
