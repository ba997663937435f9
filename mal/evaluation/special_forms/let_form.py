from mal import EvaluatorFn
from mal import SExpression, LispValue
from mal.errors import ArityMismatch, TypeMismatch
from mal.types.environment import Environment
from mal.types.symbol import Symbol
from mal.types.values import List, Vector


def let_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """
    (let* (name1 expr1 name2 expr2 ...) body)
    Each expression sees the bindings made before it. The body is the last
    operand. The nested scope is always popped, even when evaluation fails.
    """
    if len(tail) < 2:
        raise ArityMismatch("let* requires a binding list and a body")

    bindings = tail[0]
    if not isinstance(bindings, (List, Vector)) or len(bindings) % 2:
        raise TypeMismatch("let*", bindings, "bindings must be a list of name/value pairs")

    with env.nested():
        for name, val_expr in zip(bindings[::2], bindings[1::2]):
            if not isinstance(name, Symbol):
                raise TypeMismatch("let*", name, "binding name must be a symbol")
            env.set(name, evaluate_fn(val_expr, env))
        return evaluate_fn(tail[-1], env)
