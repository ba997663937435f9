from __future__ import annotations

import logging
from typing import Callable, Iterator

from mal import SExpression, LispValue
from mal.evaluation.evaluator import evaluate
from mal.printer import pr_str
from mal.reader.parser import read_str
from mal.types.environment import Environment
from mal.types.nil import Nil

log = logging.getLogger(__name__)

# Definitions every session starts with
PRELUDE = """
(def! not (fn* (a) (if a false true)))
"""


class Interpreter:
    """
    Orchestrates reading and evaluating mal code.
    Maintains an Environment across calls, so definitions persist.
    """

    def __init__(
        self,
        env: Environment | None = None,
        prelude: str | None = PRELUDE,
        eval_fn: Callable[[SExpression, Environment], LispValue] = evaluate,
    ):
        self.eval_fn = eval_fn
        self.env: Environment = env if env is not None else Environment.new()
        if prelude:
            self.eval(prelude)

    def eval(self, code: str) -> LispValue:
        """Evaluate every form in `code`; return the last result (Nil if none)."""
        result: LispValue = Nil
        for expr in read_str(code):
            result = self.eval_fn(expr, self.env)
        return result

    def rep(self, code: str) -> Iterator[str]:
        """Read, evaluate and print: the readable rendering of each form's result.

        Renderings are produced one form at a time, so the results of forms
        before a failing one are still delivered.
        """
        for expr in read_str(code):
            yield pr_str(self.eval_fn(expr, self.env))
