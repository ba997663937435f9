from mal.evaluation.evaluator import evaluate, eval_ast
from mal.evaluation.apply import apply

__all__ = ("evaluate", "eval_ast", "apply")
