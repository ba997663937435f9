import pytest

from mal.evaluation.evaluator import evaluate
from mal.reader.parser import read_str
from mal.types.environment import Environment


@pytest.fixture
def env():
    """Fresh root environment with the library composed in."""
    return Environment.new()


@pytest.fixture
def run(env):
    """Evaluate every form of a source string in `env`, returning the last result."""
    def _run(source):
        result = None
        for expr in read_str(source):
            result = evaluate(expr, env)
        return result
    return _run
