"""
Interactive read-eval-print loop, one variant per interpreter stage.

Stages grow the language one step at a time:

- 0: echo each line back
- 1: read and print the forms of each line
- 2: evaluate with only the arithmetic operators, fresh state per line
- 3: full library, definitions persist across lines
- 4: as 3, plus the prelude (`not`)

Each non-blank line is one turn. A turn that fails prints a single
`Error: ...` line and the loop moves on to the next turn.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Callable, Iterable, Iterator, TextIO

from mal.builtin.core import arithmetic_namespace
from mal.config import LATEST_STAGE, get_config, setup_logging
from mal.console import Console
from mal.errors import MalError
from mal.evaluation.evaluator import evaluate
from mal.interpreter import Interpreter
from mal.printer import pr_str
from mal.reader.parser import read_str
from mal.types.environment import Environment

log = logging.getLogger(__name__)

# line -> rendered output lines, produced lazily so each is written before
# the next form on the line is evaluated
Step = Callable[[str], Iterable[str]]


def echo_step() -> Step:
    return lambda line: [line]


def read_print_step() -> Step:
    return lambda line: (pr_str(form) for form in read_str(line))


def arithmetic_step() -> Step:
    def step(line: str) -> Iterator[str]:
        env = Environment(arithmetic_namespace())
        for form in read_str(line):
            yield pr_str(evaluate(form, env))
    return step


def interpreter_step(prelude: bool) -> Step:
    interp = Interpreter() if prelude else Interpreter(prelude=None)
    return interp.rep


STAGES: dict[int, Callable[[], Step]] = {
    0: echo_step,
    1: read_print_step,
    2: arithmetic_step,
    3: lambda: interpreter_step(prelude=False),
    4: lambda: interpreter_step(prelude=True),
}


def run(stage: int = LATEST_STAGE, console: Console | None = None, out: TextIO | None = None) -> None:
    """Drive `console` until end of input, writing results to `out`."""
    console = console if console is not None else Console()
    out = out if out is not None else sys.stdout
    step = STAGES[stage]()

    for line in console:
        if not line.strip():
            continue
        try:
            for rendered in step(line):
                out.write(rendered + "\n")
        except MalError as ex:
            log.debug("turn failed", exc_info=True)
            out.write(f"Error: {ex}\n")
        except RecursionError:
            out.write("Error: maximum recursion depth exceeded\n")
        out.flush()


def main(argv: list[str] | None = None) -> int:
    config = get_config()
    parser = argparse.ArgumentParser(prog="mal", description="mal interpreter REPL")
    parser.add_argument(
        "--stage", type=int, choices=sorted(STAGES), default=config.stage,
        help="interpreter stage to run (default: %(default)s)",
    )
    parser.add_argument(
        "--log-level", default=config.log_level,
        help="logging level (default: %(default)s)",
    )
    args = parser.parse_args(argv)

    setup_logging(args.log_level)
    run(args.stage)
    return 0


if __name__ == "__main__":
    sys.exit(main())
