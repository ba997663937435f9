"""Line-oriented input for the REPL."""

from __future__ import annotations

import sys
from typing import Optional, TextIO

from mal.config import get_config

# Control character that ends a session, as typed at a terminal
END_OF_TRANSMISSION = "\x04"


class Console:
    """Reads one line of user input per turn from `stdin`, prompting on `stdout`."""

    def __init__(
        self,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
        prompt: str | None = None,
    ):
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout
        self.prompt = prompt if prompt is not None else get_config().prompt

    def read_line(self) -> Optional[str]:
        """Next line without its line ending, or None at end of input.

        A blank line comes back as "" and carries no input.
        """
        self.stdout.write(self.prompt)
        self.stdout.flush()

        line = self.stdin.readline()
        if not line:
            return None
        line = line.rstrip("\n").rstrip("\r")
        if line == END_OF_TRANSMISSION:
            return None
        return line

    def __iter__(self):
        while (line := self.read_line()) is not None:
            yield line
