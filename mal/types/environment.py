"""Runtime environment for mal.

An Environment is a *handle* onto a chain of mutable scopes. Each Scope stores
bindings of Symbols to evaluated values and links to its enclosing scope via
`outer`. Every handle also carries the shared default namespace (the library),
which lookup consults before the scope chain, so no user binding can shadow a
library name.

Handles are cheap: `clone()` makes a second handle onto the *same* scope, so a
`def!` performed through one is visible through the other. `enter()` and
`exit()` move a handle to a fresh child scope and back without touching other
handles.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from io import StringIO
from types import MappingProxyType
from typing import Iterator, Mapping, Optional, Sequence

from mal import LispValue
from mal.errors import ArityMismatch, SymbolNotFound, TypeMismatch
from mal.types.symbol import Symbol, REST_MARKER

log = logging.getLogger(__name__)

_EMPTY_NAMESPACE: Mapping[Symbol, LispValue] = MappingProxyType({})


class Scope:
    """One frame of bindings with a link to its parent frame."""

    __slots__ = ("vars", "outer")

    def __init__(self, outer: Optional[Scope] = None):
        self.vars: dict[Symbol, LispValue] = {}
        self.outer: Scope | None = outer

    def find(self, symbol: Symbol) -> Optional[Scope]:
        """Find the nearest scope in the chain that binds `symbol`."""
        scope: Optional[Scope] = self
        while scope is not None:
            if symbol in scope.vars:
                return scope
            scope = scope.outer
        return None


class Environment:
    """Handle onto a scope chain plus the immutable default namespace."""

    __slots__ = ("scope", "default_ns")

    def __init__(
        self,
        default_ns: Mapping[Symbol, LispValue] | None = None,
        scope: Scope | None = None,
    ):
        self.scope: Scope = scope if scope is not None else Scope()
        self.default_ns: Mapping[Symbol, LispValue] = (
            default_ns if default_ns is not None else _EMPTY_NAMESPACE
        )

    @classmethod
    def new(cls) -> Environment:
        """Root environment with the library composed in."""
        # Lazy import to avoid circular imports
        from mal.builtin.core import default_namespace

        return cls(default_namespace())

    @classmethod
    def derive(
        cls,
        outer: Environment,
        params: Sequence[LispValue],
        args: Sequence[LispValue],
    ) -> Environment:
        """Child environment of `outer` with `params` bound against `args`.

        Parameters bind positionally. On reaching the `&` marker the following
        symbol is bound to a List of all remaining arguments and binding stops.
        Surplus arguments without `&` are ignored.
        """
        from mal.types.values import List

        env = cls(outer.default_ns, Scope(outer.scope))
        params = list(params)
        for i, param in enumerate(params):
            if param == REST_MARKER:
                rest = params[i + 1:]
                if len(rest) != 1 or not isinstance(rest[0], Symbol):
                    raise TypeMismatch("&", list(params), "'&' must be followed by exactly one symbol")
                env.set(rest[0], List(args[i:]))
                break
            if i >= len(args):
                required = params.index(REST_MARKER) if REST_MARKER in params else len(params)
                raise ArityMismatch(
                    f"Too few arguments: expected {required}, got {len(args)}"
                )
            env.set(param, args[i])
        return env

    def clone(self) -> Environment:
        """Another handle onto the same scope; state is shared, not copied."""
        return Environment(self.default_ns, self.scope)

    def set(self, name: Symbol, value: LispValue) -> None:
        """Bind `name` to `value` in the innermost scope only."""
        if not isinstance(name, Symbol):
            raise TypeMismatch("set", name, "binding name must be a symbol")
        log.debug("set %s", name)
        self.scope.vars[name] = value

    def get(self, name: Symbol) -> Optional[LispValue]:
        """Value bound to `name`, or None when the chain is exhausted.

        Order of resolution:
        1) Default namespace (library)
        2) Lexical chain, innermost to outermost
        """
        value = self.default_ns.get(name)
        if value is not None:
            return value
        scope = self.scope.find(name)
        if scope is not None:
            return scope.vars[name]
        return None

    def lookup(self, name: Symbol) -> LispValue:
        """Like get(), but raises SymbolNotFound when `name` is unbound."""
        value = self.get(name)
        if value is None:
            raise SymbolNotFound(name)
        return value

    def enter(self) -> None:
        """Move this handle into a fresh anonymous child scope."""
        log.debug("entering scope")
        self.scope = Scope(self.scope)

    def exit(self) -> None:
        """Move this handle back to the parent scope; no-op at the root."""
        log.debug("exiting scope")
        if self.scope.outer is not None:
            self.scope = self.scope.outer

    @contextmanager
    def nested(self) -> Iterator[Environment]:
        """enter() for the duration of a block, exit() on every way out."""
        self.enter()
        try:
            yield self
        finally:
            self.exit()

    def depth(self) -> int:
        n = 0
        scope = self.scope.outer
        while scope is not None:
            n += 1
            scope = scope.outer
        return n

    def _write_vars(self, scope: Scope, buffer: StringIO) -> None:
        """Write one scope's variables into the buffer in a compact form."""
        buffer.write("{")
        buffer.write(", ".join(f"{k}: {v!r}" for k, v in scope.vars.items()))
        buffer.write("}")

    def __str__(self) -> str:
        """Human-readable single-frame view with an indicator for parent."""
        with StringIO() as buffer:
            self._write_vars(self.scope, buffer)
            if self.scope.outer is not None:
                buffer.write(" -> ...")
            return buffer.getvalue()

    def __repr__(self) -> str:
        """Detailed chain representation for debugging purposes."""
        chain = []
        scope: Optional[Scope] = self.scope
        while scope is not None:
            with StringIO() as buffer:
                self._write_vars(scope, buffer)
                chain.append(buffer.getvalue())
            scope = scope.outer
        return f"<Environment chain: {' -> '.join(chain)}>"
