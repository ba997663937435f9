"""Symbols: interned identifier names.

Two Symbols are equal when their names are equal. The name is interned so
comparison and hashing stay cheap during environment lookups.
"""

from __future__ import annotations

import sys


class Symbol:
    """An identifier in mal source; compares and hashes by name."""

    __slots__ = ("id",)

    def __init__(self, name: str):
        # Intern to ensure fast equality/hash and reduce memory
        self.id = sys.intern(name)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Symbol) and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self):
        return f"Symbol({self.id!r})"

    def __str__(self):
        return self.id


# Marker separating positional parameters from the rest parameter
REST_MARKER = Symbol("&")
