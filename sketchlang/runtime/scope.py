"""Parent-linked variable scopes."""

from __future__ import annotations

from typing import Dict, Iterator, Optional

from sketchlang.errors import UndefinedVariableError

from .values import Value


class Scope:
    """A namespace whose reads fall back to its parent.

    The parent is fixed at construction. Writes through :meth:`set` land in
    the nearest scope that already owns the name, otherwise in this scope,
    so a nested block can update an outer variable without declaring it.
    """

    __slots__ = ("vars", "parent")

    def __init__(self, parent: Optional["Scope"] = None) -> None:
        self.vars: Dict[str, Value] = {}
        self.parent = parent

    def child(self) -> "Scope":
        return Scope(self)

    def chain(self) -> Iterator["Scope"]:
        scope: Optional[Scope] = self
        while scope is not None:
            yield scope
            scope = scope.parent

    def owner(self, name: str) -> Optional["Scope"]:
        """Return the nearest scope in the chain that owns ``name``."""
        for scope in self.chain():
            if name in scope.vars:
                return scope
        return None

    def get(self, name: str) -> Value:
        owner = self.owner(name)
        if owner is None:
            raise UndefinedVariableError(name)
        return owner.vars[name]

    def set(self, name: str, value: Value) -> None:
        owner = self.owner(name)
        (owner or self).vars[name] = value

    def define(self, name: str, value: Value) -> None:
        """Bind ``name`` in this scope, shadowing any outer binding."""
        self.vars[name] = value

    def flatten(self) -> Dict[str, Value]:
        """Every reachable name, nearest binding winning."""
        merged: Dict[str, Value] = {}
        for scope in self.chain():
            for name, value in scope.vars.items():
                merged.setdefault(name, value)
        return merged

    def __contains__(self, name: str) -> bool:
        return self.owner(name) is not None

    def __repr__(self) -> str:
        depth = sum(1 for _ in self.chain()) - 1
        return f"Scope(depth={depth}, vars={sorted(self.vars)})"


__all__ = ["Scope"]
