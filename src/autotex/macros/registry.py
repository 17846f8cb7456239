"""Macro catalogue and the scoped macro table.

Built-in macros are registered once, at import time, into BUILTIN_MACROS
with define_macro() or the @macro decorator. Expansion never writes to the
catalogue. Every expansion works against a MacroTable, which layers user
and run-time definitions over the read-only catalogue.

MacroTable models TeX grouping: a local definition made inside a group is
undone when the group ends; a global one (``\\gdef``) survives.

Thread Safety:
BUILTIN_MACROS is only written while modules import. MacroTable
serializes every read and write with a re-entrant lock, so several
expansions may share one table (``\\gdef`` across sibling math regions).
``names`` returns a snapshot; new definitions never disturb an iteration
in progress.

Example:
    >>> table = create_macro_table({"\\\\RR": "\\\\mathbb{R}"})
    >>> table.get("\\\\RR")
    TemplateMacro(body='\\\\mathbb{R}')
    >>> table.begin_group()
    >>> table.set("\\\\x", "y")
    >>> table.end_group()
    >>> table.has("\\\\x")
    False

"""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterator, Mapping
from contextlib import contextmanager
from types import MappingProxyType
from typing import Any

from autotex.errors import MacroScopeError
from autotex.macros.definitions import (
    MacroDefinition,
    MacroFunction,
    ProcedureMacro,
    as_definition,
)

# Static catalogue, filled by the modules in autotex.macros.builtins
BUILTIN_MACROS: dict[str, MacroDefinition] = {}

# Sentinel for "not defined before this group" in the undo records
_UNDEFINED: Any = object()


def define_macro(name: str, body: MacroDefinition | str | MacroFunction) -> None:
    """Register a built-in macro.

    Later registrations of the same name replace earlier ones.

    Args:
        name: Control sequence (``"\\\\foo"``) or single character
        body: Template string, procedure, or MacroDefinition

    Raises:
        TypeError: If body cannot define a macro
    """
    BUILTIN_MACROS[name] = as_definition(body)


def macro(name: str) -> Callable[[MacroFunction], MacroFunction]:
    """Decorator registering a function as a procedural built-in macro.

    Example:
        >>> @macro("\\\\@firstoftwo")
        ... def first_of_two(context):
        ...     return MacroExpansion.of(context.consume_args(2)[0])
    """

    def decorator(func: MacroFunction) -> MacroFunction:
        BUILTIN_MACROS[name] = ProcedureMacro(func, name)
        return func

    return decorator


class MacroTable:
    """Mutable, scoped mapping from macro names to definitions.

    Lookups fall back to the built-in catalogue, so a local definition can
    shadow a built-in and ``end_group`` restores it.

    """

    __slots__ = ("_builtins", "_current", "_undo_stack", "_lock")

    def __init__(
        self,
        builtins: Mapping[str, MacroDefinition] | None = None,
        macros: Mapping[str, Any] | None = None,
    ) -> None:
        """Initialize a table.

        Args:
            builtins: Read-only fallback definitions (the built-in catalogue)
            macros: Seed definitions at global level; strings and callables
                are coerced with as_definition()
        """
        self._builtins: Mapping[str, MacroDefinition] = builtins if builtins is not None else {}
        self._current: dict[str, MacroDefinition] = {}
        self._undo_stack: list[dict[str, Any]] = []
        self._lock = threading.RLock()
        for name, value in (macros or {}).items():
            self._current[name] = as_definition(value)

    def get(self, name: str) -> MacroDefinition | None:
        """Get the current definition of name, or None."""
        with self._lock:
            definition = self._current.get(name)
            if definition is None:
                definition = self._builtins.get(name)
            return definition

    def has(self, name: str) -> bool:
        """Check if name has a definition."""
        with self._lock:
            return name in self._current or name in self._builtins

    def set(
        self,
        name: str,
        value: MacroDefinition | str | MacroFunction | None,
        global_: bool = False,
    ) -> None:
        """Define, redefine or (with None) undefine a macro.

        Args:
            name: Macro name
            value: New definition, or None to remove the current one
            global_: Survive the end of every open group (``\\gdef``)
        """
        definition = None if value is None else as_definition(value)
        with self._lock:
            if global_:
                # Forget pending restores so no end_group undoes this
                for undo in self._undo_stack:
                    undo.pop(name, None)
                if self._undo_stack:
                    self._undo_stack[-1][name] = definition
            elif self._undo_stack:
                top = self._undo_stack[-1]
                if name not in top:
                    top[name] = self._current.get(name, _UNDEFINED)

            if definition is None:
                self._current.pop(name, None)
            else:
                self._current[name] = definition

    def begin_group(self) -> None:
        """Open a group; local definitions after this are undone at its end."""
        with self._lock:
            self._undo_stack.append({})

    def end_group(self) -> None:
        """Close the innermost group, restoring shadowed definitions.

        Raises:
            MacroScopeError: If no group is open
        """
        with self._lock:
            if not self._undo_stack:
                msg = "Unbalanced macro group: end_group() without begin_group()"
                raise MacroScopeError(msg)
            undo = self._undo_stack.pop()
            for name, previous in undo.items():
                if previous is _UNDEFINED or previous is None:
                    self._current.pop(name, None)
                else:
                    self._current[name] = previous

    @contextmanager
    def group(self) -> Iterator[MacroTable]:
        """Hold the table for one expansion inside its own group.

        Other threads block on the table until the block exits; every group
        opened inside the block is closed on the way out.

        Example:
            >>> with table.group():
            ...     table.set("\\\\x", "y")
            >>> table.has("\\\\x")
            False
        """
        with self._lock:
            depth = len(self._undo_stack)
            self.begin_group()
            try:
                yield self
            finally:
                while len(self._undo_stack) > depth:
                    self.end_group()

    def end_groups(self) -> None:
        """Close every open group."""
        with self._lock:
            while self._undo_stack:
                self.end_group()

    @property
    def depth(self) -> int:
        """Number of open groups."""
        with self._lock:
            return len(self._undo_stack)

    @property
    def names(self) -> frozenset[str]:
        """Snapshot of every defined name, built-ins included."""
        with self._lock:
            return frozenset(self._current) | frozenset(self._builtins)

    def user_macros(self) -> dict[str, MacroDefinition]:
        """Snapshot of definitions layered over the built-ins."""
        with self._lock:
            return dict(self._current)

    def __contains__(self, name: str) -> bool:
        """Support 'name in table' syntax."""
        return self.has(name)

    def __len__(self) -> int:
        """Number of defined names."""
        return len(self.names)

    def __repr__(self) -> str:
        return f"MacroTable(user={len(self._current)}, depth={len(self._undo_stack)})"


def builtin_macros() -> Mapping[str, MacroDefinition]:
    """Read-only view of the built-in catalogue, fully populated."""
    import autotex.macros.builtins  # noqa: F401 - registers the catalogue

    return MappingProxyType(BUILTIN_MACROS)


def create_macro_table(macros: Mapping[str, Any] | MacroTable | None = None) -> MacroTable:
    """Create a table over the built-in catalogue.

    Args:
        macros: Seed definitions. An existing MacroTable is returned as-is,
            which lets several render passes share ``\\gdef`` definitions.

    Returns:
        MacroTable backed by every built-in macro
    """
    if isinstance(macros, MacroTable):
        return macros
    return MacroTable(builtin_macros(), macros)


__all__ = [
    "BUILTIN_MACROS",
    "MacroTable",
    "builtin_macros",
    "create_macro_table",
    "define_macro",
    "macro",
]
