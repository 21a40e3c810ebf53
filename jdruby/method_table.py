"""Registry of symbols, classes and native methods."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Any

_PREINTERNED = (
    "initialize", "new", "to_s", "inspect", "class",
    "puts", "print", "p", "raise", "require",
    "==", "!=", "<", ">", "<=", ">=", "<=>",
    "+", "-", "*", "/", "%", "**",
    "[]", "[]=", "<<", "each", "map", "select",
    "length", "size", "freeze", "frozen?",
    "nil?", "respond_to?", "send", "method_missing",
)

_FIRST_SYMBOL_ID = 1
_FIRST_CLASS_ID = 0x1_0000
_CLASS_ID_STEP = 8


@dataclass(frozen=True)
class MethodEntry:
    """A registered method.

    arity >= 0 is a fixed argument count, -1 is variadic with
    (argc, argv, self), -2 receives the arguments as one array.
    """

    func: Any
    arity: int
    name: str
    klass: int


class MethodTable:
    """Symbols, class hierarchy and method definitions."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._methods: dict[tuple[int, str], MethodEntry] = {}
        self._symbols: dict[str, int] = {}
        self._sym_names: dict[int, str] = {}
        self._next_sym_id = _FIRST_SYMBOL_ID
        self._class_hierarchy: dict[int, int] = {}
        self._class_names: dict[int, str] = {}
        self._next_class_id = _FIRST_CLASS_ID
        for name in _PREINTERNED:
            self.intern(name)

    def intern(self, name: str) -> int:
        """The symbol id for name, allocating one if needed."""
        with self._lock:
            existing = self._symbols.get(name)
            if existing is not None:
                return existing
            symbol_id = self._next_sym_id
            self._next_sym_id += 1
            self._symbols[name] = symbol_id
            self._sym_names[symbol_id] = name
            return symbol_id

    def id2name(self, symbol_id: int) -> str | None:
        """The name of a symbol id, or None if unknown."""
        return self._sym_names.get(symbol_id)

    def define_method(self, klass: int, name: str, func: Any, arity: int) -> None:
        """Register or replace a method on a class."""
        with self._lock:
            self._methods[(klass, name)] = MethodEntry(func, arity, name, klass)

    def lookup_method(self, klass: int, name: str) -> MethodEntry | None:
        """Find a method on klass or the nearest superclass."""
        current = klass
        while True:
            entry = self._methods.get((current, name))
            if entry is not None:
                return entry
            parent = self._class_hierarchy.get(current, 0)
            if parent == 0:
                return None
            current = parent

    def define_class(self, name: str, superclass: int) -> int:
        """Create a class and return its value; 0 means no superclass."""
        with self._lock:
            class_id = self._next_class_id
            self._next_class_id += _CLASS_ID_STEP
            self._class_hierarchy[class_id] = superclass
            self._class_names[class_id] = name
            return class_id

    def class_by_name(self, name: str) -> int | None:
        """The value of the first class defined with this name."""
        return next(
            (value for value, cname in self._class_names.items() if cname == name),
            None,
        )


_default: MethodTable | None = None
_default_lock = threading.Lock()


def default_table() -> MethodTable:
    """The process-wide method table, created on first use."""
    global _default
    with _default_lock:
        if _default is None:
            _default = MethodTable()
        return _default


def intern_symbol(name: str) -> int:
    """Intern a name in the process-wide table."""
    return default_table().intern(name)


def symbol_name(symbol_id: int) -> str | None:
    """Look up a symbol id in the process-wide table."""
    return default_table().id2name(symbol_id)