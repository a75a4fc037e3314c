# -*- coding: utf-8 -*-
"""
Module grid used while a symbol is being built.

Each cell is tri-state: None (not yet set), True (dark) or False (light).
A parallel boolean mask records which cells belong to function patterns;
those cells can only be written through ``set_function`` and are never
touched by data placement or masking.
"""

from typing import List, Optional, Tuple

from .errors import EncodingInvariantError
from .tables import check_version, symbol_size


class ModuleGrid:
    """Square matrix of modules plus its reserved (function) mask."""

    def __init__(self, version: int):
        check_version(version)
        self.version = version
        self.size = symbol_size(version)
        self.modules: List[List[Optional[bool]]] = [[None] * self.size for _ in range(self.size)]
        self.function: List[List[bool]] = [[False] * self.size for _ in range(self.size)]

    def __repr__(self) -> str:
        return f"<ModuleGrid version={self.version} size={self.size}>"

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def set_function(self, row: int, col: int, dark: bool) -> None:
        """Place (or update) a function module and reserve it."""
        self.modules[row][col] = bool(dark)
        self.function[row][col] = True

    def reserve(self, row: int, col: int) -> None:
        """Reserve a function module whose value is written later."""
        self.function[row][col] = True
        if self.modules[row][col] is None:
            self.modules[row][col] = False

    def is_function(self, row: int, col: int) -> bool:
        return self.function[row][col]

    def set_data(self, row: int, col: int, dark: bool) -> None:
        if self.function[row][col]:
            raise EncodingInvariantError(f"Data bit written over function module ({row}, {col})")
        self.modules[row][col] = bool(dark)

    def unset_count(self) -> int:
        return sum(1 for row in self.modules for cell in row if cell is None)

    def copy(self) -> 'ModuleGrid':
        clone = ModuleGrid.__new__(ModuleGrid)
        clone.version = self.version
        clone.size = self.size
        clone.modules = [list(row) for row in self.modules]
        clone.function = self.function  # shared, never mutated after placement
        return clone

    def to_matrix(self) -> Tuple[Tuple[bool, ...], ...]:
        """Freeze into a tuple of rows; every cell must be set."""
        if self.unset_count():
            raise EncodingInvariantError(f"{self.unset_count()} modules left unset")
        return tuple(tuple(bool(cell) for cell in row) for row in self.modules)
