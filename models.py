from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, NamedTuple, Optional, Tuple

Shape = Tuple[Tuple[bool, ...], ...]
Cell = Tuple[int, int]  # (row, col) inside a shape grid
Board = List[List[Optional[str]]]


class InvalidPieceError(ValueError):
    """A piece's shape or orientation table breaks the roster contract."""


class BoardMismatchError(ValueError):
    """A board does not match the layout it is being used with."""


class Orientation(NamedTuple):
    rotation: int  # clockwise quarter turns, 0..3
    flipped: bool = False  # mirrored horizontally before rotating

    @property
    def index(self) -> int:
        return (4 if self.flipped else 0) + self.rotation % 4

    @classmethod
    def from_index(cls, index: int) -> "Orientation":
        if not 0 <= int(index) < 8:
            raise ValueError(f"orientation index out of range: {index!r}")
        return cls(int(index) % 4, int(index) >= 4)


ORIENTATIONS: Tuple[Orientation, ...] = tuple(Orientation.from_index(i) for i in range(8))


@dataclass(frozen=True)
class Piece:
    name: str
    shape: Shape
    color: str
    orientations: Tuple[Shape, ...]
    # occupied (row, col) cells of every orientation, row-major
    cells: Tuple[Tuple[Cell, ...], ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        cells = tuple(
            tuple((r, c) for r, row in enumerate(o) for c, v in enumerate(row) if v)
            for o in self.orientations
        )
        object.__setattr__(self, "cells", cells)

    @property
    def size(self) -> int:
        return sum(1 for row in self.shape for v in row if v)

    def oriented(self, orientation: int) -> Shape:
        return self.orientations[orientation]


@dataclass(frozen=True)
class Layout:
    name: str
    rows: int
    cols: int
    mask: Tuple[Tuple[bool, ...], ...]

    def __post_init__(self):
        mask = tuple(tuple(bool(v) for v in row) for row in self.mask)
        if len(mask) != self.rows or any(len(row) != self.cols for row in mask):
            raise ValueError(
                f"layout {self.name!r}: mask does not match {self.rows}x{self.cols}"
            )
        object.__setattr__(self, "mask", mask)

    @classmethod
    def from_strings(cls, name: str, rows: List[str]) -> "Layout":
        """Build a layout from rows of ``#`` (playable) and ``.`` (blocked)."""
        mask = tuple(tuple(ch == "#" for ch in row) for row in rows)
        return cls(name, len(mask), len(mask[0]) if mask else 0, mask)

    def is_playable(self, x: int, y: int) -> bool:
        return 0 <= x < self.cols and 0 <= y < self.rows and self.mask[y][x]

    @property
    def cell_count(self) -> int:
        return sum(1 for row in self.mask for v in row if v)


@dataclass(frozen=True)
class Placement:
    piece: Piece
    x: int
    y: int
    orientation: int = 0

    def __post_init__(self):
        # keep the flat table index even when built from an Orientation
        if isinstance(self.orientation, Orientation):
            object.__setattr__(self, "orientation", self.orientation.index)

    @property
    def name(self) -> str:
        return self.piece.name

    @property
    def rotation(self) -> int:
        return Orientation.from_index(self.orientation).rotation

    @property
    def flipped(self) -> bool:
        return Orientation.from_index(self.orientation).flipped

    def cells(self) -> Tuple[Tuple[int, int], ...]:
        """Board (x, y) cells covered by this placement."""
        return tuple((self.x + c, self.y + r) for r, c in self.piece.cells[self.orientation])
