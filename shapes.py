# shapes.py
# Shape normalization + rotations/flips

from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

from models import Cell, Orientation, Shape


def shape_from_rows(rows: Sequence[Sequence[int]]) -> Shape:
    return tuple(tuple(bool(v) for v in row) for row in rows)


def shape_cells(shape: Shape) -> Tuple[Cell, ...]:
    return tuple((r, c) for r, row in enumerate(shape) for c, v in enumerate(row) if v)


def _from_cells(cells: Iterable[Cell], size: int) -> Shape:
    grid: List[List[bool]] = [[False] * size for _ in range(size)]
    for r, c in cells:
        grid[r][c] = True
    return tuple(tuple(row) for row in grid)


def normalize(shape: Shape) -> Shape:
    """Translate the occupied cells so their bounding box starts at (0, 0).

    An empty shape has no bounding box and is returned unchanged.
    """
    cells = shape_cells(shape)
    if not cells:
        return shape
    min_r = min(r for r, _ in cells)
    min_c = min(c for _, c in cells)
    return _from_cells(((r - min_r, c - min_c) for r, c in cells), len(shape))


def rotate90(shape: Shape) -> Shape:
    # (r, c) -> (c, N-1-r), clockwise
    n = len(shape)
    return _from_cells(((c, n - 1 - r) for r, c in shape_cells(shape)), n)


def flip_horizontal(shape: Shape) -> Shape:
    return tuple(tuple(reversed(row)) for row in shape)


def _rotations(shape: Shape) -> List[Shape]:
    out: List[Shape] = []
    current = normalize(shape)
    for _ in range(4):
        out.append(current)
        current = normalize(rotate90(current))
    return out


def orientations(shape: Shape) -> Tuple[Shape, ...]:
    """All 8 orientations indexed by ``flipped*4 + rotation``.

    Symmetric pieces repeat entries; the table is never deduplicated so the
    index arithmetic stays uniform.
    """
    return tuple(_rotations(shape) + _rotations(normalize(flip_horizontal(shape))))


def unorient(shape: Shape, orientation: int) -> Shape:
    """Undo orientation ``orientation`` and return the normalized base shape."""
    o = Orientation.from_index(orientation)
    out = shape
    for _ in range((4 - o.rotation) % 4):
        out = rotate90(out)
    if o.flipped:
        out = flip_horizontal(normalize(out))
    return normalize(out)


def distinct_orientations(table: Sequence[Shape]) -> List[int]:
    """Indices of the first occurrence of each distinct oriented shape."""
    seen = set()
    out: List[int] = []
    for idx, shape in enumerate(table):
        if shape in seen:
            continue
        seen.add(shape)
        out.append(idx)
    return out


def shape_to_text(shape: Shape) -> str:
    return "\n".join("".join("#" if v else "." for v in row) for row in shape)
