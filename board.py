# board.py
# Board model, placement validation and copy-on-write mutations

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Set, Tuple, Union

from models import Board, BoardMismatchError, Layout, Orientation, Piece, Placement

logger = logging.getLogger(__name__)

OrientationLike = Union[int, Orientation]


def create_empty_board(layout: Layout) -> Board:
    return [[None] * layout.cols for _ in range(layout.rows)]


def clone_board(board: Board) -> Board:
    return [list(row) for row in board]


def check_board(board: Board, layout: Layout) -> None:
    """Raise ``BoardMismatchError`` unless ``board`` fits ``layout``."""
    if len(board) != layout.rows or any(len(row) != layout.cols for row in board):
        raise BoardMismatchError(
            f"board is not {layout.rows}x{layout.cols} (layout {layout.name!r})"
        )
    for y, row in enumerate(board):
        for x, owner in enumerate(row):
            if owner is not None and not layout.mask[y][x]:
                raise BoardMismatchError(
                    f"non-playable cell ({x},{y}) holds {owner!r} (layout {layout.name!r})"
                )


def _orientation_index(orientation: OrientationLike) -> Optional[int]:
    if isinstance(orientation, Orientation):
        idx = orientation.index
    elif isinstance(orientation, int) and not isinstance(orientation, bool):
        idx = orientation
    else:
        return None
    return idx if 0 <= idx < 8 else None


def footprint(piece: Piece, x: int, y: int, orientation: OrientationLike = 0) -> Tuple[Tuple[int, int], ...]:
    """Board (x, y) cells the oriented piece covers when anchored at (x, y)."""
    idx = _orientation_index(orientation)
    if idx is None:
        raise ValueError(f"orientation out of range: {orientation!r}")
    return tuple((x + c, y + r) for r, c in piece.cells[idx])


def is_legal(
    board: Board,
    layout: Layout,
    piece: Optional[Piece],
    x: int,
    y: int,
    orientation: OrientationLike = 0,
) -> bool:
    """Can ``piece`` be written at anchor (x, y) in ``orientation``?

    Every occupied cell of the oriented shape must land inside the board, on a
    playable mask cell, on an empty board cell. Reads its arguments only.
    """
    if piece is None or not getattr(piece, "cells", None):
        logger.error("Invalid piece passed to is_legal: %r", piece)
        return False
    idx = _orientation_index(orientation)
    if idx is None or idx >= len(piece.cells):
        logger.error("Invalid orientation %r for piece %s", orientation, piece.name)
        return False

    rows, cols, mask = layout.rows, layout.cols, layout.mask
    for r, c in piece.cells[idx]:
        bx = x + c
        by = y + r
        if bx < 0 or bx >= cols or by < 0 or by >= rows:
            return False
        if not mask[by][bx]:
            return False
        if board[by][bx] is not None:
            return False
    return True


def _placement_cells(placement: Optional[Placement]) -> Optional[Tuple[Tuple[int, int], ...]]:
    piece = getattr(placement, "piece", None)
    if piece is None or not getattr(piece, "cells", None):
        return None
    idx = _orientation_index(placement.orientation)
    if idx is None or idx >= len(piece.cells):
        return None
    return footprint(piece, placement.x, placement.y, idx)


def apply_placement(board: Board, placement: Placement, layout: Layout) -> Optional[Board]:
    """Return a new board with ``placement`` written onto it.

    ``None`` means the call was rejected and ``board`` is untouched: the
    placement is malformed or ``is_legal`` refuses it against ``layout``.
    """
    cells = _placement_cells(placement)
    if cells is None:
        logger.error("Invalid placement passed to apply_placement: %r", placement)
        return None
    if not is_legal(board, layout, placement.piece, placement.x, placement.y, placement.orientation):
        logger.warning(
            "Rejected placement of %s at (%d,%d) o=%d",
            placement.name, placement.x, placement.y, placement.orientation,
        )
        return None

    out = clone_board(board)
    for bx, by in cells:
        out[by][bx] = placement.name
    return out


def remove_placement(board: Board, placement: Placement) -> Optional[Board]:
    """Return a new board with ``placement``'s footprint cleared.

    ``None`` when the footprint is not entirely owned by the placement's piece.
    """
    cells = _placement_cells(placement)
    if cells is None:
        logger.error("Invalid placement passed to remove_placement: %r", placement)
        return None
    rows = len(board)
    for bx, by in cells:
        if by < 0 or by >= rows or bx < 0 or bx >= len(board[by]) or board[by][bx] != placement.name:
            logger.warning(
                "Cannot remove %s at (%d,%d) o=%d: footprint not owned",
                placement.name, placement.x, placement.y, placement.orientation,
            )
            return None
    out = clone_board(board)
    for bx, by in cells:
        out[by][bx] = None
    return out


def apply_solution(board: Board, placements: Iterable[Placement], layout: Layout) -> Optional[Board]:
    out: Optional[Board] = board
    for placement in placements:
        out = apply_placement(out, placement, layout)
        if out is None:
            return None
    return clone_board(out) if out is board else out


def piece_at(board: Board, x: int, y: int) -> Optional[str]:
    if 0 <= y < len(board) and 0 <= x < len(board[y]):
        return board[y][x]
    return None


def remove_piece(board: Board, name: str) -> Board:
    """Clear every cell owned by ``name``."""
    return [[None if owner == name else owner for owner in row] for row in board]


def move_piece(board: Board, layout: Layout, placement: Placement) -> Optional[Board]:
    """Lift any copy of the piece already on the board, then place it again."""
    if _placement_cells(placement) is None:
        logger.error("Invalid placement passed to move_piece: %r", placement)
        return None
    return apply_placement(remove_piece(board, placement.name), placement, layout)


def placed_piece_names(board: Board) -> Set[str]:
    return {owner for row in board for owner in row if owner is not None}


def empty_cells(board: Board, layout: Layout) -> List[Tuple[int, int]]:
    """Empty playable (x, y) cells in row-major order."""
    return [
        (x, y)
        for y in range(layout.rows)
        for x in range(layout.cols)
        if layout.mask[y][x] and board[y][x] is None
    ]


def is_board_complete(board: Board, layout: Layout) -> bool:
    return not empty_cells(board, layout)


def board_to_text(board: Board, layout: Layout) -> str:
    lines = []
    for y in range(layout.rows):
        line = ""
        for x in range(layout.cols):
            if not layout.mask[y][x]:
                line += " "
            elif board[y][x] is None:
                line += "."
            else:
                line += str(board[y][x])[0]
        lines.append(line)
    return "\n".join(lines)


__all__ = [
    "apply_placement",
    "apply_solution",
    "board_to_text",
    "check_board",
    "clone_board",
    "create_empty_board",
    "empty_cells",
    "footprint",
    "is_board_complete",
    "is_legal",
    "move_piece",
    "piece_at",
    "placed_piece_names",
    "remove_piece",
    "remove_placement",
]
