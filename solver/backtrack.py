# solver/backtrack.py
from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from board import footprint, is_legal
from config import CFG
from models import Board, Layout, Orientation, Piece, Placement
from progress import SolveProgress
from shapes import distinct_orientations


def _playable_order(layout: Layout) -> List[Tuple[int, int]]:
    return [(x, y) for y in range(layout.rows) for x in range(layout.cols) if layout.mask[y][x]]


def _next_empty(board: Board, order: Sequence[Tuple[int, int]], start: int) -> int:
    for i in range(start, len(order)):
        x, y = order[i]
        if board[y][x] is None:
            return i
    return -1


def _write(board: Board, cells, owner: Optional[str]) -> None:
    for x, y in cells:
        board[y][x] = owner


def _has_dead_region(board: Board, layout: Layout, order: Sequence[Tuple[int, int]], start: int, min_size: int) -> bool:
    """True when a connected empty region is smaller than ``min_size``."""
    if min_size <= 1:
        return False
    seen = set()
    for i in range(start, len(order)):
        cell = order[i]
        x, y = cell
        if board[y][x] is not None or cell in seen:
            continue
        seen.add(cell)
        stack = [cell]
        size = 0
        while stack:
            cx, cy = stack.pop()
            size += 1
            for nx, ny in ((cx + 1, cy), (cx - 1, cy), (cx, cy + 1), (cx, cy - 1)):
                if (nx, ny) in seen or not layout.is_playable(nx, ny) or board[ny][nx] is not None:
                    continue
                seen.add((nx, ny))
                stack.append((nx, ny))
        if size < min_size:
            return True
    return False


def search_exhaustive(
    board: Board,
    layout: Layout,
    pieces: Sequence[Piece],
    progress: SolveProgress,
) -> Optional[List[Placement]]:
    """Backtracking that always fills the first empty cell in row-major order.

    Each candidate piece/orientation is anchored so its first occupied cell
    (row-major) lands on the target; any other cell of the shape would put
    an earlier cell of the shape onto an already-filled board cell. Mutates
    ``board``, which must be a private copy.
    """
    order = _playable_order(layout)
    prune_regions = bool(getattr(CFG, "PRUNE_REGIONS", True))

    # (piece, [(orientation index, first occupied cell), ...]) with symmetric duplicates dropped
    plans = [
        (piece, [(idx, piece.cells[idx][0]) for idx in distinct_orientations(piece.orientations)])
        for piece in pieces
    ]
    used = [False] * len(plans)
    solution: List[Placement] = []

    empty_left = sum(1 for x, y in order if board[y][x] is None)
    area_left = sum(piece.size for piece in pieces)

    def _search(start: int, empty_left: int, area_left: int) -> bool:
        target = _next_empty(board, order, start)
        if target == -1:
            return True
        if area_left < empty_left:
            return False
        tx, ty = order[target]
        for i, (piece, options) in enumerate(plans):
            if used[i]:
                continue
            for idx, (r0, c0) in options:
                x = tx - c0
                y = ty - r0
                progress.candidates += 1
                if not is_legal(board, layout, piece, x, y, idx):
                    continue
                cells = footprint(piece, x, y, idx)
                _write(board, cells, piece.name)
                used[i] = True
                solution.append(Placement(piece, x, y, idx))
                progress.nodes += 1

                alive = True
                if prune_regions:
                    sizes = [p.size for j, (p, _) in enumerate(plans) if not used[j]]
                    if sizes and _has_dead_region(board, layout, order, target, min(sizes)):
                        alive = False
                if alive and _search(target, empty_left - piece.size, area_left - piece.size):
                    return True

                solution.pop()
                used[i] = False
                _write(board, cells, None)
        return False

    if _search(0, empty_left, area_left):
        return solution
    return None


def _first_nearby(
    board: Board,
    layout: Layout,
    piece: Piece,
    target: Tuple[int, int],
    radius: int,
    progress: SolveProgress,
) -> Optional[Tuple[int, int, int]]:
    tx, ty = target
    for dy in range(-radius, radius + 1):
        for dx in range(-radius, radius + 1):
            x = tx + dx
            y = ty + dy
            if x < 0 or x >= layout.cols or y < 0 or y >= layout.rows:
                continue
            for rotation in range(4):
                for flipped in (False, True):
                    idx = Orientation(rotation, flipped).index
                    progress.candidates += 1
                    if is_legal(board, layout, piece, x, y, idx):
                        return x, y, idx
    return None


def search_nearby(
    board: Board,
    layout: Layout,
    pieces: Sequence[Piece],
    progress: SolveProgress,
    *,
    radius: Optional[int] = None,
    max_attempts: Optional[int] = None,
) -> Optional[List[Placement]]:
    """Fast, incomplete search: anchors only near the first empty cell.

    Each piece is offered just its first legal placement within ``radius``
    of the first empty cell, so this can miss tilings the exhaustive search
    finds. Mutates ``board``, which must be a private copy.
    """
    radius = int(CFG.NEARBY_RADIUS if radius is None else radius)
    max_attempts = int(CFG.NEARBY_MAX_ATTEMPTS if max_attempts is None else max_attempts)
    order = _playable_order(layout)
    used = [False] * len(pieces)
    solution: List[Placement] = []

    def _search(start: int) -> bool:
        target = _next_empty(board, order, start)
        if target == -1:
            return True
        attempts = 0
        for i, piece in enumerate(pieces):
            if used[i]:
                continue
            attempts += 1
            if attempts > max_attempts:
                break
            found = _first_nearby(board, layout, piece, order[target], radius, progress)
            if found is None:
                continue
            x, y, idx = found
            cells = footprint(piece, x, y, idx)
            _write(board, cells, piece.name)
            used[i] = True
            solution.append(Placement(piece, x, y, idx))
            progress.nodes += 1

            if _search(target):
                return True

            solution.pop()
            used[i] = False
            _write(board, cells, None)
        return False

    if _search(0):
        return solution
    return None


__all__ = ["search_exhaustive", "search_nearby"]
